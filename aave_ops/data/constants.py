"""Protocol constants and operator defaults."""

from enum import IntEnum

# Largest uint256; Aave reads it as "the whole balance / the whole debt"
MAX_UINT256 = 2**256 - 1

# Health factor is 18-decimal fixed point (1e18 == 1.0)
HEALTH_FACTOR_DECIMALS = 18
HEALTH_FACTOR_WARNING = 10**17  # 0.1

# Fallbacks when an ERC-20 does not expose the optional metadata
DEFAULT_TOKEN_SYMBOL = "Unknown"
DEFAULT_TOKEN_DECIMALS = 18

# Networks that get no explorer verification or extra confirmations
LOCAL_NETWORKS = frozenset({"hardhat", "localhost"})
DEPLOY_CONFIRMATIONS = 6

DEFAULT_NETWORK = "localhost"
DEFAULT_RPC_URL = "http://127.0.0.1:8545"
DEFAULT_POLL_INTERVAL = 2.0
DEFAULT_ARTIFACT_PATH = "artifacts/contracts/AaveDepositBorrow.sol/AaveDepositBorrow.json"
WRAPPER_CONTRACT_NAME = "AaveDepositBorrow"

# Aave oracle prices are quoted in the base currency with 8 decimals
BASE_CURRENCY_DECIMALS = 8

# Ray (1e27), Aave's fixed-point unit for rates and indexes
RAY = 10**27


class InterestRateMode(IntEnum):
    """Aave borrow rate modes."""

    STABLE = 1
    VARIABLE = 2
