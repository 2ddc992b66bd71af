"""Abstract gateway interface and the values it returns."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

from aave_ops.data.constants import HEALTH_FACTOR_WARNING


@dataclass(frozen=True)
class AccountSnapshot:
    """Aave account state as returned by ``getUserAccountData``.

    All values are raw integers: the ``*_base`` fields are in the oracle
    base currency, ``current_liquidation_threshold`` and ``ltv`` are in
    basis points and ``health_factor`` is 18-decimal fixed point.
    """

    total_collateral_base: int
    total_debt_base: int
    available_borrows_base: int
    current_liquidation_threshold: int
    ltv: int
    health_factor: int

    @classmethod
    def from_tuple(cls, data: Sequence[int]) -> "AccountSnapshot":
        return cls(
            total_collateral_base=int(data[0]),
            total_debt_base=int(data[1]),
            available_borrows_base=int(data[2]),
            current_liquidation_threshold=int(data[3]),
            ltv=int(data[4]),
            health_factor=int(data[5]),
        )

    @property
    def is_health_factor_low(self) -> bool:
        return self.health_factor < HEALTH_FACTOR_WARNING


@dataclass(frozen=True)
class TokenInfo:
    """ERC-20 metadata needed for display."""

    address: str
    symbol: str
    decimals: int


@dataclass(frozen=True)
class TxReceipt:
    """The parts of a mined transaction receipt we report."""

    transaction_hash: str
    block_number: int
    gas_used: int
    status: int = 1
    contract_address: str | None = None  # set for deployments


@dataclass(frozen=True)
class ReserveData:
    """Subset of Aave V3 ``DataTypes.ReserveData`` shown by the status command."""

    liquidity_index: int
    current_liquidity_rate: int  # ray
    variable_borrow_index: int
    current_variable_borrow_rate: int  # ray
    current_stable_borrow_rate: int  # ray
    last_update_timestamp: int
    a_token_address: str
    variable_debt_token_address: str

    @classmethod
    def from_tuple(cls, data: Sequence[Any]) -> "ReserveData":
        return cls(
            liquidity_index=int(data[1]),
            current_liquidity_rate=int(data[2]),
            variable_borrow_index=int(data[3]),
            current_variable_borrow_rate=int(data[4]),
            current_stable_borrow_rate=int(data[5]),
            last_update_timestamp=int(data[6]),
            a_token_address=data[8],
            variable_debt_token_address=data[10],
        )


class LendingGateway(ABC):
    """Abstract interface to the wrapper contract and the tokens it moves.

    Mutating methods submit a transaction and return its hash; callers
    decide when to block on :meth:`wait_for_receipt`.
    """

    @abstractmethod
    def get_signer_address(self) -> str:
        """Address that signs and pays for transactions."""

    @abstractmethod
    def get_chain_id(self) -> int:
        """Chain id reported by the connected node."""

    # -- ERC-20 ---------------------------------------------------------

    @abstractmethod
    def get_token_symbol(self, asset: str) -> str:
        """ERC-20 ``symbol()``."""

    @abstractmethod
    def get_token_decimals(self, asset: str) -> int:
        """ERC-20 ``decimals()``."""

    @abstractmethod
    def get_balance(self, asset: str, owner: str) -> int:
        """ERC-20 ``balanceOf(owner)``."""

    @abstractmethod
    def get_allowance(self, asset: str, owner: str, spender: str) -> int:
        """ERC-20 ``allowance(owner, spender)``."""

    @abstractmethod
    def approve(self, asset: str, spender: str, amount: int) -> str:
        """Submit ERC-20 ``approve(spender, amount)``."""

    # -- Wrapper contract -----------------------------------------------

    @property
    @abstractmethod
    def contract_address(self) -> str:
        """Address of the deployed wrapper contract."""

    @abstractmethod
    def deposit(self, asset: str, amount: int, on_behalf_of: str) -> str:
        """Submit ``deposit(asset, amount, onBehalfOf)``."""

    @abstractmethod
    def borrow(
        self, asset: str, amount: int, interest_rate_mode: int, on_behalf_of: str
    ) -> str:
        """Submit ``borrow(asset, amount, interestRateMode, onBehalfOf)``."""

    @abstractmethod
    def repay(
        self, asset: str, amount: int, interest_rate_mode: int, on_behalf_of: str
    ) -> str:
        """Submit ``repay(asset, amount, interestRateMode, onBehalfOf)``."""

    @abstractmethod
    def withdraw(self, asset: str, amount: int, to: str) -> str:
        """Submit ``withdraw(asset, amount, to)``."""

    @abstractmethod
    def get_user_account_data(self, user: str) -> AccountSnapshot:
        """Read ``getUserAccountData(user)``."""

    @abstractmethod
    def get_reserve_data(self, asset: str) -> ReserveData:
        """Read ``getReserveData(asset)``."""

    @abstractmethod
    def get_asset_price(self, asset: str) -> int:
        """Read the oracle price of *asset* in base-currency units."""

    # -- Transactions ---------------------------------------------------

    @abstractmethod
    def deploy_contract(self, abi: list[dict], bytecode: str, *args: Any) -> str:
        """Submit a contract creation transaction."""

    @abstractmethod
    def wait_for_receipt(self, tx_hash: str, confirmations: int = 1) -> TxReceipt:
        """Block until *tx_hash* is mined and buried under *confirmations* blocks.

        Raises ``TransactionFailedError`` when the transaction reverted.
        """
