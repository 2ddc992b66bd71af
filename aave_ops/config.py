"""Settings read from .env files and the process environment."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from aave_ops.amounts import All, Amount, Exact, parse_amount
from aave_ops.data.constants import (
    DEFAULT_ARTIFACT_PATH,
    DEFAULT_NETWORK,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RPC_URL,
    InterestRateMode,
)
from aave_ops.data.contracts import TOKEN_ADDRESSES
from aave_ops.errors import ConfigurationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Usage examples shown with configuration errors
# ---------------------------------------------------------------------------

SUPPLY_EXAMPLE = (
    f"ASSET_ADDRESS={TOKEN_ADDRESSES['DAI']} (DAI)\n"
    "AMOUNT=1000000000000000000 (1 token with 18 decimals)"
)
BORROW_EXAMPLE = (
    f"ASSET_ADDRESS={TOKEN_ADDRESSES['USDC']} (USDC)\n"
    "AMOUNT=1000000 (1 USDC with 6 decimals)\n"
    "INTEREST_RATE_MODE=2 (1 for stable, 2 for variable)"
)
REPAY_EXAMPLE = (
    f"ASSET_ADDRESS={TOKEN_ADDRESSES['USDC']} (USDC)\n"
    "AMOUNT=max (or specific amount like 1000000 for 1 USDC)\n"
    "INTEREST_RATE_MODE=2 (1 for stable, 2 for variable)"
)
WITHDRAW_EXAMPLE = (
    f"ASSET_ADDRESS={TOKEN_ADDRESSES['DAI']} (DAI)\n"
    "AMOUNT=max (or specific amount like 1000000000000000000 for 1 DAI)\n"
    "TO_ADDRESS=0x... (optional, defaults to signer address)"
)
STATUS_EXAMPLE = (
    "CONTRACT_ADDRESS=0x... (deployed AaveDepositBorrow)\n"
    f"ASSET_ADDRESS={TOKEN_ADDRESSES['DAI']} (optional)"
)


# ---------------------------------------------------------------------------
# Frozen settings dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConnectionSettings:
    network: str = DEFAULT_NETWORK
    rpc_url: str = DEFAULT_RPC_URL
    private_key: str | None = None
    tx_timeout: float | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ConnectionSettings:
        env = os.environ if environ is None else environ
        return cls(
            network=_get(env, "NETWORK") or DEFAULT_NETWORK,
            rpc_url=_get(env, "RPC_URL") or DEFAULT_RPC_URL,
            private_key=_get(env, "PRIVATE_KEY"),
            tx_timeout=_get_float(env, "TX_TIMEOUT"),
            poll_interval=_get_float(env, "POLL_INTERVAL") or DEFAULT_POLL_INTERVAL,
        )


@dataclass(frozen=True)
class SupplySettings:
    contract_address: str
    asset_address: str
    amount: int
    on_behalf_of: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> SupplySettings:
        env = os.environ if environ is None else environ
        _require(env, ("CONTRACT_ADDRESS", "ASSET_ADDRESS", "AMOUNT"), SUPPLY_EXAMPLE)
        return cls(
            contract_address=_get(env, "CONTRACT_ADDRESS"),
            asset_address=_get(env, "ASSET_ADDRESS"),
            amount=_exact_amount(env),
            on_behalf_of=_get(env, "ON_BEHALF_OF"),
        )


@dataclass(frozen=True)
class BorrowSettings:
    contract_address: str
    asset_address: str
    amount: int
    interest_rate_mode: int = InterestRateMode.VARIABLE
    on_behalf_of: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> BorrowSettings:
        env = os.environ if environ is None else environ
        _require(env, ("CONTRACT_ADDRESS", "ASSET_ADDRESS", "AMOUNT"), BORROW_EXAMPLE)
        return cls(
            contract_address=_get(env, "CONTRACT_ADDRESS"),
            asset_address=_get(env, "ASSET_ADDRESS"),
            amount=_exact_amount(env),
            interest_rate_mode=_rate_mode(env),
            on_behalf_of=_get(env, "ON_BEHALF_OF"),
        )


@dataclass(frozen=True)
class RepaySettings:
    contract_address: str
    asset_address: str
    amount: Amount = All()
    interest_rate_mode: int = InterestRateMode.VARIABLE
    on_behalf_of: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> RepaySettings:
        env = os.environ if environ is None else environ
        _require(env, ("CONTRACT_ADDRESS", "ASSET_ADDRESS"), REPAY_EXAMPLE)
        return cls(
            contract_address=_get(env, "CONTRACT_ADDRESS"),
            asset_address=_get(env, "ASSET_ADDRESS"),
            amount=_optional_amount(env),
            interest_rate_mode=_rate_mode(env),
            on_behalf_of=_get(env, "ON_BEHALF_OF"),
        )


@dataclass(frozen=True)
class WithdrawSettings:
    contract_address: str
    asset_address: str
    amount: Amount = All()
    to_address: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> WithdrawSettings:
        env = os.environ if environ is None else environ
        _require(env, ("CONTRACT_ADDRESS", "ASSET_ADDRESS"), WITHDRAW_EXAMPLE)
        return cls(
            contract_address=_get(env, "CONTRACT_ADDRESS"),
            asset_address=_get(env, "ASSET_ADDRESS"),
            amount=_optional_amount(env),
            to_address=_get(env, "TO_ADDRESS"),
        )


@dataclass(frozen=True)
class StatusSettings:
    contract_address: str
    asset_address: str | None = None
    on_behalf_of: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StatusSettings:
        env = os.environ if environ is None else environ
        _require(env, ("CONTRACT_ADDRESS",), STATUS_EXAMPLE)
        return cls(
            contract_address=_get(env, "CONTRACT_ADDRESS"),
            asset_address=_get(env, "ASSET_ADDRESS"),
            on_behalf_of=_get(env, "ON_BEHALF_OF"),
        )


@dataclass(frozen=True)
class DeploySettings:
    network: str = DEFAULT_NETWORK
    addresses_provider_override: str | None = None
    artifact_path: str = DEFAULT_ARTIFACT_PATH
    explorer_api_key: str | None = None
    explorer_api_url: str | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DeploySettings:
        env = os.environ if environ is None else environ
        return cls(
            network=_get(env, "NETWORK") or DEFAULT_NETWORK,
            addresses_provider_override=_get(env, "AAVE_POOL_ADDRESSES_PROVIDER"),
            artifact_path=_get(env, "ARTIFACT_PATH") or DEFAULT_ARTIFACT_PATH,
            explorer_api_key=_get(env, "ETHERSCAN_API_KEY"),
            explorer_api_url=_get(env, "EXPLORER_API_URL"),
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get(env: Mapping[str, str], name: str) -> str | None:
    """Return a stripped variable, treating empty strings as unset."""
    value = env.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _get_float(env: Mapping[str, str], name: str) -> float | None:
    raw = _get(env, name)
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None


def _require(env: Mapping[str, str], names: tuple[str, ...], example: str) -> None:
    missing = [name for name in names if _get(env, name) is None]
    if missing:
        raise ConfigurationError(
            f"Please set {' and '.join(missing)} in your environment or .env file.\n"
            f"Example:\n{example}"
        )


def _exact_amount(env: Mapping[str, str]) -> int:
    amount = parse_amount(_get(env, "AMOUNT"))
    if not isinstance(amount, Exact):
        raise ConfigurationError("AMOUNT must be a literal amount for this operation, not 'max'")
    return amount.value


def _optional_amount(env: Mapping[str, str]) -> Amount:
    raw = _get(env, "AMOUNT")
    return All() if raw is None else parse_amount(raw)


def _rate_mode(env: Mapping[str, str]) -> int:
    raw = _get(env, "INTEREST_RATE_MODE")
    if raw is None:
        return InterestRateMode.VARIABLE
    try:
        return int(raw, 10)
    except ValueError:
        raise ConfigurationError(
            f"INTEREST_RATE_MODE must be 1 (stable) or 2 (variable), got {raw!r}"
        ) from None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_environment(env_file: str | Path | None = None) -> None:
    """Load a .env file into ``os.environ`` without overriding set variables.

    Parameters
    ----------
    env_file : str | Path | None
        Explicit path. Defaults to the nearest ``.env`` found from the
        current working directory upwards.

    Raises
    ------
    ConfigurationError
        If *env_file* is given but does not exist.
    """
    if env_file is not None:
        env_file = Path(env_file)
        if not env_file.exists():
            raise ConfigurationError(f"Env file not found: {env_file}")
        load_dotenv(env_file, override=False)
        logger.debug("Environment loaded from %s", env_file)
        return

    found = find_dotenv(usecwd=True)
    if found:
        load_dotenv(found, override=False)
        logger.debug("Environment loaded from %s", found)
