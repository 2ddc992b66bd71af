"""Steps shared by the supply/borrow/repay/withdraw operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from aave_ops.data.constants import DEFAULT_TOKEN_DECIMALS, DEFAULT_TOKEN_SYMBOL, MAX_UINT256
from aave_ops.data.interfaces import AccountSnapshot, LendingGateway, TokenInfo, TxReceipt
from aave_ops.reporting import format_token_amount, print_account_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of one mutating operation."""

    receipt: TxReceipt
    amount: int  # the value passed to the contract
    before: AccountSnapshot | None = None
    after: AccountSnapshot | None = None
    approval: TxReceipt | None = None
    health_factor_warning: bool = False


def read_token_info(gateway: LendingGateway, asset: str) -> TokenInfo:
    """Read symbol and decimals, substituting defaults for either on failure."""
    try:
        symbol = gateway.get_token_symbol(asset)
    except Exception:
        logger.warning("Could not read symbol() of %s; using %r", asset, DEFAULT_TOKEN_SYMBOL)
        symbol = DEFAULT_TOKEN_SYMBOL
    try:
        decimals = gateway.get_token_decimals(asset)
    except Exception:
        logger.warning(
            "Could not read decimals() of %s; assuming %d", asset, DEFAULT_TOKEN_DECIMALS
        )
        decimals = DEFAULT_TOKEN_DECIMALS
    token = TokenInfo(address=asset, symbol=symbol, decimals=decimals)
    logger.info("Token: %s (%d decimals)", token.symbol, token.decimals)
    return token


def describe_amount(value: int, token: TokenInfo) -> str:
    if value == MAX_UINT256:
        return f"MAX {token.symbol}"
    return format_token_amount(value, token)


def ensure_allowance(
    gateway: LendingGateway,
    token: TokenInfo,
    owner: str,
    amount: int,
) -> TxReceipt | None:
    """Approve the wrapper for exactly *amount* unless the allowance covers it.

    Waits for the approval to be mined before returning its receipt; returns
    ``None`` when no approval was needed.
    """
    spender = gateway.contract_address
    allowance = gateway.get_allowance(token.address, owner, spender)
    logger.info("Current allowance: %s", describe_amount(allowance, token))
    if allowance >= amount:
        return None

    logger.info("Approving %s...", describe_amount(amount, token))
    tx_hash = gateway.approve(token.address, spender, amount)
    receipt = gateway.wait_for_receipt(tx_hash)
    logger.info("Approved! Tx: %s", tx_hash)
    return receipt


def wait_for_confirmation(gateway: LendingGateway, tx_hash: str) -> TxReceipt:
    logger.info("Transaction hash: %s", tx_hash)
    logger.info("Waiting for confirmation...")
    return gateway.wait_for_receipt(tx_hash)


def warn_if_health_factor_low(snapshot: AccountSnapshot) -> bool:
    """Log the liquidation-risk advisory; return whether it fired."""
    if not snapshot.is_health_factor_low:
        return False
    logger.warning("Health factor is low! You may be at risk of liquidation.")
    return True


def fetch_snapshot_best_effort(
    gateway: LendingGateway, user: str, title: str = "User Account Data"
) -> AccountSnapshot | None:
    """Fetch and print account data; report instead of raising on failure."""
    try:
        snapshot = gateway.get_user_account_data(user)
    except Exception:
        logger.warning("Could not fetch account data", exc_info=True)
        print("Could not fetch account data")
        return None
    print_account_snapshot(snapshot, title)
    return snapshot
