"""Operator-facing output: token amounts, receipts and account snapshots."""

from __future__ import annotations

from aave_ops.data.constants import HEALTH_FACTOR_DECIMALS, MAX_UINT256, RAY
from aave_ops.data.interfaces import AccountSnapshot, ReserveData, TokenInfo, TxReceipt


def format_units(value: int, decimals: int) -> str:
    """Render a raw integer amount with *decimals* implied decimals.

    Always keeps at least one fractional digit: ``format_units(10**18, 18)``
    is ``"1.0"``.
    """
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10**decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{sign}{whole}.{frac_str or '0'}"


def format_token_amount(value: int, token: TokenInfo) -> str:
    return f"{format_units(value, token.decimals)} {token.symbol}"


def format_health_factor(health_factor: int) -> str:
    # Aave reports type(uint256).max when there is no debt
    if health_factor == MAX_UINT256:
        return "inf (no debt)"
    return format_units(health_factor, HEALTH_FACTOR_DECIMALS)


def format_ray(value: int) -> str:
    """Ray-denominated rate as a percentage."""
    return f"{value * 100 / RAY:.2f}%"


def print_receipt(receipt: TxReceipt) -> None:
    print(f"Block: {receipt.block_number}")
    print(f"Gas used: {receipt.gas_used}")


def print_account_snapshot(snapshot: AccountSnapshot, title: str = "User Account Data") -> None:
    print(f"\n{title}:")
    print(f"Total Collateral (Base): {snapshot.total_collateral_base}")
    print(f"Total Debt (Base): {snapshot.total_debt_base}")
    print(f"Available Borrows (Base): {snapshot.available_borrows_base}")
    print(f"Liquidation Threshold: {snapshot.current_liquidation_threshold}")
    print(f"LTV: {snapshot.ltv}")
    print(
        f"Health Factor: {snapshot.health_factor} "
        f"({format_health_factor(snapshot.health_factor)})"
    )


def print_reserve_data(reserve: ReserveData) -> None:
    print("\nReserve Data:")
    print(f"aToken: {reserve.a_token_address}")
    print(f"Variable debt token: {reserve.variable_debt_token_address}")
    print(f"Supply APR: {format_ray(reserve.current_liquidity_rate)}")
    print(f"Variable borrow APR: {format_ray(reserve.current_variable_borrow_rate)}")
    print(f"Stable borrow APR: {format_ray(reserve.current_stable_borrow_rate)}")
    print(f"Last update: {reserve.last_update_timestamp}")
