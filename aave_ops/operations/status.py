"""Read-only view of an account and, optionally, one reserve."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from aave_ops.config import StatusSettings
from aave_ops.data.constants import BASE_CURRENCY_DECIMALS
from aave_ops.data.interfaces import AccountSnapshot, LendingGateway, ReserveData
from aave_ops.operations.common import read_token_info
from aave_ops.reporting import format_units, print_account_snapshot, print_reserve_data

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusResult:
    user: str
    snapshot: AccountSnapshot
    asset_price: int | None = None
    reserve: ReserveData | None = None


def run_status(settings: StatusSettings, gateway: LendingGateway) -> StatusResult:
    """Print account data for ``ON_BEHALF_OF`` (or the signer); sends nothing."""
    signer = gateway.get_signer_address()
    user = settings.on_behalf_of or signer
    logger.info("Signer: %s", signer)
    logger.info("Contract: %s", settings.contract_address)
    logger.info("User: %s", user)

    snapshot = gateway.get_user_account_data(user)
    print_account_snapshot(snapshot)

    if not settings.asset_address:
        return StatusResult(user=user, snapshot=snapshot)

    asset = settings.asset_address
    token = read_token_info(gateway, asset)
    price = gateway.get_asset_price(asset)
    print(f"\n{token.symbol} price (base currency): {format_units(price, BASE_CURRENCY_DECIMALS)}")
    reserve = gateway.get_reserve_data(asset)
    print_reserve_data(reserve)

    return StatusResult(user=user, snapshot=snapshot, asset_price=price, reserve=reserve)
