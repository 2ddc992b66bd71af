"""Withdraw supplied collateral from Aave through the wrapper contract."""

from __future__ import annotations

import logging

from aave_ops.config import WithdrawSettings
from aave_ops.data.interfaces import LendingGateway
from aave_ops.errors import NoCollateralError
from aave_ops.operations.common import (
    OperationResult,
    read_token_info,
    wait_for_confirmation,
    warn_if_health_factor_low,
)
from aave_ops.reporting import (
    format_health_factor,
    format_token_amount,
    print_account_snapshot,
    print_receipt,
)

logger = logging.getLogger(__name__)


def run_withdraw(settings: WithdrawSettings, gateway: LendingGateway) -> OperationResult:
    """Withdraw a literal amount or, with ``All``, all available collateral."""
    signer = gateway.get_signer_address()
    destination = settings.to_address or signer
    asset = settings.asset_address

    logger.info("Signer: %s", signer)
    logger.info("Contract: %s", settings.contract_address)
    logger.info("Asset: %s", asset)
    logger.info(
        "Amount: %s", "MAX (withdraw all)" if settings.amount.is_all else settings.amount
    )
    logger.info("To: %s", destination)

    before = gateway.get_user_account_data(destination)
    logger.info("Total Collateral (Base): %d", before.total_collateral_base)
    logger.info("Health Factor: %s", format_health_factor(before.health_factor))
    if before.total_collateral_base == 0:
        raise NoCollateralError("No collateral to withdraw.")

    token = read_token_info(gateway, asset)
    withdraw_amount = settings.amount.to_uint()
    if settings.amount.is_all:
        logger.info("Withdrawing all available collateral...")
    else:
        logger.info("Withdrawing %s...", format_token_amount(withdraw_amount, token))

    tx_hash = gateway.withdraw(asset, withdraw_amount, destination)
    receipt = wait_for_confirmation(gateway, tx_hash)

    print("\nSuccessfully withdrew tokens!")
    print_receipt(receipt)

    after = gateway.get_user_account_data(destination)
    print_account_snapshot(after, "Updated User Account Data")
    warning = warn_if_health_factor_low(after)

    return OperationResult(
        receipt=receipt,
        amount=withdraw_amount,
        before=before,
        after=after,
        health_factor_warning=warning,
    )
