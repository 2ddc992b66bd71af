"""Borrow an asset from Aave through the wrapper contract."""

from __future__ import annotations

import logging

from aave_ops.config import BorrowSettings
from aave_ops.data.constants import InterestRateMode
from aave_ops.data.interfaces import LendingGateway
from aave_ops.errors import NoBorrowCapacityError
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


def rate_mode_label(mode: int) -> str:
    return "Stable" if mode == InterestRateMode.STABLE else "Variable"


def run_borrow(settings: BorrowSettings, gateway: LendingGateway) -> OperationResult:
    """Borrow ``settings.amount`` if the account has any borrowing capacity."""
    signer = gateway.get_signer_address()
    beneficiary = settings.on_behalf_of or signer
    asset = settings.asset_address
    mode = settings.interest_rate_mode

    logger.info("Signer: %s", signer)
    logger.info("Contract: %s", settings.contract_address)
    logger.info("Asset: %s", asset)
    logger.info("Amount: %d", settings.amount)
    logger.info("Interest Rate Mode: %d (%s)", mode, rate_mode_label(mode))
    logger.info("On behalf of: %s", beneficiary)

    logger.info("Checking account data...")
    before = gateway.get_user_account_data(beneficiary)
    logger.info("Available Borrows (Base): %d", before.available_borrows_base)
    logger.info("Health Factor: %s", format_health_factor(before.health_factor))
    if before.available_borrows_base == 0:
        raise NoBorrowCapacityError(
            "No available borrows. You may need to deposit collateral first."
        )

    token = read_token_info(gateway, asset)
    amount_str = format_token_amount(settings.amount, token)

    logger.info("Borrowing %s from Aave...", amount_str)
    tx_hash = gateway.borrow(asset, settings.amount, mode, beneficiary)
    receipt = wait_for_confirmation(gateway, tx_hash)

    print(f"\nSuccessfully borrowed {amount_str}!")
    print_receipt(receipt)

    after = gateway.get_user_account_data(beneficiary)
    print_account_snapshot(after, "Updated User Account Data")
    warning = warn_if_health_factor_low(after)

    return OperationResult(
        receipt=receipt,
        amount=settings.amount,
        before=before,
        after=after,
        health_factor_warning=warning,
    )
