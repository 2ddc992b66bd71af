"""Repay Aave debt through the wrapper contract."""

from __future__ import annotations

import logging

from aave_ops.config import RepaySettings
from aave_ops.data.interfaces import LendingGateway
from aave_ops.errors import InsufficientBalanceError, NoDebtError
from aave_ops.operations.borrow import rate_mode_label
from aave_ops.operations.common import (
    OperationResult,
    describe_amount,
    ensure_allowance,
    read_token_info,
    wait_for_confirmation,
)
from aave_ops.reporting import format_token_amount, print_account_snapshot, print_receipt

logger = logging.getLogger(__name__)


def run_repay(settings: RepaySettings, gateway: LendingGateway) -> OperationResult:
    """Repay a literal amount or, with ``All``, the whole debt.

    For ``All`` the contract receives ``MAX_UINT256`` and Aave caps the
    transfer at the outstanding debt; the local balance check is skipped
    because the exact figure is only known on chain.
    """
    signer = gateway.get_signer_address()
    beneficiary = settings.on_behalf_of or signer
    asset = settings.asset_address
    mode = settings.interest_rate_mode

    logger.info("Signer: %s", signer)
    logger.info("Contract: %s", settings.contract_address)
    logger.info("Asset: %s", asset)
    logger.info(
        "Amount: %s", "MAX (repay all)" if settings.amount.is_all else settings.amount
    )
    logger.info("Interest Rate Mode: %d (%s)", mode, rate_mode_label(mode))
    logger.info("On behalf of: %s", beneficiary)

    before = gateway.get_user_account_data(beneficiary)
    logger.info("Total Debt (Base): %d", before.total_debt_base)
    if before.total_debt_base == 0:
        raise NoDebtError("No debt to repay.")

    token = read_token_info(gateway, asset)
    repay_amount = settings.amount.to_uint()
    if settings.amount.is_all:
        logger.info("Repaying all debt...")
    else:
        logger.info("Repaying %s...", format_token_amount(repay_amount, token))

    balance = gateway.get_balance(asset, signer)
    logger.info("Your balance: %s", format_token_amount(balance, token))
    if not settings.amount.is_all and balance < repay_amount:
        raise InsufficientBalanceError(
            f"Insufficient balance. You have {format_token_amount(balance, token)}"
        )

    approval = ensure_allowance(gateway, token, signer, repay_amount)

    logger.info("Repaying %s of debt...", describe_amount(repay_amount, token))
    tx_hash = gateway.repay(asset, repay_amount, mode, beneficiary)
    receipt = wait_for_confirmation(gateway, tx_hash)

    print("\nSuccessfully repaid debt!")
    print_receipt(receipt)

    after = gateway.get_user_account_data(beneficiary)
    print_account_snapshot(after, "Updated User Account Data")

    return OperationResult(
        receipt=receipt,
        amount=repay_amount,
        before=before,
        after=after,
        approval=approval,
    )
