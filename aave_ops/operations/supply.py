"""Supply an asset to Aave through the wrapper contract."""

from __future__ import annotations

import logging

from aave_ops.config import SupplySettings
from aave_ops.data.interfaces import LendingGateway
from aave_ops.errors import InsufficientBalanceError
from aave_ops.operations.common import (
    OperationResult,
    ensure_allowance,
    fetch_snapshot_best_effort,
    read_token_info,
    wait_for_confirmation,
)
from aave_ops.reporting import format_token_amount, print_receipt

logger = logging.getLogger(__name__)


def run_supply(settings: SupplySettings, gateway: LendingGateway) -> OperationResult:
    """Check balance and allowance, approve if needed, then deposit.

    The balance check happens before any transaction, so an underfunded
    signer never sends an approval. The post-deposit account snapshot is
    best-effort.
    """
    signer = gateway.get_signer_address()
    beneficiary = settings.on_behalf_of or signer
    asset = settings.asset_address

    logger.info("Signer: %s", signer)
    logger.info("Contract: %s", settings.contract_address)
    logger.info("Asset: %s", asset)
    logger.info("Amount: %d", settings.amount)
    logger.info("On behalf of: %s", beneficiary)

    token = read_token_info(gateway, asset)
    amount_str = format_token_amount(settings.amount, token)

    balance = gateway.get_balance(asset, signer)
    logger.info("Your balance: %s", format_token_amount(balance, token))
    if balance < settings.amount:
        raise InsufficientBalanceError(
            f"Insufficient balance. You have {format_token_amount(balance, token)}"
        )

    approval = ensure_allowance(gateway, token, signer, settings.amount)

    logger.info("Supplying %s to Aave...", amount_str)
    tx_hash = gateway.deposit(asset, settings.amount, beneficiary)
    receipt = wait_for_confirmation(gateway, tx_hash)

    print(f"\nSuccessfully supplied {amount_str}!")
    print_receipt(receipt)

    after = fetch_snapshot_best_effort(gateway, beneficiary)
    return OperationResult(
        receipt=receipt,
        amount=settings.amount,
        after=after,
        approval=approval,
    )
