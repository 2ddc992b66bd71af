"""Shared fixtures: an in-memory gateway that records every call."""
from __future__ import annotations

from typing import Any

import pytest

from aave_ops.data.contracts import TOKEN_ADDRESSES
from aave_ops.data.interfaces import (
    AccountSnapshot,
    LendingGateway,
    ReserveData,
    TxReceipt,
)

SIGNER = "0x1111111111111111111111111111111111111111"
OTHER = "0x3333333333333333333333333333333333333333"
CONTRACT = "0x2222222222222222222222222222222222222222"
DEPLOYED = "0x4444444444444444444444444444444444444444"
DAI = TOKEN_ADDRESSES["DAI"]

ONE_DAI = 10**18
HEALTHY_HF = 2 * 10**18

TX_METHODS = ("approve", "deposit", "borrow", "repay", "withdraw", "deploy_contract")


def make_snapshot(
    collateral: int = 1_000_00000000,
    debt: int = 0,
    available: int = 750_00000000,
    threshold: int = 8_000,
    ltv: int = 7_500,
    health_factor: int = HEALTHY_HF,
) -> AccountSnapshot:
    return AccountSnapshot(
        total_collateral_base=collateral,
        total_debt_base=debt,
        available_borrows_base=available,
        current_liquidation_threshold=threshold,
        ltv=ltv,
        health_factor=health_factor,
    )


class RecordingGateway(LendingGateway):
    """LendingGateway fake with settable state and a call log.

    ``snapshots`` is consumed in order by ``get_user_account_data``; the
    last one is repeated. Any method named in ``errors`` raises that
    exception instead of running.
    """

    def __init__(self) -> None:
        self.signer = SIGNER
        self.chain_id = 1
        self.symbol = "DAI"
        self.decimals = 18
        self.balance = 0
        self.allowance = 0
        self.price = 100_000_000
        self.snapshots: list[AccountSnapshot] = [make_snapshot()]
        self.reserve = ReserveData(
            liquidity_index=10**27,
            current_liquidity_rate=3 * 10**25,
            variable_borrow_index=10**27,
            current_variable_borrow_rate=5 * 10**25,
            current_stable_borrow_rate=0,
            last_update_timestamp=1_700_000_000,
            a_token_address="0x018008bfb33d285247A21d44E50697654f754e63",
            variable_debt_token_address="0xcF8d0c70c850859266f5C338b38F9D663181C314",
        )
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self._next_block = 100
        self._tx_count = 0

    # -- bookkeeping ----------------------------------------------------

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.errors:
            raise self.errors[name]

    def _tx(self, name: str, *args: Any) -> str:
        self._record(name, *args)
        self._tx_count += 1
        return "0x" + format(self._tx_count, "064x")

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    @property
    def transactions(self) -> list[tuple[str, tuple[Any, ...]]]:
        return [(name, args) for name, args in self.calls if name in TX_METHODS]

    def calls_to(self, name: str) -> list[tuple[Any, ...]]:
        return [args for n, args in self.calls if n == name]

    # -- LendingGateway -------------------------------------------------

    def get_signer_address(self) -> str:
        self._record("get_signer_address")
        return self.signer

    def get_chain_id(self) -> int:
        self._record("get_chain_id")
        return self.chain_id

    def get_token_symbol(self, asset: str) -> str:
        self._record("get_token_symbol", asset)
        return self.symbol

    def get_token_decimals(self, asset: str) -> int:
        self._record("get_token_decimals", asset)
        return self.decimals

    def get_balance(self, asset: str, owner: str) -> int:
        self._record("get_balance", asset, owner)
        return self.balance

    def get_allowance(self, asset: str, owner: str, spender: str) -> int:
        self._record("get_allowance", asset, owner, spender)
        return self.allowance

    def approve(self, asset: str, spender: str, amount: int) -> str:
        return self._tx("approve", asset, spender, amount)

    @property
    def contract_address(self) -> str:
        return CONTRACT

    def deposit(self, asset: str, amount: int, on_behalf_of: str) -> str:
        return self._tx("deposit", asset, amount, on_behalf_of)

    def borrow(self, asset, amount, interest_rate_mode, on_behalf_of) -> str:
        return self._tx("borrow", asset, amount, interest_rate_mode, on_behalf_of)

    def repay(self, asset, amount, interest_rate_mode, on_behalf_of) -> str:
        return self._tx("repay", asset, amount, interest_rate_mode, on_behalf_of)

    def withdraw(self, asset: str, amount: int, to: str) -> str:
        return self._tx("withdraw", asset, amount, to)

    def get_user_account_data(self, user: str) -> AccountSnapshot:
        self._record("get_user_account_data", user)
        if len(self.snapshots) > 1:
            return self.snapshots.pop(0)
        return self.snapshots[0]

    def get_reserve_data(self, asset: str) -> ReserveData:
        self._record("get_reserve_data", asset)
        return self.reserve

    def get_asset_price(self, asset: str) -> int:
        self._record("get_asset_price", asset)
        return self.price

    def deploy_contract(self, abi, bytecode, *args) -> str:
        return self._tx("deploy_contract", bytecode, *args)

    def wait_for_receipt(self, tx_hash: str, confirmations: int = 1) -> TxReceipt:
        self._record("wait_for_receipt", tx_hash, confirmations)
        self._next_block += 1
        return TxReceipt(
            transaction_hash=tx_hash,
            block_number=self._next_block,
            gas_used=150_000,
            contract_address=DEPLOYED,
        )


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()
