"""Tests for the borrow operation."""

from __future__ import annotations

import logging

import pytest

from aave_ops.config import BorrowSettings
from aave_ops.data.constants import HEALTH_FACTOR_WARNING, InterestRateMode
from aave_ops.errors import NoBorrowCapacityError
from aave_ops.operations.borrow import rate_mode_label, run_borrow
from conftest import CONTRACT, DAI, ONE_DAI, OTHER, SIGNER, RecordingGateway, make_snapshot

SETTINGS = BorrowSettings(contract_address=CONTRACT, asset_address=DAI, amount=ONE_DAI)


class TestBorrowPreconditions:
    def test_no_capacity_fails_before_borrow(self, gateway: RecordingGateway) -> None:
        gateway.snapshots = [make_snapshot(available=0)]

        with pytest.raises(NoBorrowCapacityError, match="No available borrows"):
            run_borrow(SETTINGS, gateway)

        assert gateway.transactions == []

    def test_reads_capacity_of_beneficiary(self, gateway: RecordingGateway) -> None:
        settings = BorrowSettings(CONTRACT, DAI, ONE_DAI, on_behalf_of=OTHER)

        run_borrow(settings, gateway)

        assert gateway.calls_to("get_user_account_data")[0] == (OTHER,)


class TestBorrowExecution:
    def test_defaults_to_variable_rate_and_signer(self, gateway: RecordingGateway) -> None:
        result = run_borrow(SETTINGS, gateway)

        assert gateway.calls_to("borrow") == [
            (DAI, ONE_DAI, InterestRateMode.VARIABLE, SIGNER)
        ]
        assert result.before is not None
        assert result.after is not None

    def test_passes_rate_mode_through(self, gateway: RecordingGateway) -> None:
        settings = BorrowSettings(CONTRACT, DAI, ONE_DAI, interest_rate_mode=1)

        run_borrow(settings, gateway)

        assert gateway.calls_to("borrow")[0][2] == 1

    def test_borrow_revert_propagates(self, gateway: RecordingGateway) -> None:
        gateway.errors["borrow"] = RuntimeError("execution reverted: 36")

        with pytest.raises(RuntimeError, match="36"):
            run_borrow(SETTINGS, gateway)

    def test_no_approval_is_requested(self, gateway: RecordingGateway) -> None:
        run_borrow(SETTINGS, gateway)
        assert "approve" not in gateway.call_names
        assert "get_allowance" not in gateway.call_names


class TestHealthFactorAdvisory:
    def test_warning_below_threshold(
        self, gateway: RecordingGateway, caplog: pytest.LogCaptureFixture
    ) -> None:
        gateway.snapshots = [
            make_snapshot(),
            make_snapshot(health_factor=HEALTH_FACTOR_WARNING - 1),
        ]

        with caplog.at_level(logging.WARNING):
            result = run_borrow(SETTINGS, gateway)

        assert result.health_factor_warning is True
        assert "Health factor is low" in caplog.text

    def test_no_warning_at_threshold(
        self, gateway: RecordingGateway, caplog: pytest.LogCaptureFixture
    ) -> None:
        gateway.snapshots = [
            make_snapshot(),
            make_snapshot(health_factor=HEALTH_FACTOR_WARNING),
        ]

        with caplog.at_level(logging.WARNING):
            result = run_borrow(SETTINGS, gateway)

        assert result.health_factor_warning is False
        assert "Health factor is low" not in caplog.text


class TestRateModeLabel:
    def test_stable(self) -> None:
        assert rate_mode_label(1) == "Stable"

    def test_variable(self) -> None:
        assert rate_mode_label(2) == "Variable"

    def test_unknown_mode_reads_as_variable(self) -> None:
        assert rate_mode_label(3) == "Variable"
