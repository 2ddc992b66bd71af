"""Tests for wrapper deployment and source verification."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest

from aave_ops.config import DeploySettings
from aave_ops.data.artifacts import ContractArtifact
from aave_ops.data.constants import DEPLOY_CONFIRMATIONS
from aave_ops.data.contracts import POOL_ADDRESSES_PROVIDER, WRAPPER_ABI
from aave_ops.errors import ConfigurationError, VerificationError
from aave_ops.operations.deploy import resolve_addresses_provider, run_deploy
from conftest import DEPLOYED, RecordingGateway

OVERRIDE = "0x5555555555555555555555555555555555555555"

ARTIFACT = ContractArtifact(
    contract_name="AaveDepositBorrow",
    abi=WRAPPER_ABI,
    bytecode="0x6080604052",
    source_name="contracts/AaveDepositBorrow.sol",
    standard_json_input={"language": "Solidity", "sources": {}},
    compiler_version="0.8.20+commit.a1b79de6",
)


class TestResolveAddressesProvider:
    def test_table_entry(self) -> None:
        assert resolve_addresses_provider("sepolia") == POOL_ADDRESSES_PROVIDER["sepolia"]

    def test_table_wins_over_override(self) -> None:
        assert (
            resolve_addresses_provider("mainnet", OVERRIDE)
            == POOL_ADDRESSES_PROVIDER["mainnet"]
        )

    def test_override_for_unlisted_network(self) -> None:
        assert resolve_addresses_provider("hardhat", OVERRIDE) == OVERRIDE

    def test_unlisted_without_override(self) -> None:
        with pytest.raises(ConfigurationError, match="AAVE_POOL_ADDRESSES_PROVIDER"):
            resolve_addresses_provider("hardhat")


class TestLocalDeploy:
    def test_constructor_receives_provider(self, gateway: RecordingGateway) -> None:
        settings = DeploySettings(network="hardhat", addresses_provider_override=OVERRIDE)

        result = run_deploy(settings, gateway, ARTIFACT)

        assert gateway.calls_to("deploy_contract") == [(ARTIFACT.bytecode, OVERRIDE)]
        assert result.contract_address == DEPLOYED
        assert result.addresses_provider == OVERRIDE

    def test_skips_confirmations_and_verification(self, gateway: RecordingGateway) -> None:
        settings = DeploySettings(network="localhost", addresses_provider_override=OVERRIDE)

        with patch("aave_ops.operations.deploy.verify_contract") as verify:
            result = run_deploy(settings, gateway, ARTIFACT)

        verify.assert_not_called()
        assert [args[1] for args in gateway.calls_to("wait_for_receipt")] == [1]
        assert result.verified is False

    def test_missing_provider_sends_nothing(self, gateway: RecordingGateway) -> None:
        with pytest.raises(ConfigurationError):
            run_deploy(DeploySettings(network="hardhat"), gateway, ARTIFACT)

        assert gateway.calls == []

    def test_prints_address(
        self, gateway: RecordingGateway, capsys: pytest.CaptureFixture[str]
    ) -> None:
        settings = DeploySettings(network="hardhat", addresses_provider_override=OVERRIDE)
        run_deploy(settings, gateway, ARTIFACT)

        out = capsys.readouterr().out
        assert f"AaveDepositBorrow deployed to: {DEPLOYED}" in out
        assert "Network: hardhat" in out


class TestPublicDeploy:
    def test_waits_then_verifies(self, gateway: RecordingGateway) -> None:
        gateway.chain_id = 11155111
        settings = DeploySettings(network="sepolia", explorer_api_key="KEY")

        with patch("aave_ops.operations.deploy.verify_contract") as verify:
            result = run_deploy(settings, gateway, ARTIFACT)

        provider = POOL_ADDRESSES_PROVIDER["sepolia"]
        assert gateway.calls_to("deploy_contract") == [(ARTIFACT.bytecode, provider)]
        waits = [args[1] for args in gateway.calls_to("wait_for_receipt")]
        assert waits == [1, DEPLOY_CONFIRMATIONS]
        verify.assert_called_once_with(
            ARTIFACT,
            DEPLOYED,
            [provider],
            chain_id=11155111,
            api_key="KEY",
            api_url=None,
        )
        assert result.verified is True

    def test_verification_failure_is_not_fatal(
        self, gateway: RecordingGateway, caplog: pytest.LogCaptureFixture
    ) -> None:
        settings = DeploySettings(network="mainnet", explorer_api_key="KEY")

        with patch(
            "aave_ops.operations.deploy.verify_contract",
            side_effect=VerificationError("Explorer rejected verification: bad"),
        ), caplog.at_level(logging.WARNING):
            result = run_deploy(settings, gateway, ARTIFACT)

        assert result.contract_address == DEPLOYED
        assert result.verified is False
        assert "Error verifying contract" in caplog.text

    def test_missing_api_key_is_not_fatal(self, gateway: RecordingGateway) -> None:
        result = run_deploy(DeploySettings(network="polygon"), gateway, ARTIFACT)

        assert result.contract_address == DEPLOYED
        assert result.verified is False


class TestArtifactLoading:
    def test_loads_artifact_from_settings(self, gateway: RecordingGateway, tmp_path) -> None:
        path = tmp_path / "AaveDepositBorrow.json"
        path.write_text(json.dumps({"abi": WRAPPER_ABI, "bytecode": "0x6080"}))
        settings = DeploySettings(
            network="hardhat", addresses_provider_override=OVERRIDE, artifact_path=str(path)
        )

        run_deploy(settings, gateway)

        assert gateway.calls_to("deploy_contract") == [("0x6080", OVERRIDE)]

    def test_missing_artifact(self, gateway: RecordingGateway, tmp_path) -> None:
        settings = DeploySettings(
            network="hardhat",
            addresses_provider_override=OVERRIDE,
            artifact_path=str(tmp_path / "missing.json"),
        )

        with pytest.raises(ConfigurationError, match="artifact not found"):
            run_deploy(settings, gateway)

        assert gateway.transactions == []
