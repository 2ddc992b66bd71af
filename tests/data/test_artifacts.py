"""Tests for compiled-artifact loading."""

from __future__ import annotations

import json

import pytest

from aave_ops.data.artifacts import load_artifact
from aave_ops.data.contracts import WRAPPER_ABI
from aave_ops.errors import ConfigurationError


def _write(tmp_path, payload) -> str:
    path = tmp_path / "AaveDepositBorrow.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload))
    return str(path)


class TestLoadArtifact:
    def test_hardhat_format(self, tmp_path) -> None:
        path = _write(
            tmp_path,
            {
                "contractName": "AaveDepositBorrow",
                "sourceName": "contracts/AaveDepositBorrow.sol",
                "abi": WRAPPER_ABI,
                "bytecode": "0x6080",
            },
        )
        artifact = load_artifact(path)
        assert artifact.contract_name == "AaveDepositBorrow"
        assert artifact.source_name == "contracts/AaveDepositBorrow.sol"
        assert artifact.bytecode == "0x6080"
        assert artifact.standard_json_input is None

    def test_foundry_format(self, tmp_path) -> None:
        path = _write(tmp_path, {"abi": WRAPPER_ABI, "bytecode": {"object": "6080"}})
        artifact = load_artifact(path, "AaveDepositBorrow")
        assert artifact.bytecode == "0x6080"
        assert artifact.contract_name == "AaveDepositBorrow"

    def test_verification_fields(self, tmp_path) -> None:
        path = _write(
            tmp_path,
            {
                "abi": WRAPPER_ABI,
                "bytecode": "0x6080",
                "standardJsonInput": {"language": "Solidity"},
                "compilerVersion": "0.8.20",
            },
        )
        artifact = load_artifact(path)
        assert artifact.standard_json_input == {"language": "Solidity"}
        assert artifact.compiler_version == "0.8.20"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="ARTIFACT_PATH"):
            load_artifact(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError, match="Could not read"):
            load_artifact(_write(tmp_path, "{not json"))

    @pytest.mark.parametrize("bytecode", ["0x", "", None])
    def test_empty_bytecode(self, tmp_path, bytecode) -> None:
        with pytest.raises(ConfigurationError, match="no ABI or bytecode"):
            load_artifact(_write(tmp_path, {"abi": WRAPPER_ABI, "bytecode": bytecode}))
