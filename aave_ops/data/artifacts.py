"""Compiled contract artifacts (Hardhat or Foundry JSON output)."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from aave_ops.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContractArtifact:
    """ABI and creation bytecode of a compiled contract."""

    contract_name: str
    abi: list[dict[str, Any]]
    bytecode: str
    source_name: str | None = None
    # solc standard-JSON input, when the artifact carries it (for verification)
    standard_json_input: dict[str, Any] | None = field(default=None, compare=False)
    compiler_version: str | None = None


def _extract_bytecode(raw: Any) -> str:
    # Hardhat: "0x..."; Foundry: {"object": "0x...", ...}
    if isinstance(raw, dict):
        raw = raw.get("object", "")
    if not isinstance(raw, str):
        return ""
    if raw and not raw.startswith("0x"):
        raw = "0x" + raw
    return raw


def load_artifact(path: str | Path, contract_name: str | None = None) -> ContractArtifact:
    """Load an artifact JSON file.

    Raises ``ConfigurationError`` when the file is missing, unreadable, or
    holds no deployable bytecode.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(
            f"Contract artifact not found: {path}. "
            "Compile the contract first or set ARTIFACT_PATH."
        )

    try:
        with open(path) as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not read contract artifact {path}: {exc}") from exc

    abi = raw.get("abi")
    bytecode = _extract_bytecode(raw.get("bytecode"))
    if not isinstance(abi, list) or len(bytecode) <= 2:
        raise ConfigurationError(f"Artifact {path} has no ABI or bytecode")

    name = raw.get("contractName") or contract_name or path.stem
    artifact = ContractArtifact(
        contract_name=name,
        abi=abi,
        bytecode=bytecode,
        source_name=raw.get("sourceName"),
        standard_json_input=raw.get("standardJsonInput"),
        compiler_version=raw.get("compilerVersion"),
    )
    logger.debug("Loaded artifact %s from %s", name, path)
    return artifact
