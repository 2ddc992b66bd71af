"""Source verification against an Etherscan-compatible explorer API."""

from __future__ import annotations

import json
import logging
from typing import Any, Sequence

from aave_ops.data.artifacts import ContractArtifact
from aave_ops.errors import VerificationError

logger = logging.getLogger(__name__)

# Etherscan V2 multichain endpoint; the chain is selected by ``chainid``
ETHERSCAN_V2_API = "https://api.etherscan.io/v2/api"

_ALREADY_VERIFIED = "already verified"


def encode_constructor_args(abi: list[dict[str, Any]], args: Sequence[Any]) -> str:
    """ABI-encode constructor arguments as unprefixed hex, as Etherscan wants."""
    from eth_abi import encode

    constructor = next((item for item in abi if item.get("type") == "constructor"), None)
    types = [inp["type"] for inp in constructor["inputs"]] if constructor else []
    if len(types) != len(args):
        raise VerificationError(
            f"Constructor expects {len(types)} argument(s), got {len(args)}"
        )
    return encode(types, list(args)).hex() if types else ""


def _query_explorer(url: str, params: dict[str, Any], data: dict[str, Any]) -> dict:
    """POST a form to the explorer API and return the decoded response."""
    import requests

    resp = requests.post(url, params=params, data=data, timeout=30)
    resp.raise_for_status()
    return resp.json()


def verify_contract(
    artifact: ContractArtifact,
    address: str,
    constructor_args: Sequence[Any],
    chain_id: int,
    api_key: str | None,
    api_url: str | None = None,
) -> str:
    """Submit the artifact's source for verification at *address*.

    Returns the explorer's verification GUID, or ``"already verified"``.
    Raises ``VerificationError`` when the request cannot be built or the
    explorer rejects it; HTTP failures propagate as ``requests`` errors.
    """
    if not api_key:
        raise VerificationError("ETHERSCAN_API_KEY is not set")
    if artifact.standard_json_input is None or not artifact.compiler_version:
        raise VerificationError(
            f"Artifact for {artifact.contract_name} carries no standard JSON input "
            "or compiler version"
        )

    qualified_name = (
        f"{artifact.source_name}:{artifact.contract_name}"
        if artifact.source_name
        else artifact.contract_name
    )
    compiler = artifact.compiler_version
    if not compiler.startswith("v"):
        compiler = "v" + compiler

    data = {
        "apikey": api_key,
        "module": "contract",
        "action": "verifysourcecode",
        "codeformat": "solidity-standard-json-input",
        "sourceCode": json.dumps(artifact.standard_json_input),
        "contractaddress": address,
        "contractname": qualified_name,
        "compilerversion": compiler,
        # Etherscan's spelling
        "constructorArguements": encode_constructor_args(artifact.abi, constructor_args),
    }
    result = _query_explorer(api_url or ETHERSCAN_V2_API, {"chainid": chain_id}, data)

    message = str(result.get("result", ""))
    if str(result.get("status")) != "1":
        if _ALREADY_VERIFIED in message.lower():
            logger.info("Contract %s is already verified", address)
            return _ALREADY_VERIFIED
        raise VerificationError(f"Explorer rejected verification: {message}")

    logger.info("Verification submitted for %s (guid=%s)", address, message)
    return message
