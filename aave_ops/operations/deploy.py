"""Deploy the AaveDepositBorrow wrapper and verify its source."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from aave_ops.config import DeploySettings
from aave_ops.data.artifacts import ContractArtifact, load_artifact
from aave_ops.data.constants import DEPLOY_CONFIRMATIONS, LOCAL_NETWORKS, WRAPPER_CONTRACT_NAME
from aave_ops.data.contracts import POOL_ADDRESSES_PROVIDER
from aave_ops.data.interfaces import LendingGateway, TxReceipt
from aave_ops.errors import ConfigurationError, OperatorError
from aave_ops.explorer import verify_contract

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeployResult:
    contract_address: str
    addresses_provider: str
    receipt: TxReceipt
    verified: bool = False


def resolve_addresses_provider(network: str, override: str | None = None) -> str:
    """Aave PoolAddressesProvider for *network*.

    The static table wins; *override* (``AAVE_POOL_ADDRESSES_PROVIDER``) is
    only consulted for networks the table does not list.
    """
    address = POOL_ADDRESSES_PROVIDER.get(network) or override
    if not address:
        raise ConfigurationError(
            f"No Pool Addresses Provider address found for network {network}. "
            "Please set AAVE_POOL_ADDRESSES_PROVIDER in your .env file or add it "
            "to the network table."
        )
    return address


def run_deploy(
    settings: DeploySettings,
    gateway: LendingGateway,
    artifact: ContractArtifact | None = None,
) -> DeployResult:
    """Deploy the wrapper with the addresses provider as constructor argument.

    On non-local networks, waits for ``DEPLOY_CONFIRMATIONS`` blocks and
    submits the source to the block explorer. A failed verification is
    logged and does not fail the deployment.
    """
    network = settings.network
    logger.info("Deploying to %s...", network)

    provider = resolve_addresses_provider(network, settings.addresses_provider_override)
    logger.info("Using Pool Addresses Provider: %s", provider)

    if artifact is None:
        artifact = load_artifact(settings.artifact_path, WRAPPER_CONTRACT_NAME)

    tx_hash = gateway.deploy_contract(artifact.abi, artifact.bytecode, provider)
    logger.info("Deployment transaction: %s", tx_hash)
    receipt = gateway.wait_for_receipt(tx_hash)
    if not receipt.contract_address:
        raise OperatorError(f"Deployment receipt {tx_hash} has no contract address")

    address = receipt.contract_address
    print(f"{artifact.contract_name} deployed to: {address}")
    print(f"Network: {network}")
    print(f"Pool Addresses Provider: {provider}")

    verified = False
    if network not in LOCAL_NETWORKS:
        logger.info("Waiting for block confirmations...")
        gateway.wait_for_receipt(tx_hash, confirmations=DEPLOY_CONFIRMATIONS)
        try:
            verify_contract(
                artifact,
                address,
                [provider],
                chain_id=gateway.get_chain_id(),
                api_key=settings.explorer_api_key,
                api_url=settings.explorer_api_url,
            )
            verified = True
            print("Contract verification submitted to the block explorer!")
        except Exception as exc:
            logger.warning("Error verifying contract: %s", exc)

    return DeployResult(
        contract_address=address,
        addresses_provider=provider,
        receipt=receipt,
        verified=verified,
    )
