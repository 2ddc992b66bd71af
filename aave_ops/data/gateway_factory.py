"""Factory for creating the LendingGateway used by the operator scripts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from aave_ops.data.interfaces import LendingGateway
from aave_ops.errors import ConfigurationError

if TYPE_CHECKING:
    from aave_ops.config import ConnectionSettings

logger = logging.getLogger(__name__)


def create_gateway(
    connection: ConnectionSettings,
    contract_address: str | None = None,
) -> LendingGateway:
    """Create an on-chain gateway for *connection*.

    Parameters
    ----------
    connection : ConnectionSettings
        RPC endpoint, signing key and receipt-wait tuning.
    contract_address : str | None
        Deployed wrapper contract; omitted for deployments.

    Returns
    -------
    LendingGateway
        A connected ``OnChainGateway``.

    Raises
    ------
    ConfigurationError
        If the RPC endpoint does not answer.
    """
    from aave_ops.data.onchain_gateway import OnChainGateway

    logger.debug(
        "Connecting to %s (%s), contract=%s",
        connection.network, connection.rpc_url, contract_address,
    )
    gateway = OnChainGateway(
        rpc_url=connection.rpc_url,
        contract_address=contract_address,
        private_key=connection.private_key,
        tx_timeout=connection.tx_timeout,
        poll_interval=connection.poll_interval,
    )
    if not gateway.is_connected:
        raise ConfigurationError(
            f"Cannot connect to {connection.rpc_url}. Check RPC_URL and that the node is running."
        )
    return gateway
