"""Chain access for the AaveDepositBorrow wrapper."""

from aave_ops.data.gateway_factory import create_gateway

__all__ = ["create_gateway"]
