"""One function per operator command."""

from aave_ops.operations.borrow import run_borrow
from aave_ops.operations.deploy import run_deploy
from aave_ops.operations.repay import run_repay
from aave_ops.operations.status import run_status
from aave_ops.operations.supply import run_supply
from aave_ops.operations.withdraw import run_withdraw

__all__ = [
    "run_borrow",
    "run_deploy",
    "run_repay",
    "run_status",
    "run_supply",
    "run_withdraw",
]
