"""Command-line interface: one process per operation, exit code 0 or 1."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Any, Callable, Mapping

from .config import (
    BorrowSettings,
    ConnectionSettings,
    DeploySettings,
    RepaySettings,
    StatusSettings,
    SupplySettings,
    WithdrawSettings,
    load_environment,
)
from .data import create_gateway
from .data.interfaces import LendingGateway
from .logging_setup import configure_logging
from .operations import (
    run_borrow,
    run_deploy,
    run_repay,
    run_status,
    run_supply,
    run_withdraw,
)

logger = logging.getLogger(__name__)

# command -> (settings class, runner, banner verb)
_OPERATIONS: dict[str, tuple[Any, Callable[..., Any], str]] = {
    "supply": (SupplySettings, run_supply, "Supplying tokens"),
    "borrow": (BorrowSettings, run_borrow, "Borrowing tokens"),
    "repay": (RepaySettings, run_repay, "Repaying tokens"),
    "withdraw": (WithdrawSettings, run_withdraw, "Withdrawing tokens"),
    "status": (StatusSettings, run_status, "Reading account status"),
}

_HELP = {
    "deploy": "Deploy the AaveDepositBorrow wrapper contract",
    "supply": "Supply ASSET_ADDRESS to Aave (approves first if needed)",
    "borrow": "Borrow ASSET_ADDRESS against supplied collateral",
    "repay": "Repay debt in ASSET_ADDRESS (AMOUNT defaults to max)",
    "withdraw": "Withdraw collateral in ASSET_ADDRESS (AMOUNT defaults to max)",
    "status": "Show account data, and reserve data when ASSET_ADDRESS is set",
}


def build_parser(prog: str = "aave-ops") -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--env-file",
        default=None,
        help="Path to a .env file (default: nearest .env from the working directory)",
    )
    common.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )

    parser = argparse.ArgumentParser(
        prog=prog,
        description="Operator scripts for the AaveDepositBorrow wrapper contract. "
        "Operation parameters are read from the environment.",
    )
    sub = parser.add_subparsers(dest="command")
    for name, help_text in _HELP.items():
        sub.add_parser(name, help=help_text, parents=[common])
    return parser


def run_command(
    command: str,
    environ: Mapping[str, str] | None = None,
    gateway: LendingGateway | None = None,
) -> Any:
    """Parse settings for *command* from the environment and execute it.

    Settings are validated before a gateway is built, so configuration
    errors never reach the network.
    """
    env = os.environ if environ is None else environ
    connection = ConnectionSettings.from_env(env)

    if command == "deploy":
        settings = DeploySettings.from_env(env)
        if gateway is None:
            gateway = create_gateway(connection)
        return run_deploy(settings, gateway)

    settings_cls, runner, verb = _OPERATIONS[command]
    settings = settings_cls.from_env(env)
    if gateway is None:
        gateway = create_gateway(connection, settings.contract_address)
    print(f"{verb} on {connection.network}...\n")
    return runner(settings, gateway)


def main(argv: list[str] | None = None, prog: str = "aave-ops") -> int:
    """Entry point; returns the process exit code."""
    parser = build_parser(prog)
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        load_environment(args.env_file)
        configure_logging(args.log_level or os.environ.get("LOG_LEVEL", "INFO"))
        run_command(args.command)
    except Exception as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"\nError: {exc}", file=sys.stderr)
        return 1
    return 0


def _script(command: str) -> Callable[[], None]:
    def entry() -> None:
        sys.exit(main([command, *sys.argv[1:]], prog=f"aave-{command}"))

    entry.__name__ = f"{command}_main"
    entry.__doc__ = f"Console script for ``{command}``."
    return entry


def ops_main() -> None:
    """Console script for the umbrella ``aave-ops`` command."""
    sys.exit(main())


deploy_main = _script("deploy")
supply_main = _script("supply")
borrow_main = _script("borrow")
repay_main = _script("repay")
withdraw_main = _script("withdraw")
status_main = _script("status")


if __name__ == "__main__":
    ops_main()
