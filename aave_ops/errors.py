"""Exception hierarchy for operator failures.

Errors raised by web3 itself (reverts, rejected transactions, transport
failures) are not wrapped; they reach the CLI unchanged.
"""


class OperatorError(Exception):
    """Base class for failures detected by this package."""


class ConfigurationError(OperatorError):
    """Required configuration is missing or malformed."""


class PreconditionError(OperatorError):
    """On-chain state makes the requested operation pointless."""


class InsufficientBalanceError(PreconditionError):
    pass


class NoBorrowCapacityError(PreconditionError):
    pass


class NoDebtError(PreconditionError):
    pass


class NoCollateralError(PreconditionError):
    pass


class TransactionFailedError(OperatorError):
    """A transaction was mined but reverted (receipt status 0)."""

    def __init__(self, tx_hash: str, block_number: int | None = None) -> None:
        self.tx_hash = tx_hash
        self.block_number = block_number
        super().__init__(f"Transaction {tx_hash} reverted (block {block_number})")


class VerificationError(OperatorError):
    """The block explorer refused to verify the deployed source."""
