"""Token amounts with an explicit "everything" variant.

``AMOUNT=max`` must reach the contract as ``type(uint256).max`` so that
Aave resolves the real balance or debt itself. Keeping the sentinel as its
own type avoids mixing it up with a literal number anywhere downstream.
"""

from __future__ import annotations

from dataclasses import dataclass

from aave_ops.data.constants import MAX_UINT256
from aave_ops.errors import ConfigurationError

MAX_KEYWORD = "max"


@dataclass(frozen=True)
class Exact:
    """A literal amount in the token's smallest unit."""

    value: int

    is_all = False

    def to_uint(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class All:
    """The whole balance, debt or collateral, resolved on chain."""

    is_all = True

    def to_uint(self) -> int:
        return MAX_UINT256

    def __str__(self) -> str:
        return MAX_KEYWORD


Amount = Exact | All


def parse_amount(raw: str, variable: str = "AMOUNT") -> Amount:
    """Parse an environment amount: a non-negative integer or ``max``."""
    text = raw.strip()
    if text.lower() == MAX_KEYWORD:
        return All()
    try:
        value = int(text, 10)
    except ValueError:
        raise ConfigurationError(
            f"{variable} must be an integer amount in the token's smallest unit "
            f"or '{MAX_KEYWORD}', got {raw!r}"
        ) from None
    if value < 0 or value > MAX_UINT256:
        raise ConfigurationError(f"{variable} is out of uint256 range: {raw!r}")
    return Exact(value)
