"""Operator tooling for the AaveDepositBorrow wrapper contract."""

__version__ = "0.1.0"
