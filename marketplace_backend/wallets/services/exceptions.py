# wallets/services/exceptions.py

"""
WALLET SERVICE ERRORS

Centralized domain errors for balance movements, recharges and withdrawals.
"""


class WalletError(Exception):
    """Base exception for all wallet service failures."""


class InvalidAmountError(WalletError):
    """Raised when an amount is missing, zero or negative."""


class InsufficientBalanceError(WalletError):
    """Raised when a debit would take a balance below zero."""


class UnsupportedMethodError(WalletError):
    """Raised for payment methods that cannot be self-served (bank transfer)."""


class ProofRequiredError(WalletError):
    """Raised when a recharge is submitted without a payment proof URL."""


class WithdrawalPinError(WalletError):
    """Raised when the withdrawal PIN is missing or does not match."""


class InvalidTransactionTransitionError(WalletError):
    """Raised on a status change the transaction lifecycle does not allow."""
