# stores/services/exceptions.py

"""
STORE SERVICE ERRORS
"""


class StoreServiceError(Exception):
    """Base exception for store services."""


class StoreAlreadyExistsError(StoreServiceError):
    """Raised when a user who already owns a store applies again."""


class InvalidStoreTransitionError(StoreServiceError):
    """Raised on a status change the lifecycle does not allow."""


class StoreNotActiveError(StoreServiceError):
    """Raised when an operation needs an active store."""
