# cards/services/exceptions.py


class CardError(Exception):
    """Base exception for saved-card operations."""


class CardLimitReachedError(CardError):
    pass


class DuplicateCardTypeError(CardError):
    pass


class DuplicateCardNumberError(CardError):
    pass


class InvalidCardNumberError(CardError):
    pass


class CardDecryptionError(CardError):
    """Stored ciphertext could not be decrypted with the configured key."""
