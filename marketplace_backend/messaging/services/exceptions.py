# messaging/services/exceptions.py


class MessagingError(Exception):
    """Base exception for store messaging failures."""


class InvalidRecipientError(MessagingError):
    """Raised when the receiver is not part of the store conversation."""


class MessagePermissionError(MessagingError):
    """Raised when a user acts on a message they did not receive."""
