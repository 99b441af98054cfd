# messaging/views/common.py

from __future__ import annotations

from rest_framework import status

from backend.errors import error_response
from messaging.services.exceptions import (
    InvalidRecipientError,
    MessagePermissionError,
    MessagingError,
)


def messaging_error_response(exc: MessagingError):
    if isinstance(exc, MessagePermissionError):
        code, http_status = "forbidden", status.HTTP_403_FORBIDDEN
    elif isinstance(exc, InvalidRecipientError):
        code, http_status = "invalid_recipient", status.HTTP_400_BAD_REQUEST
    else:
        code, http_status = "message_error", status.HTTP_400_BAD_REQUEST
    return error_response(code=code, message=str(exc), http_status=http_status)
