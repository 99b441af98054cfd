# orders/views/common.py

from __future__ import annotations

from rest_framework import status

from backend.errors import error_response
from orders.services.exceptions import (
    CartError,
    EmptyCartError,
    InsufficientBalanceError,
    InvalidOrderTransitionError,
    OrderLifecycleError,
    ProductUnavailableError,
)


def order_error_response(exc: Exception):
    """Map cart / checkout / lifecycle errors to the API error envelope."""
    if isinstance(exc, EmptyCartError):
        code, http_status = "empty_cart", status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, ProductUnavailableError):
        code, http_status = "product_unavailable", status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, InsufficientBalanceError):
        code, http_status = "insufficient_balance", status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, InvalidOrderTransitionError):
        code, http_status = "invalid_transition", status.HTTP_409_CONFLICT
    elif isinstance(exc, OrderLifecycleError):
        code, http_status = "order_error", status.HTTP_400_BAD_REQUEST
    elif isinstance(exc, CartError):
        code, http_status = "cart_error", status.HTTP_400_BAD_REQUEST
    else:
        code, http_status = "checkout_failed", status.HTTP_400_BAD_REQUEST

    return error_response(code=code, message=str(exc), http_status=http_status)
