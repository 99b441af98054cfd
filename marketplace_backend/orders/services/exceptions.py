# orders/services/exceptions.py

"""
ORDER SERVICE ERRORS

Raised by cart, checkout and order lifecycle services.
Views translate them into {"error": {"code", "message"}} responses.
"""

from wallets.services.exceptions import InsufficientBalanceError  # noqa: F401


class CartError(Exception):
    """Base exception for cart mutations."""


class CheckoutError(Exception):
    """Base checkout exception"""


class EmptyCartError(CheckoutError):
    pass


class ProductUnavailableError(CheckoutError):
    """A cart line points at an inactive or unavailable product."""


class PlatformAccountMissingError(CheckoutError):
    """Platform items were ordered but no platform account exists to receive payment."""


class OrderLifecycleError(Exception):
    pass


class InvalidOrderTransitionError(OrderLifecycleError):
    pass
