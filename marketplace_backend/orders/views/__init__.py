from .admin import AdminOrderViewSet
from .cart import ActiveCartView, CartItemDetailView, CartItemsView, ClearCartView
from .checkout import CheckoutView
from .merchant import MerchantOrderViewSet
from .orders import MyOrderViewSet, TrackOrderView

__all__ = [
    "ActiveCartView",
    "AdminOrderViewSet",
    "CartItemDetailView",
    "CartItemsView",
    "CheckoutView",
    "ClearCartView",
    "MerchantOrderViewSet",
    "MyOrderViewSet",
    "TrackOrderView",
]
