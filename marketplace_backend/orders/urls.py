# orders/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from orders.views import (
    ActiveCartView,
    AdminOrderViewSet,
    CartItemDetailView,
    CartItemsView,
    CheckoutView,
    ClearCartView,
    MerchantOrderViewSet,
    MyOrderViewSet,
    TrackOrderView,
)

router = DefaultRouter()
router.register(r"my-orders", MyOrderViewSet, basename="my-orders")
router.register(r"merchant/orders", MerchantOrderViewSet, basename="merchant-orders")
router.register(r"admin/orders", AdminOrderViewSet, basename="admin-orders")

urlpatterns = [
    path("cart/", ActiveCartView.as_view(), name="cart"),
    path("cart/items/", CartItemsView.as_view(), name="cart-items"),
    path("cart/items/<uuid:item_id>/", CartItemDetailView.as_view(), name="cart-item-detail"),
    path("cart/clear/", ClearCartView.as_view(), name="cart-clear"),
    path("checkout/", CheckoutView.as_view(), name="checkout"),
    path("track/", TrackOrderView.as_view(), name="order-track"),
    path("", include(router.urls)),
]
