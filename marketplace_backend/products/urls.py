# products/urls.py

"""
PRODUCTS URLS

Registered under /api/products/:
    products/            public catalog (AllowAny)
    merchant/products/   merchant's own store
    admin/products/      back-office
    history/             signed-in user's browsing history
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from products.views import (
    AdminProductViewSet,
    BrowsingHistoryViewSet,
    MerchantProductViewSet,
    ProductViewSet,
)

router = DefaultRouter()

router.register(r"products", ProductViewSet, basename="products")
router.register(r"merchant/products", MerchantProductViewSet, basename="merchant-products")
router.register(r"admin/products", AdminProductViewSet, basename="admin-products")
router.register(r"history", BrowsingHistoryViewSet, basename="browsing-history")

urlpatterns = [
    path("", include(router.urls)),
]
