from .history import BrowsingHistoryViewSet
from .product import (
    AdminProductViewSet,
    MerchantProductViewSet,
    ProductViewSet,
    storefront_products,
)

__all__ = [
    "AdminProductViewSet",
    "BrowsingHistoryViewSet",
    "MerchantProductViewSet",
    "ProductViewSet",
    "storefront_products",
]
