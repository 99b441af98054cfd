from .product import (
    AdminProductSerializer,
    BrowsingHistorySerializer,
    BulkProductUpdateSerializer,
    ProductSerializer,
)

__all__ = [
    "AdminProductSerializer",
    "BrowsingHistorySerializer",
    "BulkProductUpdateSerializer",
    "ProductSerializer",
]
