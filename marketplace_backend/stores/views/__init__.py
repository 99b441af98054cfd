from .admin import AdminStoreViewSet
from .news import AdminStoreNewsViewSet, StoreNewsViewSet
from .stores import StoreViewSet

__all__ = ["AdminStoreNewsViewSet", "AdminStoreViewSet", "StoreNewsViewSet", "StoreViewSet"]
