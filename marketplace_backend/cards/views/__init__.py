from .admin import AdminCardViewSet
from .user import CardViewSet

__all__ = ["AdminCardViewSet", "CardViewSet"]
