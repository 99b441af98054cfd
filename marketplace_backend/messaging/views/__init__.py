from .messages import MessageViewSet
from .store import StoreMessageViewSet

__all__ = ["MessageViewSet", "StoreMessageViewSet"]
