from .admin import AdminNotificationViewSet
from .notifications import NotificationViewSet

__all__ = ["AdminNotificationViewSet", "NotificationViewSet"]
