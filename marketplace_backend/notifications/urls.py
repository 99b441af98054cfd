# notifications/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from notifications.views import AdminNotificationViewSet, NotificationViewSet

router = DefaultRouter()
router.register(r"notifications", NotificationViewSet, basename="notifications")
router.register(r"admin/notifications", AdminNotificationViewSet, basename="admin-notifications")

urlpatterns = [
    path("", include(router.urls)),
]
