# messaging/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from messaging.views import MessageViewSet, StoreMessageViewSet

router = DefaultRouter()
router.register(r"messages", MessageViewSet, basename="messages")
router.register(r"store/messages", StoreMessageViewSet, basename="store-messages")

urlpatterns = [
    path("", include(router.urls)),
]
