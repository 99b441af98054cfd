# contacts/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from contacts.views import (
    AdminContactInfoView,
    AdminContactMessageViewSet,
    ContactInfoView,
    ContactSubmitView,
)

router = DefaultRouter()
router.register(r"admin/messages", AdminContactMessageViewSet, basename="admin-contact-messages")

urlpatterns = [
    path("", ContactSubmitView.as_view(), name="contact-submit"),
    path("info/", ContactInfoView.as_view(), name="contact-info"),
    path("admin/info/", AdminContactInfoView.as_view(), name="admin-contact-info"),
    path("", include(router.urls)),
]
