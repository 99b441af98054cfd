# users/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import (
    AddressViewSet,
    AdminUserViewSet,
    LoginView,
    LogoutView,
    MeView,
    RegisterView,
    WithdrawalPinView,
)

app_name = "users"

router = DefaultRouter()
router.register(r"addresses", AddressViewSet, basename="address")
router.register(r"admin/users", AdminUserViewSet, basename="admin-user")

urlpatterns = [
    # ---------------- PUBLIC AUTH ----------------
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    # ---------------- AUTHENTICATED ----------------
    path("logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    path("me/pin/", WithdrawalPinView.as_view(), name="me-pin"),
    path("", include(router.urls)),
]
