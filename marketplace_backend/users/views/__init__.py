from .addresses import AddressViewSet
from .admin_users import AdminUserViewSet
from .auth import LoginView, LogoutView, RegisterView
from .me import MeView, WithdrawalPinView

__all__ = [
    "AddressViewSet",
    "AdminUserViewSet",
    "LoginView",
    "LogoutView",
    "MeView",
    "RegisterView",
    "WithdrawalPinView",
]
