# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# customer: default for every signup
# merchant: owner of an approved store
# manager/admin: back-office staff
ROLE_CUSTOMER = "customer"
ROLE_MERCHANT = "merchant"
ROLE_MANAGER = "manager"
ROLE_ADMIN = "admin"

ROLE_CHOICES = [
    (ROLE_CUSTOMER, "Customer"),
    (ROLE_MERCHANT, "Merchant"),
    (ROLE_MANAGER, "Manager"),
    (ROLE_ADMIN, "Admin"),
]

BACK_OFFICE_ROLES = {
    ROLE_ADMIN,
    ROLE_MANAGER,
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)

    Superusers pass every role check.
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        if getattr(user, "is_superuser", False):
            return True

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


class IsBackOffice(BaseRolePermission):
    allowed_roles = BACK_OFFICE_ROLES


class IsMerchant(BaseRolePermission):
    allowed_roles = {ROLE_MERCHANT}
