"""
PATH: users/auth_backends.py

AUTH BACKEND: email or username login

Rules:
- Identifier containing "@" is looked up as an email, anything else as a username.
- Inactive accounts and accounts an admin has suspended/blocked cannot log in.

Used by Django authenticate(), the login endpoint and SimpleJWT's
TokenObtainPairView.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import BaseBackend

User = get_user_model()

LOCKED_STATUSES = {User.STATUS_SUSPENDED, User.STATUS_BLOCKED}


class EmailOrUsernameBackend(BaseBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        identifier = (username or kwargs.get("email") or "").strip()
        if not identifier or password is None:
            return None

        lookup = {"email__iexact": identifier} if "@" in identifier else {
            "username__iexact": identifier
        }

        try:
            user = User.objects.get(**lookup)
        except User.DoesNotExist:
            # Run the hasher anyway so timing doesn't reveal unknown accounts.
            User().set_password(password)
            return None

        if not user.is_active or user.status in LOCKED_STATUSES:
            return None

        if user.check_password(password):
            return user

        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
