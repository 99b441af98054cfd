"""
PATH: users/models/user.py

CUSTOM USER MODEL (ACCOUNT + PROFILE + WALLET)

One row per person using the marketplace:
- Login identity is the email; username is optional and auto-derived.
- Role decides what the account can do (customer / merchant / manager / admin).
- Status is the admin-controlled account state (active / suspended / pending / blocked).
- wallet_balance is the spendable balance. It is ONLY mutated through
  wallets.services.balance_service (row lock + ledger entry).
- withdrawal_pin is stored hashed (same hasher as passwords).
"""

from __future__ import annotations

import re
import uuid
from decimal import Decimal

from django.contrib.auth.hashers import check_password, make_password
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import BACK_OFFICE_ROLES, ROLE_ADMIN, ROLE_CHOICES, ROLE_CUSTOMER

PIN_PATTERN = re.compile(r"^\d{4,6}$")


def _unique_username(manager, base: str) -> str:
    base = (base or "user").strip().lower()
    candidate = base
    i = 1
    while manager.model.objects.filter(username__iexact=candidate).exists():
        i += 1
        candidate = f"{base}{i}"
    return candidate


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    def create_user(self, email=None, password=None, **extra_fields):
        """
        Supports:
        - create_user(email="a@b.com", password="x")
        - create_user(email="a@b.com", password="x", username="john")

        If username is missing it is derived from the email local-part
        (uniqueness ensured).
        """
        username = (extra_fields.get("username") or "").strip()
        email = (email or extra_fields.get("email") or "").strip()

        if not email:
            raise ValueError("Users must have an email address")

        email = self.normalize_email(email)

        if not username:
            username = _unique_username(self, email.split("@")[0])

        extra_fields["email"] = email
        extra_fields["username"] = username
        extra_fields.setdefault("is_active", True)

        user = self.model(**extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.full_clean()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Superuser must have an email")
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("is_verified", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    STATUS_ACTIVE = "active"
    STATUS_SUSPENDED = "suspended"
    STATUS_PENDING = "pending"
    STATUS_BLOCKED = "blocked"

    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_SUSPENDED, "Suspended"),
        (STATUS_PENDING, "Pending"),
        (STATUS_BLOCKED, "Blocked"),
    ]

    GENDER_CHOICES = [
        ("male", "Male"),
        ("female", "Female"),
        ("other", "Other"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    username = models.CharField(max_length=150, unique=True, null=True, blank=True)

    # Canonical identity
    email = models.EmailField(unique=True)

    full_name = models.CharField(max_length=200, blank=True, default="")
    phone = models.CharField(max_length=40, blank=True, default="")
    avatar_url = models.URLField(max_length=500, blank=True, default="")

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_CUSTOMER)
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE
    )
    is_verified = models.BooleanField(default=False)

    wallet_balance = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    withdrawal_pin = models.CharField(max_length=128, blank=True, default="")

    # Postal profile
    address = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=120, blank=True, default="")
    state = models.CharField(max_length=120, blank=True, default="")
    country = models.CharField(max_length=120, blank=True, default="")
    postal_code = models.CharField(max_length=20, blank=True, default="")

    preferred_currency = models.CharField(max_length=3, default="USD")
    language = models.CharField(max_length=10, default="en")
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, blank=True, default="")

    referred_by = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="referrals",
    )

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["role"]),
            models.Index(fields=["status"]),
        ]

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email).strip()
        if self.username is not None:
            self.username = self.username.strip() or None

        if not self.email:
            raise ValidationError({"email": "User must have an email"})

        if self.wallet_balance is not None and Decimal(self.wallet_balance) < Decimal("0.00"):
            raise ValidationError({"wallet_balance": "wallet_balance cannot be negative"})

    # ---------------- WITHDRAWAL PIN ----------------
    @property
    def has_withdrawal_pin(self) -> bool:
        return bool(self.withdrawal_pin)

    def set_withdrawal_pin(self, raw_pin: str) -> None:
        raw_pin = (raw_pin or "").strip()
        if not PIN_PATTERN.match(raw_pin):
            raise ValidationError({"pin": "PIN must be 4 to 6 digits"})
        self.withdrawal_pin = make_password(raw_pin)

    def check_withdrawal_pin(self, raw_pin: str) -> bool:
        if not self.withdrawal_pin or not raw_pin:
            return False
        return check_password(str(raw_pin).strip(), self.withdrawal_pin)

    # ---------------- ROLE HELPERS ----------------
    @property
    def is_back_office(self) -> bool:
        return self.is_superuser or self.role in BACK_OFFICE_ROLES

    @property
    def display_name(self) -> str:
        return self.full_name or self.username or self.email

    def __str__(self):
        ident = self.username or self.email
        return f"{ident} ({self.role})"
