# users/admin.py

"""
USERS ADMIN REGISTRATION

Custom User (profile + wallet) and the address book in Django Admin.
wallet_balance is read-only here: balances move only through the wallet ledger.
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.contrib.auth.forms import UserChangeForm, UserCreationForm

from users.models import Address, User


class MarketplaceUserCreationForm(UserCreationForm):
    class Meta:
        model = User
        fields = ("email", "role")
        field_classes = {}


class MarketplaceUserChangeForm(UserChangeForm):
    class Meta:
        model = User
        fields = "__all__"
        field_classes = {}


class AddressInline(admin.TabularInline):
    model = Address
    extra = 0
    fields = ("type", "first_name", "last_name", "city", "country", "is_default")


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    form = MarketplaceUserChangeForm
    add_form = MarketplaceUserCreationForm
    ordering = ("email",)
    list_display = ("email", "full_name", "role", "status", "wallet_balance", "is_verified", "is_active")
    list_filter = ("role", "status", "is_verified", "is_staff", "is_active")
    search_fields = ("email", "username", "full_name", "phone")
    readonly_fields = ("wallet_balance", "created_at", "updated_at")
    inlines = [AddressInline]

    fieldsets = (
        (None, {"fields": ("email", "username", "password")}),
        (
            "Profile",
            {
                "fields": (
                    "full_name",
                    "phone",
                    "avatar_url",
                    "date_of_birth",
                    "gender",
                    "preferred_currency",
                    "language",
                    "referred_by",
                )
            },
        ),
        ("Postal", {"fields": ("address", "city", "state", "country", "postal_code")}),
        ("Account", {"fields": ("role", "status", "is_verified", "wallet_balance")}),
        (
            "Permissions",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                )
            },
        ),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "password1",
                    "password2",
                    "role",
                    "is_staff",
                    "is_active",
                ),
            },
        ),
    )


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("user", "type", "city", "country", "is_default", "created_at")
    list_filter = ("type", "is_default", "country")
    search_fields = ("user__email", "first_name", "last_name", "city")
