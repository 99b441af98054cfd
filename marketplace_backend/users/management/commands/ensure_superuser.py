"""
PATH: users/management/commands/ensure_superuser.py

Superuser bootstrap for deploys without a shell.

- Reads AUTO_ADMIN_EMAIL + AUTO_ADMIN_PASSWORD from env.
- Idempotent: creates the superuser if missing; otherwise re-asserts
  admin flags and resets the password.
- Never prints the password.

The first active superuser is also the platform account credited for
store-less (platform catalog) orders.
"""

from __future__ import annotations

import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from permissions.roles import ROLE_ADMIN


class Command(BaseCommand):
    help = "Create/update an initial superuser from env vars (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=None, help="Overrides AUTO_ADMIN_EMAIL")

    def handle(self, *args, **options):
        email = (options.get("email") or os.environ.get("AUTO_ADMIN_EMAIL") or "").strip()
        password = (os.environ.get("AUTO_ADMIN_PASSWORD") or "").strip()

        if not email or not password:
            self.stdout.write(self.style.WARNING("AUTO_ADMIN_* env vars not set. Skipping."))
            return

        User = get_user_model()

        with transaction.atomic():
            user = User.objects.filter(email__iexact=email).first()

            if user:
                user.is_active = True
                user.is_staff = True
                user.is_superuser = True
                user.role = ROLE_ADMIN
                user.status = User.STATUS_ACTIVE
                user.set_password(password)
                user.save()
                self.stdout.write(self.style.SUCCESS(f"Superuser ensured: {email} (updated)"))
                return

            User.objects.create_superuser(email=email, password=password)
            self.stdout.write(self.style.SUCCESS(f"Superuser ensured: {email} (created)"))
