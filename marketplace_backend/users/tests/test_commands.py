import os
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from permissions.roles import ROLE_ADMIN

User = get_user_model()


class EnsureSuperuserCommandTests(TestCase):
    @mock.patch.dict(
        os.environ,
        {"AUTO_ADMIN_EMAIL": "boot@example.com", "AUTO_ADMIN_PASSWORD": "Boot-Pass-123"},
    )
    def test_is_idempotent(self):
        call_command("ensure_superuser")
        call_command("ensure_superuser")

        users = User.objects.filter(email="boot@example.com")
        self.assertEqual(users.count(), 1)
        self.assertTrue(users[0].is_superuser)
        self.assertEqual(users[0].role, ROLE_ADMIN)
