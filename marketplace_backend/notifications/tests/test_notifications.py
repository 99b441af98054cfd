from django.contrib.auth import get_user_model
from django.db import transaction
from django.test import TestCase
from rest_framework.test import APIClient

from notifications.models import Notification
from notifications.services import notify, notify_on_commit
from permissions.roles import ROLE_ADMIN

User = get_user_model()

INBOX = "/api/notifications/notifications/"


class NotifyServiceTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="inbox@example.com", password="pass1234")

    def test_on_commit_waits_for_commit(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            notify_on_commit(user=self.user, title="Later", message="after commit")
            self.assertFalse(Notification.objects.filter(title="Later").exists())

        self.assertEqual(len(callbacks), 1)
        self.assertTrue(Notification.objects.filter(title="Later").exists())

    def test_rolled_back_block_sends_nothing(self):
        with self.captureOnCommitCallbacks(execute=True) as callbacks:
            try:
                with transaction.atomic():
                    notify_on_commit(user=self.user, title="Ghost", message="never")
                    raise RuntimeError("abort")
            except RuntimeError:
                pass

        self.assertEqual(callbacks, [])
        self.assertFalse(Notification.objects.filter(title="Ghost").exists())


class InboxApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="reader@example.com", password="pass1234")
        self.other = User.objects.create_user(email="someone@example.com", password="pass1234")
        self.first = notify(user=self.user, title="One", message="first")
        notify(user=self.user, title="Two", message="second", type=Notification.TYPE_ORDER)
        notify(user=self.other, title="Not yours", message="hidden")
        self.client.force_authenticate(self.user)

    def test_list_is_scoped_to_owner(self):
        res = self.client.get(INBOX)

        self.assertEqual(res.status_code, 200)
        titles = {n["title"] for n in res.data["results"]}
        self.assertEqual(titles, {"One", "Two"})

    def test_filter_by_type(self):
        res = self.client.get(INBOX, {"type": Notification.TYPE_ORDER})
        self.assertEqual([n["title"] for n in res.data["results"]], ["Two"])

    def test_mark_read_and_unread_count(self):
        self.assertEqual(self.client.get(f"{INBOX}unread-count/").data["unread"], 2)

        res = self.client.post(f"{INBOX}{self.first.id}/mark-read/")
        self.assertTrue(res.data["is_read"])
        self.assertEqual(self.client.get(f"{INBOX}unread-count/").data["unread"], 1)

        res = self.client.post(f"{INBOX}mark-all-read/")
        self.assertEqual(res.data["updated"], 1)
        self.assertEqual(self.client.get(f"{INBOX}unread-count/").data["unread"], 0)
        self.assertFalse(Notification.objects.get(user=self.other).is_read)

    def test_cannot_touch_another_users_notification(self):
        foreign = Notification.objects.get(user=self.other)

        res = self.client.delete(f"{INBOX}{foreign.id}/")
        self.assertEqual(res.status_code, 404)


class AdminNotificationTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="boss@example.com", password="pass1234", role=ROLE_ADMIN
        )
        self.user = User.objects.create_user(email="target@example.com", password="pass1234")
        User.objects.create_user(email="gone@example.com", password="pass1234", is_active=False)
        self.client.force_authenticate(self.admin)

    def test_broadcast_reaches_active_users(self):
        res = self.client.post(
            "/api/notifications/admin/notifications/",
            {"broadcast": True, "title": "Maintenance", "message": "Tonight at 2am"},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["sent"], 2)
        self.assertEqual(Notification.objects.filter(title="Maintenance").count(), 2)

    def test_single_recipient(self):
        res = self.client.post(
            "/api/notifications/admin/notifications/",
            {"user": str(self.user.id), "title": "Hello", "message": "Welcome", "type": "account"},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["notification"]["user_email"], "target@example.com")

    def test_recipient_or_broadcast_required(self):
        res = self.client.post(
            "/api/notifications/admin/notifications/",
            {"title": "Nobody", "message": "x"},
            format="json",
        )
        self.assertEqual(res.status_code, 400)

    def test_bulk_mark_read(self):
        a = notify(user=self.user, title="A", message="a")
        b = notify(user=self.user, title="B", message="b")

        res = self.client.post(
            "/api/notifications/admin/notifications/bulk-mark-read/",
            {"ids": [str(a.id), str(b.id)]},
            format="json",
        )

        self.assertEqual(res.data["updated"], 2)
        self.assertEqual(Notification.objects.filter(is_read=True).count(), 2)
