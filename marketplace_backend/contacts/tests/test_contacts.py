from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from contacts.models import ContactMessage
from permissions.roles import ROLE_MANAGER

User = get_user_model()


class ContactSubmitTests(TestCase):
    def setUp(self):
        self.client = APIClient()

    def test_anonymous_submission(self):
        res = self.client.post(
            "/api/contacts/",
            {
                "name": "Kofi",
                "email": "kofi@example.com",
                "subject": "Missing parcel",
                "message": "My parcel has not arrived yet.",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertIn("message", res.data)
        self.assertEqual(res.data["contact"]["email"], "kofi@example.com")
        self.assertEqual(ContactMessage.objects.get().status, ContactMessage.STATUS_NEW)

    def test_short_fields_rejected(self):
        res = self.client.post(
            "/api/contacts/",
            {"name": "K", "email": "not-an-email", "subject": "Hi", "message": "short"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        for field in ("name", "email", "subject", "message"):
            self.assertIn(field, res.data)
        self.assertFalse(ContactMessage.objects.exists())


class AdminContactTests(TestCase):
    """
    GUARANTEES:
    - Resolving stamps who and when, reopening clears it
    - Bulk status skips rows already in the target status
    """

    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(
            email="support@example.com", password="pass1234", role=ROLE_MANAGER
        )
        self.client.force_authenticate(self.manager)
        self.msg = ContactMessage.objects.create(
            name="Ama", email="ama@example.com", subject="Refund please", message="I want a refund."
        )

    def test_resolve_then_reopen(self):
        res = self.client.patch(
            f"/api/contacts/admin/messages/{self.msg.id}/",
            {"status": "resolved", "notes": "Refunded"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertIsNotNone(res.data["resolved_at"])
        self.assertEqual(res.data["resolved_by_email"], "support@example.com")
        self.assertEqual(res.data["notes"], "Refunded")

        res = self.client.patch(
            f"/api/contacts/admin/messages/{self.msg.id}/", {"status": "in_progress"}, format="json"
        )
        self.assertIsNone(res.data["resolved_at"])
        self.assertIsNone(res.data["resolved_by"])

    def test_submitted_content_is_read_only(self):
        self.client.patch(
            f"/api/contacts/admin/messages/{self.msg.id}/", {"subject": "Changed"}, format="json"
        )
        self.msg.refresh_from_db()
        self.assertEqual(self.msg.subject, "Refund please")

    def test_bulk_status(self):
        done = ContactMessage.objects.create(
            name="Yaw", email="yaw@example.com", subject="Hello there", message="Just saying hi.",
            status=ContactMessage.STATUS_SPAM,
        )

        res = self.client.post(
            "/api/contacts/admin/messages/bulk-status/",
            {"ids": [str(self.msg.id), str(done.id)], "status": "spam"},
            format="json",
        )

        self.assertEqual(res.data["updated"], 1)
        self.msg.refresh_from_db()
        self.assertEqual(self.msg.status, ContactMessage.STATUS_SPAM)

    def test_bulk_delete(self):
        res = self.client.post(
            "/api/contacts/admin/messages/bulk-delete/", {"ids": [str(self.msg.id)]}, format="json"
        )
        self.assertEqual(res.data["deleted"], 1)

    def test_filter_by_status(self):
        res = self.client.get("/api/contacts/admin/messages/", {"status": "resolved"})
        self.assertEqual(res.data["count"], 0)

    def test_customer_forbidden(self):
        customer = User.objects.create_user(email="c@example.com", password="pass1234")
        self.client.force_authenticate(customer)
        self.assertEqual(self.client.get("/api/contacts/admin/messages/").status_code, 403)
