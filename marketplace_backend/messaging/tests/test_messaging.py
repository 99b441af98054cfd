from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from messaging.models import Message
from messaging.services import mark_read, send_message
from messaging.services.exceptions import (
    InvalidRecipientError,
    MessagePermissionError,
    MessagingError,
)
from notifications.models import Notification
from orders.models import Order
from permissions.roles import ROLE_MERCHANT
from stores.models import Store

User = get_user_model()


class MessagingFixtureMixin:
    def setUp(self):
        self.client = APIClient()
        self.customer = User.objects.create_user(
            email="customer@example.com", password="pass1234", full_name="Kofi Mensah"
        )
        self.merchant = User.objects.create_user(
            email="merchant@example.com", password="pass1234", role=ROLE_MERCHANT
        )
        self.store = Store.objects.create(
            owner=self.merchant, name="Bead Market", status=Store.STATUS_ACTIVE
        )


class SendMessageTests(MessagingFixtureMixin, TestCase):
    """
    GUARANTEES:
    - Customers always write to the store owner
    - Owners reply only to customers of their store
    - Receivers are notified after commit
    """

    def test_customer_message_goes_to_store_owner(self):
        with self.captureOnCommitCallbacks(execute=True):
            msg = send_message(sender=self.customer, store=self.store, body="  Is this in stock? ")

        self.assertEqual(msg.receiver, self.merchant)
        self.assertEqual(msg.sender_role, Message.ROLE_CUSTOMER)
        self.assertEqual(msg.receiver_role, Message.ROLE_MERCHANT)
        self.assertEqual(msg.message, "Is this in stock?")
        note = Notification.objects.get(user=self.merchant)
        self.assertEqual(note.type, Notification.TYPE_MESSAGE)
        self.assertEqual(note.title, "New Message")

    def test_owner_replies_to_known_customer(self):
        send_message(sender=self.customer, store=self.store, body="Hello")

        reply = send_message(
            sender=self.merchant, store=self.store, body="Yes, ships today", receiver=self.customer
        )

        self.assertEqual(reply.sender_role, Message.ROLE_MERCHANT)
        self.assertEqual(reply.receiver, self.customer)

    def test_owner_cannot_message_strangers(self):
        stranger = User.objects.create_user(email="stranger@example.com", password="pass1234")

        with self.assertRaises(InvalidRecipientError):
            send_message(sender=self.merchant, store=self.store, body="Buy now", receiver=stranger)

    def test_buyer_counts_as_store_customer(self):
        Order.objects.create(user=self.customer, store=self.store, total_amount=Decimal("10.00"))

        reply = send_message(
            sender=self.merchant, store=self.store, body="Thanks for your order", receiver=self.customer
        )

        self.assertEqual(reply.receiver, self.customer)

    def test_order_must_belong_to_conversation(self):
        other = User.objects.create_user(email="other@example.com", password="pass1234")
        order = Order.objects.create(user=other, store=self.store, total_amount=Decimal("10.00"))

        with self.assertRaises(MessagingError):
            send_message(sender=self.customer, store=self.store, body="Where is it?", order=order)

    def test_inactive_store_and_blank_body_rejected(self):
        with self.assertRaises(MessagingError):
            send_message(sender=self.customer, store=self.store, body="   ")

        self.store.status = Store.STATUS_SUSPENDED
        self.store.save()
        with self.assertRaises(MessagingError):
            send_message(sender=self.customer, store=self.store, body="Hello?")

    def test_only_receiver_marks_read(self):
        msg = send_message(sender=self.customer, store=self.store, body="Hello")

        with self.assertRaises(MessagePermissionError):
            mark_read(message=msg, user=self.customer)

        self.assertTrue(mark_read(message=msg, user=self.merchant).is_read)


class CustomerMessageApiTests(MessagingFixtureMixin, TestCase):
    def test_send_and_list_own_conversation(self):
        self.client.force_authenticate(self.customer)

        res = self.client.post(
            "/api/messaging/messages/",
            {"store": str(self.store.id), "message": "Do you ship to Kumasi?"},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["receiver"], self.merchant.id)

        outsider = User.objects.create_user(email="outsider@example.com", password="pass1234")
        self.client.force_authenticate(outsider)
        self.assertEqual(self.client.get("/api/messaging/messages/").data["count"], 0)

        self.client.force_authenticate(self.customer)
        listed = self.client.get("/api/messaging/messages/", {"store": str(self.store.id)})
        self.assertEqual(listed.data["count"], 1)

    def test_unread_count_and_mark_read(self):
        send_message(sender=self.customer, store=self.store, body="Hello")
        reply = send_message(
            sender=self.merchant, store=self.store, body="Hi there", receiver=self.customer
        )
        self.client.force_authenticate(self.customer)

        self.assertEqual(self.client.get("/api/messaging/messages/unread-count/").data, {"unread": 1})

        res = self.client.post(f"/api/messaging/messages/{reply.id}/mark-read/")
        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["is_read"])
        self.assertEqual(self.client.get("/api/messaging/messages/unread-count/").data, {"unread": 0})

    def test_sender_cannot_mark_own_message_read(self):
        msg = send_message(sender=self.customer, store=self.store, body="Hello")
        self.client.force_authenticate(self.customer)

        res = self.client.post(f"/api/messaging/messages/{msg.id}/mark-read/")

        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["error"]["code"], "forbidden")

    def test_anonymous_rejected(self):
        self.assertEqual(self.client.get("/api/messaging/messages/").status_code, 401)


class StoreInboxApiTests(MessagingFixtureMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.inbound = send_message(sender=self.customer, store=self.store, body="Hello shop")
        self.client.force_authenticate(self.merchant)

    def test_inbox_lists_own_store_only(self):
        rival = User.objects.create_user(
            email="rival@example.com", password="pass1234", role=ROLE_MERCHANT
        )
        rival_store = Store.objects.create(owner=rival, name="Rival", status=Store.STATUS_ACTIVE)
        send_message(sender=self.customer, store=rival_store, body="Hi rival")

        res = self.client.get("/api/messaging/store/messages/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual([m["message"] for m in res.data["results"]], ["Hello shop"])

    def test_reply_and_delete(self):
        res = self.client.post(
            "/api/messaging/store/messages/",
            {"receiver": str(self.customer.id), "message": "Welcome!"},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["sender_role"], Message.ROLE_MERCHANT)

        res = self.client.delete(f"/api/messaging/store/messages/{self.inbound.id}/")
        self.assertEqual(res.status_code, 204)
        self.assertFalse(Message.objects.filter(pk=self.inbound.pk).exists())

    def test_reply_to_stranger_is_rejected(self):
        stranger = User.objects.create_user(email="stranger@example.com", password="pass1234")

        res = self.client.post(
            "/api/messaging/store/messages/",
            {"receiver": str(stranger.id), "message": "Hi"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "invalid_recipient")

    def test_customer_cannot_open_store_inbox(self):
        self.client.force_authenticate(self.customer)
        self.assertEqual(self.client.get("/api/messaging/store/messages/").status_code, 403)
