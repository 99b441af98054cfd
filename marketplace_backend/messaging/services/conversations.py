"""
STORE MESSAGING SERVICE

Who is who is decided by store ownership, not by the user's role:
- the store owner writing in their store's conversation is the merchant,
  and must address a customer who already wrote to or ordered from the store;
- anyone else is a customer, and always writes to the store owner.

The receiver is notified once the message commits.
"""

from __future__ import annotations

import logging

from django.db import transaction

from messaging.models import Message
from notifications.models import Notification
from notifications.services import notify_on_commit
from orders.models import Order
from stores.models import Store

from .exceptions import InvalidRecipientError, MessagePermissionError, MessagingError

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 140


def _is_store_customer(*, store: Store, user) -> bool:
    return (
        Message.objects.filter(store=store, sender=user).exists()
        or Order.objects.filter(store=store, user=user).exists()
    )


def _check_order(*, order, store: Store, customer) -> None:
    if order is None:
        return
    if order.store_id != store.pk or order.user_id != customer.pk:
        raise MessagingError("The order does not belong to this conversation.")


@transaction.atomic
def send_message(*, sender, store: Store, body: str, receiver=None, order=None) -> Message:
    body = (body or "").strip()
    if not body:
        raise MessagingError("Message cannot be empty.")

    if store.owner_id == sender.pk:
        if receiver is None or receiver.pk == sender.pk:
            raise InvalidRecipientError("Choose the customer to reply to.")
        if not _is_store_customer(store=store, user=receiver):
            raise InvalidRecipientError("You can only message customers of your store.")
        _check_order(order=order, store=store, customer=receiver)
        sender_role, receiver_role = Message.ROLE_MERCHANT, Message.ROLE_CUSTOMER
    else:
        if store.status != Store.STATUS_ACTIVE:
            raise MessagingError("This store is not accepting messages.")
        receiver = store.owner
        _check_order(order=order, store=store, customer=sender)
        sender_role, receiver_role = Message.ROLE_CUSTOMER, Message.ROLE_MERCHANT

    msg = Message.objects.create(
        store=store,
        order=order,
        sender=sender,
        receiver=receiver,
        sender_role=sender_role,
        receiver_role=receiver_role,
        message=body,
    )

    notify_on_commit(
        user=receiver,
        type=Notification.TYPE_MESSAGE,
        title="New Message",
        message=body[:PREVIEW_LENGTH],
        data={"message_id": str(msg.id), "store_id": str(store.id)},
    )
    logger.info("Message %s sent in store %s (%s)", msg.id, store.slug, sender_role)
    return msg


def mark_read(*, message: Message, user) -> Message:
    if message.receiver_id != user.pk:
        raise MessagePermissionError("Only the receiver can mark a message as read.")
    if not message.is_read:
        message.is_read = True
        message.save(update_fields=["is_read", "updated_at"])
    return message
