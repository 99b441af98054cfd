"""
PATH: notifications/services/notify.py

NOTIFICATION DISPATCH

notify()          -> write one notification now
notify_on_commit() -> write it once the surrounding transaction commits
broadcast()       -> one notification per active user

Callers inside transaction.atomic() (checkout, wallet status changes)
use notify_on_commit so a rolled-back change never leaves a message behind.
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from notifications.models import Notification

logger = logging.getLogger(__name__)


def notify(
    *,
    user,
    title: str,
    message: str,
    type: str = Notification.TYPE_SYSTEM,
    data: dict | None = None,
) -> Notification:
    note = Notification.objects.create(
        user=user,
        type=type,
        title=title,
        message=message,
        data=data or {},
    )
    logger.debug("Notification %s sent to %s: %s", note.id, user, title)
    return note


def notify_on_commit(**kwargs) -> None:
    transaction.on_commit(lambda: notify(**kwargs))


def broadcast(
    *,
    title: str,
    message: str,
    type: str = Notification.TYPE_SYSTEM,
    data: dict | None = None,
) -> int:
    User = get_user_model()
    users = User.objects.filter(is_active=True).only("id")
    rows = [
        Notification(user=u, type=type, title=title, message=message, data=data or {})
        for u in users
    ]
    Notification.objects.bulk_create(rows)
    logger.info("Broadcast notification '%s' to %s users", title, len(rows))
    return len(rows)
