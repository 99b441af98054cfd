"""
STORE LIFECYCLE DOMAIN RULES

Allowed transitions:
    pending   -> active | blocked
    active    -> suspended | blocked
    suspended -> active | blocked
    blocked   -> active

Side effects of activation:
- owner is promoted customer -> merchant
- owner is notified
"""

from __future__ import annotations

import logging

from django.db import transaction

from notifications.models import Notification
from notifications.services import notify_on_commit
from permissions.roles import ROLE_CUSTOMER, ROLE_MERCHANT
from stores.models import Store

from .exceptions import InvalidStoreTransitionError, StoreAlreadyExistsError

logger = logging.getLogger(__name__)

# ============================================================
# STATE DEFINITIONS
# ============================================================

ALLOWED_TRANSITIONS = {
    Store.STATUS_PENDING: {Store.STATUS_ACTIVE, Store.STATUS_BLOCKED},
    Store.STATUS_ACTIVE: {Store.STATUS_SUSPENDED, Store.STATUS_BLOCKED},
    Store.STATUS_SUSPENDED: {Store.STATUS_ACTIVE, Store.STATUS_BLOCKED},
    Store.STATUS_BLOCKED: {Store.STATUS_ACTIVE},
}

STATUS_MESSAGES = {
    Store.STATUS_ACTIVE: (
        "Store Approved",
        "Your store '{name}' is now active. You can start listing products.",
    ),
    Store.STATUS_SUSPENDED: (
        "Store Suspended",
        "Your store '{name}' has been suspended. Contact support for details.",
    ),
    Store.STATUS_BLOCKED: (
        "Store Blocked",
        "Your store '{name}' has been blocked. Contact support for details.",
    ),
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, store: Store, target_status: str):
    if not can_transition(from_status=store.status, to_status=target_status):
        raise InvalidStoreTransitionError(
            f"Store {store.id} cannot transition from "
            f"'{store.status}' to '{target_status}'"
        )


# ============================================================
# COMMANDS
# ============================================================


def apply_for_store(*, user, **fields) -> Store:
    """
    Merchant application: create the user's store in PENDING.
    """
    if Store.objects.filter(owner=user).exists():
        raise StoreAlreadyExistsError("You already have a store.")

    fields.pop("status", None)
    store = Store.objects.create(owner=user, status=Store.STATUS_PENDING, **fields)
    logger.info("Store application %s submitted by %s", store.id, user.email)
    return store


@transaction.atomic
def change_store_status(*, store: Store, target_status: str, actor=None) -> Store:
    store = Store.objects.select_for_update().select_related("owner").get(pk=store.pk)
    validate_transition(store=store, target_status=target_status)

    previous = store.status
    store.status = target_status
    store.save()

    owner = store.owner
    if target_status == Store.STATUS_ACTIVE and owner.role == ROLE_CUSTOMER:
        owner.role = ROLE_MERCHANT
        owner.save(update_fields=["role", "updated_at"])

    title, message = STATUS_MESSAGES[target_status]
    notify_on_commit(
        user=owner,
        type=Notification.TYPE_ACCOUNT,
        title=title,
        message=message.format(name=store.name),
        data={"store_id": str(store.id), "status": target_status},
    )

    logger.info(
        "Store %s status %s -> %s by %s",
        store.id,
        previous,
        target_status,
        getattr(actor, "email", "system"),
    )
    return store
