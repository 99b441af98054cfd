"""
PUBLIC ORDER TRACKING

Lookup by order id (UUID), order number or tracking number.
Returns None when nothing matches; callers decide the 404 shape.
"""

from __future__ import annotations

import uuid

from django.db.models import Q

from orders.models import Order


def _as_uuid(value: str):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def find_order_for_tracking(*, order_id: str = "", tracking_number: str = "") -> Order | None:
    order_id = (order_id or "").strip()
    tracking_number = (tracking_number or "").strip().upper()

    if not order_id and not tracking_number:
        return None

    qs = Order.objects.select_related("store").prefetch_related("items")

    if tracking_number:
        return qs.filter(tracking_number=tracking_number).first()

    as_uuid = _as_uuid(order_id)
    if as_uuid is not None:
        return qs.filter(id=as_uuid).first()
    return qs.filter(Q(order_number__iexact=order_id)).first()
