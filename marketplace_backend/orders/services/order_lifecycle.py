"""
ORDER LIFECYCLE DOMAIN RULES

Allowed transitions:
    pending    -> confirmed | cancelled
    confirmed  -> processing | cancelled
    processing -> shipped | cancelled
    shipped    -> delivered
    delivered, cancelled are terminal

Side effects (change_order_status):
- shipped   stamps shipped_at
- delivered stamps delivered_at
- cancelled refunds the buyer, reverses the payee credit and the store totals
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from notifications.models import Notification
from notifications.services import notify_on_commit
from orders.models import Order
from stores.models import Store
from wallets.models import BalanceEntry
from wallets.services import balance_service

from .exceptions import InvalidOrderTransitionError, OrderLifecycleError

logger = logging.getLogger(__name__)


TERMINAL_STATES = {
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Order.STATUS_PENDING: {Order.STATUS_CONFIRMED, Order.STATUS_CANCELLED},
    Order.STATUS_CONFIRMED: {Order.STATUS_PROCESSING, Order.STATUS_CANCELLED},
    Order.STATUS_PROCESSING: {Order.STATUS_SHIPPED, Order.STATUS_CANCELLED},
    Order.STATUS_SHIPPED: {Order.STATUS_DELIVERED},
}

STATUS_TITLES = {
    Order.STATUS_CONFIRMED: "Order Confirmed",
    Order.STATUS_PROCESSING: "Order Processing",
    Order.STATUS_SHIPPED: "Order Shipped",
    Order.STATUS_DELIVERED: "Order Delivered",
    Order.STATUS_CANCELLED: "Order Cancelled",
}


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str):
    if not can_transition(from_status=order.status, to_status=target_status):
        raise InvalidOrderTransitionError(
            f"Order {order.order_number} cannot transition from "
            f"'{order.status}' to '{target_status}'"
        )


def _payee_for(order: Order):
    if order.is_platform_order or order.store_id is None:
        entry = (
            BalanceEntry.objects.filter(
                reason=BalanceEntry.REASON_ORDER_INCOME,
                reference=f"order:{order.order_number}",
            )
            .select_related("user")
            .first()
        )
        return entry.user if entry else None
    return order.store.owner


def _reverse_payment(order: Order) -> None:
    reference = f"order:{order.order_number}"
    amount = order.total_amount

    if amount <= 0:
        return

    balance_service.credit(
        user=order.user,
        amount=amount,
        reason=BalanceEntry.REASON_ORDER_REFUND,
        reference=reference,
    )

    payee = _payee_for(order)
    if payee is not None:
        balance_service.debit(
            user=payee,
            amount=amount,
            reason=BalanceEntry.REASON_ORDER_REVERSAL,
            reference=reference,
            allow_negative=True,
        )

    if order.store_id and not order.is_platform_order:
        store = Store.objects.select_for_update().get(pk=order.store_id)
        store.total_sales = max(int(store.total_sales) - 1, 0)
        store.total_revenue = max(store.total_revenue - amount, Decimal("0.00"))
        Store.objects.filter(pk=store.pk).update(
            total_sales=store.total_sales,
            total_revenue=store.total_revenue,
        )


@transaction.atomic
def change_order_status(*, order: Order, target_status: str, actor=None) -> Order:
    locked = Order.objects.select_for_update().select_related("store", "user").get(pk=order.pk)
    validate_transition(order=locked, target_status=target_status)

    previous = locked.status
    locked.status = target_status
    update_fields = ["status", "updated_at"]

    now = timezone.now()
    if target_status == Order.STATUS_SHIPPED:
        locked.shipped_at = now
        update_fields.append("shipped_at")
    elif target_status == Order.STATUS_DELIVERED:
        locked.delivered_at = now
        update_fields.append("delivered_at")
    elif target_status == Order.STATUS_CANCELLED:
        locked.cancelled_at = now
        update_fields.append("cancelled_at")
        if locked.payment_status == Order.PAYMENT_CONFIRMED:
            _reverse_payment(locked)
            locked.payment_status = Order.PAYMENT_CANCELLED
            update_fields.append("payment_status")

    locked.save(update_fields=update_fields)

    notify_on_commit(
        user=locked.user,
        type=Notification.TYPE_ORDER,
        title=STATUS_TITLES[target_status],
        message=f"Your order {locked.order_number} is now {locked.get_status_display().lower()}.",
        data={"order_id": str(locked.id), "status": target_status},
    )

    logger.info(
        "Order %s %s -> %s by %s",
        locked.order_number,
        previous,
        target_status,
        getattr(actor, "email", "system"),
    )

    order.status = locked.status
    order.payment_status = locked.payment_status
    order.shipped_at = locked.shipped_at
    order.delivered_at = locked.delivered_at
    order.cancelled_at = locked.cancelled_at
    return locked


def cancel_own_order(*, order: Order, user) -> Order:
    if order.user_id != user.pk:
        raise OrderLifecycleError("You can only cancel your own orders.")
    if order.status != Order.STATUS_PENDING:
        raise InvalidOrderTransitionError("Only pending orders can be cancelled.")
    return change_order_status(order=order, target_status=Order.STATUS_CANCELLED, actor=user)
