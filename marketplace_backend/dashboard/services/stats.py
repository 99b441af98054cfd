"""
PATH: dashboard/services/stats.py

ADMIN DASHBOARD AGGREGATES (read-only)

- users:     non-admin accounts, created today
- products:  total / active / unavailable
- orders:    total / pending / processing / completed (delivered) / revenue
- stores:    total / per status
- financial: delivered revenue, last 30 days, pending payouts
"""

from __future__ import annotations

from datetime import datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.contrib.auth import get_user_model
from django.db.models import Count, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from orders.models import Order
from permissions.roles import ROLE_ADMIN
from products.models import Product
from stores.models import Store
from wallets.models import TransactionStatus, Withdrawal

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _q2(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _today_start():
    tz = timezone.get_current_timezone()
    return timezone.make_aware(datetime.combine(timezone.localdate(), time.min), tz)


def user_stats() -> dict:
    User = get_user_model()
    qs = User.objects.exclude(role=ROLE_ADMIN).exclude(is_superuser=True)
    return {
        "total": qs.count(),
        "new_today": qs.filter(created_at__gte=_today_start()).count(),
    }


def product_stats() -> dict:
    return Product.objects.aggregate(
        total=Count("id"),
        active=Count("id", filter=Q(is_active=True)),
        unavailable=Count("id", filter=Q(is_available=False)),
    )


def order_stats() -> dict:
    delivered = Q(status=Order.STATUS_DELIVERED)
    row = Order.objects.aggregate(
        total=Count("id"),
        pending=Count("id", filter=Q(status=Order.STATUS_PENDING)),
        processing=Count("id", filter=Q(status=Order.STATUS_PROCESSING)),
        completed=Count("id", filter=delivered),
        revenue=Coalesce(Sum("total_amount", filter=delivered), ZERO),
    )
    row["revenue"] = _q2(row["revenue"])
    return row


def store_stats() -> dict:
    return Store.objects.aggregate(
        total=Count("id"),
        active=Count("id", filter=Q(status=Store.STATUS_ACTIVE)),
        pending=Count("id", filter=Q(status=Store.STATUS_PENDING)),
        blocked=Count("id", filter=Q(status=Store.STATUS_BLOCKED)),
        suspended=Count("id", filter=Q(status=Store.STATUS_SUSPENDED)),
    )


def financial_stats(*, total_revenue: Decimal | None = None) -> dict:
    delivered = Order.objects.filter(status=Order.STATUS_DELIVERED)
    if total_revenue is None:
        total_revenue = delivered.aggregate(v=Coalesce(Sum("total_amount"), ZERO))["v"]

    since = timezone.now() - timedelta(days=30)
    monthly = delivered.filter(created_at__gte=since).aggregate(
        v=Coalesce(Sum("total_amount"), ZERO)
    )["v"]
    pending_payouts = Withdrawal.objects.filter(status=TransactionStatus.PENDING).aggregate(
        v=Coalesce(Sum("amount"), ZERO)
    )["v"]

    return {
        "total_revenue": _q2(total_revenue),
        "monthly_revenue": _q2(monthly),
        "pending_payouts": _q2(pending_payouts),
    }


def dashboard_stats() -> dict:
    orders = order_stats()
    return {
        "users": user_stats(),
        "products": product_stats(),
        "orders": orders,
        "stores": store_stats(),
        "financial": financial_stats(total_revenue=orders["revenue"]),
    }
