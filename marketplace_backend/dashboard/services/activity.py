"""
PATH: dashboard/services/activity.py

Recent wallet activity: latest recharges and withdrawals merged by time.
"""

from __future__ import annotations

from wallets.models import Recharge, Withdrawal

DEFAULT_LIMIT = 10


def _recharge_item(r: Recharge) -> dict:
    return {
        "id": f"recharge-{r.id}",
        "type": "recharge",
        "title": f"User recharged ${r.amount}",
        "status": r.status,
        "timestamp": r.created_at,
        "user_id": r.user_id,
        "user_email": r.user.email,
        "metadata": {"amount": r.amount, "currency": r.currency, "method": r.method},
    }


def _withdrawal_item(w: Withdrawal) -> dict:
    return {
        "id": f"withdrawal-{w.id}",
        "type": "withdrawal",
        "title": f"Withdrawal request for ${w.amount}",
        "status": w.status,
        "timestamp": w.created_at,
        "user_id": w.user_id,
        "user_email": w.user.email,
        "metadata": {"amount": w.amount, "currency": w.currency, "method": w.method},
    }


def recent_activity(*, limit: int = DEFAULT_LIMIT) -> list[dict]:
    recharges = Recharge.objects.select_related("user").order_by("-created_at")[:limit]
    withdrawals = Withdrawal.objects.select_related("user").order_by("-created_at")[:limit]

    items = [_recharge_item(r) for r in recharges] + [_withdrawal_item(w) for w in withdrawals]
    items.sort(key=lambda i: i["timestamp"], reverse=True)
    return items[:limit]
