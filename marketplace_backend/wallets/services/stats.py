"""
PATH: wallets/services/stats.py

Back-office transaction summary (read-only).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.db.models import Count, Sum
from django.db.models.functions import Coalesce

from wallets.models import Recharge, TransactionStatus, Withdrawal

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _q2(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _counts_by_status(model) -> dict:
    counts = {status: 0 for status in TransactionStatus.values}
    for row in model.objects.values("status").annotate(n=Count("id")):
        counts[row["status"]] = row["n"]
    counts["total"] = sum(counts[s] for s in TransactionStatus.values)
    return counts


def _sum(qs, field: str) -> Decimal:
    return _q2(qs.aggregate(v=Coalesce(Sum(field), ZERO))["v"])


def transaction_summary() -> dict:
    ok_recharges = Recharge.objects.filter(status=TransactionStatus.SUCCESS)
    ok_withdrawals = Withdrawal.objects.filter(status=TransactionStatus.SUCCESS)
    pending_withdrawals = Withdrawal.objects.filter(status=TransactionStatus.PENDING)

    recharge_fees = _sum(ok_recharges, "fee")
    withdrawal_fees = _sum(ok_withdrawals, "fee")

    return {
        "recharges": {
            "by_status": _counts_by_status(Recharge),
            "success_volume": _sum(ok_recharges, "amount"),
            "pending_volume": _sum(
                Recharge.objects.filter(status=TransactionStatus.PENDING), "amount"
            ),
            "fees_collected": recharge_fees,
        },
        "withdrawals": {
            "by_status": _counts_by_status(Withdrawal),
            "success_volume": _sum(ok_withdrawals, "amount"),
            "pending_payouts": _sum(pending_withdrawals, "amount"),
            "fees_collected": withdrawal_fees,
        },
        "fees_collected": _q2(recharge_fees + withdrawal_fees),
    }
