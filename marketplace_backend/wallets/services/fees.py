"""
PATH: wallets/services/fees.py

FEE RULES

- recharge fee   = amount x RECHARGE_RATE   (default 2.5%)
- withdrawal fee = amount x WITHDRAWAL_RATE (default 2%), net = amount - fee

Rates are read from settings.WALLET_FEES so they can be tuned per deploy.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _rate(key: str, default: str) -> Decimal:
    fees = getattr(settings, "WALLET_FEES", {}) or {}
    return Decimal(str(fees.get(key) or default))


def recharge_fee(amount) -> Decimal:
    return _money(_money(amount) * _rate("RECHARGE_RATE", "0.025"))


def withdrawal_fee(amount) -> tuple[Decimal, Decimal]:
    """Returns (fee, net_amount)."""
    gross = _money(amount)
    fee = _money(gross * _rate("WITHDRAWAL_RATE", "0.02"))
    return fee, _money(gross - fee)
