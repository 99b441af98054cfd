"""
PATH: products/services/pricing.py

PRICING HELPERS (pure, no DB)

Marketplace discount strings look like "-15%", "15%", "-15", "15 % off".
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

TWOPLACES = Decimal("0.01")
HUNDRED = Decimal("100")

_PERCENT_RE = re.compile(r"(\d+(?:\.\d+)?)")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def parse_discount_percent(discount) -> Decimal:
    """
    "-15%" -> Decimal("15"). Missing / unparseable / out-of-range -> 0.
    """
    if discount is None:
        return Decimal("0")

    match = _PERCENT_RE.search(str(discount))
    if not match:
        return Decimal("0")

    try:
        pct = Decimal(match.group(1))
    except InvalidOperation:
        return Decimal("0")

    if pct < 0 or pct > HUNDRED:
        return Decimal("0")
    return pct


def unit_discount_amount(*, initial_price, discount) -> Decimal:
    """Per-unit discount, unrounded (rounding happens per order line)."""
    pct = parse_discount_percent(discount)
    return Decimal(str(initial_price or 0)) * pct / HUNDRED
