# wallets/services/balance_service.py

"""
WALLET BALANCE SERVICE (AUTHORITATIVE)

The ONLY place that mutates User.wallet_balance.

RULES:
- Every movement locks the user row (select_for_update) and writes one
  immutable BalanceEntry carrying balance_after.
- Debits never take a balance below zero unless allow_negative=True
  (used only to reverse income that was already spent).
- Callers own the transaction: these helpers run inside transaction.atomic()
  and join any outer atomic block.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q

from permissions.roles import ROLE_ADMIN
from wallets.models import BalanceEntry

from .exceptions import InsufficientBalanceError, InvalidAmountError

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _positive(amount) -> Decimal:
    value = _money(amount)
    if value <= Decimal("0.00"):
        raise InvalidAmountError(f"Amount must be greater than zero (got {value})")
    return value


def _locked_user(user):
    User = get_user_model()
    return User.objects.select_for_update().get(pk=user.pk)


def _apply(*, user, direction: str, amount: Decimal, reason: str, reference: str, memo: str):
    locked = _locked_user(user)
    current = _money(locked.wallet_balance)

    if direction == BalanceEntry.DIRECTION_CREDIT:
        new_balance = _money(current + amount)
    else:
        new_balance = _money(current - amount)

    locked.wallet_balance = new_balance
    locked.save(update_fields=["wallet_balance", "updated_at"])

    entry = BalanceEntry.objects.create(
        user=locked,
        direction=direction,
        amount=amount,
        balance_after=new_balance,
        reason=reason,
        reference=reference or "",
        memo=memo or "",
    )

    # keep the caller's instance in sync
    user.wallet_balance = new_balance

    logger.info(
        "Wallet %s %s %s (%s) -> balance %s [%s]",
        locked.email,
        direction,
        amount,
        reason,
        new_balance,
        reference,
    )
    return entry


@transaction.atomic
def credit(*, user, amount, reason: str, reference: str = "", memo: str = "") -> BalanceEntry:
    value = _positive(amount)
    return _apply(
        user=user,
        direction=BalanceEntry.DIRECTION_CREDIT,
        amount=value,
        reason=reason,
        reference=reference,
        memo=memo,
    )


@transaction.atomic
def debit(
    *,
    user,
    amount,
    reason: str,
    reference: str = "",
    memo: str = "",
    allow_negative: bool = False,
) -> BalanceEntry:
    value = _positive(amount)

    if not allow_negative:
        balance = _money(_locked_user(user).wallet_balance)
        if balance < value:
            raise InsufficientBalanceError(
                f"Insufficient balance: available {balance}, required {value}"
            )

    return _apply(
        user=user,
        direction=BalanceEntry.DIRECTION_DEBIT,
        amount=value,
        reason=reason,
        reference=reference,
        memo=memo,
    )


def get_balance(user) -> Decimal:
    User = get_user_model()
    return _money(User.objects.only("wallet_balance").get(pk=user.pk).wallet_balance)


def get_platform_account():
    """
    The single account credited for platform (store-less) orders:
    the earliest active superuser, else the earliest active admin.
    """
    User = get_user_model()
    return (
        User.objects.filter(is_active=True)
        .filter(Q(is_superuser=True) | Q(role=ROLE_ADMIN))
        .order_by("-is_superuser", "created_at")
        .first()
    )
