"""
PATH: wallets/services/recharge_service.py

RECHARGE (WALLET TOP-UP) REQUESTS

Rules:
- amount > 0
- bank_transfer is not self-service: the user is told to contact support
- every other method needs a payment proof URL
- fee = amount x recharge rate, stored on the row; credited net on success
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from notifications.models import Notification
from notifications.services import notify_on_commit
from wallets.models import Recharge, TransactionStatus

from .exceptions import InvalidAmountError, ProofRequiredError, UnsupportedMethodError
from .fees import recharge_fee
from .transaction_lifecycle import set_recharge_status

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def create_recharge(
    *,
    user,
    amount,
    method: str,
    prove_url: str = "",
    currency: str = "USD",
    description: str = "",
    transaction_hash: str = "",
    wallet_address: str = "",
) -> Recharge:
    value = Decimal(str(amount or 0)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    if value <= Decimal("0.00"):
        raise InvalidAmountError("Amount must be greater than zero")

    if method == Recharge.METHOD_BANK_TRANSFER:
        raise UnsupportedMethodError(
            "Please contact support for bank transfer instructions."
        )

    if not (prove_url or "").strip():
        raise ProofRequiredError("Please upload your payment proof/receipt.")

    recharge = Recharge.objects.create(
        user=user,
        amount=value,
        currency=(currency or "USD").upper(),
        method=method,
        fee=recharge_fee(value),
        status=TransactionStatus.PENDING,
        prove_url=prove_url.strip(),
        description=description or "",
        transaction_hash=transaction_hash or "",
        metadata={"exchange_rate": "1.0", "wallet_address": wallet_address or None},
    )

    notify_on_commit(
        user=user,
        type=Notification.TYPE_TRANSACTION,
        title="Recharge Initiated",
        message="Your recharge request has been submitted successfully.",
        data={"kind": "recharge", "id": str(recharge.id), "reference_id": recharge.reference_id},
    )

    logger.info("Recharge %s created by %s (%s %s)", recharge.reference_id, user.email, value, method)
    return recharge


def cancel_recharge(*, recharge: Recharge, user) -> Recharge:
    """Owner-side cancel; only pending recharges can be cancelled."""
    return set_recharge_status(
        recharge=recharge, target_status=TransactionStatus.CANCELLED, actor=user
    )
