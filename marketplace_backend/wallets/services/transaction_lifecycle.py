"""
WALLET TRANSACTION LIFECYCLE (recharges + withdrawals)

Allowed transitions:
    pending -> success | failed | cancelled
    failed  -> pending            (retry)
success and cancelled are terminal.

Balance effects:
- Recharge   -> success:            credit amount - fee
- Withdrawal -> failed | cancelled: refund the held amount
- Withdrawal failed -> pending:     hold the amount again
- Withdrawal -> success:            stamp processed_date

Every change notifies the owner once the transaction commits.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from notifications.models import Notification
from notifications.services import notify_on_commit
from wallets.models import BalanceEntry, Recharge, TransactionStatus, Withdrawal

from . import balance_service
from .exceptions import InsufficientBalanceError, InvalidTransactionTransitionError

logger = logging.getLogger(__name__)

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    TransactionStatus.SUCCESS,
    TransactionStatus.CANCELLED,
}

ALLOWED_TRANSITIONS = {
    TransactionStatus.PENDING: {
        TransactionStatus.SUCCESS,
        TransactionStatus.FAILED,
        TransactionStatus.CANCELLED,
    },
    TransactionStatus.FAILED: {
        TransactionStatus.PENDING,
    },
}


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False
    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, txn, target_status: str):
    if not can_transition(from_status=txn.status, to_status=target_status):
        raise InvalidTransactionTransitionError(
            f"{txn.reference_id} cannot transition from "
            f"'{txn.status}' to '{target_status}'"
        )


# ============================================================
# RECHARGES
# ============================================================


@transaction.atomic
def set_recharge_status(
    *, recharge: Recharge, target_status: str, failure_reason: str = "", actor=None
) -> Recharge:
    recharge = Recharge.objects.select_for_update().select_related("user").get(pk=recharge.pk)
    validate_transition(txn=recharge, target_status=target_status)

    previous = recharge.status
    recharge.status = target_status
    if target_status == TransactionStatus.FAILED:
        recharge.failure_reason = failure_reason or recharge.failure_reason
    elif target_status == TransactionStatus.PENDING:
        recharge.failure_reason = ""
    recharge.save()

    if target_status == TransactionStatus.SUCCESS:
        balance_service.credit(
            user=recharge.user,
            amount=recharge.net_amount,
            reason=BalanceEntry.REASON_RECHARGE,
            reference=f"recharge:{recharge.reference_id}",
        )

    _notify(
        user=recharge.user,
        kind="Recharge",
        txn=recharge,
        amount=recharge.amount,
        failure_reason=recharge.failure_reason,
    )
    logger.info(
        "Recharge %s %s -> %s by %s",
        recharge.reference_id,
        previous,
        target_status,
        getattr(actor, "email", "system"),
    )
    return recharge


# ============================================================
# WITHDRAWALS
# ============================================================


@transaction.atomic
def set_withdrawal_status(
    *, withdrawal: Withdrawal, target_status: str, failure_reason: str = "", actor=None
) -> Withdrawal:
    withdrawal = (
        Withdrawal.objects.select_for_update().select_related("user").get(pk=withdrawal.pk)
    )
    validate_transition(txn=withdrawal, target_status=target_status)

    previous = withdrawal.status
    reference = f"withdrawal:{withdrawal.reference_id}"

    if target_status in (TransactionStatus.FAILED, TransactionStatus.CANCELLED):
        balance_service.credit(
            user=withdrawal.user,
            amount=withdrawal.amount,
            reason=BalanceEntry.REASON_WITHDRAWAL_REVERSAL,
            reference=reference,
        )
        if target_status == TransactionStatus.FAILED:
            withdrawal.failure_reason = failure_reason or withdrawal.failure_reason

    elif target_status == TransactionStatus.PENDING:
        # retry: hold the funds again (raises if they were spent meanwhile)
        balance_service.debit(
            user=withdrawal.user,
            amount=withdrawal.amount,
            reason=BalanceEntry.REASON_WITHDRAWAL,
            reference=reference,
        )
        withdrawal.failure_reason = ""

    elif target_status == TransactionStatus.SUCCESS:
        withdrawal.processed_date = timezone.now()

    withdrawal.status = target_status
    withdrawal.save()

    _notify(
        user=withdrawal.user,
        kind="Withdrawal",
        txn=withdrawal,
        amount=withdrawal.amount,
        failure_reason=withdrawal.failure_reason,
    )
    logger.info(
        "Withdrawal %s %s -> %s by %s",
        withdrawal.reference_id,
        previous,
        target_status,
        getattr(actor, "email", "system"),
    )
    return withdrawal


# ============================================================
# HELPERS
# ============================================================

_STATUS_TEXT = {
    TransactionStatus.PENDING: ("Pending", "is pending review"),
    TransactionStatus.SUCCESS: ("Successful", "was completed successfully"),
    TransactionStatus.FAILED: ("Failed", "has failed"),
    TransactionStatus.CANCELLED: ("Cancelled", "was cancelled"),
}


def _notify(*, user, kind: str, txn, amount, failure_reason: str = ""):
    label, phrase = _STATUS_TEXT[txn.status]
    message = f"Your {kind.lower()} of {amount} {txn.currency} {phrase}."
    if txn.status == TransactionStatus.FAILED and failure_reason:
        message = f"{message} Reason: {failure_reason}"

    notify_on_commit(
        user=user,
        type=Notification.TYPE_TRANSACTION,
        title=f"{kind} {label}",
        message=message,
        data={
            "kind": kind.lower(),
            "id": str(txn.id),
            "reference_id": txn.reference_id,
            "status": txn.status,
        },
    )


def bulk_set_status(
    *, model, ids, target_status: str, failure_reason: str = "", actor=None
) -> dict:
    """
    Apply one status to many transactions. Each row is its own atomic unit;
    rows that cannot transition are reported, not fatal.
    """
    setter = set_recharge_status if model is Recharge else set_withdrawal_status
    field = "recharge" if model is Recharge else "withdrawal"

    updated, skipped = [], []
    for txn in model.objects.filter(id__in=ids):
        try:
            setter(
                **{field: txn},
                target_status=target_status,
                failure_reason=failure_reason,
                actor=actor,
            )
            updated.append(str(txn.id))
        except (InvalidTransactionTransitionError, InsufficientBalanceError) as e:
            skipped.append({"id": str(txn.id), "reason": str(e)})

    return {"updated": len(updated), "updated_ids": updated, "skipped": skipped}
