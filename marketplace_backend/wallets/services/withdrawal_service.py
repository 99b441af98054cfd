"""
PATH: wallets/services/withdrawal_service.py

WITHDRAWAL (PAYOUT) REQUESTS

Rules:
- the user must have set a withdrawal PIN, and the supplied PIN must match
- 0 < amount <= wallet balance
- the full amount is debited immediately (held) inside the same transaction
- fee / net_amount computed from the withdrawal rate
- destination details are copied from the chosen PayoutWallet
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.db import transaction

from wallets.models import BalanceEntry, PayoutWallet, TransactionStatus, Withdrawal

from . import balance_service
from .exceptions import InvalidAmountError, WalletError, WithdrawalPinError
from .fees import withdrawal_fee
from .transaction_lifecycle import set_withdrawal_status

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


@transaction.atomic
def create_withdrawal(*, user, payout_wallet: PayoutWallet, amount, pin: str) -> Withdrawal:
    if not user.has_withdrawal_pin:
        raise WithdrawalPinError("Set a withdrawal PIN before requesting a withdrawal.")
    if not user.check_withdrawal_pin(pin):
        raise WithdrawalPinError("Incorrect withdrawal PIN.")

    if payout_wallet.user_id != user.id:
        raise WalletError("Payout wallet not found.")

    value = Decimal(str(amount or 0)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    if value <= Decimal("0.00"):
        raise InvalidAmountError("Amount must be greater than zero")

    fee, net = withdrawal_fee(value)

    withdrawal = Withdrawal.objects.create(
        user=user,
        payout_wallet=payout_wallet,
        amount=value,
        currency=payout_wallet.currency,
        method=payout_wallet.type,
        status=TransactionStatus.PENDING,
        fee=fee,
        net_amount=net,
        wallet_address=payout_wallet.address if not payout_wallet.is_bank else "",
        bank_name=payout_wallet.bank_name if payout_wallet.is_bank else "",
        account_number=payout_wallet.account_number if payout_wallet.is_bank else "",
    )

    # raises InsufficientBalanceError -> whole request rolls back
    balance_service.debit(
        user=user,
        amount=value,
        reason=BalanceEntry.REASON_WITHDRAWAL,
        reference=f"withdrawal:{withdrawal.reference_id}",
    )

    logger.info(
        "Withdrawal %s created by %s (%s via %s)",
        withdrawal.reference_id,
        user.email,
        value,
        payout_wallet.type,
    )
    return withdrawal


def cancel_withdrawal(*, withdrawal: Withdrawal, user) -> Withdrawal:
    """Owner-side cancel of a pending withdrawal; refunds the held amount."""
    return set_withdrawal_status(
        withdrawal=withdrawal, target_status=TransactionStatus.CANCELLED, actor=user
    )
