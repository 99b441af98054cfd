from .balance_entry import BalanceEntry
from .payout_wallet import PayoutWallet
from .recharge import Recharge
from .transaction import TransactionStatus
from .withdrawal import Withdrawal

__all__ = [
    "BalanceEntry",
    "PayoutWallet",
    "Recharge",
    "TransactionStatus",
    "Withdrawal",
]
