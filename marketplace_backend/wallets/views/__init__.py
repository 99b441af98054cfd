from .admin import (
    AdminPayoutWalletViewSet,
    AdminRechargeViewSet,
    AdminWithdrawalViewSet,
    TransactionSummaryView,
)
from .user import (
    BalanceEntryViewSet,
    BalanceView,
    PayoutWalletViewSet,
    RechargeMethodsView,
    RechargeViewSet,
    WithdrawalViewSet,
)

__all__ = [
    "AdminPayoutWalletViewSet",
    "AdminRechargeViewSet",
    "AdminWithdrawalViewSet",
    "BalanceEntryViewSet",
    "BalanceView",
    "PayoutWalletViewSet",
    "RechargeMethodsView",
    "RechargeViewSet",
    "TransactionSummaryView",
    "WithdrawalViewSet",
]
