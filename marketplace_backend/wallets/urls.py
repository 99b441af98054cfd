# wallets/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from wallets.views import (
    AdminPayoutWalletViewSet,
    AdminRechargeViewSet,
    AdminWithdrawalViewSet,
    BalanceEntryViewSet,
    BalanceView,
    PayoutWalletViewSet,
    RechargeMethodsView,
    RechargeViewSet,
    TransactionSummaryView,
    WithdrawalViewSet,
)

router = DefaultRouter()
router.register(r"entries", BalanceEntryViewSet, basename="balance-entries")
router.register(r"payout-wallets", PayoutWalletViewSet, basename="payout-wallets")
router.register(r"recharges", RechargeViewSet, basename="recharges")
router.register(r"withdrawals", WithdrawalViewSet, basename="withdrawals")
router.register(r"admin/recharges", AdminRechargeViewSet, basename="admin-recharges")
router.register(r"admin/withdrawals", AdminWithdrawalViewSet, basename="admin-withdrawals")
router.register(r"admin/payout-wallets", AdminPayoutWalletViewSet, basename="admin-payout-wallets")

urlpatterns = [
    path("balance/", BalanceView.as_view(), name="wallet-balance"),
    path("recharge-methods/", RechargeMethodsView.as_view(), name="recharge-methods"),
    path("admin/summary/", TransactionSummaryView.as_view(), name="transaction-summary"),
    path("", include(router.urls)),
]
