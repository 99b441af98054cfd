# wallets/views/user.py

"""
USER WALLET ENDPOINTS

- GET  /api/wallets/balance/                 balance + latest ledger entries
- GET  /api/wallets/entries/                 full ledger (paginated)
- GET  /api/wallets/recharge-methods/        methods + platform deposit addresses (site contact info, else env)
- CRUD /api/wallets/payout-wallets/          (+ /{id}/set-default/)
- GET/POST /api/wallets/recharges/           (+ /{id}/cancel/)
- GET/POST /api/wallets/withdrawals/         (+ /{id}/cancel/)
"""

from __future__ import annotations

from django.conf import settings
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.errors import error_response
from contacts.models import ContactInfo
from wallets.models import BalanceEntry, PayoutWallet, Recharge, Withdrawal
from wallets.serializers import (
    BalanceEntrySerializer,
    PayoutWalletSerializer,
    RechargeCreateSerializer,
    RechargeSerializer,
    WithdrawalCreateSerializer,
    WithdrawalSerializer,
)
from wallets.services import balance_service
from wallets.services.exceptions import (
    InsufficientBalanceError,
    InvalidTransactionTransitionError,
    UnsupportedMethodError,
    WalletError,
    WithdrawalPinError,
)
from wallets.services.fees import recharge_fee, withdrawal_fee
from wallets.services.recharge_service import cancel_recharge, create_recharge
from wallets.services.withdrawal_service import cancel_withdrawal, create_withdrawal


def wallet_error_response(exc: WalletError):
    """Map wallet domain errors to the API error envelope."""
    if isinstance(exc, InsufficientBalanceError):
        return error_response(
            code="insufficient_balance", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST
        )
    if isinstance(exc, WithdrawalPinError):
        return error_response(
            code="invalid_pin", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST
        )
    if isinstance(exc, UnsupportedMethodError):
        return error_response(
            code="contact_support", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST
        )
    if isinstance(exc, InvalidTransactionTransitionError):
        return error_response(
            code="invalid_transition", message=str(exc), http_status=status.HTTP_409_CONFLICT
        )
    return error_response(
        code="wallet_error", message=str(exc), http_status=status.HTTP_400_BAD_REQUEST
    )


class BalanceView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = BalanceEntrySerializer

    @extend_schema(responses={200: dict}, description="Current wallet balance + latest 10 ledger entries")
    def get(self, request):
        entries = BalanceEntry.objects.filter(user=request.user)[:10]
        return Response(
            {
                "balance": balance_service.get_balance(request.user),
                "currency": request.user.preferred_currency,
                "has_withdrawal_pin": request.user.has_withdrawal_pin,
                "recent_entries": BalanceEntrySerializer(entries, many=True).data,
            }
        )


class BalanceEntryViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = BalanceEntrySerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["direction", "reason"]

    def get_queryset(self):
        return BalanceEntry.objects.filter(user=self.request.user)


class RechargeMethodsView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = None

    @extend_schema(responses={200: dict}, description="Recharge methods, fee rates and deposit addresses")
    def get(self, request):
        fallback = getattr(settings, "WALLET_DEPOSIT_ADDRESSES", {}) or {}
        info = ContactInfo.load()
        methods = []
        for value, label in Recharge.METHOD_CHOICES:
            details = info.deposit_details(value)
            methods.append(
                {
                    "method": value,
                    "label": label,
                    "self_service": value != Recharge.METHOD_BANK_TRANSFER,
                    "deposit_address": details["address"] or fallback.get(value) or None,
                    "deposit_qr": details["qr"] or None,
                }
            )
        fee, net = withdrawal_fee("100.00")
        return Response(
            {
                "methods": methods,
                "recharge_fee_example": {"amount": "100.00", "fee": recharge_fee("100.00")},
                "withdrawal_fee_example": {"amount": "100.00", "fee": fee, "net_amount": net},
            }
        )


class PayoutWalletViewSet(viewsets.ModelViewSet):
    serializer_class = PayoutWalletSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["type", "is_default"]
    pagination_class = None

    def get_queryset(self):
        return PayoutWallet.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        # first wallet becomes the default
        is_first = not PayoutWallet.objects.filter(user=self.request.user).exists()
        if is_first:
            serializer.save(user=self.request.user, is_default=True)
        else:
            serializer.save(user=self.request.user)

    @extend_schema(request=None, responses={200: PayoutWalletSerializer})
    @action(detail=True, methods=["post"], url_path="set-default")
    def set_default(self, request, pk=None):
        wallet = self.get_object()
        wallet.is_default = True
        wallet.save()
        return Response(PayoutWalletSerializer(wallet).data)


class RechargeViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = RechargeSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status", "method"]
    search_fields = ["reference_id", "transaction_hash", "method"]
    ordering_fields = ["created_at", "amount", "status"]

    def get_queryset(self):
        return Recharge.objects.filter(user=self.request.user)

    @extend_schema(request=RechargeCreateSerializer, responses={201: RechargeSerializer})
    def create(self, request, *args, **kwargs):
        payload = RechargeCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        try:
            recharge = create_recharge(user=request.user, **payload.validated_data)
        except WalletError as e:
            return wallet_error_response(e)

        return Response(RechargeSerializer(recharge).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: RechargeSerializer})
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        recharge = self.get_object()
        try:
            recharge = cancel_recharge(recharge=recharge, user=request.user)
        except WalletError as e:
            return wallet_error_response(e)
        return Response(RechargeSerializer(recharge).data)


class WithdrawalViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = WithdrawalSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status", "method"]
    search_fields = ["reference_id", "transaction_hash"]
    ordering_fields = ["created_at", "amount", "status"]

    def get_queryset(self):
        return Withdrawal.objects.filter(user=self.request.user)

    @extend_schema(request=WithdrawalCreateSerializer, responses={201: WithdrawalSerializer})
    def create(self, request, *args, **kwargs):
        payload = WithdrawalCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        payout_wallet = get_object_or_404(
            PayoutWallet, pk=data["payout_wallet"], user=request.user
        )

        try:
            withdrawal = create_withdrawal(
                user=request.user,
                payout_wallet=payout_wallet,
                amount=data["amount"],
                pin=data["pin"],
            )
        except WalletError as e:
            return wallet_error_response(e)

        return Response(WithdrawalSerializer(withdrawal).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: WithdrawalSerializer})
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        withdrawal = self.get_object()
        try:
            withdrawal = cancel_withdrawal(withdrawal=withdrawal, user=request.user)
        except WalletError as e:
            return wallet_error_response(e)
        return Response(WithdrawalSerializer(withdrawal).data)
