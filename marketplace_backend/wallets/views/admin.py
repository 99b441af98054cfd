# wallets/views/admin.py

"""
BACK-OFFICE TRANSACTIONS

- /api/wallets/admin/recharges/     list, retrieve, update (status via lifecycle), delete
- /api/wallets/admin/withdrawals/   same
- POST .../bulk-status/             {"ids": [...], "status": "...", "failure_reason": ""}
- GET  /api/wallets/admin/summary/  counts per status, volumes, fees, pending payouts
- /api/wallets/admin/payout-wallets/  list, retrieve, delete, bulk-delete
"""

from __future__ import annotations

import logging

from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from permissions.roles import IsBackOffice
from wallets.models import PayoutWallet, Recharge, TransactionStatus, Withdrawal
from wallets.serializers import (
    AdminPayoutWalletSerializer,
    AdminRechargeSerializer,
    AdminWithdrawalSerializer,
    BulkIdsSerializer,
    BulkStatusSerializer,
)
from wallets.services.exceptions import WalletError
from wallets.services.stats import transaction_summary
from wallets.services.transaction_lifecycle import (
    bulk_set_status,
    set_recharge_status,
    set_withdrawal_status,
)

from .user import wallet_error_response

logger = logging.getLogger(__name__)

ADMIN_SEARCH = ["reference_id", "transaction_hash", "user__email", "user__full_name"]


class _AdminTransactionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    Shared admin behaviour. Subclasses define model + serializer + set_status().
    """

    model = None
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["status", "method", "currency", "user"]
    search_fields = ADMIN_SEARCH
    ordering_fields = ["created_at", "amount", "status"]

    def get_queryset(self):
        return self.model.objects.select_related("user").all()

    def set_status(self, obj, target_status: str, failure_reason: str):
        raise NotImplementedError

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        target_status = data.pop("status", None)
        failure_reason = data.get("failure_reason", "")

        try:
            with transaction.atomic():
                if target_status and target_status != instance.status:
                    instance = self.set_status(instance, target_status, failure_reason)
                if data:
                    for key, value in data.items():
                        setattr(instance, key, value)
                    instance.save(update_fields=[*data.keys(), "updated_at"])
        except WalletError as e:
            return wallet_error_response(e)

        return Response(self.get_serializer(instance).data)

    @extend_schema(request=BulkStatusSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-status")
    def bulk_status(self, request):
        payload = BulkStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        result = bulk_set_status(
            model=self.model,
            ids=payload.validated_data["ids"],
            target_status=payload.validated_data["status"],
            failure_reason=payload.validated_data.get("failure_reason", ""),
            actor=request.user,
        )
        return Response(result)


class AdminRechargeViewSet(_AdminTransactionViewSet):
    model = Recharge
    serializer_class = AdminRechargeSerializer

    def set_status(self, obj, target_status, failure_reason):
        return set_recharge_status(
            recharge=obj,
            target_status=target_status,
            failure_reason=failure_reason,
            actor=self.request.user,
        )


class AdminWithdrawalViewSet(_AdminTransactionViewSet):
    model = Withdrawal
    serializer_class = AdminWithdrawalSerializer

    def set_status(self, obj, target_status, failure_reason):
        return set_withdrawal_status(
            withdrawal=obj,
            target_status=target_status,
            failure_reason=failure_reason,
            actor=self.request.user,
        )

    def perform_destroy(self, instance):
        # release the hold first
        with transaction.atomic():
            if instance.status == TransactionStatus.PENDING:
                set_withdrawal_status(
                    withdrawal=instance,
                    target_status=TransactionStatus.CANCELLED,
                    actor=self.request.user,
                )
            logger.info("Withdrawal %s deleted by %s", instance.reference_id, self.request.user.email)
            instance.delete()


class TransactionSummaryView(APIView):
    permission_classes = [IsAuthenticated, IsBackOffice]
    serializer_class = None

    @extend_schema(responses={200: dict}, description="Recharge/withdrawal statistics")
    def get(self, request):
        return Response(transaction_summary(), status=status.HTTP_200_OK)


class AdminPayoutWalletViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = PayoutWallet.objects.select_related("user").all()
    serializer_class = AdminPayoutWalletSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["type", "user", "is_default"]
    search_fields = ["name", "address", "bank_name", "user__email"]

    @extend_schema(request=BulkIdsSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request):
        payload = BulkIdsSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        deleted, _ = PayoutWallet.objects.filter(id__in=payload.validated_data["ids"]).delete()
        return Response({"deleted": deleted})
