# stores/views/admin.py

"""
BACK-OFFICE STORE MANAGEMENT

- CRUD /api/stores/admin/stores/  (filter status, search name/owner)
- POST /api/stores/admin/stores/{id}/approve|activate|suspend|block/
- POST /api/stores/admin/stores/{id}/set-status/   {"status": "..."}
- POST /api/stores/admin/stores/bulk-delete/       {"ids": [...]} -> {"deleted": n}
"""

from __future__ import annotations

import logging

from django.db.models import Count
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from backend.errors import error_response
from permissions.roles import IsBackOffice
from stores.models import Store
from stores.serializers import AdminStoreSerializer, BulkIdsSerializer, StoreStatusSerializer
from stores.services.exceptions import InvalidStoreTransitionError
from stores.services.store_lifecycle import change_store_status

logger = logging.getLogger(__name__)


class AdminStoreViewSet(viewsets.ModelViewSet):
    serializer_class = AdminStoreSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["status", "is_verified", "category", "store_level"]
    search_fields = ["name", "slug", "owner__email", "owner__full_name", "email"]
    ordering_fields = ["created_at", "name", "total_revenue", "total_sales", "rating"]

    def get_queryset(self):
        return (
            Store.objects.select_related("owner")
            .annotate(product_count=Count("products", distinct=True))
            .order_by("-created_at")
        )

    def _transition(self, request, target_status: str):
        store = self.get_object()
        try:
            store = change_store_status(store=store, target_status=target_status, actor=request.user)
        except InvalidStoreTransitionError as e:
            return error_response(
                code="invalid_transition",
                message=str(e),
                http_status=status.HTTP_409_CONFLICT,
            )
        return Response(AdminStoreSerializer(store).data, status=status.HTTP_200_OK)

    @extend_schema(request=None, responses={200: AdminStoreSerializer})
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        return self._transition(request, Store.STATUS_ACTIVE)

    @extend_schema(request=None, responses={200: AdminStoreSerializer})
    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):
        return self._transition(request, Store.STATUS_ACTIVE)

    @extend_schema(request=None, responses={200: AdminStoreSerializer})
    @action(detail=True, methods=["post"])
    def suspend(self, request, pk=None):
        return self._transition(request, Store.STATUS_SUSPENDED)

    @extend_schema(request=None, responses={200: AdminStoreSerializer})
    @action(detail=True, methods=["post"])
    def block(self, request, pk=None):
        return self._transition(request, Store.STATUS_BLOCKED)

    @extend_schema(request=StoreStatusSerializer, responses={200: AdminStoreSerializer})
    @action(detail=True, methods=["post"], url_path="set-status")
    def set_status(self, request, pk=None):
        payload = StoreStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        return self._transition(request, payload.validated_data["status"])

    @extend_schema(request=BulkIdsSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request):
        payload = BulkIdsSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        ids = payload.validated_data["ids"]
        deleted = Store.objects.filter(id__in=ids).count()
        Store.objects.filter(id__in=ids).delete()

        logger.info("Bulk store delete by %s: %s stores", request.user.email, deleted)
        return Response({"deleted": deleted})
