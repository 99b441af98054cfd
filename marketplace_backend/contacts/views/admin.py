# contacts/views/admin.py

"""
BACK-OFFICE CONTACT TRIAGE

- GET/PATCH/DELETE /api/contacts/admin/messages/   (filter status, search)
- POST /api/contacts/admin/messages/bulk-status/   {"ids": [...], "status": "..."} -> {"updated": n}
- POST /api/contacts/admin/messages/bulk-delete/   {"ids": [...]} -> {"deleted": n}
"""

from __future__ import annotations

from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from contacts.models import ContactMessage
from contacts.serializers import (
    AdminContactMessageSerializer,
    BulkIdsSerializer,
    BulkStatusSerializer,
)
from permissions.roles import IsBackOffice


class AdminContactMessageViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminContactMessageSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["status"]
    search_fields = ["name", "email", "subject", "company", "message"]
    ordering_fields = ["created_at", "status"]

    def get_queryset(self):
        return ContactMessage.objects.select_related("resolved_by").order_by("-created_at")

    @extend_schema(request=BulkStatusSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-status")
    def bulk_status(self, request):
        serializer = BulkStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        target = serializer.validated_data["status"]

        updated = 0
        with transaction.atomic():
            for message in ContactMessage.objects.select_for_update().filter(
                id__in=serializer.validated_data["ids"]
            ):
                if message.status == target:
                    continue
                message.apply_status(target, actor=request.user)
                message.save(update_fields=["status", "resolved_at", "resolved_by", "updated_at"])
                updated += 1

        return Response({"updated": updated}, status=status.HTTP_200_OK)

    @extend_schema(request=BulkIdsSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request):
        serializer = BulkIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        deleted, _ = ContactMessage.objects.filter(id__in=serializer.validated_data["ids"]).delete()
        return Response({"deleted": deleted}, status=status.HTTP_200_OK)
