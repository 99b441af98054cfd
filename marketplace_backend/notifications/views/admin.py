"""
PATH: notifications/views/admin.py

Back-office notification management:
- list all (filter by user / type / is_read, search title+message)
- create for one user or broadcast to every active user
- update, delete
- bulk mark read, bulk delete
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from notifications.models import Notification
from notifications.serializers import (
    AdminNotificationCreateSerializer,
    AdminNotificationSerializer,
    BulkIdsSerializer,
)
from notifications.services import broadcast, notify
from permissions.roles import IsBackOffice


class AdminNotificationViewSet(viewsets.ModelViewSet):
    queryset = Notification.objects.select_related("user").all()
    serializer_class = AdminNotificationSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["user", "type", "is_read"]
    search_fields = ["title", "message", "user__email"]
    ordering_fields = ["created_at", "type"]

    @extend_schema(
        request=AdminNotificationCreateSerializer,
        responses={201: dict},
        description="Send a notification to one user, or broadcast to all active users",
    )
    def create(self, request, *args, **kwargs):
        serializer = AdminNotificationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        payload = {
            "title": data["title"],
            "message": data["message"],
            "type": data["type"],
            "data": data.get("data") or {},
        }

        if data.get("broadcast"):
            sent = broadcast(**payload)
            return Response({"sent": sent}, status=status.HTTP_201_CREATED)

        note = notify(user=data["user"], **payload)
        return Response(
            {"sent": 1, "notification": AdminNotificationSerializer(note).data},
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=BulkIdsSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-mark-read")
    def bulk_mark_read(self, request):
        serializer = BulkIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        updated = Notification.objects.filter(
            id__in=serializer.validated_data["ids"]
        ).update(is_read=True)
        return Response({"updated": updated})

    @extend_schema(request=BulkIdsSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-delete")
    def bulk_delete(self, request):
        serializer = BulkIdsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        deleted, _ = Notification.objects.filter(
            id__in=serializer.validated_data["ids"]
        ).delete()
        return Response({"deleted": deleted})
