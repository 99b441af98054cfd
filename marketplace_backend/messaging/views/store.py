# messaging/views/store.py

"""
STORE INBOX (merchant, own store only)

- GET    /api/messaging/store/messages/                 (filter is_read, order, sender)
- POST   /api/messaging/store/messages/                 {"receiver", "message", "order"?} reply
- POST   /api/messaging/store/messages/{id}/mark-read/
- DELETE /api/messaging/store/messages/{id}/
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from messaging.models import Message
from messaging.serializers import MessageSerializer, StoreReplySerializer
from messaging.services import mark_read, send_message
from messaging.services.exceptions import MessagingError
from permissions.roles import IsMerchant
from stores.models import Store

from .common import messaging_error_response

logger = logging.getLogger(__name__)


class StoreMessageViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = MessageSerializer
    permission_classes = [IsAuthenticated, IsMerchant]
    filterset_fields = ["is_read", "order", "sender", "receiver"]
    search_fields = ["message", "sender__email", "sender__full_name"]
    ordering_fields = ["created_at"]

    def _own_store(self) -> Store:
        store = Store.objects.filter(owner=self.request.user).first()
        if store is None:
            raise PermissionDenied("You do not have a store.")
        return store

    def get_queryset(self):
        return (
            Message.objects.filter(store__owner=self.request.user)
            .select_related("store", "order", "sender", "receiver")
            .order_by("-created_at")
        )

    @extend_schema(request=StoreReplySerializer, responses={201: MessageSerializer})
    def create(self, request, *args, **kwargs):
        payload = StoreReplySerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        try:
            msg = send_message(
                sender=request.user,
                store=self._own_store(),
                body=data["message"],
                receiver=data["receiver"],
                order=data.get("order"),
            )
        except MessagingError as exc:
            return messaging_error_response(exc)

        return Response(MessageSerializer(msg).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: MessageSerializer})
    @action(detail=True, methods=["post"], url_path="mark-read")
    def mark_read(self, request, pk=None):
        try:
            msg = mark_read(message=self.get_object(), user=request.user)
        except MessagingError as exc:
            return messaging_error_response(exc)
        return Response(MessageSerializer(msg).data)

    def perform_destroy(self, instance):
        logger.info("Message %s deleted by %s", instance.id, self.request.user.email)
        instance.delete()
