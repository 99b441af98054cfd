# messaging/views/messages.py

"""
CUSTOMER MESSAGES

- GET  /api/messaging/messages/                 sent + received (filter store, order, is_read)
- POST /api/messaging/messages/                 {"store", "message", "order"?} -> to the store owner
- POST /api/messaging/messages/{id}/mark-read/  receiver only
- GET  /api/messaging/messages/unread-count/
"""

from __future__ import annotations

from django.db.models import Q
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from messaging.models import Message
from messaging.serializers import MessageSerializer, SendMessageSerializer
from messaging.services import mark_read, send_message
from messaging.services.exceptions import MessagingError

from .common import messaging_error_response


class MessageViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = MessageSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["store", "order", "is_read"]
    search_fields = ["message", "store__name"]
    ordering_fields = ["created_at"]

    def get_queryset(self):
        user = self.request.user
        return (
            Message.objects.filter(Q(sender=user) | Q(receiver=user))
            .select_related("store", "order", "sender", "receiver")
            .order_by("-created_at")
        )

    @extend_schema(request=SendMessageSerializer, responses={201: MessageSerializer})
    def create(self, request, *args, **kwargs):
        payload = SendMessageSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        try:
            msg = send_message(
                sender=request.user,
                store=data["store"],
                body=data["message"],
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

    @extend_schema(responses={200: dict})
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        count = Message.objects.filter(receiver=request.user, is_read=False).count()
        return Response({"unread": count})
