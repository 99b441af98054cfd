# cards/views/user.py

"""
SAVED CARDS (own)

- CRUD /api/cards/                   max MAX_CARDS_PER_USER per user
- POST /api/cards/{id}/set-default/
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from backend.errors import error_response
from cards.models import Card
from cards.serializers import CardSerializer
from cards.services import card_service
from cards.services.exceptions import (
    CardError,
    CardLimitReachedError,
    DuplicateCardNumberError,
    DuplicateCardTypeError,
)


def card_error_response(exc: CardError):
    if isinstance(exc, CardLimitReachedError):
        code = "card_limit_reached"
    elif isinstance(exc, (DuplicateCardTypeError, DuplicateCardNumberError)):
        code = "duplicate_card"
    else:
        code = "invalid_card"
    return error_response(code=code, message=str(exc), http_status=status.HTTP_400_BAD_REQUEST)


class CardWriteMixin:
    """create / update / destroy routed through card_service."""

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        try:
            card = card_service.add_card(
                user=self.get_card_owner(),
                card_number=data.pop("card_number"),
                **data,
            )
        except CardError as exc:
            return card_error_response(exc)
        return Response(self.get_serializer(card).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        card = self.get_object()
        serializer = self.get_serializer(card, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        try:
            card = card_service.update_card(
                card=card,
                card_number=data.pop("card_number", None),
                **data,
            )
        except CardError as exc:
            return card_error_response(exc)
        return Response(self.get_serializer(card).data, status=status.HTTP_200_OK)

    def perform_destroy(self, instance):
        card_service.delete_card(card=instance)

    @extend_schema(request=None)
    @action(detail=True, methods=["post"], url_path="set-default")
    def set_default(self, request, pk=None):
        card = card_service.set_default_card(card=self.get_object())
        return Response(self.get_serializer(card).data, status=status.HTTP_200_OK)


class CardViewSet(CardWriteMixin, viewsets.ModelViewSet):
    serializer_class = CardSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = None
    filter_backends = []

    def get_queryset(self):
        return Card.objects.filter(user=self.request.user).order_by("-is_default", "-added_date")

    def get_card_owner(self):
        return self.request.user
