# cards/views/admin.py

"""
BACK-OFFICE CARD MANAGEMENT

- GET    /api/cards/admin/cards/?user=<uuid>
- PATCH  /api/cards/admin/cards/{id}/
- DELETE /api/cards/admin/cards/{id}/
- POST   /api/cards/admin/cards/{id}/set-default/

Creating cards on behalf of users is not exposed.
"""

from __future__ import annotations

from rest_framework import mixins, viewsets
from rest_framework.permissions import IsAuthenticated

from cards.models import Card
from cards.serializers import AdminCardSerializer
from permissions.roles import IsBackOffice

from .user import CardWriteMixin


class AdminCardViewSet(
    CardWriteMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminCardSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["user", "card_type", "is_default"]
    search_fields = ["cardholder_name", "card_number_last4", "user__email", "user__full_name"]
    ordering_fields = ["added_date", "card_type"]

    def get_queryset(self):
        return Card.objects.select_related("user").order_by("-added_date")
