"""
PATH: users/views/admin_users.py

BACK-OFFICE USER MANAGEMENT

- List customer/merchant/manager profiles (admins are excluded) with
  order count + order total.
- Update role / status / verification / profile fields.
- Delete an account.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db.models import Count, DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce
from rest_framework import mixins, viewsets
from rest_framework.permissions import IsAuthenticated

from permissions.roles import ROLE_ADMIN, IsBackOffice
from users.models import User
from users.serializers import AdminUserSerializer

logger = logging.getLogger(__name__)


class AdminUserViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminUserSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["role", "status", "is_verified"]
    search_fields = ["email", "full_name", "username", "phone"]
    ordering_fields = ["created_at", "email", "wallet_balance", "order_count", "order_total"]

    def get_queryset(self):
        return (
            User.objects.exclude(Q(role=ROLE_ADMIN) | Q(is_superuser=True))
            .annotate(
                order_count=Count("orders", distinct=True),
                order_total=Coalesce(
                    Sum("orders__total_amount"),
                    Value(Decimal("0.00")),
                    output_field=DecimalField(max_digits=14, decimal_places=2),
                ),
            )
            .order_by("-created_at")
        )

    def perform_update(self, serializer):
        user = serializer.save()
        logger.info(
            "User %s updated by %s (role=%s status=%s)",
            user.email,
            self.request.user.email,
            user.role,
            user.status,
        )

    def perform_destroy(self, instance):
        logger.info("User %s deleted by %s", instance.email, self.request.user.email)
        instance.delete()
