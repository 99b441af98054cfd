# orders/views/admin.py

"""
BACK-OFFICE ORDER MANAGEMENT

- GET    /api/orders/admin/orders/        (filter status / payment_status / store / platform)
- GET    /api/orders/admin/orders/{id}/
- POST   /api/orders/admin/orders/{id}/update-status/
- DELETE /api/orders/admin/orders/{id}/      (open orders are cancelled and refunded first)
"""

from __future__ import annotations

import logging

from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders.models import Order
from orders.serializers import AdminOrderSerializer, OrderStatusSerializer
from orders.services.exceptions import OrderLifecycleError
from orders.services.order_lifecycle import TERMINAL_STATES, change_order_status
from permissions.roles import IsBackOffice

from .common import order_error_response

logger = logging.getLogger(__name__)


class AdminOrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminOrderSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["status", "payment_status", "store", "is_platform_order", "user"]
    search_fields = ["order_number", "tracking_number", "user__email", "user__full_name", "store__name"]
    ordering_fields = ["created_at", "total_amount", "status"]

    def get_queryset(self):
        return (
            Order.objects.select_related("store", "user")
            .prefetch_related("items")
            .order_by("-created_at")
        )

    @extend_schema(request=OrderStatusSerializer, responses={200: AdminOrderSerializer})
    @action(detail=True, methods=["post"], url_path="update-status")
    def update_status(self, request, pk=None):
        order = self.get_object()
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            change_order_status(
                order=order,
                target_status=serializer.validated_data["status"],
                actor=request.user,
            )
        except OrderLifecycleError as exc:
            return order_error_response(exc)

        order = self.get_queryset().get(pk=order.pk)
        return Response(AdminOrderSerializer(order).data, status=status.HTTP_200_OK)

    def destroy(self, request, *args, **kwargs):
        """
        Open orders are cancelled first so the payment is reversed.
        Shipped orders cannot be cancelled and therefore cannot be deleted.
        """
        order = self.get_object()
        try:
            with transaction.atomic():
                if order.status not in TERMINAL_STATES:
                    change_order_status(
                        order=order, target_status=Order.STATUS_CANCELLED, actor=request.user
                    )
                logger.warning("Order %s deleted by %s", order.order_number, request.user.email)
                order.delete()
        except OrderLifecycleError as exc:
            return order_error_response(exc)

        return Response(status=status.HTTP_204_NO_CONTENT)
