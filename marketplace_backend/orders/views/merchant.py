# orders/views/merchant.py

"""
MERCHANT ORDER ENDPOINTS (own store only)

- GET  /api/orders/merchant/orders/
- POST /api/orders/merchant/orders/{id}/update-status/   {"status": "..."}
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from orders.models import Order
from orders.serializers import AdminOrderSerializer, OrderStatusSerializer
from orders.services.exceptions import OrderLifecycleError
from orders.services.order_lifecycle import change_order_status
from permissions.roles import IsMerchant

from .common import order_error_response


class MerchantOrderViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = AdminOrderSerializer
    permission_classes = [IsAuthenticated, IsMerchant]
    filterset_fields = ["status", "payment_status"]
    search_fields = ["order_number", "tracking_number", "user__email", "user__full_name"]
    ordering_fields = ["created_at", "total_amount"]

    def get_queryset(self):
        return (
            Order.objects.filter(store__owner=self.request.user)
            .select_related("store", "user")
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
