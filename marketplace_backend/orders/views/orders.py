# orders/views/orders.py

"""
CUSTOMER ORDER ENDPOINTS

- GET  /api/orders/my-orders/               own orders with items (filter status)
- GET  /api/orders/my-orders/{id}/
- POST /api/orders/my-orders/{id}/cancel/   pending only; refunds the wallet
- GET  /api/orders/track/?order_id=...|tracking_number=...   public, throttled
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from backend.errors import error_response
from orders.models import Order
from orders.serializers import OrderSerializer, OrderTrackingSerializer, TrackOrderQuerySerializer
from orders.services.exceptions import OrderLifecycleError
from orders.services.order_lifecycle import cancel_own_order
from orders.services.tracking import find_order_for_tracking

from .common import order_error_response


class MyOrderViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status", "payment_status", "is_platform_order"]
    search_fields = ["order_number", "tracking_number"]
    ordering_fields = ["created_at", "total_amount"]

    def get_queryset(self):
        return (
            Order.objects.filter(user=self.request.user)
            .select_related("store")
            .prefetch_related("items")
            .order_by("-created_at")
        )

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        order = self.get_object()
        try:
            order = cancel_own_order(order=order, user=request.user)
        except OrderLifecycleError as exc:
            return order_error_response(exc)

        order = self.get_queryset().get(pk=order.pk)
        return Response(OrderSerializer(order).data, status=status.HTTP_200_OK)


class TrackOrderView(APIView):
    """
    Public order tracking by order id / order number or tracking number.
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "public_track"
    serializer_class = OrderTrackingSerializer

    @extend_schema(parameters=[TrackOrderQuerySerializer], responses={200: OrderTrackingSerializer})
    def get(self, request):
        query = TrackOrderQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        order_id = query.validated_data.get("order_id", "")
        tracking_number = query.validated_data.get("tracking_number", "")

        if not (order_id or "").strip() and not (tracking_number or "").strip():
            return error_response(
                code="missing_lookup",
                message="Provide order_id or tracking_number.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        order = find_order_for_tracking(order_id=order_id, tracking_number=tracking_number)
        if order is None:
            return error_response(
                code="not_found",
                message="No order matches that reference.",
                http_status=status.HTTP_404_NOT_FOUND,
            )

        return Response(OrderTrackingSerializer(order).data, status=status.HTTP_200_OK)
