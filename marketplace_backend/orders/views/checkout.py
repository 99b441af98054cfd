# orders/views/checkout.py

"""
CHECKOUT API

POST /api/orders/checkout/
    {"shipping_address": {...}} or {"address_id": "<saved address>"}
    optional: billing_address, notes

Pays from the wallet and returns every order created (one per store).
"""

from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiExample, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from orders.serializers import CheckoutInputSerializer, OrderSerializer
from orders.services.checkout_orchestrator import checkout_cart
from orders.services.exceptions import CheckoutError, InsufficientBalanceError
from users.models import Address
from wallets.services import balance_service

from .common import order_error_response

logger = logging.getLogger(__name__)


class CheckoutView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CheckoutInputSerializer

    @extend_schema(
        request=CheckoutInputSerializer,
        responses={201: OrderSerializer(many=True)},
        description="Checkout the active cart: one order per store, paid from the wallet.",
        examples=[
            OpenApiExample(
                "Inline shipping address",
                value={
                    "shipping_address": {
                        "first_name": "Ada",
                        "last_name": "Obi",
                        "address_line_1": "12 Market Road",
                        "city": "Lagos",
                        "postal_code": "100001",
                        "country": "NG",
                    },
                    "notes": "Leave at the front desk",
                },
                request_only=True,
            ),
        ],
    )
    def post(self, request):
        serializer = CheckoutInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        shipping_address = data.get("shipping_address")
        if data.get("address_id"):
            address = get_object_or_404(Address, id=data["address_id"], user=request.user)
            shipping_address = address.as_snapshot()

        try:
            orders = checkout_cart(
                user=request.user,
                shipping_address=shipping_address,
                billing_address=data.get("billing_address"),
                notes=data.get("notes", ""),
            )
        except (CheckoutError, InsufficientBalanceError) as exc:
            logger.info("Checkout rejected for %s: %s", request.user.email, exc)
            return order_error_response(exc)

        return Response(
            {
                "orders": OrderSerializer(orders, many=True).data,
                "wallet_balance": str(balance_service.get_balance(request.user)),
            },
            status=status.HTTP_201_CREATED,
        )
