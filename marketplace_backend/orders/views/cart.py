# orders/views/cart.py

"""
CART API VIEWS

- GET    /api/orders/cart/                  active cart (created on demand)
- POST   /api/orders/cart/items/            add product (increments if present)
- PATCH  /api/orders/cart/items/{id}/       set quantity (<= 0 removes)
- DELETE /api/orders/cart/items/{id}/       remove line
- DELETE /api/orders/cart/clear/            remove every line

Money is server-owned: every response re-derives totals from product prices.
"""

from __future__ import annotations

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.errors import error_response
from orders.models import Cart, CartItem
from orders.serializers import (
    AddCartItemInputSerializer,
    CartSerializer,
    UpdateCartItemInputSerializer,
)
from orders.services import cart_service
from orders.services.exceptions import CartError
from products.models import Product

from .common import order_error_response


def _cart_response(cart: Cart, http_status=status.HTTP_200_OK):
    cart = Cart.objects.prefetch_related("items__product__store").get(pk=cart.pk)
    return Response(CartSerializer(cart).data, status=http_status)


class ActiveCartView(APIView):
    """
    Retrieve or create the authenticated user's active cart.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(responses={200: CartSerializer})
    def get(self, request):
        cart = cart_service.get_active_cart(request.user)
        return _cart_response(cart)


class CartItemsView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(
        request=AddCartItemInputSerializer,
        responses={200: CartSerializer},
        description="Add a product to the active cart (increments quantity if exists)",
    )
    def post(self, request):
        serializer = AddCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = get_object_or_404(
            Product.objects.select_related("store"),
            id=serializer.validated_data["product_id"],
            is_active=True,
        )

        try:
            cart = cart_service.add_item(
                user=request.user,
                product=product,
                quantity=serializer.validated_data["quantity"],
            )
        except CartError as exc:
            return order_error_response(exc)

        return _cart_response(cart)


class CartItemDetailView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(
        request=UpdateCartItemInputSerializer,
        responses={200: CartSerializer},
        description="Set the quantity of a cart line; 0 or less removes it",
    )
    def patch(self, request, item_id):
        serializer = UpdateCartItemInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            cart = cart_service.set_quantity(
                user=request.user,
                item_id=item_id,
                quantity=serializer.validated_data["quantity"],
            )
        except CartItem.DoesNotExist:
            return error_response(
                code="not_found", message="Cart item not found.", http_status=status.HTTP_404_NOT_FOUND
            )

        return _cart_response(cart)

    @extend_schema(request=None, responses={200: CartSerializer})
    def delete(self, request, item_id):
        try:
            cart = cart_service.remove_item(user=request.user, item_id=item_id)
        except CartItem.DoesNotExist:
            return error_response(
                code="not_found", message="Cart item not found.", http_status=status.HTTP_404_NOT_FOUND
            )

        return _cart_response(cart)


class ClearCartView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = CartSerializer

    @extend_schema(request=None, responses={200: CartSerializer})
    def delete(self, request):
        cart = cart_service.clear_cart(user=request.user)
        return _cart_response(cart)
