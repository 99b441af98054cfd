# orders/services/cart_service.py

"""
CART SERVICE

Single entry point for cart mutations:
- get_active_cart(user)            -> get or create the user's one active cart
- add_item(user, product, qty)     -> increments an existing line
- set_quantity(user, item_id, qty) -> qty <= 0 removes the line
- remove_item / clear_cart

Prices are never stored on cart lines; see CartItem.unit_price.
"""

from __future__ import annotations

from django.db import transaction

from orders.models import Cart, CartItem

from .exceptions import CartError


def get_active_cart(user) -> Cart:
    cart, _ = Cart.objects.get_or_create(user=user, is_active=True)
    return cart


def _ensure_purchasable(product) -> None:
    if not product.is_purchasable:
        raise CartError(f"'{product.title}' is not available for purchase.")


@transaction.atomic
def add_item(*, user, product, quantity: int = 1) -> Cart:
    if int(quantity) < 1:
        raise CartError("quantity must be at least 1")

    _ensure_purchasable(product)
    cart = get_active_cart(user)

    item = CartItem.objects.select_for_update().filter(cart=cart, product=product).first()
    if item is None:
        CartItem.objects.create(cart=cart, product=product, quantity=int(quantity))
    else:
        item.quantity = int(item.quantity) + int(quantity)
        item.save(update_fields=["quantity", "updated_at"])

    return cart


@transaction.atomic
def set_quantity(*, user, item_id, quantity: int) -> Cart:
    cart = get_active_cart(user)
    item = CartItem.objects.filter(cart=cart, id=item_id).first()
    if item is None:
        raise CartItem.DoesNotExist("Cart item not found")

    if int(quantity) <= 0:
        item.delete()
    else:
        item.quantity = int(quantity)
        item.save(update_fields=["quantity", "updated_at"])

    return cart


def remove_item(*, user, item_id) -> Cart:
    cart = get_active_cart(user)
    deleted, _ = CartItem.objects.filter(cart=cart, id=item_id).delete()
    if not deleted:
        raise CartItem.DoesNotExist("Cart item not found")
    return cart


def clear_cart(*, user) -> Cart:
    cart = get_active_cart(user)
    cart.items.all().delete()
    return cart
