# orders/services/checkout_orchestrator.py

"""
CHECKOUT ORCHESTRATOR (APPLICATION SERVICE)

Purpose:
- Finalize the user's active cart into one Order per store (atomic, auditable).
- Store-less (platform catalog) lines become a single platform order.
- Pay every order from the buyer's wallet and credit the receiving account.

Per group pricing (all server-side, quantized to cents):
    subtotal = sum(initial_price x qty)
    discount = sum(initial_price x pct / 100 x qty), rounded per line
    taxable  = subtotal - discount
    tax      = taxable x CHECKOUT["TAX_RATE"]
    shipping = CHECKOUT["SHIPPING_FEE"] if taxable < CHECKOUT["FREE_SHIPPING_THRESHOLD"] else 0
    total    = taxable + tax + shipping

Hard rules:
- The buyer's balance must cover the grand total before anything is written.
- Orders, items, wallet movements, store totals and cart closure succeed
  together or roll back together.
- Notifications are dispatched only after commit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import F

from notifications.models import Notification
from notifications.services import notify_on_commit
from orders.models import Cart, Order, OrderItem
from products.services import unit_discount_amount
from stores.models import Store
from wallets.models import BalanceEntry
from wallets.services import balance_service

from .exceptions import (
    CheckoutError,
    EmptyCartError,
    InsufficientBalanceError,
    PlatformAccountMissingError,
    ProductUnavailableError,
)

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    if v is None or v == "":
        return Decimal("0.00")
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _checkout_setting(name: str) -> Decimal:
    return Decimal(str(settings.CHECKOUT[name]))


@dataclass
class OrderTotals:
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    shipping_amount: Decimal
    total_amount: Decimal


@dataclass
class CheckoutGroup:
    store: Store | None
    lines: list = field(default_factory=list)

    @property
    def is_platform(self) -> bool:
        return self.store is None


def calculate_totals(lines) -> OrderTotals:
    """
    lines: iterable of (product, quantity).
    Pure function, no DB access beyond the already-loaded products.
    """
    subtotal = Decimal("0")
    discount = Decimal("0")

    for product, quantity in lines:
        gross, line_discount = line_amounts(product, quantity)
        subtotal += gross
        discount += line_discount

    subtotal = _money(subtotal)
    discount = _money(discount)
    taxable = _money(subtotal - discount)
    tax = _money(taxable * _checkout_setting("TAX_RATE"))

    if taxable < _checkout_setting("FREE_SHIPPING_THRESHOLD"):
        shipping = _money(_checkout_setting("SHIPPING_FEE"))
    else:
        shipping = Decimal("0.00")

    return OrderTotals(
        subtotal=subtotal,
        discount_amount=discount,
        tax_amount=tax,
        shipping_amount=shipping,
        total_amount=_money(taxable + tax + shipping),
    )


def line_amounts(product, quantity) -> tuple[Decimal, Decimal]:
    """(gross, discount) for one cart line, each rounded to cents."""
    qty = int(quantity)
    initial = Decimal(str(product.initial_price or 0))
    gross = _money(initial * qty)
    discount = _money(
        unit_discount_amount(initial_price=initial, discount=product.discount) * qty
    )
    return gross, discount


def line_total(product, quantity) -> Decimal:
    """Line total after discount. Line totals of a group add up to its taxable amount."""
    gross, discount = line_amounts(product, quantity)
    return _money(gross - discount)


def unit_charge(product) -> Decimal:
    """Unit price recorded on the order line (initial price less its discount)."""
    initial = Decimal(str(product.initial_price or 0))
    return _money(
        initial - unit_discount_amount(initial_price=initial, discount=product.discount)
    )


def group_cart_lines(cart_items) -> list[CheckoutGroup]:
    """Merchant groups in first-seen order, platform group last."""
    groups: dict = {}
    platform = CheckoutGroup(store=None)

    for item in cart_items:
        product = item.product
        if product.store_id is None:
            platform.lines.append((product, item.quantity))
            continue
        group = groups.get(product.store_id)
        if group is None:
            group = groups[product.store_id] = CheckoutGroup(store=product.store)
        group.lines.append((product, item.quantity))

    result = list(groups.values())
    if platform.lines:
        result.append(platform)
    return result


def billing_snapshot(user) -> dict:
    return {
        "full_name": user.full_name,
        "email": user.email,
        "phone": user.phone,
        "address": user.address,
        "city": user.city,
        "state": user.state,
        "country": user.country,
        "postal_code": user.postal_code,
    }


def _validate_lines(cart_items) -> None:
    for item in cart_items:
        if not item.product.is_purchasable:
            raise ProductUnavailableError(
                f"'{item.product.title}' is no longer available. Remove it from your cart to continue."
            )


def _create_order(*, user, group: CheckoutGroup, totals: OrderTotals, shipping_address, billing_address, notes, currency) -> Order:
    order = Order.objects.create(
        user=user,
        store=group.store,
        is_platform_order=group.is_platform,
        status=Order.STATUS_PENDING,
        payment_status=Order.PAYMENT_CONFIRMED,
        payment_method=Order.PAYMENT_METHOD_WALLET,
        currency=currency,
        subtotal=totals.subtotal,
        discount_amount=totals.discount_amount,
        tax_amount=totals.tax_amount,
        shipping_amount=totals.shipping_amount,
        total_amount=totals.total_amount,
        shipping_address=shipping_address or {},
        billing_address=billing_address,
        notes=notes or "",
    )

    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product=product,
                title=product.title,
                asin=product.asin or "",
                image_url=product.image_url or "",
                quantity=int(quantity),
                price=unit_charge(product),
                total=line_total(product, quantity),
            )
            for product, quantity in group.lines
        ]
    )
    return order


@transaction.atomic
def checkout_cart(*, user, shipping_address: dict | None = None, billing_address: dict | None = None, notes: str = "") -> list[Order]:
    """
    Returns the created orders (merchant orders first, platform order last).
    """
    cart = Cart.objects.select_for_update().filter(user=user, is_active=True).first()
    if cart is None:
        raise EmptyCartError("Cart is empty")

    cart_items = list(cart.items.select_related("product", "product__store"))
    if not cart_items:
        raise EmptyCartError("Cart is empty")

    _validate_lines(cart_items)

    groups = group_cart_lines(cart_items)
    priced = [(group, calculate_totals(group.lines)) for group in groups]
    grand_total = _money(sum((t.total_amount for _, t in priced), Decimal("0")))

    platform_account = None
    if any(g.is_platform for g, _ in priced):
        platform_account = balance_service.get_platform_account()
        if platform_account is None:
            raise PlatformAccountMissingError("Platform items cannot be ordered right now.")

    available = balance_service.get_balance(user)
    if available < grand_total:
        raise InsufficientBalanceError(
            f"Insufficient balance: available {available}, required {grand_total}"
        )

    currency = settings.CHECKOUT.get("CURRENCY", "USD")
    billing = billing_address or billing_snapshot(user)
    orders: list[Order] = []

    for group, totals in priced:
        order = _create_order(
            user=user,
            group=group,
            totals=totals,
            shipping_address=shipping_address,
            billing_address=billing,
            notes=notes,
            currency=currency,
        )
        orders.append(order)

        balance_service.debit(
            user=user,
            amount=totals.total_amount,
            reason=BalanceEntry.REASON_ORDER_PAYMENT,
            reference=f"order:{order.order_number}",
        )

        payee = platform_account if group.is_platform else group.store.owner
        balance_service.credit(
            user=payee,
            amount=totals.total_amount,
            reason=BalanceEntry.REASON_ORDER_INCOME,
            reference=f"order:{order.order_number}",
        )

        if not group.is_platform:
            Store.objects.filter(pk=group.store.pk).update(
                total_sales=F("total_sales") + 1,
                total_revenue=F("total_revenue") + totals.total_amount,
            )

        _notify_order_placed(order=order, buyer=user, payee=payee)

    cart.is_active = False
    cart.save(update_fields=["is_active", "updated_at"])

    logger.info(
        "Checkout by %s created %s order(s), total %s",
        user.email,
        len(orders),
        grand_total,
    )
    return orders


def _notify_order_placed(*, order: Order, buyer, payee) -> None:
    data = {"order_id": str(order.id), "order_number": order.order_number}

    notify_on_commit(
        user=buyer,
        type=Notification.TYPE_ORDER,
        title="Order Placed",
        message=f"Your order {order.order_number} has been placed. Total: {order.total_amount} {order.currency}.",
        data=data,
    )

    if payee is not None and payee.pk != buyer.pk:
        notify_on_commit(
            user=payee,
            type=Notification.TYPE_ORDER,
            title="New Order",
            message=f"You received a new order {order.order_number} worth {order.total_amount} {order.currency}.",
            data=data,
        )


__all__ = [
    "CheckoutError",
    "OrderTotals",
    "calculate_totals",
    "checkout_cart",
    "group_cart_lines",
    "line_total",
    "unit_charge",
]
