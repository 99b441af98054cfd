from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from notifications.models import Notification
from orders.models import Cart, CartItem, Order
from orders.services import cart_service
from orders.services.checkout_orchestrator import calculate_totals, checkout_cart
from orders.services.exceptions import EmptyCartError, PlatformAccountMissingError
from permissions.roles import ROLE_MERCHANT
from products.models import Product
from stores.models import Store
from users.models import Address
from wallets.models import BalanceEntry
from wallets.services import balance_service

User = get_user_model()

SHIPPING = {
    "first_name": "Ada",
    "last_name": "Obi",
    "address_line_1": "12 Market Road",
    "city": "Lagos",
    "postal_code": "100001",
    "country": "NG",
}


def fund(user, amount):
    balance_service.credit(user=user, amount=amount, reason=BalanceEntry.REASON_ADJUSTMENT)


@override_settings(
    CHECKOUT={
        "TAX_RATE": "0.08",
        "SHIPPING_FEE": "5.99",
        "FREE_SHIPPING_THRESHOLD": "35.00",
        "CURRENCY": "USD",
    }
)
class CheckoutTotalsTests(TestCase):
    def test_discounted_line_below_free_shipping(self):
        product = Product(title="Bowl", initial_price=Decimal("20.00"), discount="-25%")

        totals = calculate_totals([(product, 1)])

        self.assertEqual(totals.subtotal, Decimal("20.00"))
        self.assertEqual(totals.discount_amount, Decimal("5.00"))
        self.assertEqual(totals.tax_amount, Decimal("1.20"))
        self.assertEqual(totals.shipping_amount, Decimal("5.99"))
        self.assertEqual(totals.total_amount, Decimal("22.19"))

    def test_free_shipping_from_threshold(self):
        product = Product(title="Chair", initial_price=Decimal("50.00"), discount="")

        totals = calculate_totals([(product, 1)])

        self.assertEqual(totals.shipping_amount, Decimal("0.00"))
        self.assertEqual(totals.total_amount, Decimal("54.00"))


@override_settings(
    CHECKOUT={
        "TAX_RATE": "0.08",
        "SHIPPING_FEE": "5.99",
        "FREE_SHIPPING_THRESHOLD": "35.00",
        "CURRENCY": "USD",
    }
)
class CheckoutFlowTests(TestCase):
    """
    GUARANTEES:
    - One order per store, platform lines in their own order (last)
    - Buyer pays from the wallet, payee is credited the same amount
    - Store totals follow placed orders
    - Nothing is written when the balance does not cover the grand total
    """

    def setUp(self):
        self.client = APIClient()
        self.root = User.objects.create_superuser(email="root@example.com", password="pass1234")

        self.buyer = User.objects.create_user(email="buyer@example.com", password="pass1234")
        fund(self.buyer, "100")

        self.merchant = User.objects.create_user(
            email="merchant@example.com", password="pass1234", role=ROLE_MERCHANT
        )
        self.store = Store.objects.create(
            owner=self.merchant, name="Pottery Place", status=Store.STATUS_ACTIVE
        )
        self.bowl = Product.objects.create(
            store=self.store, title="Bowl", initial_price="20.00", discount="-25%"
        )
        self.chair = Product.objects.create(title="Chair", initial_price="50.00")

        self.client.force_authenticate(self.buyer)

    def test_single_store_checkout(self):
        cart_service.add_item(user=self.buyer, product=self.bowl)

        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.post(
                "/api/orders/checkout/", {"shipping_address": SHIPPING}, format="json"
            )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(len(res.data["orders"]), 1)
        order = res.data["orders"][0]
        self.assertEqual(order["total_amount"], "22.19")
        self.assertEqual(order["status"], Order.STATUS_PENDING)
        self.assertEqual(order["payment_status"], Order.PAYMENT_CONFIRMED)
        self.assertEqual(order["payment_method"], "wallet")
        self.assertEqual(order["items"][0]["price"], "15.00")
        self.assertEqual(res.data["wallet_balance"], "77.81")

        self.assertEqual(balance_service.get_balance(self.merchant), Decimal("22.19"))
        self.store.refresh_from_db()
        self.assertEqual(self.store.total_sales, 1)
        self.assertEqual(self.store.total_revenue, Decimal("22.19"))

        self.assertFalse(Cart.objects.get(user=self.buyer).is_active)
        self.assertTrue(Notification.objects.filter(user=self.buyer, title="Order Placed").exists())
        self.assertTrue(Notification.objects.filter(user=self.merchant, title="New Order").exists())

    def test_merchant_buying_from_own_store_sees_stored_balance(self):
        fund(self.merchant, "100")
        self.client.force_authenticate(self.merchant)
        cart_service.add_item(user=self.merchant, product=self.bowl)

        res = self.client.post(
            "/api/orders/checkout/", {"shipping_address": SHIPPING}, format="json"
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["wallet_balance"], "100.00")
        self.assertEqual(balance_service.get_balance(self.merchant), Decimal("100.00"))

    def test_line_totals_add_up_to_order_amount(self):
        cup = Product.objects.create(
            store=self.store, title="Cup", initial_price="1.10", discount="-15%"
        )
        cart_service.add_item(user=self.buyer, product=cup, quantity=3)

        orders = checkout_cart(user=self.buyer, shipping_address=SHIPPING)

        order = orders[0]
        item = order.items.get()
        self.assertEqual(order.subtotal - order.discount_amount, item.total)
        self.assertEqual(item.total, Decimal("2.80"))
        self.assertEqual(item.price, Decimal("0.94"))

    def test_mixed_cart_splits_and_pays_platform_account(self):
        cart_service.add_item(user=self.buyer, product=self.chair)
        cart_service.add_item(user=self.buyer, product=self.bowl)

        orders = checkout_cart(user=self.buyer, shipping_address=SHIPPING)

        self.assertEqual(len(orders), 2)
        self.assertEqual(orders[0].store, self.store)
        self.assertTrue(orders[1].is_platform_order)
        self.assertTrue(orders[1].order_number.startswith("PLT-ORD-"))
        self.assertEqual(balance_service.get_balance(self.buyer), Decimal("23.81"))
        self.assertEqual(balance_service.get_balance(self.root), Decimal("54.00"))

    def test_billing_defaults_to_profile(self):
        self.buyer.full_name = "Ada Obi"
        self.buyer.save()
        cart_service.add_item(user=self.buyer, product=self.bowl)

        order = checkout_cart(user=self.buyer, shipping_address=SHIPPING)[0]

        self.assertEqual(order.billing_address["full_name"], "Ada Obi")
        self.assertEqual(order.billing_address["email"], "buyer@example.com")

    def test_saved_address_used_as_shipping(self):
        address = Address.objects.create(user=self.buyer, **SHIPPING)
        cart_service.add_item(user=self.buyer, product=self.bowl)

        res = self.client.post(
            "/api/orders/checkout/", {"address_id": str(address.id)}, format="json"
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["orders"][0]["shipping_address"]["city"], "Lagos")

    def test_insufficient_balance_rolls_back_everything(self):
        cart_service.add_item(user=self.buyer, product=self.chair, quantity=2)

        res = self.client.post(
            "/api/orders/checkout/", {"shipping_address": SHIPPING}, format="json"
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "insufficient_balance")
        self.assertFalse(Order.objects.exists())
        self.assertEqual(balance_service.get_balance(self.buyer), Decimal("100.00"))
        self.assertTrue(Cart.objects.get(user=self.buyer).is_active)

    def test_empty_cart(self):
        with self.assertRaises(EmptyCartError):
            checkout_cart(user=self.buyer, shipping_address=SHIPPING)

        res = self.client.post(
            "/api/orders/checkout/", {"shipping_address": SHIPPING}, format="json"
        )
        self.assertEqual(res.data["error"]["code"], "empty_cart")

    def test_unavailable_product_blocks_checkout(self):
        cart_service.add_item(user=self.buyer, product=self.bowl)
        self.bowl.is_available = False
        self.bowl.save()

        res = self.client.post(
            "/api/orders/checkout/", {"shipping_address": SHIPPING}, format="json"
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "product_unavailable")

    def test_platform_items_need_a_platform_account(self):
        self.root.is_active = False
        self.root.save()
        cart_service.add_item(user=self.buyer, product=self.chair)

        with self.assertRaises(PlatformAccountMissingError):
            checkout_cart(user=self.buyer, shipping_address=SHIPPING)

    def test_shipping_address_required(self):
        cart_service.add_item(user=self.buyer, product=self.bowl)

        res = self.client.post("/api/orders/checkout/", {}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertIn("shipping_address", res.data)


class CartApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="shopper@example.com", password="pass1234")
        self.product = Product.objects.create(title="Lamp", initial_price="12.50")
        self.client.force_authenticate(self.user)

    def test_add_increments_existing_line(self):
        self.client.post("/api/orders/cart/items/", {"product_id": str(self.product.id)}, format="json")
        res = self.client.post(
            "/api/orders/cart/items/",
            {"product_id": str(self.product.id), "quantity": 2},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(len(res.data["items"]), 1)
        self.assertEqual(res.data["items"][0]["quantity"], 3)
        self.assertEqual(res.data["item_count"], 3)
        self.assertEqual(res.data["subtotal_amount"], "37.50")

    def test_unavailable_product_cannot_be_added(self):
        self.product.is_available = False
        self.product.save()

        res = self.client.post(
            "/api/orders/cart/items/", {"product_id": str(self.product.id)}, format="json"
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "cart_error")

    def test_zero_quantity_removes_line(self):
        cart = cart_service.add_item(user=self.user, product=self.product)
        item = cart.items.get()

        res = self.client.patch(f"/api/orders/cart/items/{item.id}/", {"quantity": 0}, format="json")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["items"], [])
        self.assertFalse(CartItem.objects.exists())

    def test_other_users_line_is_not_found(self):
        other = User.objects.create_user(email="else@example.com", password="pass1234")
        item = cart_service.add_item(user=other, product=self.product).items.get()

        res = self.client.delete(f"/api/orders/cart/items/{item.id}/")

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["error"]["code"], "not_found")

    def test_clear(self):
        cart_service.add_item(user=self.user, product=self.product, quantity=4)

        res = self.client.delete("/api/orders/cart/clear/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["item_count"], 0)

    def test_anonymous_gets_401(self):
        self.client.force_authenticate(None)
        self.assertEqual(self.client.get("/api/orders/cart/").status_code, 401)
