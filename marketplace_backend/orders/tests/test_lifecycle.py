from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from notifications.models import Notification
from orders.models import Order
from orders.services import cart_service
from orders.services.checkout_orchestrator import checkout_cart
from orders.services.exceptions import InvalidOrderTransitionError
from orders.services.order_lifecycle import can_transition, change_order_status
from permissions.roles import ROLE_MANAGER, ROLE_MERCHANT
from products.models import Product
from stores.models import Store
from wallets.models import BalanceEntry
from wallets.services import balance_service

User = get_user_model()


class OrderFixtureMixin:
    def make_order(self, *, buyer=None, product=None, quantity=1) -> Order:
        buyer = buyer or self.buyer
        cart_service.add_item(user=buyer, product=product or self.product, quantity=quantity)
        return checkout_cart(user=buyer, shipping_address={"city": "Accra"})[0]

    def setUp(self):
        self.client = APIClient()
        self.buyer = User.objects.create_user(email="buyer@example.com", password="pass1234")
        balance_service.credit(
            user=self.buyer, amount="500", reason=BalanceEntry.REASON_ADJUSTMENT
        )
        self.merchant = User.objects.create_user(
            email="merchant@example.com", password="pass1234", role=ROLE_MERCHANT
        )
        self.store = Store.objects.create(
            owner=self.merchant, name="Tea House", status=Store.STATUS_ACTIVE
        )
        self.product = Product.objects.create(
            store=self.store, title="Green Tea", initial_price="40.00"
        )


class TransitionTableTests(TestCase):
    def test_allowed_and_terminal(self):
        self.assertTrue(can_transition(from_status="pending", to_status="confirmed"))
        self.assertTrue(can_transition(from_status="processing", to_status="cancelled"))
        self.assertFalse(can_transition(from_status="shipped", to_status="cancelled"))
        self.assertFalse(can_transition(from_status="pending", to_status="shipped"))
        self.assertFalse(can_transition(from_status="delivered", to_status="pending"))
        self.assertFalse(can_transition(from_status="cancelled", to_status="pending"))


class OrderLifecycleTests(OrderFixtureMixin, TestCase):
    """
    GUARANTEES:
    - Shipping and delivery are stamped
    - Cancelling a paid order refunds the buyer and reverses the payee credit
    - Terminal orders cannot move
    """

    def test_full_happy_path_stamps_dates(self):
        order = self.make_order()

        for target in ("confirmed", "processing", "shipped", "delivered"):
            order = change_order_status(order=order, target_status=target)

        self.assertEqual(order.status, Order.STATUS_DELIVERED)
        self.assertIsNotNone(order.shipped_at)
        self.assertIsNotNone(order.delivered_at)

        with self.assertRaises(InvalidOrderTransitionError):
            change_order_status(order=order, target_status=Order.STATUS_CANCELLED)

    def test_cancel_reverses_payment_and_store_totals(self):
        order = self.make_order()
        total = order.total_amount

        with self.captureOnCommitCallbacks(execute=True):
            order = change_order_status(order=order, target_status=Order.STATUS_CANCELLED)

        self.assertEqual(order.payment_status, Order.PAYMENT_CANCELLED)
        self.assertIsNotNone(order.cancelled_at)
        self.assertEqual(balance_service.get_balance(self.buyer), Decimal("500.00"))
        self.assertEqual(balance_service.get_balance(self.merchant), Decimal("0.00"))
        self.assertTrue(
            BalanceEntry.objects.filter(
                user=self.buyer, reason=BalanceEntry.REASON_ORDER_REFUND, amount=total
            ).exists()
        )

        self.store.refresh_from_db()
        self.assertEqual(self.store.total_sales, 0)
        self.assertEqual(self.store.total_revenue, Decimal("0.00"))
        self.assertTrue(
            Notification.objects.filter(user=self.buyer, title="Order Cancelled").exists()
        )

    def test_reversal_may_take_payee_negative(self):
        order = self.make_order()
        balance_service.debit(
            user=self.merchant, amount=order.total_amount, reason=BalanceEntry.REASON_ADJUSTMENT
        )

        change_order_status(order=order, target_status=Order.STATUS_CANCELLED)

        self.assertEqual(balance_service.get_balance(self.merchant), -order.total_amount)

    def test_platform_order_reversal_hits_platform_account(self):
        root = User.objects.create_superuser(email="root@example.com", password="pass1234")
        platform_product = Product.objects.create(title="Gift Card", initial_price="50.00")
        order = self.make_order(product=platform_product)
        self.assertTrue(order.is_platform_order)
        self.assertEqual(balance_service.get_balance(root), Decimal("54.00"))

        change_order_status(order=order, target_status=Order.STATUS_CANCELLED)

        self.assertEqual(balance_service.get_balance(root), Decimal("0.00"))


class OrderApiTests(OrderFixtureMixin, TestCase):
    def test_my_orders_scoped_to_buyer(self):
        self.make_order()
        other = User.objects.create_user(email="other@example.com", password="pass1234")
        balance_service.credit(user=other, amount="100", reason=BalanceEntry.REASON_ADJUSTMENT)
        self.make_order(buyer=other)

        self.client.force_authenticate(self.buyer)
        res = self.client.get("/api/orders/my-orders/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

    def test_buyer_can_cancel_only_pending(self):
        order = self.make_order()
        self.client.force_authenticate(self.buyer)

        change_order_status(order=order, target_status=Order.STATUS_CONFIRMED)
        res = self.client.post(f"/api/orders/my-orders/{order.id}/cancel/")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["error"]["code"], "invalid_transition")

        pending = self.make_order()
        res = self.client.post(f"/api/orders/my-orders/{pending.id}/cancel/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], Order.STATUS_CANCELLED)

    def test_merchant_updates_own_store_orders(self):
        order = self.make_order()
        self.client.force_authenticate(self.merchant)

        res = self.client.post(
            f"/api/orders/merchant/orders/{order.id}/update-status/",
            {"status": "confirmed"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "confirmed")

        res = self.client.post(
            f"/api/orders/merchant/orders/{order.id}/update-status/",
            {"status": "delivered"},
            format="json",
        )
        self.assertEqual(res.status_code, 409)

    def test_merchant_cannot_see_other_store_orders(self):
        rival = User.objects.create_user(
            email="rival@example.com", password="pass1234", role=ROLE_MERCHANT
        )
        Store.objects.create(owner=rival, name="Rival", status=Store.STATUS_ACTIVE)
        order = self.make_order()

        self.client.force_authenticate(rival)
        res = self.client.get(f"/api/orders/merchant/orders/{order.id}/")
        self.assertEqual(res.status_code, 404)

    def test_admin_lists_with_customer_details(self):
        self.make_order()
        manager = User.objects.create_user(
            email="ops@example.com", password="pass1234", role=ROLE_MANAGER
        )
        self.client.force_authenticate(manager)

        res = self.client.get("/api/orders/admin/orders/", {"status": "pending"})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["results"][0]["customer_email"], "buyer@example.com")

    def test_admin_delete_reverses_open_order_payment(self):
        order = self.make_order()
        manager = User.objects.create_user(
            email="ops@example.com", password="pass1234", role=ROLE_MANAGER
        )
        self.client.force_authenticate(manager)

        res = self.client.delete(f"/api/orders/admin/orders/{order.id}/")

        self.assertEqual(res.status_code, 204)
        self.assertFalse(Order.objects.filter(pk=order.pk).exists())
        self.assertEqual(balance_service.get_balance(self.buyer), Decimal("500.00"))
        self.assertEqual(balance_service.get_balance(self.merchant), Decimal("0.00"))
        self.store.refresh_from_db()
        self.assertEqual(self.store.total_sales, 0)

    def test_admin_cannot_delete_shipped_order(self):
        order = self.make_order()
        for target in ("confirmed", "processing", "shipped"):
            change_order_status(order=order, target_status=target)
        manager = User.objects.create_user(
            email="ops@example.com", password="pass1234", role=ROLE_MANAGER
        )
        self.client.force_authenticate(manager)

        res = self.client.delete(f"/api/orders/admin/orders/{order.id}/")

        self.assertEqual(res.status_code, 409)
        self.assertTrue(Order.objects.filter(pk=order.pk).exists())
        self.assertEqual(balance_service.get_balance(self.merchant), order.total_amount)

    def test_customer_cannot_use_admin_orders(self):
        self.client.force_authenticate(self.buyer)
        self.assertEqual(self.client.get("/api/orders/admin/orders/").status_code, 403)


class TrackingApiTests(OrderFixtureMixin, TestCase):
    def test_track_by_tracking_number_case_insensitive(self):
        order = self.make_order()

        res = self.client.get("/api/orders/track/", {"tracking_number": order.tracking_number.lower()})

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["order_number"], order.order_number)
        self.assertNotIn("shipping_address", res.data)

    def test_track_by_order_number_and_id(self):
        order = self.make_order()

        by_number = self.client.get("/api/orders/track/", {"order_id": order.order_number.lower()})
        by_id = self.client.get("/api/orders/track/", {"order_id": str(order.id)})

        self.assertEqual(by_number.status_code, 200)
        self.assertEqual(by_id.data["tracking_number"], order.tracking_number)

    def test_missing_and_unknown(self):
        res = self.client.get("/api/orders/track/")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "missing_lookup")

        res = self.client.get("/api/orders/track/", {"tracking_number": "NOPE00000000"})
        self.assertEqual(res.status_code, 404)
