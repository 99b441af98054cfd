from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from dashboard.services.activity import recent_activity
from dashboard.services.search import global_search
from dashboard.services.stats import dashboard_stats
from orders.models import Order
from permissions.roles import ROLE_ADMIN, ROLE_MERCHANT
from products.models import Product
from stores.models import Store
from wallets.models import PayoutWallet, Recharge, TransactionStatus, Withdrawal

User = get_user_model()


class DashboardStatsTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(
            email="admin@example.com", password="pass1234", role=ROLE_ADMIN
        )
        self.buyer = User.objects.create_user(email="buyer@example.com", password="pass1234")
        merchant = User.objects.create_user(
            email="merchant@example.com", password="pass1234", role=ROLE_MERCHANT
        )
        self.store = Store.objects.create(owner=merchant, name="Shoe Box", status=Store.STATUS_ACTIVE)
        Store.objects.create(
            owner=User.objects.create_user(email="new@example.com", password="pass1234"),
            name="Waiting Room",
        )

        Product.objects.create(store=self.store, title="Sneakers", initial_price="60.00")
        Product.objects.create(title="Boots", initial_price="80.00", is_available=False)

        Order.objects.create(user=self.buyer, store=self.store, total_amount=Decimal("64.80"))
        Order.objects.create(
            user=self.buyer,
            store=self.store,
            total_amount=Decimal("30.00"),
            status=Order.STATUS_DELIVERED,
        )

        wallet = PayoutWallet.objects.create(
            user=merchant, name="W", type=PayoutWallet.TYPE_USDT_TRC20, address="Tw"
        )
        Withdrawal.objects.create(
            user=merchant,
            payout_wallet=wallet,
            amount=Decimal("25.00"),
            method=wallet.type,
        )

    def test_aggregates(self):
        stats = dashboard_stats()

        self.assertEqual(stats["users"]["total"], 3)
        self.assertEqual(stats["users"]["new_today"], 3)
        self.assertEqual(stats["products"], {"total": 2, "active": 2, "unavailable": 1})
        self.assertEqual(stats["orders"]["total"], 2)
        self.assertEqual(stats["orders"]["pending"], 1)
        self.assertEqual(stats["orders"]["completed"], 1)
        self.assertEqual(stats["orders"]["revenue"], Decimal("30.00"))
        self.assertEqual(stats["stores"]["active"], 1)
        self.assertEqual(stats["stores"]["pending"], 1)
        self.assertEqual(stats["financial"]["monthly_revenue"], Decimal("30.00"))
        self.assertEqual(stats["financial"]["pending_payouts"], Decimal("25.00"))

    def test_endpoint_requires_back_office(self):
        client = APIClient()
        client.force_authenticate(self.buyer)
        self.assertEqual(client.get("/api/dashboard/stats/").status_code, 403)

        client.force_authenticate(self.admin)
        res = client.get("/api/dashboard/stats/")
        self.assertEqual(res.status_code, 200)
        self.assertIn("financial", res.data)


class SearchAndActivityTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="admin@example.com", password="pass1234", role=ROLE_ADMIN
        )
        self.client.force_authenticate(self.admin)
        self.user = User.objects.create_user(
            email="amara@example.com", password="pass1234", full_name="Amara Eze"
        )

    def test_empty_query_returns_nothing(self):
        self.assertEqual(global_search("   "), [])

        res = self.client.get("/api/dashboard/search/", {"q": ""})
        self.assertEqual(res.data, {"query": "", "results": []})

    def test_search_spans_sources(self):
        store = Store.objects.create(owner=self.user, name="Amara Crafts")
        Product.objects.create(store=store, title="Amara beads", initial_price="9.99")
        order = Order.objects.create(user=self.user, total_amount=Decimal("9.99"))

        types = {r["type"] for r in global_search("amara")}
        self.assertEqual(types, {"user", "store", "product"})

        hits = global_search(order.tracking_number)
        self.assertEqual([h["type"] for h in hits], ["order"])

    def test_results_capped_per_source(self):
        for i in range(7):
            Product.objects.create(title=f"Widget {i}", initial_price="1.00")

        hits = [r for r in global_search("widget") if r["type"] == "product"]
        self.assertEqual(len(hits), 5)

    def test_recent_activity_merges_newest_first(self):
        Recharge.objects.create(
            user=self.user, amount=Decimal("10.00"), method=Recharge.METHOD_BTC
        )
        wallet = PayoutWallet.objects.create(
            user=self.user, name="W", type=PayoutWallet.TYPE_USDT_ERC20, address="0x1"
        )
        Withdrawal.objects.create(
            user=self.user, payout_wallet=wallet, amount=Decimal("5.00"), method=wallet.type
        )

        items = recent_activity()

        self.assertEqual([i["type"] for i in items], ["withdrawal", "recharge"])
        self.assertTrue(items[1]["id"].startswith("recharge-"))
        self.assertEqual(items[0]["status"], TransactionStatus.PENDING)

        res = self.client.get("/api/dashboard/recent-activity/")
        self.assertEqual(len(res.data["results"]), 2)
