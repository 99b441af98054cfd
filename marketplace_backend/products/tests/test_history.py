from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from products.models import BrowsingHistory, Product
from products.services.browsing_history import record_view

User = get_user_model()


class BrowsingHistoryTests(TestCase):
    """
    GUARANTEES:
    - One entry per (user, product); repeat views bump the counter
    - Opening a product page while signed in records a view
    - Users only see and delete their own entries
    """

    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="viewer@example.com", password="pass1234")
        self.other = User.objects.create_user(email="other@example.com", password="pass1234")
        self.lamp = Product.objects.create(title="Desk Lamp", initial_price="25.00")
        self.rug = Product.objects.create(title="Rug", initial_price="60.00")
        self.client.force_authenticate(self.user)

    def test_repeat_views_increment_count(self):
        record_view(user=self.user, product=self.lamp)
        entry = record_view(user=self.user, product=self.lamp)

        self.assertEqual(entry.view_count, 2)
        self.assertEqual(BrowsingHistory.objects.filter(user=self.user).count(), 1)

    def test_product_page_records_view_for_signed_in_user(self):
        self.client.get(f"/api/products/products/{self.lamp.id}/")
        self.client.get(f"/api/products/products/{self.lamp.id}/")

        entry = BrowsingHistory.objects.get(user=self.user, product=self.lamp)
        self.assertEqual(entry.view_count, 2)

    def test_anonymous_product_page_records_nothing(self):
        anonymous = APIClient()

        res = anonymous.get(f"/api/products/products/{self.lamp.id}/")

        self.assertEqual(res.status_code, 200)
        self.assertFalse(BrowsingHistory.objects.exists())

    def test_list_is_scoped_and_newest_first(self):
        record_view(user=self.user, product=self.lamp)
        record_view(user=self.user, product=self.rug)
        record_view(user=self.other, product=self.lamp)

        res = self.client.get("/api/products/history/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(
            [e["product_detail"]["title"] for e in res.data["results"]], ["Rug", "Desk Lamp"]
        )

    def test_record_via_api(self):
        res = self.client.post("/api/products/history/", {"product": str(self.rug.id)}, format="json")

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["view_count"], 1)

    def test_delete_own_entry_only(self):
        mine = record_view(user=self.user, product=self.lamp)
        theirs = record_view(user=self.other, product=self.lamp)

        self.assertEqual(self.client.delete(f"/api/products/history/{theirs.id}/").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/products/history/{mine.id}/").status_code, 204)
        self.assertTrue(BrowsingHistory.objects.filter(pk=theirs.pk).exists())

    def test_clear(self):
        record_view(user=self.user, product=self.lamp)
        record_view(user=self.user, product=self.rug)
        record_view(user=self.other, product=self.rug)

        res = self.client.post("/api/products/history/clear/")

        self.assertEqual(res.data, {"deleted": 2})
        self.assertEqual(BrowsingHistory.objects.count(), 1)
