from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework.test import APIClient

from permissions.roles import ROLE_CUSTOMER, ROLE_MERCHANT

User = get_user_model()


class RegisterAndLoginTests(TestCase):
    """
    GUARANTEES:
    - Public signup always creates a customer
    - Login accepts email or username and returns a JWT pair
    - Suspended / blocked accounts cannot log in
    """

    def setUp(self):
        self.client = APIClient()
        self.register_url = reverse("users:register")
        self.login_url = reverse("users:login")

    def test_register_creates_customer_with_tokens(self):
        res = self.client.post(
            self.register_url,
            {
                "email": "ada@example.com",
                "password": "S3cure-passw0rd!",
                "full_name": "Ada Obi",
                "role": ROLE_MERCHANT,
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertIn("access", res.data["tokens"])
        self.assertIn("refresh", res.data["tokens"])

        user = User.objects.get(email="ada@example.com")
        self.assertEqual(user.role, ROLE_CUSTOMER)
        self.assertEqual(user.username, "ada")

    def test_register_rejects_duplicate_email_case_insensitive(self):
        User.objects.create_user(email="ada@example.com", password="pass")

        res = self.client.post(
            self.register_url,
            {"email": "ADA@example.com", "password": "S3cure-passw0rd!"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertIn("email", res.data)

    def test_register_links_referrer_by_username(self):
        referrer = User.objects.create_user(email="ref@example.com", password="pass", username="topref")

        res = self.client.post(
            self.register_url,
            {"email": "new@example.com", "password": "S3cure-passw0rd!", "referral_code": "TopRef"},
            format="json",
        )

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(User.objects.get(email="new@example.com").referred_by, referrer)

    def test_login_with_email_or_username(self):
        User.objects.create_user(email="bola@example.com", password="pass1234", username="bola")

        by_email = self.client.post(
            self.login_url, {"email": "bola@example.com", "password": "pass1234"}, format="json"
        )
        by_username = self.client.post(
            self.login_url, {"email": "bola", "password": "pass1234"}, format="json"
        )

        self.assertEqual(by_email.status_code, 200)
        self.assertEqual(by_username.status_code, 200)
        self.assertEqual(by_email.data["user"]["email"], "bola@example.com")

    def test_login_wrong_password_is_401(self):
        User.objects.create_user(email="bola@example.com", password="pass1234")

        res = self.client.post(
            self.login_url, {"email": "bola@example.com", "password": "nope"}, format="json"
        )

        self.assertEqual(res.status_code, 401)

    def test_suspended_user_cannot_login(self):
        User.objects.create_user(
            email="sus@example.com", password="pass1234", status=User.STATUS_SUSPENDED
        )

        res = self.client.post(
            self.login_url, {"email": "sus@example.com", "password": "pass1234"}, format="json"
        )

        self.assertEqual(res.status_code, 401)

    def test_logout_blacklists_refresh_token(self):
        User.objects.create_user(email="out@example.com", password="pass1234")
        login = self.client.post(
            self.login_url, {"email": "out@example.com", "password": "pass1234"}, format="json"
        )
        tokens = login.data["tokens"]

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
        res = self.client.post(reverse("users:logout"), {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(res.status_code, 205)

        again = self.client.post(reverse("users:logout"), {"refresh": tokens["refresh"]}, format="json")
        self.assertEqual(again.status_code, 400)
