from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from contacts.models import ContactInfo
from permissions.roles import ROLE_MANAGER

User = get_user_model()


class ContactInfoTests(TestCase):
    """
    GUARANTEES:
    - Exactly one row, created on first read
    - Anyone can read it; only back-office can change it
    - Deposit details feed the wallet recharge methods
    """

    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(
            email="ops@example.com", password="pass1234", role=ROLE_MANAGER
        )

    def test_public_read_creates_singleton(self):
        res = self.client.get("/api/contacts/info/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["email"], "")
        self.assertEqual(ContactInfo.objects.count(), 1)

    def test_saving_again_keeps_single_row(self):
        ContactInfo(phone="+100").save()
        ContactInfo(phone="+200").save()

        self.assertEqual(ContactInfo.objects.count(), 1)
        self.assertEqual(ContactInfo.load().phone, "+200")

    def test_admin_update_is_partial_and_stamped(self):
        ContactInfo.objects.create(phone="+2348000000000")
        self.client.force_authenticate(self.manager)

        res = self.client.patch(
            "/api/contacts/admin/info/",
            {"email": "support@example.com", "btc_wallet_code": "bc1qplatform"},
            format="json",
        )

        self.assertEqual(res.status_code, 200, res.data)
        info = ContactInfo.load()
        self.assertEqual(info.email, "support@example.com")
        self.assertEqual(info.phone, "+2348000000000")
        self.assertEqual(info.updated_by, self.manager)

    def test_customer_cannot_update(self):
        customer = User.objects.create_user(email="c@example.com", password="pass1234")
        self.client.force_authenticate(customer)

        res = self.client.patch("/api/contacts/admin/info/", {"phone": "+1"}, format="json")

        self.assertEqual(res.status_code, 403)

    @override_settings(WALLET_DEPOSIT_ADDRESSES={"crypto_eth": "0xenv", "crypto_btc": "bc1env"})
    def test_recharge_methods_prefer_contact_info(self):
        info = ContactInfo.load()
        info.btc_wallet_code = "bc1qplatform"
        info.btc_wallet = "https://cdn.example.com/btc-qr.png"
        info.save()
        self.client.force_authenticate(User.objects.create_user(email="u@example.com", password="pass1234"))

        res = self.client.get("/api/wallets/recharge-methods/")

        methods = {m["method"]: m for m in res.data["methods"]}
        self.assertEqual(methods["crypto_btc"]["deposit_address"], "bc1qplatform")
        self.assertEqual(methods["crypto_btc"]["deposit_qr"], "https://cdn.example.com/btc-qr.png")
        self.assertEqual(methods["crypto_eth"]["deposit_address"], "0xenv")
        self.assertIsNone(methods["bank_transfer"]["deposit_address"])
