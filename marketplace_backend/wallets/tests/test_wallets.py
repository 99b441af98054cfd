from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from notifications.models import Notification
from permissions.roles import ROLE_ADMIN, ROLE_MANAGER
from wallets.models import BalanceEntry, PayoutWallet, Recharge, TransactionStatus, Withdrawal
from wallets.services import balance_service
from wallets.services.exceptions import InsufficientBalanceError, InvalidAmountError
from wallets.services.fees import recharge_fee, withdrawal_fee
from wallets.services.transaction_lifecycle import set_withdrawal_status

User = get_user_model()


def fund(user, amount):
    balance_service.credit(user=user, amount=amount, reason=BalanceEntry.REASON_ADJUSTMENT)


class BalanceServiceTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(email="ledger@example.com", password="pass1234")

    def test_credit_and_debit_write_ledger_entries(self):
        fund(self.user, "50")
        entry = balance_service.debit(
            user=self.user, amount="20.255", reason=BalanceEntry.REASON_ADJUSTMENT
        )

        self.assertEqual(entry.balance_after, Decimal("29.74"))
        self.assertEqual(balance_service.get_balance(self.user), Decimal("29.74"))
        self.assertEqual(BalanceEntry.objects.filter(user=self.user).count(), 2)

    def test_debit_beyond_balance_is_refused(self):
        fund(self.user, "10")
        with self.assertRaises(InsufficientBalanceError):
            balance_service.debit(user=self.user, amount="10.01", reason=BalanceEntry.REASON_ADJUSTMENT)

        self.assertEqual(balance_service.get_balance(self.user), Decimal("10.00"))

    def test_allow_negative_debit(self):
        balance_service.debit(
            user=self.user,
            amount="5",
            reason=BalanceEntry.REASON_ORDER_REVERSAL,
            allow_negative=True,
        )
        self.assertEqual(balance_service.get_balance(self.user), Decimal("-5.00"))

    def test_zero_amount_rejected(self):
        with self.assertRaises(InvalidAmountError):
            balance_service.credit(user=self.user, amount="0", reason=BalanceEntry.REASON_ADJUSTMENT)

    def test_platform_account_prefers_superuser(self):
        User.objects.create_user(email="admin@example.com", password="pass1234", role=ROLE_ADMIN)
        root = User.objects.create_superuser(email="root@example.com", password="pass1234")

        self.assertEqual(balance_service.get_platform_account(), root)

    def test_fees(self):
        self.assertEqual(recharge_fee("100"), Decimal("2.50"))
        self.assertEqual(withdrawal_fee("100"), (Decimal("2.00"), Decimal("98.00")))


class RechargeApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="buyer@example.com", password="pass1234")
        self.client.force_authenticate(self.user)

    def _create(self, **overrides):
        payload = {
            "amount": "100.00",
            "method": Recharge.METHOD_USDT_TRC20,
            "prove_url": "https://files.example.com/receipt.png",
        }
        payload.update(overrides)
        return self.client.post("/api/wallets/recharges/", payload, format="json")

    def test_create_records_fee_and_stays_pending(self):
        with self.captureOnCommitCallbacks(execute=True):
            res = self._create()

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["status"], TransactionStatus.PENDING)
        self.assertEqual(res.data["fee"], "2.50")
        self.assertEqual(res.data["net_amount"], "97.50")
        self.assertTrue(res.data["reference_id"].startswith("RCH-"))
        self.assertEqual(balance_service.get_balance(self.user), Decimal("0.00"))
        self.assertTrue(
            Notification.objects.filter(user=self.user, title="Recharge Initiated").exists()
        )

    def test_bank_transfer_points_to_support(self):
        res = self._create(method=Recharge.METHOD_BANK_TRANSFER)

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "contact_support")
        self.assertFalse(Recharge.objects.exists())

    def test_missing_proof_rejected(self):
        res = self._create(prove_url="")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "wallet_error")

    def test_owner_can_cancel_pending_only_once(self):
        recharge_id = self._create().data["id"]

        res = self.client.post(f"/api/wallets/recharges/{recharge_id}/cancel/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], TransactionStatus.CANCELLED)

        res = self.client.post(f"/api/wallets/recharges/{recharge_id}/cancel/")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["error"]["code"], "invalid_transition")

    def test_recharge_methods_lists_bank_transfer_as_not_self_service(self):
        res = self.client.get("/api/wallets/recharge-methods/")

        self.assertEqual(res.status_code, 200)
        methods = {m["method"]: m for m in res.data["methods"]}
        self.assertFalse(methods[Recharge.METHOD_BANK_TRANSFER]["self_service"])
        self.assertTrue(methods[Recharge.METHOD_BTC]["self_service"])


class WithdrawalApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="seller@example.com", password="pass1234")
        self.user.set_withdrawal_pin("1234")
        self.user.save()
        fund(self.user, "200")
        self.wallet = PayoutWallet.objects.create(
            user=self.user,
            name="Main",
            type=PayoutWallet.TYPE_USDT_TRC20,
            address="TXyz123",
            is_default=True,
        )
        self.client.force_authenticate(self.user)

    def _withdraw(self, amount="100.00", pin="1234", wallet=None):
        return self.client.post(
            "/api/wallets/withdrawals/",
            {"payout_wallet": str((wallet or self.wallet).id), "amount": amount, "pin": pin},
            format="json",
        )

    def test_withdrawal_holds_funds(self):
        res = self._withdraw()

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["fee"], "2.00")
        self.assertEqual(res.data["net_amount"], "98.00")
        self.assertEqual(res.data["wallet_address"], "TXyz123")
        self.assertEqual(balance_service.get_balance(self.user), Decimal("100.00"))

    def test_wrong_pin(self):
        res = self._withdraw(pin="9999")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "invalid_pin")
        self.assertEqual(balance_service.get_balance(self.user), Decimal("200.00"))

    def test_pin_must_be_set(self):
        self.user.withdrawal_pin = ""
        self.user.save()

        res = self._withdraw()
        self.assertEqual(res.data["error"]["code"], "invalid_pin")

    def test_insufficient_balance_rolls_back(self):
        res = self._withdraw(amount="500.00")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "insufficient_balance")
        self.assertFalse(Withdrawal.objects.exists())

    def test_foreign_payout_wallet_is_not_found(self):
        other = User.objects.create_user(email="other@example.com", password="pass1234")
        foreign = PayoutWallet.objects.create(
            user=other, name="Theirs", type=PayoutWallet.TYPE_USDT_ERC20, address="0xabc"
        )

        res = self._withdraw(wallet=foreign)
        self.assertEqual(res.status_code, 404)

    def test_cancel_refunds_hold(self):
        withdrawal_id = self._withdraw().data["id"]

        res = self.client.post(f"/api/wallets/withdrawals/{withdrawal_id}/cancel/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(balance_service.get_balance(self.user), Decimal("200.00"))
        self.assertTrue(
            BalanceEntry.objects.filter(
                user=self.user, reason=BalanceEntry.REASON_WITHDRAWAL_REVERSAL
            ).exists()
        )


class PayoutWalletApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(email="payee@example.com", password="pass1234")
        self.client.force_authenticate(self.user)

    def test_first_wallet_becomes_default(self):
        first = self.client.post(
            "/api/wallets/payout-wallets/",
            {"name": "A", "type": PayoutWallet.TYPE_USDT_ERC20, "address": "0xa"},
            format="json",
        )
        second = self.client.post(
            "/api/wallets/payout-wallets/",
            {"name": "B", "type": PayoutWallet.TYPE_USDT_TRC20, "address": "Tb"},
            format="json",
        )

        self.assertTrue(first.data["is_default"])
        self.assertFalse(second.data["is_default"])

        res = self.client.post(f"/api/wallets/payout-wallets/{second.data['id']}/set-default/")
        self.assertTrue(res.data["is_default"])
        self.assertEqual(
            list(PayoutWallet.objects.filter(user=self.user, is_default=True).values_list("name", flat=True)),
            ["B"],
        )

    def test_bank_account_requires_details(self):
        res = self.client.post(
            "/api/wallets/payout-wallets/",
            {"name": "Bank", "type": PayoutWallet.TYPE_BANK_ACCOUNT, "bank_name": "First"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertIn("account_holder", res.data)
        self.assertIn("account_number", res.data)

    def test_crypto_requires_address(self):
        res = self.client.post(
            "/api/wallets/payout-wallets/",
            {"name": "Empty", "type": PayoutWallet.TYPE_USDT_ERC20},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertIn("address", res.data)


class AdminTransactionTests(TestCase):
    """
    GUARANTEES:
    - Status changes go through the lifecycle (balance effects applied once)
    - Terminal states cannot be left
    - Bulk updates report rows they could not move
    """

    def setUp(self):
        self.client = APIClient()
        self.admin = User.objects.create_user(
            email="manager@example.com", password="pass1234", role=ROLE_MANAGER
        )
        self.user = User.objects.create_user(email="member@example.com", password="pass1234")
        self.client.force_authenticate(self.admin)

    def _recharge(self, amount="100.00"):
        return Recharge.objects.create(
            user=self.user,
            amount=Decimal(amount),
            fee=recharge_fee(amount),
            method=Recharge.METHOD_USDT_ERC20,
            prove_url="https://files.example.com/r.png",
        )

    def _withdrawal(self, amount="50.00"):
        from wallets.services.withdrawal_service import create_withdrawal

        self.user.set_withdrawal_pin("4321")
        self.user.save()
        fund(self.user, amount)
        wallet = PayoutWallet.objects.create(
            user=self.user, name="W", type=PayoutWallet.TYPE_USDT_ERC20, address="0xw"
        )
        return create_withdrawal(user=self.user, payout_wallet=wallet, amount=amount, pin="4321")

    def test_recharge_success_credits_net_amount(self):
        recharge = self._recharge()

        with self.captureOnCommitCallbacks(execute=True):
            res = self.client.patch(
                f"/api/wallets/admin/recharges/{recharge.id}/",
                {"status": TransactionStatus.SUCCESS},
                format="json",
            )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], TransactionStatus.SUCCESS)
        self.assertEqual(balance_service.get_balance(self.user), Decimal("97.50"))
        self.assertTrue(
            Notification.objects.filter(user=self.user, title="Recharge Successful").exists()
        )

    def test_success_is_terminal(self):
        recharge = self._recharge()
        self.client.patch(
            f"/api/wallets/admin/recharges/{recharge.id}/",
            {"status": TransactionStatus.SUCCESS},
            format="json",
        )

        res = self.client.patch(
            f"/api/wallets/admin/recharges/{recharge.id}/",
            {"status": TransactionStatus.FAILED},
            format="json",
        )

        self.assertEqual(res.status_code, 409)
        self.assertEqual(balance_service.get_balance(self.user), Decimal("97.50"))

    def test_failed_withdrawal_refunds_and_keeps_reason(self):
        withdrawal = self._withdrawal()

        res = self.client.patch(
            f"/api/wallets/admin/withdrawals/{withdrawal.id}/",
            {"status": TransactionStatus.FAILED, "failure_reason": "Address rejected"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["failure_reason"], "Address rejected")
        self.assertEqual(balance_service.get_balance(self.user), Decimal("50.00"))

    def test_successful_withdrawal_stamps_processed_date(self):
        withdrawal = self._withdrawal()

        res = self.client.patch(
            f"/api/wallets/admin/withdrawals/{withdrawal.id}/",
            {"status": TransactionStatus.SUCCESS, "transaction_hash": "0xhash"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertIsNotNone(res.data["processed_date"])
        self.assertEqual(res.data["transaction_hash"], "0xhash")
        self.assertEqual(balance_service.get_balance(self.user), Decimal("0.00"))

    def test_deleting_pending_withdrawal_releases_hold(self):
        withdrawal = self._withdrawal()

        res = self.client.delete(f"/api/wallets/admin/withdrawals/{withdrawal.id}/")

        self.assertEqual(res.status_code, 204)
        self.assertFalse(Withdrawal.objects.exists())
        self.assertEqual(balance_service.get_balance(self.user), Decimal("50.00"))

    def test_bulk_status_reports_skipped_rows(self):
        pending = self._recharge()
        done = self._recharge("20.00")
        done.status = TransactionStatus.CANCELLED
        done.save()

        res = self.client.post(
            "/api/wallets/admin/recharges/bulk-status/",
            {"ids": [str(pending.id), str(done.id)], "status": TransactionStatus.FAILED},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["updated"], 1)
        self.assertEqual(res.data["updated_ids"], [str(pending.id)])
        self.assertEqual(res.data["skipped"][0]["id"], str(done.id))

    def test_bulk_failed_keeps_reason(self):
        recharge = self._recharge()

        res = self.client.post(
            "/api/wallets/admin/recharges/bulk-status/",
            {
                "ids": [str(recharge.id)],
                "status": TransactionStatus.FAILED,
                "failure_reason": "Proof is unreadable",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["updated"], 1)
        recharge.refresh_from_db()
        self.assertEqual(recharge.status, TransactionStatus.FAILED)
        self.assertEqual(recharge.failure_reason, "Proof is unreadable")

    def test_withdrawal_retry_holds_funds_again(self):
        withdrawal = self._withdrawal()
        set_withdrawal_status(
            withdrawal=withdrawal, target_status=TransactionStatus.FAILED, failure_reason="Timeout"
        )
        self.assertEqual(balance_service.get_balance(self.user), Decimal("50.00"))

        res = self.client.patch(
            f"/api/wallets/admin/withdrawals/{withdrawal.id}/",
            {"status": TransactionStatus.PENDING},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], TransactionStatus.PENDING)
        self.assertEqual(res.data["failure_reason"], "")
        self.assertEqual(balance_service.get_balance(self.user), Decimal("0.00"))

    def test_withdrawal_retry_refused_when_funds_spent(self):
        withdrawal = self._withdrawal()
        set_withdrawal_status(withdrawal=withdrawal, target_status=TransactionStatus.FAILED)
        balance_service.debit(
            user=self.user, amount="30.00", reason=BalanceEntry.REASON_ORDER_PAYMENT
        )

        with self.assertRaises(InsufficientBalanceError):
            set_withdrawal_status(withdrawal=withdrawal, target_status=TransactionStatus.PENDING)

        res = self.client.patch(
            f"/api/wallets/admin/withdrawals/{withdrawal.id}/",
            {"status": TransactionStatus.PENDING},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["error"]["code"], "insufficient_balance")
        withdrawal.refresh_from_db()
        self.assertEqual(withdrawal.status, TransactionStatus.FAILED)
        self.assertEqual(balance_service.get_balance(self.user), Decimal("20.00"))

    def test_summary(self):
        self._recharge()
        self._withdrawal()

        res = self.client.get("/api/wallets/admin/summary/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["recharges"]["by_status"]["pending"], 1)
        self.assertEqual(res.data["withdrawals"]["pending_payouts"], Decimal("50.00"))

    def test_customer_cannot_reach_admin_endpoints(self):
        self.client.force_authenticate(self.user)
        res = self.client.get("/api/wallets/admin/recharges/")
        self.assertEqual(res.status_code, 403)
