from django.contrib import admin

from wallets.models import BalanceEntry, PayoutWallet, Recharge, Withdrawal


@admin.register(BalanceEntry)
class BalanceEntryAdmin(admin.ModelAdmin):
    list_display = ("user", "direction", "amount", "balance_after", "reason", "reference", "created_at")
    list_filter = ("direction", "reason")
    search_fields = ("user__email", "reference", "memo")

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def has_add_permission(self, request):
        return False


@admin.register(PayoutWallet)
class PayoutWalletAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "type", "currency", "is_default", "created_at")
    list_filter = ("type", "is_default")
    search_fields = ("name", "user__email", "address", "bank_name")


@admin.register(Recharge)
class RechargeAdmin(admin.ModelAdmin):
    list_display = ("reference_id", "user", "amount", "fee", "method", "status", "created_at")
    list_filter = ("status", "method")
    search_fields = ("reference_id", "user__email", "transaction_hash")
    readonly_fields = ("reference_id", "fee", "status", "created_at", "updated_at")


@admin.register(Withdrawal)
class WithdrawalAdmin(admin.ModelAdmin):
    list_display = ("reference_id", "user", "amount", "fee", "net_amount", "method", "status", "created_at")
    list_filter = ("status", "method")
    search_fields = ("reference_id", "user__email", "transaction_hash")
    readonly_fields = ("reference_id", "fee", "net_amount", "status", "processed_date", "created_at", "updated_at")
