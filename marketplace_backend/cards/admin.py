from django.contrib import admin

from cards.models import Card


@admin.register(Card)
class CardAdmin(admin.ModelAdmin):
    list_display = ("user", "card_type", "card_number_last4", "cardholder_name", "is_default", "added_date")
    list_filter = ("card_type", "is_default")
    search_fields = ("user__email", "cardholder_name", "card_number_last4")
    exclude = ("card_number_hash",)
    readonly_fields = ("card_number_last4", "added_date", "updated_at")
