# products/admin.py

from __future__ import annotations

from django.contrib import admin

from products.models import BrowsingHistory, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "asin",
        "store",
        "initial_price",
        "final_price",
        "discount",
        "is_available",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "is_available", "currency")
    search_fields = ("title", "asin", "brand", "store__name")
    list_select_related = ("store",)
    readonly_fields = ("created_at", "updated_at")
    actions = ["mark_unavailable", "mark_available"]

    @admin.action(description="Mark selected products unavailable")
    def mark_unavailable(self, request, queryset):
        queryset.update(is_available=False)

    @admin.action(description="Mark selected products available")
    def mark_available(self, request, queryset):
        queryset.update(is_available=True)


@admin.register(BrowsingHistory)
class BrowsingHistoryAdmin(admin.ModelAdmin):
    list_display = ("user", "product", "view_count", "viewed_at")
    search_fields = ("user__email", "product__title")
    list_select_related = ("user", "product")
