from django.contrib import admin

from orders.models import Cart, CartItem, Order, OrderItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("user__email",)
    inlines = [CartItemInline]


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("product", "title", "asin", "quantity", "price", "total")
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "order_number",
        "user",
        "store",
        "status",
        "payment_status",
        "total_amount",
        "created_at",
    )
    list_filter = ("status", "payment_status", "is_platform_order")
    search_fields = ("order_number", "tracking_number", "user__email", "store__name")
    list_select_related = ("user", "store")
    readonly_fields = (
        "order_number",
        "tracking_number",
        "subtotal",
        "discount_amount",
        "tax_amount",
        "shipping_amount",
        "total_amount",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline]
