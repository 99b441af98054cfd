from __future__ import annotations

from rest_framework import serializers

from orders.models import Cart, CartItem, Order, OrderItem


# ---------------- CART ----------------
class CartItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source="product.id", read_only=True)
    title = serializers.CharField(source="product.title", read_only=True)
    image_url = serializers.CharField(source="product.image_url", read_only=True)
    store_id = serializers.UUIDField(source="product.store_id", read_only=True, allow_null=True)
    store_name = serializers.CharField(source="product.store.name", read_only=True, default=None)
    initial_price = serializers.DecimalField(
        source="product.initial_price", max_digits=12, decimal_places=2, read_only=True
    )
    discount = serializers.CharField(source="product.discount", read_only=True)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product_id",
            "title",
            "image_url",
            "store_id",
            "store_name",
            "initial_price",
            "discount",
            "quantity",
            "unit_price",
            "line_total",
            "created_at",
        ]
        read_only_fields = fields


class CartSerializer(serializers.ModelSerializer):
    """
    Totals are computed server-side (never trusted from client).
    """

    items = CartItemSerializer(many=True, read_only=True)
    item_count = serializers.IntegerField(read_only=True)
    subtotal_amount = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = Cart
        fields = [
            "id",
            "is_active",
            "items",
            "item_count",
            "subtotal_amount",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AddCartItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemInputSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(help_text="0 or less removes the line")


# ---------------- CHECKOUT ----------------
class CheckoutInputSerializer(serializers.Serializer):
    shipping_address = serializers.JSONField(required=False)
    address_id = serializers.UUIDField(
        required=False, help_text="Saved address to use as the shipping address."
    )
    billing_address = serializers.JSONField(required=False)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_shipping_address(self, value):
        if value is not None and not isinstance(value, dict):
            raise serializers.ValidationError("shipping_address must be an object")
        return value

    def validate_billing_address(self, value):
        if value is not None and not isinstance(value, dict):
            raise serializers.ValidationError("billing_address must be an object")
        return value

    def validate(self, attrs):
        if not attrs.get("shipping_address") and not attrs.get("address_id"):
            raise serializers.ValidationError(
                {"shipping_address": "Provide a shipping address or a saved address_id."}
            )
        return attrs


# ---------------- ORDERS ----------------
class OrderItemSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product_id",
            "title",
            "asin",
            "image_url",
            "quantity",
            "price",
            "total",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    store_name = serializers.CharField(source="store.name", read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "tracking_number",
            "store",
            "store_name",
            "is_platform_order",
            "status",
            "payment_status",
            "payment_method",
            "currency",
            "subtotal",
            "discount_amount",
            "tax_amount",
            "shipping_amount",
            "total_amount",
            "shipping_address",
            "billing_address",
            "notes",
            "items",
            "created_at",
            "updated_at",
            "shipped_at",
            "delivered_at",
            "cancelled_at",
        ]
        read_only_fields = fields


class OrderTrackingSerializer(serializers.ModelSerializer):
    """Public tracking view: no addresses, no customer identity."""

    items = OrderItemSerializer(many=True, read_only=True)
    store_name = serializers.CharField(source="store.name", read_only=True, default=None)

    class Meta:
        model = Order
        fields = [
            "order_number",
            "tracking_number",
            "store_name",
            "status",
            "payment_status",
            "total_amount",
            "currency",
            "items",
            "created_at",
            "shipped_at",
            "delivered_at",
        ]
        read_only_fields = fields


class AdminOrderSerializer(OrderSerializer):
    customer_id = serializers.UUIDField(source="user.id", read_only=True)
    customer_email = serializers.EmailField(source="user.email", read_only=True)
    customer_name = serializers.CharField(source="user.display_name", read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ["customer_id", "customer_email", "customer_name"]
        read_only_fields = fields


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.STATUS_CHOICES)


class TrackOrderQuerySerializer(serializers.Serializer):
    order_id = serializers.CharField(required=False, allow_blank=True)
    tracking_number = serializers.CharField(required=False, allow_blank=True)
