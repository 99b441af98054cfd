# products/serializers/product.py

"""
PRODUCT SERIALIZERS

- ProductSerializer: storefront + merchant shape (store is server-assigned).
- AdminProductSerializer: back-office shape (store assignable; NULL = platform item).

final_price may be omitted on write; the model derives it from
initial_price and discount.
"""

from rest_framework import serializers

from products.models import BrowsingHistory, Product
from products.services.pricing import parse_discount_percent
from stores.models import Store


class ProductSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source="store.name", read_only=True, default=None)
    discount_percent = serializers.SerializerMethodField(read_only=True)
    is_platform_item = serializers.BooleanField(read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "store",
            "store_name",
            "is_platform_item",
            "title",
            "asin",
            "brand",
            "description",
            "initial_price",
            "final_price",
            "discount",
            "discount_percent",
            "currency",
            "categories",
            "image_url",
            "images",
            "rating",
            "reviews_count",
            "is_available",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "store",
            "store_name",
            "rating",
            "reviews_count",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {"final_price": {"required": False, "allow_null": True}}

    def get_discount_percent(self, obj) -> str:
        return str(parse_discount_percent(obj.discount))

    def validate_asin(self, value):
        return (value or "").strip().upper() or None

    def validate_categories(self, value):
        if not isinstance(value, list) or not all(isinstance(c, str) for c in value):
            raise serializers.ValidationError("categories must be a list of strings")
        return value

    def validate_images(self, value):
        if not isinstance(value, list) or not all(isinstance(c, str) for c in value):
            raise serializers.ValidationError("images must be a list of URLs")
        return value

    def validate_initial_price(self, value):
        if value is None or value <= 0:
            raise serializers.ValidationError("initial_price must be greater than zero")
        return value

    def update(self, instance, validated_data):
        # Re-derive final_price when the list price / discount changes without one
        if "final_price" not in validated_data and (
            "initial_price" in validated_data or "discount" in validated_data
        ):
            validated_data["final_price"] = None
        return super().update(instance, validated_data)


class AdminProductSerializer(ProductSerializer):
    store = serializers.PrimaryKeyRelatedField(
        queryset=Store.objects.all(), required=False, allow_null=True
    )

    class Meta(ProductSerializer.Meta):
        read_only_fields = [
            "id",
            "store_name",
            "created_at",
            "updated_at",
        ]


class BulkProductUpdateSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)
    is_active = serializers.BooleanField(required=False)
    is_available = serializers.BooleanField(required=False)

    def validate(self, attrs):
        if "is_active" not in attrs and "is_available" not in attrs:
            raise serializers.ValidationError("Provide is_active and/or is_available.")
        return attrs


class BrowsingHistorySerializer(serializers.ModelSerializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.filter(is_active=True))
    product_detail = ProductSerializer(source="product", read_only=True)

    class Meta:
        model = BrowsingHistory
        fields = ["id", "product", "product_detail", "view_count", "viewed_at"]
        read_only_fields = ["id", "product_detail", "view_count", "viewed_at"]
