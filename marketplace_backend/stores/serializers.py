# stores/serializers.py

from __future__ import annotations

from rest_framework import serializers

from products.serializers import ProductSerializer
from stores.models import Store, StoreNews, StoreReview

DESCRIPTIVE_FIELDS = [
    "name",
    "description",
    "category",
    "logo_url",
    "banner_url",
    "address",
    "city",
    "state",
    "country",
    "postal_code",
    "phone",
    "email",
    "website_url",
]


class StoreSerializer(serializers.ModelSerializer):
    """
    Public store card (storefront listing).
    follower_count / review_count come from queryset annotations when present.
    """

    follower_count = serializers.IntegerField(read_only=True, default=0)
    review_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Store
        fields = [
            "id",
            "slug",
            *DESCRIPTIVE_FIELDS,
            "store_level",
            "is_verified",
            "rating",
            "total_sales",
            "follower_count",
            "review_count",
            "created_at",
        ]
        read_only_fields = fields


class StoreReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source="user.display_name", read_only=True)

    class Meta:
        model = StoreReview
        fields = ["id", "user", "user_name", "rating", "comment", "created_at", "updated_at"]
        read_only_fields = ["id", "user", "user_name", "created_at", "updated_at"]


class StoreDetailSerializer(StoreSerializer):
    products = serializers.SerializerMethodField()
    recent_reviews = serializers.SerializerMethodField()

    class Meta(StoreSerializer.Meta):
        fields = StoreSerializer.Meta.fields + ["products", "recent_reviews"]
        read_only_fields = fields

    def get_products(self, obj) -> list:
        qs = obj.products.filter(is_active=True).order_by("-created_at")
        return ProductSerializer(qs, many=True).data

    def get_recent_reviews(self, obj) -> list:
        qs = obj.reviews.select_related("user").order_by("-created_at")[:10]
        return StoreReviewSerializer(qs, many=True).data


class StoreApplicationSerializer(serializers.ModelSerializer):
    """
    Owner-side shape: merchant application + self-service edits.
    Status, totals, rating and verification stay admin/service-controlled.
    """

    class Meta:
        model = Store
        fields = [
            "id",
            "slug",
            *DESCRIPTIVE_FIELDS,
            "id_photo_front_url",
            "id_photo_back_url",
            "status",
            "store_level",
            "is_verified",
            "rating",
            "total_sales",
            "total_revenue",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "slug",
            "status",
            "store_level",
            "is_verified",
            "rating",
            "total_sales",
            "total_revenue",
            "created_at",
            "updated_at",
        ]


class AdminStoreSerializer(serializers.ModelSerializer):
    owner_email = serializers.EmailField(source="owner.email", read_only=True)
    owner_name = serializers.CharField(source="owner.display_name", read_only=True)
    product_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Store
        fields = [
            "id",
            "owner",
            "owner_email",
            "owner_name",
            "slug",
            *DESCRIPTIVE_FIELDS,
            "id_photo_front_url",
            "id_photo_back_url",
            "status",
            "store_level",
            "is_verified",
            "is_active",
            "rating",
            "total_sales",
            "total_revenue",
            "product_count",
            "created_at",
            "updated_at",
        ]
        # status changes go through the lifecycle actions
        read_only_fields = [
            "id",
            "owner_email",
            "owner_name",
            "status",
            "is_active",
            "rating",
            "total_sales",
            "total_revenue",
            "product_count",
            "created_at",
            "updated_at",
        ]


class StoreStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Store.STATUS_CHOICES)


class BulkIdsSerializer(serializers.Serializer):
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)


class StoreNewsSerializer(serializers.ModelSerializer):
    author_name = serializers.CharField(source="author.full_name", read_only=True, default=None)

    class Meta:
        model = StoreNews
        fields = [
            "id",
            "title",
            "content",
            "image_urls",
            "is_published",
            "author",
            "author_name",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "author", "author_name", "created_at", "updated_at"]

    def validate_image_urls(self, value):
        if not isinstance(value, list) or not all(isinstance(u, str) for u in value):
            raise serializers.ValidationError("image_urls must be a list of URLs")
        return value
