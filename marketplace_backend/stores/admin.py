from django.contrib import admin

from stores.models import Store, StoreFollow, StoreNews, StoreReview


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ("name", "owner", "status", "rating", "total_sales", "total_revenue", "created_at")
    list_filter = ("status", "is_verified", "store_level")
    search_fields = ("name", "slug", "owner__email")
    list_select_related = ("owner",)
    readonly_fields = ("slug", "is_active", "rating", "total_sales", "total_revenue", "created_at", "updated_at")


@admin.register(StoreReview)
class StoreReviewAdmin(admin.ModelAdmin):
    list_display = ("store", "user", "rating", "created_at")
    list_filter = ("rating",)
    search_fields = ("store__name", "user__email")


@admin.register(StoreFollow)
class StoreFollowAdmin(admin.ModelAdmin):
    list_display = ("store", "follower", "created_at")
    search_fields = ("store__name", "follower__email")


@admin.register(StoreNews)
class StoreNewsAdmin(admin.ModelAdmin):
    list_display = ("title", "is_published", "author", "created_at")
    list_filter = ("is_published",)
    search_fields = ("title", "content")
