# stores/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from stores.views import AdminStoreNewsViewSet, AdminStoreViewSet, StoreNewsViewSet, StoreViewSet

router = DefaultRouter()
router.register(r"stores", StoreViewSet, basename="stores")
router.register(r"news", StoreNewsViewSet, basename="store-news")
router.register(r"admin/stores", AdminStoreViewSet, basename="admin-stores")
router.register(r"admin/news", AdminStoreNewsViewSet, basename="admin-store-news")

urlpatterns = [
    path("", include(router.urls)),
]
