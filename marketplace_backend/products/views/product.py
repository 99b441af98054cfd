# products/views/product.py

"""
PRODUCT VIEWSETS

Public (AllowAny, read-only):
- GET /api/products/products/?store=&category=&search=&ordering=
- GET /api/products/products/{id}/   (records a browsing-history view when signed in)

Merchant (own store only, store must be ACTIVE):
- CRUD /api/products/merchant/products/

Back-office:
- CRUD /api/products/admin/products/
- POST /api/products/admin/products/bulk-update/
"""

from __future__ import annotations

import logging

from django.db.models import Q
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from permissions.roles import IsBackOffice, IsMerchant
from products.filters import ProductFilter
from products.models import Product
from products.services.browsing_history import record_view
from products.serializers import (
    AdminProductSerializer,
    BulkProductUpdateSerializer,
    ProductSerializer,
)
from stores.models import Store

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ["title", "brand", "asin"]
ORDERING_FIELDS = ["final_price", "initial_price", "rating", "created_at", "title"]


def storefront_products():
    """Active products that belong to the platform or to an active store."""
    return (
        Product.objects.select_related("store")
        .filter(is_active=True)
        .filter(Q(store__isnull=True) | Q(store__status=Store.STATUS_ACTIVE))
    )


class ProductViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [AllowAny]
    filterset_class = ProductFilter
    search_fields = SEARCH_FIELDS
    ordering_fields = ORDERING_FIELDS

    def get_queryset(self):
        return storefront_products()

    def retrieve(self, request, *args, **kwargs):
        product = self.get_object()
        if request.user.is_authenticated:
            record_view(user=request.user, product=product)
        return Response(self.get_serializer(product).data)


class MerchantProductViewSet(viewsets.ModelViewSet):
    serializer_class = ProductSerializer
    permission_classes = [IsAuthenticated, IsMerchant]
    filterset_class = ProductFilter
    search_fields = SEARCH_FIELDS
    ordering_fields = ORDERING_FIELDS

    def _own_store(self) -> Store:
        store = Store.objects.filter(owner=self.request.user).first()
        if store is None:
            raise PermissionDenied("You do not have a store.")
        return store

    def get_queryset(self):
        return Product.objects.select_related("store").filter(
            store__owner=self.request.user
        )

    def perform_create(self, serializer):
        store = self._own_store()
        if store.status != Store.STATUS_ACTIVE:
            raise PermissionDenied("Your store must be active to list products.")
        product = serializer.save(store=store)
        logger.info("Product %s created in store %s", product.id, store.id)

    def perform_update(self, serializer):
        if serializer.instance.store.status != Store.STATUS_ACTIVE:
            raise PermissionDenied("Your store must be active to edit products.")
        serializer.save()


class AdminProductViewSet(viewsets.ModelViewSet):
    queryset = Product.objects.select_related("store").all()
    serializer_class = AdminProductSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_class = ProductFilter
    search_fields = SEARCH_FIELDS
    ordering_fields = ORDERING_FIELDS

    @extend_schema(request=BulkProductUpdateSerializer, responses={200: dict})
    @action(detail=False, methods=["post"], url_path="bulk-update")
    def bulk_update(self, request):
        payload = BulkProductUpdateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        changes = {k: data[k] for k in ("is_active", "is_available") if k in data}
        updated = Product.objects.filter(id__in=data["ids"]).update(**changes)

        logger.info("Bulk product update by %s: %s rows %s", request.user.email, updated, changes)
        return Response({"updated": updated}, status=status.HTTP_200_OK)
