# stores/views/news.py

"""
STORE NEWS

- GET  /api/stores/news/                     published items (merchants + back-office)
- CRUD /api/stores/admin/news/               (filter is_published, search title/content)
- POST /api/stores/admin/news/clear/         delete every item -> {"deleted": n}
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import BACK_OFFICE_ROLES, ROLE_MERCHANT, BaseRolePermission, IsBackOffice
from stores.models import StoreNews
from stores.serializers import StoreNewsSerializer

logger = logging.getLogger(__name__)


class CanReadStoreNews(BaseRolePermission):
    allowed_roles = {ROLE_MERCHANT, *BACK_OFFICE_ROLES}


class StoreNewsViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = StoreNewsSerializer
    permission_classes = [IsAuthenticated, CanReadStoreNews]
    search_fields = ["title", "content"]

    def get_queryset(self):
        return StoreNews.objects.filter(is_published=True).select_related("author")


class AdminStoreNewsViewSet(viewsets.ModelViewSet):
    serializer_class = StoreNewsSerializer
    permission_classes = [IsAuthenticated, IsBackOffice]
    filterset_fields = ["is_published"]
    search_fields = ["title", "content"]
    ordering_fields = ["created_at", "title"]

    def get_queryset(self):
        return StoreNews.objects.select_related("author").order_by("-created_at")

    def perform_create(self, serializer):
        news = serializer.save(author=self.request.user)
        logger.info("Store news %s created by %s", news.id, self.request.user.email)

    @extend_schema(request=None, responses={200: dict})
    @action(detail=False, methods=["post"])
    def clear(self, request):
        deleted, _ = StoreNews.objects.all().delete()
        logger.warning("Store news cleared by %s (%s items)", request.user.email, deleted)
        return Response({"deleted": deleted}, status=status.HTTP_200_OK)
