# products/views/history.py

"""
BROWSING HISTORY (own entries only)

- GET    /api/products/history/           most recent first
- POST   /api/products/history/           {"product": "<id>"} records a view
- DELETE /api/products/history/{id}/
- POST   /api/products/history/clear/     -> {"deleted": n}
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from products.models import BrowsingHistory
from products.serializers import BrowsingHistorySerializer
from products.services.browsing_history import clear_history, record_view


class BrowsingHistoryViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = BrowsingHistorySerializer
    permission_classes = [IsAuthenticated]
    ordering_fields = ["viewed_at", "view_count"]

    def get_queryset(self):
        return (
            BrowsingHistory.objects.filter(user=self.request.user)
            .select_related("product", "product__store")
            .order_by("-viewed_at")
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = record_view(user=request.user, product=serializer.validated_data["product"])
        return Response(self.get_serializer(entry).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: dict})
    @action(detail=False, methods=["post"])
    def clear(self, request):
        return Response({"deleted": clear_history(user=request.user)}, status=status.HTTP_200_OK)
