from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.models import Address
from users.serializers import AddressSerializer


class AddressViewSet(viewsets.ModelViewSet):
    """
    The authenticated user's address book.
    Saving with is_default=True clears the other defaults.
    """

    serializer_class = AddressSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["type", "is_default"]
    pagination_class = None

    def get_queryset(self):
        return Address.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        serializer.save(user=self.request.user)

    @action(detail=True, methods=["post"], url_path="set-default")
    def set_default(self, request, pk=None):
        address = self.get_object()
        address.is_default = True
        address.save()
        return Response(AddressSerializer(address).data, status=status.HTTP_200_OK)
