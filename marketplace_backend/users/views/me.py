from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.serializers import (
    ProfileUpdateSerializer,
    UserSerializer,
    WithdrawalPinSerializer,
)


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    @extend_schema(
        responses={200: UserSerializer},
        description="Get current authenticated user profile",
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        request=ProfileUpdateSerializer,
        responses={200: UserSerializer},
        description="Update self-editable profile fields",
    )
    def patch(self, request):
        serializer = ProfileUpdateSerializer(
            request.user, data=request.data, partial=True
        )
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)


class WithdrawalPinView(APIView):
    """
    Set or change the withdrawal PIN (4-6 digits).
    Changing an existing PIN requires current_pin.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = WithdrawalPinSerializer

    @extend_schema(
        request=WithdrawalPinSerializer,
        responses={200: dict},
        description="Set or change the withdrawal PIN",
    )
    def post(self, request):
        serializer = WithdrawalPinSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)

        user = request.user
        user.set_withdrawal_pin(serializer.validated_data["pin"])
        user.save(update_fields=["withdrawal_pin", "updated_at"])

        return Response({"message": "Withdrawal PIN saved", "has_withdrawal_pin": True})
