# contacts/views/public.py

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from contacts.serializers import ContactSubmitSerializer

logger = logging.getLogger(__name__)


class ContactSubmitView(APIView):
    """
    Public "contact us" form. Throttled per client (scope: public_write).
    """

    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "public_write"
    serializer_class = ContactSubmitSerializer

    @extend_schema(request=ContactSubmitSerializer, responses={201: ContactSubmitSerializer})
    def post(self, request):
        serializer = ContactSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = serializer.save()
        logger.info("Contact message %s received from %s", message.id, message.email)
        return Response(
            {
                "message": "Thank you for contacting us. We will get back to you shortly.",
                "contact": ContactSubmitSerializer(message).data,
            },
            status=status.HTTP_201_CREATED,
        )
