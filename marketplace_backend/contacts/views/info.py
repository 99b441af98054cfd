# contacts/views/info.py

"""
SITE CONTACT INFO (singleton)

- GET       /api/contacts/info/          public
- GET/PATCH /api/contacts/admin/info/    back-office
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from contacts.models import ContactInfo
from contacts.serializers import ContactInfoSerializer
from permissions.roles import IsBackOffice

logger = logging.getLogger(__name__)


class ContactInfoView(APIView):
    permission_classes = [AllowAny]
    serializer_class = ContactInfoSerializer

    @extend_schema(responses={200: ContactInfoSerializer})
    def get(self, request):
        return Response(ContactInfoSerializer(ContactInfo.load()).data)


class AdminContactInfoView(APIView):
    permission_classes = [IsAuthenticated, IsBackOffice]
    serializer_class = ContactInfoSerializer

    @extend_schema(responses={200: ContactInfoSerializer})
    def get(self, request):
        return Response(ContactInfoSerializer(ContactInfo.load()).data)

    @extend_schema(request=ContactInfoSerializer, responses={200: ContactInfoSerializer})
    def patch(self, request):
        serializer = ContactInfoSerializer(ContactInfo.load(), data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        info = serializer.save(updated_by=request.user)
        logger.info("Contact info updated by %s", request.user.email)
        return Response(ContactInfoSerializer(info).data)
