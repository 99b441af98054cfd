# stores/views/stores.py

"""
STOREFRONT + MERCHANT STORE ENDPOINTS

Public (AllowAny):
- GET  /api/stores/stores/                 active stores only
- GET  /api/stores/stores/{id-or-slug}/    detail with products + reviews
- GET  /api/stores/stores/{id}/reviews/

Authenticated:
- POST       /api/stores/stores/apply/        merchant application (pending)
- GET/PATCH  /api/stores/stores/mine/         own store
- GET        /api/stores/stores/following/
- POST       /api/stores/stores/{id}/follow/  (DELETE = unfollow)
- POST       /api/stores/stores/{id}/reviews/
"""

from __future__ import annotations

import uuid

from django.db.models import Count
from django.http import Http404
from django.shortcuts import get_object_or_404
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from backend.errors import error_response
from stores.models import Store, StoreFollow
from stores.serializers import (
    StoreApplicationSerializer,
    StoreDetailSerializer,
    StoreReviewSerializer,
    StoreSerializer,
)
from stores.services.exceptions import StoreAlreadyExistsError
from stores.services.reviews import submit_review
from stores.services.store_lifecycle import apply_for_store


def _annotated(qs):
    return qs.annotate(
        follower_count=Count("followers", distinct=True),
        review_count=Count("reviews", distinct=True),
    )


class StoreViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = StoreSerializer
    permission_classes = [AllowAny]
    filterset_fields = ["category", "city", "country", "is_verified"]
    search_fields = ["name", "description", "category"]
    ordering_fields = ["rating", "total_sales", "created_at", "name"]

    def get_queryset(self):
        return _annotated(Store.objects.filter(status=Store.STATUS_ACTIVE))

    def get_serializer_class(self):
        if self.action == "retrieve":
            return StoreDetailSerializer
        return StoreSerializer

    def get_object(self):
        """Lookup by UUID or by slug."""
        key = str(self.kwargs.get("pk") or "").strip()
        qs = self.get_queryset()
        try:
            lookup = {"pk": uuid.UUID(key)}
        except ValueError:
            lookup = {"slug": key}
        obj = get_object_or_404(qs, **lookup)
        self.check_object_permissions(self.request, obj)
        return obj

    # ---------------- APPLY / OWN STORE ----------------
    @extend_schema(request=StoreApplicationSerializer, responses={201: StoreApplicationSerializer})
    @action(detail=False, methods=["post"], permission_classes=[IsAuthenticated])
    def apply(self, request):
        serializer = StoreApplicationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            store = apply_for_store(user=request.user, **serializer.validated_data)
        except StoreAlreadyExistsError as e:
            return error_response(
                code="store_exists", message=str(e), http_status=status.HTTP_409_CONFLICT
            )

        return Response(
            StoreApplicationSerializer(store).data, status=status.HTTP_201_CREATED
        )

    @extend_schema(request=StoreApplicationSerializer, responses={200: StoreApplicationSerializer})
    @action(detail=False, methods=["get", "patch"], permission_classes=[IsAuthenticated])
    def mine(self, request):
        store = Store.objects.filter(owner=request.user).first()
        if store is None:
            raise Http404("You do not have a store.")

        if request.method == "PATCH":
            serializer = StoreApplicationSerializer(store, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            store = serializer.save()

        return Response(StoreApplicationSerializer(store).data)

    # ---------------- FOLLOW ----------------
    @action(detail=False, methods=["get"], permission_classes=[IsAuthenticated])
    def following(self, request):
        qs = self.get_queryset().filter(followers__follower=request.user)
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(StoreSerializer(page, many=True).data)
        return Response(StoreSerializer(qs, many=True).data)

    @extend_schema(request=None, responses={200: dict})
    @action(detail=True, methods=["post", "delete"], permission_classes=[IsAuthenticated])
    def follow(self, request, pk=None):
        store = self.get_object()

        if request.method == "DELETE":
            StoreFollow.objects.filter(follower=request.user, store=store).delete()
            following = False
        else:
            StoreFollow.objects.get_or_create(follower=request.user, store=store)
            following = True

        return Response(
            {
                "store": str(store.id),
                "following": following,
                "follower_count": store.followers.count(),
            }
        )

    # ---------------- REVIEWS ----------------
    @extend_schema(request=StoreReviewSerializer, responses={200: StoreReviewSerializer(many=True)})
    @action(detail=True, methods=["get", "post"])
    def reviews(self, request, pk=None):
        store = self.get_object()

        if request.method == "GET":
            qs = store.reviews.select_related("user").order_by("-created_at")
            return Response(StoreReviewSerializer(qs, many=True).data)

        serializer = StoreReviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        if store.owner_id == request.user.id:
            return error_response(
                code="own_store",
                message="You cannot review your own store.",
                http_status=status.HTTP_400_BAD_REQUEST,
            )

        review = submit_review(
            user=request.user,
            store=store,
            rating=serializer.validated_data["rating"],
            comment=serializer.validated_data.get("comment", ""),
        )
        return Response(StoreReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    def get_permissions(self):
        if self.action == "reviews" and self.request.method == "POST":
            return [IsAuthenticated()]
        return super().get_permissions()
