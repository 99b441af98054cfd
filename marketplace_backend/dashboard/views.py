# dashboard/views.py

"""
ADMIN DASHBOARD

- GET /api/dashboard/stats/
- GET /api/dashboard/recent-activity/
- GET /api/dashboard/search/?q=...
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiParameter, OpenApiTypes, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from dashboard.services.activity import recent_activity
from dashboard.services.search import global_search
from dashboard.services.stats import dashboard_stats
from permissions.roles import IsBackOffice


class DashboardStatsView(APIView):
    permission_classes = [IsAuthenticated, IsBackOffice]

    @extend_schema(responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        return Response(dashboard_stats())


class RecentActivityView(APIView):
    permission_classes = [IsAuthenticated, IsBackOffice]

    @extend_schema(responses={200: OpenApiTypes.OBJECT})
    def get(self, request):
        return Response({"results": recent_activity()})


class GlobalSearchView(APIView):
    permission_classes = [IsAuthenticated, IsBackOffice]

    @extend_schema(
        parameters=[OpenApiParameter("q", OpenApiTypes.STR, OpenApiParameter.QUERY)],
        responses={200: OpenApiTypes.OBJECT},
    )
    def get(self, request):
        query = request.query_params.get("q", "")
        return Response({"query": query.strip(), "results": global_search(query)})
