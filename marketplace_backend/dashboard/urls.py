from django.urls import path

from dashboard.views import DashboardStatsView, GlobalSearchView, RecentActivityView

urlpatterns = [
    path("stats/", DashboardStatsView.as_view(), name="dashboard-stats"),
    path("recent-activity/", RecentActivityView.as_view(), name="dashboard-recent-activity"),
    path("search/", GlobalSearchView.as_view(), name="dashboard-search"),
]
