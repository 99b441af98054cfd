# cards/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from cards.views import AdminCardViewSet, CardViewSet

router = SimpleRouter()
router.register(r"admin/cards", AdminCardViewSet, basename="admin-cards")
router.register(r"", CardViewSet, basename="cards")

urlpatterns = [
    path("", include(router.urls)),
]
