"""URL routing for the hotels domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import HotelViewSet

router = DefaultRouter()
router.register(r"", HotelViewSet, basename="hotel")

urlpatterns = [
    path("", include(router.urls)),
]
