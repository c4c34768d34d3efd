"""URL routing for access checks."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import AccessCheckView

urlpatterns = [
    path("check/", AccessCheckView.as_view(), name="access-check"),
]
