"""URL routing for payments."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import CreatePaymentIntentView, stripe_webhook

app_name = "payments"

urlpatterns = [
    path("create-intent/", CreatePaymentIntentView.as_view(), name="create-intent"),
    path("webhook/", stripe_webhook, name="webhook"),
]
