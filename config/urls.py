"""URL configuration for the Tripnest project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the versioned REST API of every app and the OpenAPI schema.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

from apps.access.views import unauthorized

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    # /admin is a page route guarded for the admin role, so Django admin lives elsewhere
    path('django-admin/', admin.site.urls),
    # Application URLs
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/users/', include('apps.users.urls')),
    path('api/v1/access/', include('apps.access.urls')),
    path('api/v1/hotels/', include('apps.hotels.urls')),
    path('api/v1/', include('apps.reviews.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/payments/', include(('apps.payments.urls', 'payments'), namespace='payments')),
    # API schema and docs
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('unauthorized', unauthorized, name='unauthorized'),
]
