"""URL configuration for the apartment booking project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the OpenAPI schema and the application‑level routers of each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path('admin/', admin.site.urls),
    # Public API
    path('api/v1/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/v1/apartments/', include('apps.apartments.urls')),
    path('api/v1/bookings/', include('apps.bookings.urls')),
    path('api/v1/settings/', include('apps.site_settings.urls')),
    # Admin back office API
    path('api/v1/admin/', include('apps.bookings.admin_urls')),
    path('api/v1/admin/', include('apps.site_settings.admin_urls')),
    path('api/v1/admin/', include('apps.analytics.urls')),
    # API documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
