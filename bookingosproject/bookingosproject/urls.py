"""
URL configuration for the bookingosproject project.

The Django admin is mounted at ``settings.ADMIN_PATH``; the REST API lives
under ``/api/v1/`` (see ``api_urls.py``).
"""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path(f"{getattr(settings, 'ADMIN_PATH', 'admin')}/", admin.site.urls),
    path("api/v1/", include("bookingosproject.api_urls")),
]
