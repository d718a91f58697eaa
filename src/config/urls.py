"""URL configuration for the Pililokal merchant dashboard."""
from django.conf import settings
from django.contrib import admin
from django.urls import include, path
from django.views.generic import RedirectView

urlpatterns = [
    path("api/v1/", include("api.urls")),
    path("", RedirectView.as_view(url="/api/v1/merchants/dashboard/", permanent=False)),
]

if getattr(settings, "ENABLE_DJANGO_ADMIN", False):
    urlpatterns.insert(0, path("admin/", admin.site.urls))
