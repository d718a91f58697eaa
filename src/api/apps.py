from django.apps import AppConfig


class ApiConfig(AppConfig):
    """REST API surface (DRF)."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "api"
    verbose_name = "API"
