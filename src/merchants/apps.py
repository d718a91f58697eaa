from django.apps import AppConfig


class MerchantsConfig(AppConfig):
    """Merchant onboarding records, product approvals and activity trail."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "merchants"
    verbose_name = "Merchants"
