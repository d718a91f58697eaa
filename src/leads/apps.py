from django.apps import AppConfig


class LeadsConfig(AppConfig):
    """Sales leads imported from the merchants workbook."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "leads"
    verbose_name = "Leads"
