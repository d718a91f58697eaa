from django.contrib import admin

from .models import Lead


@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    list_display = ("merchant_name", "source_sheet", "stage", "country", "city", "shopify_status")
    list_filter = ("source_sheet", "stage", "country", "shopify_status", "needs_followup")
    search_fields = ("merchant_name", "email", "contact", "address")
    readonly_fields = ("country", "city", "social_score", "stage", "needs_followup", "last_activity_dates")
