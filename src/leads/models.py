"""Models for the leads pipeline."""
from __future__ import annotations

from django.db import models

from core.models import TimeStampedModel


class SourceSheet(models.TextChoices):
    """Workbook sheets a lead can come from, in import order."""

    PH_CONFIRMED = "PH Confirmed Merchants", "PH Confirmed Merchants"
    INTERESTED = "Interested Merchants", "Interested Merchants"
    PH_NEW = "PH New Leads", "PH New Leads"
    US_NEW = "US New Leads", "US New Leads"
    US_INTERESTED = "US Interested Merchants", "US Interested Merchants"
    US_CONFIRMED = "US Confirmed Merchants", "US Confirmed Merchants"
    PREVIOUS_CLIENTS = "Previous Clients", "Previous Clients"


class Stage(models.TextChoices):
    SAMPLE_RECEIVED = "Sample Received", "Sample Received"
    SHIPPED = "Shipped / In Transit", "Shipped / In Transit"
    CONFIRMED = "Confirmed", "Confirmed"
    INTERESTED = "Interested / Replied", "Interested / Replied"
    PREVIOUS_CLIENT = "Previous Client", "Previous Client"
    CONTACTED = "Contacted", "Contacted"
    NO_RESPONSE = "No Response", "No Response"
    DECLINED = "Declined / Closed", "Declined / Closed"
    NEW = "New / Unknown", "New / Unknown"
    # Set by conversion only, never by the classifier.
    CONVERTED = "Converted", "Converted"


class Country(models.TextChoices):
    PH = "PH", "Philippines"
    US = "US", "United States"


class ShopifyStatus(models.TextChoices):
    NOT_STARTED = "NOT_STARTED", "Not Started"
    IN_PROGRESS = "IN_PROGRESS", "In Progress"
    UPLOADED = "UPLOADED", "Uploaded"
    LIVE = "LIVE", "Live"


class Lead(TimeStampedModel):
    """One row of the merchants workbook, classified at import time."""

    source_sheet = models.CharField(max_length=40, choices=SourceSheet.choices, db_index=True)
    position = models.PositiveIntegerField(default=0, help_text="Row order within the last import.")

    merchant_name = models.CharField(max_length=255)
    category = models.CharField(max_length=255, blank=True, default="")
    products = models.TextField(blank=True, default="")
    email = models.CharField(max_length=255, blank=True, default="")
    contact = models.CharField(max_length=255, blank=True, default="")
    address = models.TextField(blank=True, default="")
    status_notes = models.TextField(blank=True, default="")
    fb = models.CharField(max_length=500, blank=True, default="")
    ig = models.CharField(max_length=500, blank=True, default="")
    tiktok = models.CharField(max_length=500, blank=True, default="")
    website = models.CharField(max_length=500, blank=True, default="")
    encoded_by = models.CharField(max_length=120, blank=True, default="")
    result = models.CharField(max_length=255, blank=True, default="")
    calls_update = models.TextField(blank=True, default="")
    followup_email = models.CharField(max_length=255, blank=True, default="")
    reach_via_socmed = models.CharField(max_length=255, blank=True, default="")
    registered_name = models.CharField(max_length=255, blank=True, default="")
    contact_person = models.CharField(max_length=255, blank=True, default="")
    designation = models.CharField(max_length=255, blank=True, default="")
    authorized_signatory = models.CharField(max_length=255, blank=True, default="")

    # Derived at import time
    country = models.CharField(max_length=2, choices=Country.choices, blank=True, default="", db_index=True)
    city = models.CharField(max_length=255, blank=True, default="")
    social_score = models.PositiveSmallIntegerField(default=0)
    stage = models.CharField(max_length=40, choices=Stage.choices, default=Stage.NEW, db_index=True)
    needs_followup = models.BooleanField(default=False)
    last_activity_dates = models.JSONField(default=list, blank=True)

    shopify_status = models.CharField(
        max_length=20,
        choices=ShopifyStatus.choices,
        default=ShopifyStatus.NOT_STARTED,
    )

    class Meta:
        ordering = ["position", "created_at"]
        indexes = [
            models.Index(fields=["source_sheet", "stage"], name="lead_sheet_stage_idx"),
        ]

    def __str__(self):
        return f"{self.merchant_name} ({self.source_sheet})"
