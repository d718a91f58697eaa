"""Models for merchant onboarding."""
from __future__ import annotations

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel
from leads.models import ShopifyStatus


class Merchant(TimeStampedModel):
    """A business being onboarded to the storefront."""

    class SubmissionType(models.TextChoices):
        WEBSITE_EXTRACTION = "WEBSITE_EXTRACTION", "Website extraction"
        FB_IG_EXTRACTION = "FB_IG_EXTRACTION", "FB/IG extraction"
        MERCHANT_SELECTED = "MERCHANT_SELECTED", "Merchant selected"

    class SelectionMode(models.TextChoices):
        ALL_PRODUCTS = "ALL_PRODUCTS", "All products"
        SELECTED_ONLY = "SELECTED_ONLY", "Selected only"

    ShopifyStatus = ShopifyStatus

    # Identity / contact
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=255, blank=True, default="")
    contact_name = models.CharField(max_length=255, blank=True, default="")
    email = models.CharField(max_length=255, blank=True, default="")
    phone = models.CharField(max_length=100, blank=True, default="")
    source_website = models.CharField(max_length=500, blank=True, default="")
    source_facebook = models.CharField(max_length=500, blank=True, default="")
    source_instagram = models.CharField(max_length=500, blank=True, default="")

    # Product selection
    submission_type = models.CharField(
        max_length=30,
        choices=SubmissionType.choices,
        default=SubmissionType.MERCHANT_SELECTED,
    )
    selection_mode = models.CharField(
        max_length=20,
        choices=SelectionMode.choices,
        default=SelectionMode.SELECTED_ONLY,
    )
    selection_confirmed = models.BooleanField(default=False)

    # Shopify upload
    shopify_status = models.CharField(
        max_length=20,
        choices=ShopifyStatus.choices,
        default=ShopifyStatus.NOT_STARTED,
        db_index=True,
    )
    shopify_vendor_name = models.CharField(max_length=255, blank=True, default="")
    shopify_collection = models.CharField(max_length=255, blank=True, default="")
    shopify_tags = models.CharField(max_length=500, blank=True, default="")
    shopify_phone = models.CharField(max_length=100, blank=True, default="")
    products_submitted_count = models.PositiveIntegerField(null=True, blank=True)
    products_uploaded_count = models.PositiveIntegerField(default=0)
    products_target_count = models.PositiveIntegerField(null=True, blank=True)

    # Extraction workflow
    products_extracted = models.BooleanField(default=False)
    products_sent_for_confirmation = models.BooleanField(default=False)
    merchant_approved_extracted_list = models.BooleanField(default=False)
    approved_at = models.DateTimeField(null=True, blank=True)

    # Progress checklist
    variants_complete = models.BooleanField(default=False)
    pricing_added = models.BooleanField(default=False)
    inventory_added = models.BooleanField(default=False)
    sku_added = models.BooleanField(default=False)
    images_complete = models.BooleanField(default=False)
    final_reviewed = models.BooleanField(default=False)

    # Addresses
    business_address = models.TextField(blank=True, default="")
    warehouse_address = models.TextField(blank=True, default="")
    return_address = models.TextField(blank=True, default="")
    address_country = models.CharField(max_length=100, blank=True, default="")
    address_state = models.CharField(max_length=100, blank=True, default="")
    address_zip = models.CharField(max_length=20, blank=True, default="")

    last_updated_at = models.DateTimeField(auto_now=True, db_index=True)
    last_updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="merchants_updated",
    )
    uploaded_at = models.DateTimeField(null=True, blank=True)
    uploaded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="merchants_uploaded",
    )

    class Meta:
        ordering = ["-last_updated_at"]
        indexes = [
            models.Index(fields=["shopify_status", "last_updated_at"], name="merchant_status_updated_idx"),
        ]

    def __str__(self):
        return self.name


class MerchantProductApproval(TimeStampedModel):
    """A product the merchant approved for upload."""

    merchant = models.ForeignKey(
        Merchant,
        on_delete=models.CASCADE,
        related_name="approved_products",
    )
    product_name = models.CharField(max_length=255)
    product_url = models.CharField(max_length=500, blank=True, default="")

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return self.product_name


class ActivityLog(models.Model):
    """Append-only activity entry attached to a merchant."""

    class Type(models.TextChoices):
        NOTE = "NOTE", "Note"
        STATUS_CHANGE = "STATUS_CHANGE", "Status change"
        DATA_UPDATE = "DATA_UPDATE", "Data update"

    merchant = models.ForeignKey(
        Merchant,
        on_delete=models.CASCADE,
        related_name="activity_logs",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="activity_logs",
    )
    type = models.CharField(max_length=20, choices=Type.choices)
    message = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name = "activity log"
        verbose_name_plural = "activity logs"
        indexes = [
            models.Index(fields=["merchant", "created_at"], name="activity_merchant_created_idx"),
        ]

    def __str__(self):
        return f"{self.get_type_display()}: {self.message[:50]}"
