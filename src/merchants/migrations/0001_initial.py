import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

SHOPIFY_STATUS_CHOICES = [
    ("NOT_STARTED", "Not Started"),
    ("IN_PROGRESS", "In Progress"),
    ("UPLOADED", "Uploaded"),
    ("LIVE", "Live"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Merchant",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("category", models.CharField(blank=True, default="", max_length=255)),
                ("contact_name", models.CharField(blank=True, default="", max_length=255)),
                ("email", models.CharField(blank=True, default="", max_length=255)),
                ("phone", models.CharField(blank=True, default="", max_length=100)),
                ("source_website", models.CharField(blank=True, default="", max_length=500)),
                ("source_facebook", models.CharField(blank=True, default="", max_length=500)),
                ("source_instagram", models.CharField(blank=True, default="", max_length=500)),
                (
                    "submission_type",
                    models.CharField(
                        choices=[
                            ("WEBSITE_EXTRACTION", "Website extraction"),
                            ("FB_IG_EXTRACTION", "FB/IG extraction"),
                            ("MERCHANT_SELECTED", "Merchant selected"),
                        ],
                        default="MERCHANT_SELECTED",
                        max_length=30,
                    ),
                ),
                (
                    "selection_mode",
                    models.CharField(
                        choices=[("ALL_PRODUCTS", "All products"), ("SELECTED_ONLY", "Selected only")],
                        default="SELECTED_ONLY",
                        max_length=20,
                    ),
                ),
                ("selection_confirmed", models.BooleanField(default=False)),
                (
                    "shopify_status",
                    models.CharField(
                        choices=SHOPIFY_STATUS_CHOICES,
                        db_index=True,
                        default="NOT_STARTED",
                        max_length=20,
                    ),
                ),
                ("shopify_vendor_name", models.CharField(blank=True, default="", max_length=255)),
                ("shopify_collection", models.CharField(blank=True, default="", max_length=255)),
                ("shopify_tags", models.CharField(blank=True, default="", max_length=500)),
                ("shopify_phone", models.CharField(blank=True, default="", max_length=100)),
                ("products_submitted_count", models.PositiveIntegerField(blank=True, null=True)),
                ("products_uploaded_count", models.PositiveIntegerField(default=0)),
                ("products_target_count", models.PositiveIntegerField(blank=True, null=True)),
                ("products_extracted", models.BooleanField(default=False)),
                ("products_sent_for_confirmation", models.BooleanField(default=False)),
                ("merchant_approved_extracted_list", models.BooleanField(default=False)),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("variants_complete", models.BooleanField(default=False)),
                ("pricing_added", models.BooleanField(default=False)),
                ("inventory_added", models.BooleanField(default=False)),
                ("sku_added", models.BooleanField(default=False)),
                ("images_complete", models.BooleanField(default=False)),
                ("final_reviewed", models.BooleanField(default=False)),
                ("business_address", models.TextField(blank=True, default="")),
                ("warehouse_address", models.TextField(blank=True, default="")),
                ("return_address", models.TextField(blank=True, default="")),
                ("address_country", models.CharField(blank=True, default="", max_length=100)),
                ("address_state", models.CharField(blank=True, default="", max_length=100)),
                ("address_zip", models.CharField(blank=True, default="", max_length=20)),
                ("last_updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("uploaded_at", models.DateTimeField(blank=True, null=True)),
                (
                    "last_updated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="merchants_updated",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "uploaded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="merchants_uploaded",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-last_updated_at"],
                "indexes": [
                    models.Index(fields=["shopify_status", "last_updated_at"], name="merchant_status_updated_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MerchantProductApproval",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("product_name", models.CharField(max_length=255)),
                ("product_url", models.CharField(blank=True, default="", max_length=500)),
                (
                    "merchant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="approved_products",
                        to="merchants.merchant",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
            },
        ),
        migrations.CreateModel(
            name="ActivityLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("NOTE", "Note"),
                            ("STATUS_CHANGE", "Status change"),
                            ("DATA_UPDATE", "Data update"),
                        ],
                        max_length=20,
                    ),
                ),
                ("message", models.TextField()),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                (
                    "merchant",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="activity_logs",
                        to="merchants.merchant",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="activity_logs",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "activity log",
                "verbose_name_plural": "activity logs",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(fields=["merchant", "created_at"], name="activity_merchant_created_idx"),
                ],
            },
        ),
    ]
