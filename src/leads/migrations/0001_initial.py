import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Lead",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "source_sheet",
                    models.CharField(
                        choices=[
                            ("PH Confirmed Merchants", "PH Confirmed Merchants"),
                            ("Interested Merchants", "Interested Merchants"),
                            ("PH New Leads", "PH New Leads"),
                            ("US New Leads", "US New Leads"),
                            ("US Interested Merchants", "US Interested Merchants"),
                            ("US Confirmed Merchants", "US Confirmed Merchants"),
                            ("Previous Clients", "Previous Clients"),
                        ],
                        db_index=True,
                        max_length=40,
                    ),
                ),
                ("position", models.PositiveIntegerField(default=0, help_text="Row order within the last import.")),
                ("merchant_name", models.CharField(max_length=255)),
                ("category", models.CharField(blank=True, default="", max_length=255)),
                ("products", models.TextField(blank=True, default="")),
                ("email", models.CharField(blank=True, default="", max_length=255)),
                ("contact", models.CharField(blank=True, default="", max_length=255)),
                ("address", models.TextField(blank=True, default="")),
                ("status_notes", models.TextField(blank=True, default="")),
                ("fb", models.CharField(blank=True, default="", max_length=500)),
                ("ig", models.CharField(blank=True, default="", max_length=500)),
                ("tiktok", models.CharField(blank=True, default="", max_length=500)),
                ("website", models.CharField(blank=True, default="", max_length=500)),
                ("encoded_by", models.CharField(blank=True, default="", max_length=120)),
                ("result", models.CharField(blank=True, default="", max_length=255)),
                ("calls_update", models.TextField(blank=True, default="")),
                ("followup_email", models.CharField(blank=True, default="", max_length=255)),
                ("reach_via_socmed", models.CharField(blank=True, default="", max_length=255)),
                ("registered_name", models.CharField(blank=True, default="", max_length=255)),
                ("contact_person", models.CharField(blank=True, default="", max_length=255)),
                ("designation", models.CharField(blank=True, default="", max_length=255)),
                ("authorized_signatory", models.CharField(blank=True, default="", max_length=255)),
                (
                    "country",
                    models.CharField(
                        blank=True,
                        choices=[("PH", "Philippines"), ("US", "United States")],
                        db_index=True,
                        default="",
                        max_length=2,
                    ),
                ),
                ("city", models.CharField(blank=True, default="", max_length=255)),
                ("social_score", models.PositiveSmallIntegerField(default=0)),
                (
                    "stage",
                    models.CharField(
                        choices=[
                            ("Sample Received", "Sample Received"),
                            ("Shipped / In Transit", "Shipped / In Transit"),
                            ("Confirmed", "Confirmed"),
                            ("Interested / Replied", "Interested / Replied"),
                            ("Previous Client", "Previous Client"),
                            ("Contacted", "Contacted"),
                            ("No Response", "No Response"),
                            ("Declined / Closed", "Declined / Closed"),
                            ("New / Unknown", "New / Unknown"),
                            ("Converted", "Converted"),
                        ],
                        db_index=True,
                        default="New / Unknown",
                        max_length=40,
                    ),
                ),
                ("needs_followup", models.BooleanField(default=False)),
                ("last_activity_dates", models.JSONField(blank=True, default=list)),
                (
                    "shopify_status",
                    models.CharField(
                        choices=[
                            ("NOT_STARTED", "Not Started"),
                            ("IN_PROGRESS", "In Progress"),
                            ("UPLOADED", "Uploaded"),
                            ("LIVE", "Live"),
                        ],
                        default="NOT_STARTED",
                        max_length=20,
                    ),
                ),
            ],
            options={
                "ordering": ["position", "created_at"],
                "indexes": [models.Index(fields=["source_sheet", "stage"], name="lead_sheet_stage_idx")],
            },
        ),
    ]
