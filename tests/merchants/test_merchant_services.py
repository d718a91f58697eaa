import pytest

from core.exceptions import ActionError
from merchants import services
from merchants.models import ActivityLog, Merchant


FIELDS = {
    "name": "  Habi Crafts ",
    "category": "Textiles",
    "selection_confirmed": True,
    "pricing_added": True,
    "products_submitted_count": 25,
    "shopify_status": Merchant.ShopifyStatus.IN_PROGRESS,
}


@pytest.mark.django_db
class TestSaveMerchant:

    def test_create_logs_activity(self, editor_user):
        merchant = services.save_merchant(
            None, FIELDS, [{"product_name": "Banig", "product_url": "https://x"}, {"product_name": " "}],
            editor_user,
        )

        assert merchant.name == "Habi Crafts"
        assert merchant.selection_confirmed is True
        assert merchant.products_submitted_count == 25
        assert merchant.last_updated_by == editor_user
        assert list(merchant.approved_products.values_list("product_name", flat=True)) == ["Banig"]
        log = merchant.activity_logs.get()
        assert log.type == ActivityLog.Type.DATA_UPDATE
        assert log.message == "Merchant created"

    def test_update_replaces_approved_products(self, complete_merchant, admin_user):
        complete_merchant.approved_products.create(product_name="Old")
        services.save_merchant(
            complete_merchant.pk,
            {"name": "Kape Manila 2"},
            [{"product_name": "New"}],
            admin_user,
        )

        complete_merchant.refresh_from_db()
        assert complete_merchant.name == "Kape Manila 2"
        assert complete_merchant.last_updated_by == admin_user
        assert list(complete_merchant.approved_products.values_list("product_name", flat=True)) == ["New"]
        assert complete_merchant.activity_logs.get().message == "Merchant details updated"

    def test_blank_name_creates_nothing(self, editor_user):
        with pytest.raises(ActionError, match="Merchant name is required"):
            services.save_merchant(None, {"name": ""}, [], editor_user)
        assert not Merchant.objects.exists()


@pytest.mark.django_db
class TestStatusAndNotes:

    def test_status_change_logs_and_stamps_upload(self, complete_merchant, admin_user):
        services.update_merchant_status(complete_merchant.pk, "UPLOADED", admin_user)

        complete_merchant.refresh_from_db()
        assert complete_merchant.shopify_status == "UPLOADED"
        assert complete_merchant.uploaded_by == admin_user
        assert complete_merchant.uploaded_at is not None
        log = complete_merchant.activity_logs.get()
        assert log.type == ActivityLog.Type.STATUS_CHANGE
        assert log.message == "Status changed to UPLOADED"

    def test_upload_stamp_not_overwritten(self, complete_merchant, admin_user, editor_user):
        services.update_merchant_status(complete_merchant.pk, "UPLOADED", admin_user)
        services.update_merchant_status(complete_merchant.pk, "LIVE", editor_user)

        complete_merchant.refresh_from_db()
        assert complete_merchant.uploaded_by == admin_user
        assert complete_merchant.last_updated_by == editor_user

    def test_status_label_in_message(self, complete_merchant, admin_user):
        services.update_merchant_status(complete_merchant.pk, "NOT_STARTED", admin_user)
        assert complete_merchant.activity_logs.get().message == "Status changed to NOT STARTED"

    def test_invalid_status(self, complete_merchant, admin_user):
        with pytest.raises(ActionError, match="Invalid status"):
            services.update_merchant_status(complete_merchant.pk, "ARCHIVED", admin_user)
        assert not complete_merchant.activity_logs.exists()

    def test_add_note(self, complete_merchant, viewer_user):
        entry = services.add_note(complete_merchant.pk, "  Called owner ", viewer_user)

        assert entry.type == ActivityLog.Type.NOTE
        assert entry.message == "Called owner"
        complete_merchant.refresh_from_db()
        assert complete_merchant.last_updated_by == viewer_user

    def test_empty_note_rejected(self, complete_merchant, admin_user):
        with pytest.raises(ActionError, match="Note cannot be empty"):
            services.add_note(complete_merchant.pk, "   ", admin_user)

    def test_activity_newest_first(self, complete_merchant, admin_user):
        services.add_note(complete_merchant.pk, "first", admin_user)
        services.add_note(complete_merchant.pk, "second", admin_user)

        messages = [entry.message for entry in services.list_activity(complete_merchant.pk)]
        assert messages == ["second", "first"]

    def test_delete_cascades_activity(self, complete_merchant, admin_user):
        services.add_note(complete_merchant.pk, "note", admin_user)
        services.delete_merchant(complete_merchant.pk)

        assert not Merchant.objects.exists()
        assert not ActivityLog.objects.exists()


@pytest.mark.django_db
class TestBulkMerchantActions:

    def test_bulk_status(self, complete_merchant, admin_user):
        other = Merchant.objects.create(name="Other")
        count = services.bulk_update_merchant_status(
            [str(complete_merchant.pk), str(other.pk)], "LIVE", admin_user,
        )

        assert count == 2
        assert set(Merchant.objects.values_list("shopify_status", flat=True)) == {"LIVE"}
        assert ActivityLog.objects.filter(type=ActivityLog.Type.STATUS_CHANGE).count() == 2

    def test_bulk_requires_ids(self, admin_user):
        with pytest.raises(ActionError, match="No merchants selected"):
            services.bulk_update_merchant_status([], "LIVE", admin_user)
        with pytest.raises(ActionError, match="No merchants selected"):
            services.bulk_delete_merchants([])

    def test_bulk_delete(self, complete_merchant):
        other = Merchant.objects.create(name="Other")
        assert services.bulk_delete_merchants([complete_merchant.pk]) == 1
        assert list(Merchant.objects.all()) == [other]


@pytest.mark.django_db
class TestDashboard:

    def test_summary_counts(self, complete_merchant):
        Merchant.objects.create(name="Bare", shopify_status="LIVE")
        Merchant.objects.create(name="Busy", shopify_status="IN_PROGRESS")

        rows = [services.annotate_merchant(m) for m in services.dashboard_queryset()]
        summary = services.dashboard_summary(rows)

        assert summary == {
            "total": 3,
            "not_started": 1,
            "in_progress": 1,
            "uploaded": 0,
            "live": 1,
            "needs_attention": 2,
        }

    def test_row_uses_annotated_count(self, complete_merchant):
        complete_merchant.products_uploaded_count = 1
        complete_merchant.save()
        complete_merchant.approved_products.create(product_name="A")
        complete_merchant.approved_products.create(product_name="B")

        row = services.annotate_merchant(services.dashboard_queryset().get())

        assert row.address_complete is True
        assert row.completion_percent == 40
        assert row.needs_attention is False
