from datetime import timedelta

import pytest
from django.utils import timezone

from merchants.models import Merchant, MerchantProductApproval
from merchants.scoring import (
    CHECKLIST_FIELDS,
    compute_completion_percent,
    is_address_complete,
    needs_attention,
    upload_target,
)


def _merchant(**overrides):
    values = {
        "name": "Shop",
        "business_address": "1 Main St",
        "return_address": "1 Main St",
        "address_country": "PH",
        "address_state": "NCR",
        "address_zip": "1000",
    }
    values.update(overrides)
    return Merchant(**values)


class TestAddressComplete:

    def test_all_fields_present(self):
        assert is_address_complete(_merchant()) is True

    def test_whitespace_counts_as_blank(self):
        assert is_address_complete(_merchant(address_zip="   ")) is False

    def test_warehouse_address_not_required(self):
        assert is_address_complete(_merchant(warehouse_address="")) is True


class TestUploadTarget:

    def test_explicit_target_wins(self):
        merchant = _merchant(products_target_count=12, products_submitted_count=30)
        assert upload_target(merchant, approved_count=5) == 12

    def test_approved_count_for_selected_only(self):
        merchant = _merchant(products_submitted_count=30)
        assert upload_target(merchant, approved_count=5) == 5

    def test_approved_count_ignored_for_all_products(self):
        merchant = _merchant(
            selection_mode=Merchant.SelectionMode.ALL_PRODUCTS, products_submitted_count=30,
        )
        assert upload_target(merchant, approved_count=5) == 30

    def test_zero_target_falls_through(self):
        merchant = _merchant(products_target_count=0, products_submitted_count=0)
        assert upload_target(merchant, approved_count=0) == 1


class TestCompletionPercent:

    def test_empty_merchant_is_zero(self):
        merchant = Merchant(name="Bare")
        assert compute_completion_percent(merchant, approved_count=0) == 0

    def test_address_only(self):
        assert compute_completion_percent(_merchant(), approved_count=0) == 20

    def test_everything_done(self):
        merchant = _merchant(
            products_target_count=10,
            products_uploaded_count=10,
            variants_complete=True,
            pricing_added=True,
            inventory_added=True,
            sku_added=True,
            images_complete=True,
            final_reviewed=True,
        )
        assert compute_completion_percent(merchant, approved_count=0) == 100

    def test_upload_ratio_capped(self):
        merchant = _merchant(products_target_count=4, products_uploaded_count=40)
        assert compute_completion_percent(merchant, approved_count=0) == 60

    def test_partial_checklist(self):
        # 20 + 40 * 1/3 + 30 * 2/5 = 45.33
        merchant = _merchant(
            products_target_count=3,
            products_uploaded_count=1,
            variants_complete=True,
            pricing_added=True,
        )
        assert compute_completion_percent(merchant, approved_count=0) == 45

    def test_half_rounds_up(self):
        # 40 * 3/16 = 7.5
        merchant = Merchant(name="Half", products_target_count=16, products_uploaded_count=3)
        assert compute_completion_percent(merchant, approved_count=0) == 8

    @pytest.mark.parametrize("target", [1, 3, 7, 16])
    def test_progress_never_decreases(self, target):
        merchant = _merchant(business_address="", products_target_count=target)
        steps = []

        def record():
            steps.append(compute_completion_percent(merchant, approved_count=0))

        record()
        for uploaded in range(1, target + 1):
            merchant.products_uploaded_count = uploaded
            record()
        for name in (*CHECKLIST_FIELDS, "final_reviewed"):
            setattr(merchant, name, True)
            record()
        merchant.business_address = "1 Main St"
        record()

        assert all(isinstance(value, int) and 0 <= value <= 100 for value in steps)
        assert steps == sorted(steps)
        assert steps[0] == 0
        assert steps[-1] == 100

    @pytest.mark.django_db
    def test_approved_products_looked_up(self):
        merchant = Merchant.objects.create(name="Lookup", products_uploaded_count=1)
        MerchantProductApproval.objects.create(merchant=merchant, product_name="A")
        MerchantProductApproval.objects.create(merchant=merchant, product_name="B")

        assert compute_completion_percent(merchant) == 20


class TestNeedsAttention:

    def test_incomplete_address(self):
        merchant = _merchant(address_state="")
        merchant.last_updated_at = timezone.now()
        assert needs_attention(merchant) is True

    def test_recent_complete_merchant(self):
        merchant = _merchant()
        merchant.last_updated_at = timezone.now() - timedelta(days=2)
        assert needs_attention(merchant) is False

    def test_stale_merchant(self):
        merchant = _merchant()
        merchant.last_updated_at = timezone.now() - timedelta(days=8)
        assert needs_attention(merchant) is True

    def test_stale_live_merchant_is_fine(self):
        merchant = _merchant(shopify_status=Merchant.ShopifyStatus.LIVE)
        merchant.last_updated_at = timezone.now() - timedelta(days=30)
        assert needs_attention(merchant) is False

    def test_stale_days_setting(self, settings):
        settings.MERCHANT_STALE_DAYS = 1
        merchant = _merchant()
        now = timezone.now()
        merchant.last_updated_at = now - timedelta(days=2)
        assert needs_attention(merchant, now=now) is True
