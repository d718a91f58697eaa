"""Read-time derivations shown on the merchant dashboard.

Nothing computed here is persisted.
"""
from __future__ import annotations

import math
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from leads.models import ShopifyStatus

ADDRESS_FIELDS = (
    "business_address",
    "return_address",
    "address_country",
    "address_state",
    "address_zip",
)
CHECKLIST_FIELDS = (
    "variants_complete",
    "pricing_added",
    "inventory_added",
    "sku_added",
    "images_complete",
)

ADDRESS_WEIGHT = 20
UPLOAD_WEIGHT = 40
CHECKLIST_WEIGHT = 30
FINAL_REVIEW_WEIGHT = 10


def is_address_complete(merchant) -> bool:
    """True iff every required address field is non-blank after trimming."""
    return all((getattr(merchant, name) or "").strip() for name in ADDRESS_FIELDS)


def upload_target(merchant, approved_count: int | None = None) -> int:
    """Number of products the upload ratio is measured against.

    Zero and ``None`` both mean "not set"; the chain falls through to 1.
    """
    candidates = [merchant.products_target_count]
    if merchant.selection_mode == merchant.SelectionMode.SELECTED_ONLY:
        candidates.append(approved_count)
    candidates.append(merchant.products_submitted_count)
    for value in candidates:
        if value:
            return value
    return 1


def compute_completion_percent(merchant, approved_count: int | None = None) -> int:
    """Weighted onboarding progress as an integer between 0 and 100.

    *approved_count* is the number of approved products; it is looked up
    when not supplied.
    """
    if approved_count is None and merchant.pk:
        approved_count = merchant.approved_products.count()

    total = ADDRESS_WEIGHT if is_address_complete(merchant) else 0

    target = upload_target(merchant, approved_count)
    uploaded = merchant.products_uploaded_count or 0
    ratio = min(uploaded / target, 1) if target > 0 else 0
    total += ratio * UPLOAD_WEIGHT

    done = sum(1 for name in CHECKLIST_FIELDS if getattr(merchant, name))
    total += done / len(CHECKLIST_FIELDS) * CHECKLIST_WEIGHT

    if merchant.final_reviewed:
        total += FINAL_REVIEW_WEIGHT

    # Halves round up.
    return int(math.floor(min(total, 100) + 0.5))


def needs_attention(merchant, address_complete: bool | None = None, *, now=None) -> bool:
    if address_complete is None:
        address_complete = is_address_complete(merchant)
    if not address_complete:
        return True
    now = now or timezone.now()
    stale_before = now - timedelta(days=settings.MERCHANT_STALE_DAYS)
    return merchant.last_updated_at < stale_before and merchant.shopify_status != ShopifyStatus.LIVE
