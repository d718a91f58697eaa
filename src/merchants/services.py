"""
Service functions for the merchants app.

Every mutation stamps ``last_updated_by`` (``last_updated_at`` is
``auto_now``) and records an :class:`ActivityLog` entry.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass

from django.db import transaction
from django.db.models import Count
from django.utils import timezone

from core.exceptions import ActionError
from core.parsing import clean_text

from .models import ActivityLog, Merchant, MerchantProductApproval
from .scoring import compute_completion_percent, is_address_complete, needs_attention

logger = logging.getLogger("pililokal")

UPLOADED_STATUSES = (Merchant.ShopifyStatus.UPLOADED.value, Merchant.ShopifyStatus.LIVE.value)


def log_activity(merchant: Merchant, user, type: str, message: str) -> ActivityLog:
    return ActivityLog.objects.create(merchant=merchant, user=user, type=type, message=message)


def get_merchant(merchant_id) -> Merchant:
    return Merchant.objects.get(pk=merchant_id)


def status_label(status: str) -> str:
    """``"NOT_STARTED"`` -> ``"NOT STARTED"``."""
    return str(status).replace("_", " ")


# =========================================================================
# CREATE / UPDATE
# =========================================================================

def _replace_approved_products(merchant: Merchant, approved_products) -> None:
    merchant.approved_products.all().delete()
    MerchantProductApproval.objects.bulk_create([
        MerchantProductApproval(
            merchant=merchant,
            product_name=clean_text(item.get("product_name")),
            product_url=clean_text(item.get("product_url")),
        )
        for item in approved_products or []
        if clean_text(item.get("product_name"))
    ])


def save_merchant(merchant_id, fields: dict, approved_products, user) -> Merchant:
    """Create (``merchant_id`` is ``None``) or update a merchant.

    *fields* holds typed column values, as validated by the API write
    serializer. Approved products are replaced by *approved_products*;
    items with a blank product name are dropped.
    """
    fields = dict(fields)
    fields["name"] = clean_text(fields.get("name"))
    if not fields["name"]:
        raise ActionError("Merchant name is required")

    with transaction.atomic():
        if merchant_id:
            merchant = get_merchant(merchant_id)
            for name, value in fields.items():
                setattr(merchant, name, value)
            merchant.last_updated_by = user
            merchant.save()
            message = "Merchant details updated"
        else:
            merchant = Merchant.objects.create(last_updated_by=user, **fields)
            message = "Merchant created"
        _replace_approved_products(merchant, approved_products)
        log_activity(merchant, user, ActivityLog.Type.DATA_UPDATE, message)
    logger.info("%s: %s (%s)", message, merchant.name, merchant.pk)
    return merchant


def create_merchant_from_lead(lead, *, user, with_activity: bool = True) -> Merchant:
    merchant = Merchant.objects.create(
        name=lead.merchant_name.strip(),
        category=lead.category,
        contact_name=lead.contact,
        email=lead.email,
        phone=lead.contact,
        source_website=lead.website,
        source_facebook=lead.fb,
        source_instagram=lead.ig,
        business_address=lead.address,
        last_updated_by=user,
    )
    if with_activity:
        log_activity(
            merchant, user, ActivityLog.Type.DATA_UPDATE, f"Merchant created from lead ({lead.source_sheet})",
        )
    return merchant


# =========================================================================
# STATUS / NOTES / DELETE
# =========================================================================

def _validate_status(status) -> str:
    if status not in Merchant.ShopifyStatus.values:
        raise ActionError(f"Invalid status: {status}")
    return status


def _apply_status(merchant: Merchant, status: str, user) -> None:
    merchant.shopify_status = status
    merchant.last_updated_by = user
    if status in UPLOADED_STATUSES and merchant.uploaded_at is None:
        merchant.uploaded_at = timezone.now()
        merchant.uploaded_by = user
    merchant.save()
    log_activity(merchant, user, ActivityLog.Type.STATUS_CHANGE, f"Status changed to {status_label(status)}")


def update_merchant_status(merchant_id, status: str, user) -> Merchant:
    status = _validate_status(status)
    merchant = get_merchant(merchant_id)
    with transaction.atomic():
        _apply_status(merchant, status, user)
    logger.info("Merchant %s status set to %s", merchant.pk, status)
    return merchant


def add_note(merchant_id, message: str, user) -> ActivityLog:
    message = clean_text(message)
    if not message:
        raise ActionError("Note cannot be empty")
    merchant = get_merchant(merchant_id)
    with transaction.atomic():
        entry = log_activity(merchant, user, ActivityLog.Type.NOTE, message)
        merchant.last_updated_by = user
        merchant.save(update_fields=["last_updated_by", "last_updated_at", "updated_at"])
    return entry


def delete_merchant(merchant_id) -> None:
    merchant = get_merchant(merchant_id)
    merchant.delete()
    logger.info("Merchant %s (%s) deleted", merchant_id, merchant.name)


def list_activity(merchant_id):
    """Activity entries for a merchant, newest first."""
    merchant = get_merchant(merchant_id)
    return merchant.activity_logs.select_related("user").order_by("-created_at", "-id")


# =========================================================================
# BULK ACTIONS
# =========================================================================

def _require_ids(ids) -> list:
    ids = [value for value in (ids or []) if value]
    if not ids:
        raise ActionError("No merchants selected")
    return ids


def bulk_update_merchant_status(ids, status: str, user) -> int:
    """Set *status* on every listed merchant, all or nothing."""
    ids = _require_ids(ids)
    status = _validate_status(status)
    count = 0
    with transaction.atomic():
        for merchant in Merchant.objects.filter(pk__in=ids).select_for_update():
            _apply_status(merchant, status, user)
            count += 1
    logger.info("Bulk merchant status %s applied to %d merchants", status, count)
    return count


def bulk_delete_merchants(ids) -> int:
    ids = _require_ids(ids)
    with transaction.atomic():
        queryset = Merchant.objects.filter(pk__in=ids)
        count = queryset.count()
        queryset.delete()
    logger.info("Bulk deleted %d merchants", count)
    return count


# =========================================================================
# DASHBOARD
# =========================================================================

@dataclass
class MerchantRow:
    merchant: Merchant
    address_complete: bool
    completion_percent: int
    needs_attention: bool


def annotate_merchant(merchant: Merchant, *, now=None) -> MerchantRow:
    approved_count = getattr(merchant, "approved_count", None)
    address_complete = is_address_complete(merchant)
    return MerchantRow(
        merchant=merchant,
        address_complete=address_complete,
        completion_percent=compute_completion_percent(merchant, approved_count),
        needs_attention=needs_attention(merchant, address_complete, now=now),
    )


def dashboard_queryset():
    return Merchant.objects.select_related("last_updated_by").annotate(
        approved_count=Count("approved_products"),
    )


def dashboard_summary(rows: list[MerchantRow]) -> dict:
    by_status = Counter(row.merchant.shopify_status for row in rows)
    return {
        "total": len(rows),
        "not_started": by_status[Merchant.ShopifyStatus.NOT_STARTED.value],
        "in_progress": by_status[Merchant.ShopifyStatus.IN_PROGRESS.value],
        "uploaded": by_status[Merchant.ShopifyStatus.UPLOADED.value],
        "live": by_status[Merchant.ShopifyStatus.LIVE.value],
        "needs_attention": sum(1 for row in rows if row.needs_attention),
    }
