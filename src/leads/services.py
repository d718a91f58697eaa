"""
Service functions for the leads app.

The lead table is a snapshot of the merchants workbook: every import
replaces it wholesale. After an import, rows are edited in place,
deleted, or converted into merchants.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, fields
from typing import Iterable, Optional

from django.db import transaction

from core.exceptions import ActionError

from .classification import (
    SOCIAL_FIELDS,
    extract_dates,
    infer_city,
    infer_country,
    needs_followup,
    social_score,
)
from .ingestion import LeadRecord, parse_workbook
from .models import Country, Lead, ShopifyStatus, SourceSheet, Stage

logger = logging.getLogger("pililokal")

CONFIRMED_SHEETS = (SourceSheet.PH_CONFIRMED.value, SourceSheet.US_CONFIRMED.value)
NO_DATA_MESSAGE = "No data found. Place Pililokal_Merchants_Cleaned.xlsx in the data directory."


# =========================================================================
# IMPORT
# =========================================================================

@dataclass
class ImportResult:
    count: int
    by_sheet: dict[str, int]


def import_leads(records: Iterable[LeadRecord]) -> int:
    """Replace every stored lead with *records*; returns the number inserted.

    The delete and the insert share one transaction, so readers never
    observe a half-imported table.
    """
    leads = [
        Lead(position=index, **record.as_model_kwargs())
        for index, record in enumerate(records)
    ]
    with transaction.atomic():
        deleted, _ = Lead.objects.all().delete()
        Lead.objects.bulk_create(leads, batch_size=500)
    logger.info("Lead import replaced %d rows with %d rows", deleted, len(leads))
    return len(leads)


def import_workbook(source) -> ImportResult:
    """Parse the workbook at *source* and load it into the lead table.

    Rows without a merchant name are dropped. An empty workbook raises
    :class:`ActionError` and leaves the table untouched.
    """
    parsed = parse_workbook(source)
    records = [record for record in parsed.records if record.merchant_name.strip()]
    if not records:
        raise ActionError(NO_DATA_MESSAGE)

    by_sheet = dict(Counter(record.source_sheet for record in records))
    count = import_leads(records)
    for sheet, sheet_count in by_sheet.items():
        logger.info("Imported %d leads from '%s'", sheet_count, sheet)
    return ImportResult(count=count, by_sheet=by_sheet)


# =========================================================================
# SINGLE-LEAD ACTIONS
# =========================================================================

@dataclass
class LeadPatch:
    """Editable lead columns; ``None`` means "leave unchanged"."""

    merchant_name: Optional[str] = None
    source_sheet: Optional[str] = None
    category: Optional[str] = None
    products: Optional[str] = None
    email: Optional[str] = None
    contact: Optional[str] = None
    address: Optional[str] = None
    status_notes: Optional[str] = None
    result: Optional[str] = None
    calls_update: Optional[str] = None
    followup_email: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    fb: Optional[str] = None
    ig: Optional[str] = None
    tiktok: Optional[str] = None
    website: Optional[str] = None

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_payload(cls, payload: dict) -> "LeadPatch":
        """Build a patch from request data; unknown keys are ignored."""
        values = {}
        for name in cls.field_names():
            if name in payload and payload[name] is not None:
                values[name] = str(payload[name]).strip()
        return cls(**values)

    def changes(self) -> dict[str, str]:
        return {
            name: value
            for name in self.field_names()
            if (value := getattr(self, name)) is not None
        }


def get_lead(lead_id) -> Lead:
    return Lead.objects.get(pk=lead_id)


def _refresh_derived_fields(lead: Lead, changed: set[str]) -> list[str]:
    """Recompute classifier columns whose inputs are in *changed*.

    Columns the caller set explicitly (``city``, ``country``) are left
    alone. Returns the names of the columns that were recomputed.
    """
    refreshed = []
    if changed & set(SOCIAL_FIELDS):
        lead.social_score = social_score(lead.fb, lead.ig, lead.tiktok, lead.website)
        refreshed.append("social_score")
    if changed & {"address", "source_sheet"} and "country" not in changed:
        lead.country = infer_country(lead.address, lead.source_sheet)
        refreshed.append("country")
    if "address" in changed and "city" not in changed:
        lead.city = infer_city(lead.address)
        refreshed.append("city")
    if changed & {"status_notes", "calls_update"}:
        lead.needs_followup = needs_followup(lead.status_notes, lead.calls_update)
        lead.last_activity_dates = extract_dates(f"{lead.status_notes} {lead.calls_update}")
        refreshed.extend(["needs_followup", "last_activity_dates"])
    return refreshed


def update_lead(lead_id, patch: LeadPatch) -> Lead:
    """Apply the set fields of *patch*; an empty patch writes nothing."""
    lead = get_lead(lead_id)
    changes = {name: value.strip() for name, value in patch.changes().items()}
    if not changes:
        return lead

    if "merchant_name" in changes and not changes["merchant_name"]:
        raise ActionError("Merchant name is required")
    if "source_sheet" in changes and changes["source_sheet"] not in SourceSheet.values:
        raise ActionError(f"Unknown source sheet: {changes['source_sheet']}")
    if "country" in changes:
        changes["country"] = changes["country"].upper()
        if changes["country"] and changes["country"] not in Country.values:
            raise ActionError(f"Unknown country: {changes['country']}")

    for name, value in changes.items():
        setattr(lead, name, value)
    derived = _refresh_derived_fields(lead, set(changes))
    lead.save(update_fields=[*changes, *derived, "updated_at"])
    logger.info("Lead %s updated (%s)", lead.pk, ", ".join(sorted(changes)))
    return lead


def _validate_shopify_status(status) -> str:
    if status not in ShopifyStatus.values:
        raise ActionError(f"Invalid status: {status}")
    return status


def update_lead_status(lead_id, status: str) -> Lead:
    lead = get_lead(lead_id)
    lead.shopify_status = _validate_shopify_status(status)
    lead.save(update_fields=["shopify_status", "updated_at"])
    return lead


def delete_lead(lead_id) -> None:
    lead = get_lead(lead_id)
    lead.delete()
    logger.info("Lead %s (%s) deleted", lead_id, lead.merchant_name)


def convert_lead_to_merchant(lead_id, user):
    """Promote a lead into a new merchant and mark the lead as converted."""
    from merchants.services import create_merchant_from_lead

    lead = get_lead(lead_id)
    if not lead.merchant_name.strip():
        raise ActionError("Merchant name is required")
    with transaction.atomic():
        merchant = create_merchant_from_lead(lead, user=user)
        lead.stage = Stage.CONVERTED
        lead.save(update_fields=["stage", "updated_at"])
    logger.info("Lead %s converted to merchant %s", lead.pk, merchant.pk)
    return merchant


# =========================================================================
# BULK ACTIONS
# =========================================================================

def _require_ids(ids) -> list:
    ids = [value for value in (ids or []) if value]
    if not ids:
        raise ActionError("No leads selected")
    return ids


def bulk_update_lead_status(ids, status: str) -> int:
    ids = _require_ids(ids)
    status = _validate_shopify_status(status)
    with transaction.atomic():
        count = Lead.objects.filter(pk__in=ids).update(shopify_status=status)
    logger.info("Bulk lead status %s applied to %d leads", status, count)
    return count


def bulk_delete_leads(ids) -> int:
    ids = _require_ids(ids)
    with transaction.atomic():
        count, _ = Lead.objects.filter(pk__in=ids).delete()
    logger.info("Bulk deleted %d leads", count)
    return count


def bulk_add_confirmed_as_merchants(user) -> tuple[int, int]:
    """Create a merchant for every confirmed-sheet lead not already present.

    Names are compared case-insensitively against existing merchants and
    against each other. Returns ``(added, skipped)``.
    """
    from merchants.models import Merchant
    from merchants.services import create_merchant_from_lead

    existing = {name.lower() for name in Merchant.objects.values_list("name", flat=True)}
    added = skipped = 0
    with transaction.atomic():
        for lead in Lead.objects.filter(source_sheet__in=CONFIRMED_SHEETS):
            name = lead.merchant_name.strip()
            if not name:
                continue
            if name.lower() in existing:
                skipped += 1
                continue
            create_merchant_from_lead(lead, user=user, with_activity=False)
            existing.add(name.lower())
            added += 1
    logger.info("Confirmed leads added as merchants: %d added, %d skipped", added, skipped)
    return added, skipped


# =========================================================================
# KPIs
# =========================================================================

def lead_kpis() -> dict:
    """Headline counters for the leads pipeline."""
    rows = list(
        Lead.objects.values_list("source_sheet", "status_notes", "calls_update", "result", "stage")
    )
    per_sheet = Counter(row[0] for row in rows)

    def notes(row) -> str:
        return f"{row[1]}{row[2]}".lower()

    ph_confirmed = [row for row in rows if row[0] == SourceSheet.PH_CONFIRMED]
    us_confirmed = per_sheet[SourceSheet.US_CONFIRMED.value] or sum(
        1 for row in rows
        if row[0] == SourceSheet.US_NEW and row[3].strip().lower() == "confirmed"
    )

    return {
        "total": len(rows),
        "ph_confirmed": per_sheet[SourceSheet.PH_CONFIRMED.value],
        "us_confirmed": us_confirmed,
        "sample_received": sum(
            1 for row in ph_confirmed if "sample" in notes(row) and "received" in notes(row)
        ),
        "shipped_in_transit": sum(
            1 for row in ph_confirmed if "shipped" in notes(row) or "lbc" in notes(row)
        ),
        "interested": per_sheet[SourceSheet.INTERESTED.value],
        "us_leads": per_sheet[SourceSheet.US_NEW.value],
        "ph_leads": per_sheet[SourceSheet.PH_NEW.value],
        "previous_clients": per_sheet[SourceSheet.PREVIOUS_CLIENTS.value],
        "awaiting_response": sum(1 for row in rows if "awaiting response" in notes(row)),
        "no_answer_unreachable": sum(
            1 for row in rows
            if any(
                phrase in notes(row)
                for phrase in ("no answer", "cannot be reached", "not answering")
            )
        ),
        "by_stage": dict(Counter(row[4] for row in rows)),
        "by_sheet": {sheet: per_sheet[sheet] for sheet in SourceSheet.values},
    }
