"""Heuristics that derive pipeline fields from a raw workbook row.

Every function here is pure. The keyword checks are order-sensitive:
the first matching branch wins, so the order of the checks below is
part of the behaviour.
"""
from __future__ import annotations

import re

from .models import Country, SourceSheet, Stage

US_SHEETS = frozenset({
    SourceSheet.US_NEW.value,
    SourceSheet.US_INTERESTED.value,
    SourceSheet.US_CONFIRMED.value,
})
PH_SHEETS = frozenset({
    SourceSheet.PH_NEW.value,
    SourceSheet.PH_CONFIRMED.value,
    SourceSheet.INTERESTED.value,
})
INTERESTED_SHEETS = frozenset({
    SourceSheet.INTERESTED.value,
    SourceSheet.US_INTERESTED.value,
})

US_STATE_PATTERN = re.compile(
    r",\s*(CA|NY|TX|FL|IL|WA|NJ|PA|OH|GA|AZ|CO|NV|OR|VA|MA|MI|NC|MN|HI)\s*(?:\d|$)",
    re.IGNORECASE,
)
PH_PLACE_KEYWORDS = ("philippines", "manila", "quezon", "cebu")

FOLLOWUP_KEYWORDS = (
    "no answer",
    "cannot be reached",
    "no response",
    "awaiting",
    "will call again",
    "not answering",
    "busy",
    "called back",
)

DATE_PATTERNS = (
    re.compile(r"\b(\d{1,2}/\d{1,2}(?:/\d{2,4})?)\b"),
    re.compile(r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+\d{1,2}\b", re.IGNORECASE),
)

SOCIAL_FIELDS = ("fb", "ig", "tiktok", "website")


def _blank(value) -> bool:
    return not (value or "").strip()


def infer_country(address: str, source_sheet: str) -> str:
    """Return ``"US"``, ``"PH"`` or ``""`` (unknown)."""
    address = (address or "").strip()
    lowered = address.lower()

    if (
        "united states" in lowered
        or " usa" in lowered
        or lowered.endswith("usa")
        or US_STATE_PATTERN.search(address)
    ):
        return Country.US
    if any(keyword in lowered for keyword in PH_PLACE_KEYWORDS):
        return Country.PH
    if source_sheet in US_SHEETS:
        return Country.US
    if source_sheet in PH_SHEETS:
        return Country.PH
    if address:
        # Ambiguous addresses default to the primary market.
        return Country.PH
    return ""


def infer_city(address: str) -> str:
    address = (address or "").strip()
    if not address:
        return ""
    return address.split(",", 1)[0].strip()


def social_score(fb="", ig="", tiktok="", website="") -> int:
    """Number of non-blank social/website links, 0 to 4."""
    return sum(1 for value in (fb, ig, tiktok, website) if not _blank(value))


def classify_stage(status_notes: str, result: str, source_sheet: str) -> str:
    """Map notes and sheet provenance to one pipeline :class:`Stage`."""
    text = f"{status_notes or ''} {result or ''}".lower()

    if source_sheet == SourceSheet.PH_CONFIRMED:
        if "sample" in text and "received" in text:
            return Stage.SAMPLE_RECEIVED
        if "shipped" in text or "lbc" in text:
            return Stage.SHIPPED
        return Stage.CONFIRMED
    if source_sheet == SourceSheet.US_CONFIRMED:
        return Stage.CONFIRMED
    if source_sheet in INTERESTED_SHEETS:
        return Stage.INTERESTED
    if source_sheet == SourceSheet.PREVIOUS_CLIENTS:
        return Stage.PREVIOUS_CLIENT

    if "sample" in text and "received" in text:
        return Stage.SAMPLE_RECEIVED
    if "confirmed" in text or "will ship" in text:
        return Stage.CONFIRMED
    if "interested" in text or "replied" in text or "zoom meeting" in text:
        return Stage.INTERESTED
    if "email sent" in text or "called" in text:
        return Stage.CONTACTED
    if "no response" in text or "no answer" in text:
        return Stage.NO_RESPONSE
    if "declined" in text or "closed" in text:
        return Stage.DECLINED
    return Stage.NEW


def needs_followup(status_notes: str, calls_update: str = "") -> bool:
    text = f"{status_notes or ''} {calls_update or ''}".lower()
    return any(keyword in text for keyword in FOLLOWUP_KEYWORDS)


def extract_dates(text: str) -> list[str]:
    """Date-like substrings in *text*, deduplicated, first occurrence kept.

    Numeric dates (``3/14``, ``3/14/2024``) come before month-name dates
    (``Mar 14``).
    """
    found: list[str] = []
    for pattern in DATE_PATTERNS:
        for match in pattern.finditer(text or ""):
            value = match.group(0)
            if value not in found:
                found.append(value)
    return found


def derive_fields(record: dict, source_sheet: str) -> dict:
    """Return the derived columns for a normalized row."""
    status_notes = record.get("status_notes", "")
    calls_update = record.get("calls_update", "")
    address = record.get("address", "")
    return {
        "country": infer_country(address, source_sheet),
        "city": infer_city(address),
        "social_score": social_score(*(record.get(field, "") for field in SOCIAL_FIELDS)),
        "stage": classify_stage(status_notes, record.get("result", ""), source_sheet),
        "needs_followup": needs_followup(status_notes, calls_update),
        "last_activity_dates": extract_dates(f"{status_notes} {calls_update}"),
    }
