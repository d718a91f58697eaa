"""
Workbook ingestion for the leads pipeline.

Reads the merchants workbook with openpyxl, maps column headers onto
Lead fields through an alias table and turns each data row into a
classified :class:`LeadRecord`.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from datetime import date, datetime

import openpyxl

from .classification import derive_fields
from .models import SourceSheet

logger = logging.getLogger("pililokal")

ZERO_WIDTH_SPACE = "\u200b"

# Fixed import order of the workbook sheets.
SHEET_ORDER = [
    SourceSheet.PH_CONFIRMED,
    SourceSheet.INTERESTED,
    SourceSheet.PH_NEW,
    SourceSheet.US_NEW,
    SourceSheet.US_INTERESTED,
    SourceSheet.US_CONFIRMED,
    SourceSheet.PREVIOUS_CLIENTS,
]

HEADER_ALIASES = {
    "Merchant Name": "merchant_name",
    "Merchant": "merchant_name",
    "Category": "category",
    "Products": "products",
    "Email": "email",
    "Contact": "contact",
    "Phone": "contact",
    "Address": "address",
    "Status Notes": "status_notes",
    "Status": "status_notes",
    "FB": "fb",
    "Fb": "fb",
    "IG": "ig",
    "Ig": "ig",
    "TikTok": "tiktok",
    "Website": "website",
    "Encoded By": "encoded_by",
    "Result": "result",
    "Results": "result",
    "Outcome": "result",
    "Call Result": "result",
    "Follow-up Result": "result",
    "Lead Result": "result",
    "Calls Update": "calls_update",
    "Followup Email": "followup_email",
    "Reach Via Socmed": "reach_via_socmed",
    "Registered Name": "registered_name",
    "Contact Person": "contact_person",
    "Designation": "designation",
    "Authorized Signatory": "authorized_signatory",
}
_ALIASES_LOWER = {header.lower(): key for header, key in HEADER_ALIASES.items()}


@dataclass
class LeadRecord:
    source_sheet: str
    merchant_name: str = ""
    category: str = ""
    products: str = ""
    email: str = ""
    contact: str = ""
    address: str = ""
    status_notes: str = ""
    fb: str = ""
    ig: str = ""
    tiktok: str = ""
    website: str = ""
    encoded_by: str = ""
    result: str = ""
    calls_update: str = ""
    followup_email: str = ""
    reach_via_socmed: str = ""
    registered_name: str = ""
    contact_person: str = ""
    designation: str = ""
    authorized_signatory: str = ""
    country: str = ""
    city: str = ""
    social_score: int = 0
    stage: str = ""
    needs_followup: bool = False
    last_activity_dates: list[str] = field(default_factory=list)

    def as_model_kwargs(self) -> dict:
        return asdict(self)


# Columns read from the sheet; anything else a header maps to is dropped.
TEXT_FIELDS = frozenset(HEADER_ALIASES.values())


@dataclass
class WorkbookParse:
    records: list[LeadRecord]
    by_sheet: dict[str, int]


def normalize_header(header) -> str:
    """Canonical field key for a raw column header.

    Exact alias match first, then a case-insensitive one; otherwise the
    trimmed header itself is returned.
    """
    cleaned = str(header if header is not None else "").replace(ZERO_WIDTH_SPACE, "").strip()
    if cleaned in HEADER_ALIASES:
        return HEADER_ALIASES[cleaned]
    return _ALIASES_LOWER.get(cleaned.lower(), cleaned)


def cell_text(value) -> str:
    """Render a cell value the way it reads in the sheet."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == datetime.min.time():
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def sheet_to_records(worksheet, source_sheet: str) -> list[LeadRecord]:
    """Convert one worksheet into classified records.

    Blank rows are skipped; rows without a merchant name are kept and
    left for the caller to filter. When several headers map to the same
    field, the right-most column wins, blank or not.
    """
    rows = worksheet.iter_rows(values_only=True)
    header_row = next(rows, None)
    if header_row is None:
        return []
    keys = [normalize_header(header) for header in header_row]

    records = []
    for row in rows:
        values = [cell_text(value) for value in row]
        if not any(values):
            continue
        raw: dict[str, str] = {}
        for key, value in zip(keys, values):
            if key in TEXT_FIELDS:
                raw[key] = value
        raw["category"] = raw.get("category", "").replace(ZERO_WIDTH_SPACE, "").strip()

        record = LeadRecord(source_sheet=source_sheet, **raw)
        for name, value in derive_fields(raw, source_sheet).items():
            setattr(record, name, value)
        records.append(record)
    return records


def find_sheet(workbook, name: str):
    """Worksheet called *name*: exact match, then case-insensitive trimmed match."""
    if name in workbook.sheetnames:
        return workbook[name]
    wanted = name.lower().strip()
    for actual in workbook.sheetnames:
        if actual.lower().strip() == wanted:
            return workbook[actual]
    return None


def parse_workbook(source) -> WorkbookParse:
    """Read every known sheet of *source* (path or file object) in fixed order.

    Missing sheets count as empty. ``by_sheet`` only lists sheets that
    produced at least one record.
    """
    workbook = openpyxl.load_workbook(source, read_only=True, data_only=True)
    try:
        records: list[LeadRecord] = []
        by_sheet: dict[str, int] = {}
        for sheet_name in SHEET_ORDER:
            worksheet = find_sheet(workbook, sheet_name)
            if worksheet is None:
                logger.debug("Sheet '%s' not found in workbook", sheet_name)
                continue
            sheet_records = sheet_to_records(worksheet, sheet_name.value)
            if sheet_records:
                by_sheet[sheet_name.value] = len(sheet_records)
            records.extend(sheet_records)
    finally:
        workbook.close()
    return WorkbookParse(records=records, by_sheet=by_sheet)
