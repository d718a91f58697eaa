"""
Spreadsheet export of selected merchants, written with openpyxl.
"""
from __future__ import annotations

import logging
from io import BytesIO

from django.http import HttpResponse
from django.utils import timezone

import openpyxl
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from core.exceptions import ActionError

from .models import Merchant
from .services import annotate_merchant, dashboard_queryset

logger = logging.getLogger("pililokal")

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# field key -> column header, in sheet order
EXPORT_COLUMNS = {
    "name": "Name",
    "category": "Category",
    "status": "Status",
    "contact": "Contact",
    "email": "Email",
    "phone": "Phone",
    "completion_percent": "Completion %",
    "last_updated": "Last Updated",
}


def _export_values(merchant: Merchant) -> dict:
    row = annotate_merchant(merchant)
    return {
        "name": merchant.name,
        "category": merchant.category,
        "status": merchant.get_shopify_status_display(),
        "contact": merchant.contact_name,
        "email": merchant.email,
        "phone": merchant.phone,
        "completion_percent": row.completion_percent,
        "last_updated": timezone.localtime(merchant.last_updated_at).date().isoformat(),
    }


def resolve_fields(fields) -> list[str]:
    """Selected export fields in sheet order; empty selection means all."""
    if not fields:
        return list(EXPORT_COLUMNS)
    unknown = sorted(set(fields) - set(EXPORT_COLUMNS))
    if unknown:
        raise ActionError(f"Unknown export fields: {', '.join(unknown)}")
    return [key for key in EXPORT_COLUMNS if key in fields]


def build_merchants_workbook(merchants, fields=None) -> bytes:
    """Render *merchants* to xlsx bytes, one row per merchant."""
    columns = resolve_fields(fields)
    headers = [EXPORT_COLUMNS[key] for key in columns]

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Merchants"

    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")

    for col_num, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col_num, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center", vertical="center")

    for row_num, merchant in enumerate(merchants, start=2):
        values = _export_values(merchant)
        for col_num, key in enumerate(columns, 1):
            ws.cell(row=row_num, column=col_num, value=values[key])

    for col_num in range(1, len(headers) + 1):
        col_letter = get_column_letter(col_num)
        max_length = len(headers[col_num - 1])
        for row in ws.iter_rows(min_row=2, min_col=col_num, max_col=col_num):
            for cell in row:
                if cell.value is not None:
                    max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_length + 4, 50)

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def export_filename(today=None) -> str:
    today = today or timezone.localdate()
    return f"merchants-export-{today.isoformat()}.xlsx"


def export_merchants(ids, fields=None) -> HttpResponse:
    """Download response for the merchants listed in *ids*."""
    ids = [value for value in (ids or []) if value]
    if not ids:
        raise ActionError("No merchants selected")

    merchants = list(dashboard_queryset().filter(pk__in=ids).order_by("name"))
    content = build_merchants_workbook(merchants, fields)
    filename = export_filename()
    logger.info("Exported %d merchants to %s", len(merchants), filename)

    response = HttpResponse(content, content_type=XLSX_CONTENT_TYPE)
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    response["Content-Length"] = str(len(content))
    return response
