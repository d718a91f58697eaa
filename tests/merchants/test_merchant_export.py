from datetime import date
from io import BytesIO

import openpyxl
import pytest

from core.exceptions import ActionError
from merchants.export import (
    XLSX_CONTENT_TYPE,
    build_merchants_workbook,
    export_filename,
    export_merchants,
    resolve_fields,
)
from merchants.models import Merchant


def test_resolve_fields_keeps_column_order():
    assert resolve_fields(["email", "name"]) == ["name", "email"]


def test_resolve_fields_defaults_to_all():
    assert resolve_fields([])[0] == "name"
    assert len(resolve_fields(None)) == 8


def test_resolve_fields_rejects_unknown():
    with pytest.raises(ActionError, match="Unknown export fields: secret"):
        resolve_fields(["name", "secret"])


def test_export_filename():
    assert export_filename(date(2024, 3, 14)) == "merchants-export-2024-03-14.xlsx"


@pytest.mark.django_db
def test_workbook_contents(complete_merchant):
    content = build_merchants_workbook([complete_merchant], ["name", "status", "completion_percent"])

    ws = openpyxl.load_workbook(BytesIO(content)).active
    rows = list(ws.iter_rows(values_only=True))
    assert rows[0] == ("Name", "Status", "Completion %")
    assert rows[1] == ("Kape Manila", "Not Started", 20)


@pytest.mark.django_db
def test_export_response(complete_merchant):
    Merchant.objects.create(name="Not Selected")

    response = export_merchants([str(complete_merchant.pk)], ["name"])

    assert response["Content-Type"] == XLSX_CONTENT_TYPE
    assert response["Content-Disposition"].startswith('attachment; filename="merchants-export-')
    ws = openpyxl.load_workbook(BytesIO(response.content)).active
    assert [row[0] for row in ws.iter_rows(values_only=True)] == ["Name", "Kape Manila"]


@pytest.mark.django_db
def test_export_requires_selection():
    with pytest.raises(ActionError, match="No merchants selected"):
        export_merchants([], None)
