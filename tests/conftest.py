"""Shared fixtures for all tests."""
from io import BytesIO

import openpyxl
import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from merchants.models import Merchant

User = get_user_model()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(
        email="admin@test.com",
        password="TestPass123!",
        name="Admin User",
        role=User.Role.ADMIN,
    )


@pytest.fixture
def editor_user(db):
    return User.objects.create_user(
        email="editor@test.com",
        password="TestPass123!",
        name="Editor User",
        role=User.Role.EDITOR,
    )


@pytest.fixture
def viewer_user(db):
    return User.objects.create_user(
        email="viewer@test.com",
        password="TestPass123!",
        name="Viewer User",
        role=User.Role.VIEWER,
    )


@pytest.fixture
def inactive_admin(db):
    return User.objects.create_user(
        email="inactive@test.com",
        password="TestPass123!",
        name="Inactive Admin",
        role=User.Role.ADMIN,
        is_active=False,
    )


@pytest.fixture
def admin_client(api_client, admin_user):
    api_client.force_authenticate(user=admin_user)
    return api_client


@pytest.fixture
def editor_client(api_client, editor_user):
    api_client.force_authenticate(user=editor_user)
    return api_client


@pytest.fixture
def viewer_client(api_client, viewer_user):
    api_client.force_authenticate(user=viewer_user)
    return api_client


@pytest.fixture
def complete_merchant(db, editor_user):
    return Merchant.objects.create(
        name="Kape Manila",
        category="Coffee",
        contact_name="Ana Cruz",
        email="ana@kape.ph",
        phone="0917 000 0000",
        business_address="12 Roxas Blvd",
        return_address="12 Roxas Blvd",
        address_country="PH",
        address_state="NCR",
        address_zip="1000",
        last_updated_by=editor_user,
    )


@pytest.fixture
def make_workbook():
    """Build an in-memory .xlsx from ``{sheet_name: [header_row, *rows]}``."""

    def _build(sheets: dict) -> BytesIO:
        wb = openpyxl.Workbook()
        wb.remove(wb.active)
        for sheet_name, rows in sheets.items():
            ws = wb.create_sheet(title=sheet_name)
            for row in rows:
                ws.append(list(row))
        buffer = BytesIO()
        wb.save(buffer)
        buffer.seek(0)
        buffer.name = "leads.xlsx"
        return buffer

    return _build
