import uuid

import pytest

from leads.models import Lead, SourceSheet, Stage
from merchants.models import Merchant

URL = "/api/v1/leads/"


@pytest.fixture
def lead(db):
    return Lead.objects.create(
        source_sheet=SourceSheet.PH_CONFIRMED,
        merchant_name="Kape Manila",
        email="ana@kape.ph",
        stage=Stage.CONFIRMED,
    )


@pytest.mark.django_db
class TestLeadReads:

    def test_requires_session(self, api_client, lead):
        response = api_client.get(URL)
        assert response.status_code == 401

    def test_list_paginated(self, viewer_client, lead):
        response = viewer_client.get(URL)

        assert response.status_code == 200
        assert response.data["success"] is True
        assert response.data["count"] == 1
        assert response.data["results"][0]["merchant_name"] == "Kape Manila"

    def test_filter_by_stage(self, viewer_client, lead):
        Lead.objects.create(source_sheet=SourceSheet.PH_NEW, merchant_name="Other")

        response = viewer_client.get(URL, {"stage": "Confirmed"})

        assert [row["merchant_name"] for row in response.data["results"]] == ["Kape Manila"]

    def test_kpis(self, viewer_client, lead):
        response = viewer_client.get(f"{URL}kpis/")

        assert response.status_code == 200
        assert response.data["kpis"]["total"] == 1
        assert response.data["kpis"]["ph_confirmed"] == 1


@pytest.mark.django_db
class TestLeadEdits:

    def test_viewer_cannot_edit(self, viewer_client, lead):
        response = viewer_client.patch(f"{URL}{lead.pk}/", {"city": "Makati"}, format="json")

        assert response.status_code == 403
        assert response.data == {"success": False, "error": "Forbidden: insufficient permissions"}

    def test_editor_patch(self, editor_client, lead):
        response = editor_client.patch(f"{URL}{lead.pk}/", {"city": "Makati", "country": "ph"}, format="json")

        assert response.status_code == 200
        assert response.data["lead"]["city"] == "Makati"
        assert response.data["lead"]["country"] == "PH"

    def test_patch_bad_country(self, editor_client, lead):
        response = editor_client.patch(f"{URL}{lead.pk}/", {"country": "JP"}, format="json")

        assert response.status_code == 400
        assert response.data["success"] is False

    def test_patch_missing_lead(self, editor_client, db):
        response = editor_client.patch(f"{URL}{uuid.uuid4()}/", {"city": "X"}, format="json")

        assert response.status_code == 404
        assert response.data == {"success": False, "error": "Not found"}

    def test_status(self, editor_client, lead):
        response = editor_client.post(f"{URL}{lead.pk}/status/", {"status": "UPLOADED"}, format="json")

        assert response.status_code == 200
        assert response.data["lead"]["shopify_status"] == "UPLOADED"

    def test_delete(self, editor_client, lead):
        response = editor_client.delete(f"{URL}{lead.pk}/")

        assert response.status_code == 200
        assert not Lead.objects.exists()

    def test_convert(self, editor_client, lead):
        response = editor_client.post(f"{URL}{lead.pk}/convert/")

        assert response.status_code == 201
        merchant = Merchant.objects.get(pk=response.data["merchant_id"])
        assert merchant.name == "Kape Manila"
        lead.refresh_from_db()
        assert lead.stage == Stage.CONVERTED


@pytest.mark.django_db
class TestLeadImport:

    def test_upload_workbook(self, editor_client, lead, make_workbook):
        source = make_workbook({
            "PH Confirmed Merchants": [
                ["Merchant Name", "Address", "Status Notes"],
                ["Habi", "Cebu City, Cebu", "sample received 3/14"],
            ],
            "US New Leads": [
                ["Merchant", "Address"],
                ["Aloha", "Honolulu, HI 96815"],
            ],
        })

        response = editor_client.post(f"{URL}import/", {"file": source}, format="multipart")

        assert response.status_code == 200
        assert response.data["count"] == 2
        assert response.data["by_sheet"] == {"PH Confirmed Merchants": 1, "US New Leads": 1}
        habi = Lead.objects.get(merchant_name="Habi")
        assert habi.stage == Stage.SAMPLE_RECEIVED
        assert habi.last_activity_dates == ["3/14"]
        assert Lead.objects.get(merchant_name="Aloha").country == "US"
        assert not Lead.objects.filter(merchant_name="Kape Manila").exists()

    def test_missing_default_workbook(self, editor_client, lead, settings, tmp_path):
        settings.LEADS_WORKBOOK_PATH = str(tmp_path / "missing.xlsx")

        response = editor_client.post(f"{URL}import/")

        assert response.status_code == 400
        assert response.data["error"].startswith("No data found")
        assert Lead.objects.count() == 1

    def test_viewer_cannot_import(self, viewer_client):
        assert viewer_client.post(f"{URL}import/").status_code == 403


@pytest.mark.django_db
class TestLeadBulk:

    def test_bulk_status(self, editor_client, lead):
        response = editor_client.post(
            f"{URL}bulk-status/", {"ids": [str(lead.pk)], "status": "LIVE"}, format="json",
        )

        assert response.status_code == 200
        assert response.data["count"] == 1

    def test_bulk_delete_needs_ids(self, editor_client):
        response = editor_client.post(f"{URL}bulk-delete/", {"ids": []}, format="json")

        assert response.status_code == 400
        assert response.data["error"] == "No leads selected"

    def test_add_confirmed_merchants(self, editor_client, lead):
        response = editor_client.post(f"{URL}add-confirmed-merchants/")

        assert response.status_code == 200
        assert (response.data["added"], response.data["skipped"]) == (1, 0)

        again = editor_client.post(f"{URL}add-confirmed-merchants/")
        assert (again.data["added"], again.data["skipped"]) == (0, 1)
