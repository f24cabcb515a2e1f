"""Tests for the project, QTO item and spreadsheet routes."""

from io import BytesIO

import openpyxl
import pytest

from qto.interfaces.api.spreadsheets import XLSX_MEDIA_TYPE


@pytest.fixture
def manager_client(login_as, manager):
    return login_as(manager)


def _create_project(client, **fields):
    body = {"project_name": "Harbor Bridge Retrofit"}
    body.update(fields)
    response = client.post("/projects", json=body)
    assert response.status_code == 201, response.text
    return response.json()["project_id"]


class TestProjectRoutes:
    def test_create_and_read(self, manager_client, manager):
        project_id = _create_project(manager_client, project_number="HB-01", currency="EUR")

        project = manager_client.get(f"/projects/{project_id}").json()

        assert project["project_name"] == "Harbor Bridge Retrofit"
        assert project["project_number"] == "HB-01"
        assert project["project_status"] == "Planning"
        assert project["currency"] == "EUR"
        assert project["created_by_id"] == manager.user_id

    def test_missing_name_error_shape(self, manager_client):
        response = manager_client.post("/projects", json={"client_name": "Nameless"})

        assert response.status_code == 422
        assert response.json() == {
            "message": "Project Name is required.",
            "type": "error",
            "code": "ValidationError",
            "errors": {"project_name": "Project Name is required."},
            "path": "/projects",
        }

    def test_invalid_status_rejected(self, manager_client):
        response = manager_client.post("/projects", json={"project_name": "X", "project_status": "Dreaming"})

        body = response.json()
        assert response.status_code == 422
        assert body["type"] == "error"
        assert "project_status" in body["errors"]

    def test_duplicate_number(self, manager_client):
        _create_project(manager_client, project_number="HB-01")

        response = manager_client.post("/projects", json={"project_name": "Again", "project_number": "HB-01"})

        assert response.status_code == 409
        assert response.json()["message"] == "Project Number must be unique."

    def test_foreign_project_looks_missing(self, manager_client, login_as, other_user):
        project_id = _create_project(manager_client)

        client = login_as(other_user)

        assert client.get(f"/projects/{project_id}").status_code == 404
        assert client.put(f"/projects/{project_id}", json={"project_name": "Mine"}).status_code == 404
        assert client.delete(f"/projects/{project_id}").status_code == 404
        assert client.get("/projects").json() == []

    def test_admin_sees_all(self, manager_client, login_as, admin):
        _create_project(manager_client)

        projects = login_as(admin).get("/projects").json()

        assert [p["project_name"] for p in projects] == ["Harbor Bridge Retrofit"]

    def test_update_and_delete(self, manager_client):
        project_id = _create_project(manager_client)

        update = manager_client.put(f"/projects/{project_id}", json={"project_status": "In Progress"})
        assert update.status_code == 200
        assert manager_client.get(f"/projects/{project_id}").json()["project_status"] == "In Progress"

        delete = manager_client.delete(f"/projects/{project_id}")
        assert delete.status_code == 200
        assert manager_client.get(f"/projects/{project_id}").status_code == 404


class TestItemRoutes:
    def test_create_list_update_delete(self, manager_client):
        project_id = _create_project(manager_client)

        created = manager_client.post(
            f"/projects/{project_id}/items",
            json={"item_description": "Rebar", "quantity": 3, "unit": "TON", "unit_rate": 900, "total_cost": 1},
        )
        assert created.status_code == 201
        item_id = created.json()["qto_item_id"]

        items = manager_client.get(f"/projects/{project_id}/items").json()
        assert len(items) == 1
        assert items[0]["total_cost"] == 2700

        updated = manager_client.put(f"/projects/items/{item_id}", json={"quantity": 4})
        assert updated.json()["project_id"] == project_id
        assert manager_client.get(f"/projects/{project_id}/items").json()[0]["total_cost"] == 3600

        deleted = manager_client.delete(f"/projects/items/{item_id}")
        assert deleted.json()["project_id"] == project_id
        assert manager_client.get(f"/projects/{project_id}/items").json() == []

    def test_missing_description(self, manager_client):
        project_id = _create_project(manager_client)

        response = manager_client.post(f"/projects/{project_id}/items", json={"quantity": 1})

        assert response.status_code == 422
        assert response.json()["code"] == "ValidationError"

    def test_foreign_items_forbidden(self, manager_client, login_as, other_user):
        project_id = _create_project(manager_client)

        client = login_as(other_user)

        assert client.get(f"/projects/{project_id}/items").status_code == 403
        response = client.post(f"/projects/{project_id}/items", json={"item_description": "Sneaky"})
        assert response.status_code == 403
        assert response.json()["type"] == "error"

    def test_unknown_item(self, manager_client):
        response = manager_client.delete("/projects/items/999")

        assert response.status_code == 404


class TestSpreadsheetRoutes:
    def test_export(self, manager_client):
        project_id = _create_project(manager_client, project_name="Café Annex")
        manager_client.post(f"/projects/{project_id}/items", json={"item_description": "Tiles", "quantity": 2, "unit_rate": 5})

        response = manager_client.get(f"/projects/{project_id}/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(XLSX_MEDIA_TYPE)
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="QTO_Export_Caf.Annex_')
        assert "filename*=UTF-8''QTO_Export_Caf%C3%A9.Annex_" in disposition
        workbook = openpyxl.load_workbook(BytesIO(response.content))
        assert workbook["Summary"]["B5"].value == 10

    def test_export_foreign_project_forbidden(self, manager_client, login_as, other_user):
        project_id = _create_project(manager_client)

        assert login_as(other_user).get(f"/projects/{project_id}/export").status_code == 403

    def test_import(self, manager_client, build_xlsx, qto_header):
        project_id = _create_project(manager_client)
        content = build_xlsx([qto_header, ["03 30 00", "Concrete slab", "10", "CY", "150"]])

        response = manager_client.post(
            f"/projects/{project_id}/import",
            files={"file": ("takeoff.xlsx", content, XLSX_MEDIA_TYPE)},
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "1 QTO items imported successfully!",
            "type": "success",
            "items_added": 1,
            "errors": [],
        }
        assert manager_client.get(f"/projects/{project_id}/items").json()[0]["total_cost"] == 1500

    def test_import_rejects_other_formats(self, manager_client):
        project_id = _create_project(manager_client)

        response = manager_client.post(
            f"/projects/{project_id}/import",
            files={"file": ("takeoff.csv", b"Description\nSlab\n", "text/csv")},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Only .xlsx files are accepted."

    def test_import_without_description_column(self, manager_client, build_xlsx):
        project_id = _create_project(manager_client)
        content = build_xlsx([["Quantity"], [4]])

        response = manager_client.post(
            f"/projects/{project_id}/import",
            files={"file": ("takeoff.xlsx", content, XLSX_MEDIA_TYPE)},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "ParseError"
