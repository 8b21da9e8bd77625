from datetime import datetime

from models import db
from models.employee import Employee
from models.employee_detail import EmployeeDetail
from services import employee_service


def _url(employee):
    return f"/api/employees/{employee['id']}"


def test_show_unknown_employee_is_404(client):
    response = client.get("/api/employees/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404
    assert response.get_json() == {"success": False, "message": "Employee not found."}


def test_update_only_supplied_fields(client, created_employee):
    response = client.put(_url(created_employee), json={"name": "Aman K. Sharma"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Employee updated successfully."
    data = body["data"]
    assert data["name"] == "Aman K. Sharma"
    assert data["email"] == created_employee["email"]
    assert data["department"] == created_employee["department"]
    assert data["details"] == created_employee["details"]


def test_patch_moves_employee_to_other_department(client, created_employee, other_department):
    response = client.patch(_url(created_employee), json={"department_id": other_department.id})

    assert response.status_code == 200
    assert response.get_json()["data"]["department"] == {"id": other_department.id, "name": "Finance"}


def test_update_details_keeps_address_when_omitted(client, created_employee):
    payload = {
        "details": {
            "designation": "Staff Engineer",
            "salary": 72000,
            "joined_date": "2022-06-01",
        }
    }

    response = client.put(_url(created_employee), json=payload)

    assert response.status_code == 200
    assert response.get_json()["data"]["details"] == {
        "designation": "Staff Engineer",
        "salary": 72000.0,
        "address": "123 Main Street, Delhi",
        "joined_date": "2022-06-01",
    }


def test_incomplete_details_are_rejected(client, created_employee):
    response = client.put(_url(created_employee), json={"details": {"designation": "Lead"}})

    assert response.status_code == 422
    errors = response.get_json()["data"]
    assert "details.salary" in errors
    assert "details.joined_date" in errors

    unchanged = client.get(_url(created_employee)).get_json()["data"]
    assert unchanged["details"] == created_employee["details"]


def test_update_rejects_null_fields(client, created_employee):
    response = client.put(_url(created_employee), json={"name": None})

    assert response.status_code == 422
    assert response.get_json()["data"]["name"] == ["This field may not be null"]


def test_update_email_conflict(client, created_employee, department, make_payload):
    other = client.post(
        "/api/employees",
        json=make_payload(department.id, name="Priya Rao", email="priya.rao@company.com"),
    ).get_json()["data"]

    response = client.put(_url(other), json={"email": created_employee["email"]})

    assert response.status_code == 422
    assert response.get_json()["data"]["email"] == ["The email has already been taken."]


def test_update_keeping_own_email_is_allowed(client, created_employee):
    response = client.put(_url(created_employee), json={"email": created_employee["email"], "name": "A. Sharma"})

    assert response.status_code == 200
    assert response.get_json()["data"]["name"] == "A. Sharma"


def test_update_unknown_department_changes_nothing(client, created_employee, department):
    response = client.put(
        _url(created_employee),
        json={"department_id": department.id + 999, "name": "Should Not Stick"},
    )

    assert response.status_code == 422
    assert response.get_json()["data"]["department_id"] == ["The selected department id is invalid."]

    current = client.get(_url(created_employee)).get_json()["data"]
    assert current["name"] == created_employee["name"]
    assert current["department"] == created_employee["department"]


def test_update_unknown_employee_is_404(client, department):
    response = client.put("/api/employees/missing", json={"name": "Nobody"})
    assert response.status_code == 404


def test_delete_is_soft(client, created_employee):
    response = client.delete(_url(created_employee))

    assert response.status_code == 200
    assert response.get_json() == {
        "success": True,
        "data": [],
        "message": "Employee deleted successfully.",
    }

    assert client.get(_url(created_employee)).status_code == 404
    assert client.get("/api/employees").get_json()["meta"]["total"] == 0

    row = db.session.get(Employee, created_employee["id"])
    assert row is not None
    assert row.deleted_at is not None
    assert db.session.query(EmployeeDetail).filter_by(employee_id=row.id).count() == 1


def test_delete_unknown_employee_is_404(client):
    response = client.delete("/api/employees/does-not-exist")

    assert response.status_code == 404
    assert response.get_json()["success"] is False


def test_delete_twice_is_404(client, created_employee):
    assert client.delete(_url(created_employee)).status_code == 200
    assert client.delete(_url(created_employee)).status_code == 404


def test_failed_update_rolls_back_every_change(client, created_employee, monkeypatch):
    def fail(*args, **kwargs):
        raise RuntimeError("detail update failed")

    monkeypatch.setattr(employee_service, "_apply_details", fail)

    payload = {
        "name": "Half Written",
        "details": {"designation": "Lead", "salary": 90000, "joined_date": "2021-03-01"},
    }
    response = client.patch(_url(created_employee), json=payload)

    assert response.status_code == 500
    assert response.get_json() == {"success": False, "message": "detail update failed"}

    current = client.get(_url(created_employee)).get_json()["data"]
    assert current["name"] == created_employee["name"]
    assert current["details"] == created_employee["details"]


def test_details_only_update_touches_employee_timestamp(client, created_employee):
    row = db.session.get(Employee, created_employee["id"])
    row.updated_at = datetime(2020, 1, 1)
    db.session.commit()

    payload = {"details": {"designation": "Staff Engineer", "salary": 72000, "joined_date": "2022-06-01"}}
    response = client.patch(_url(created_employee), json=payload)

    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["details"]["designation"] == "Staff Engineer"
    assert data["updated_at"] != "2020-01-01 00:00:00"


def test_update_with_oversized_department_id_is_validation_error(client, created_employee):
    response = client.patch(_url(created_employee), json={"department_id": 2**63})

    assert response.status_code == 422
    assert "department_id" in response.get_json()["data"]
    assert client.get(_url(created_employee)).get_json()["data"] == created_employee
