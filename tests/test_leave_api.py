import pytest
from datetime import datetime
from fastapi import status

from app.services.id_share import ID_SHARE_PATTERN

BASE = "/api/leave-requests"


def _create(client, payload, **overrides):
    response = client.post(BASE, json={**payload, **overrides})
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


def test_create_leave_request(client, valid_payload):
    """Status omitted: record comes back Pending with generated identity."""
    data = _create(client, valid_payload)
    assert data["status"] == "Pending"
    assert isinstance(data["id"], int)
    assert ID_SHARE_PATTERN.match(data["id_share"])
    assert data["leave_date"] == "2024-01-15"
    assert data["time_out"] == "09:00"
    assert data["created_at"] == data["updated_at"]


def test_create_with_status(client, valid_payload):
    data = _create(client, valid_payload, status="Rejected", location="Sembung G")
    assert data["status"] == "Rejected"
    assert data["location"] == "Sembung G"


def test_create_validation_errors_are_per_field(client, valid_payload):
    response = client.post(BASE, json={**valid_payload, "time_out": "9:60", "department_grade": "G7"})
    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    fields = {e["field"] for e in body["errors"]}
    assert fields == {"time_out", "department_grade"}
    assert client.get(BASE).json() == []


@pytest.mark.parametrize("day", ["2024-12-31", "2024-01-01"])
def test_leave_date_round_trip(client, valid_payload, day):
    created = _create(client, valid_payload, leave_date=day)
    fetched = client.get(f"{BASE}/{created['id']}").json()
    assert fetched["leave_date"] == day


def test_get_missing_returns_null(client):
    response = client.get(f"{BASE}/99999")
    assert response.status_code == 200
    assert response.json() is None


def test_list_newest_first(client, valid_payload):
    ids = [_create(client, valid_payload, employee_name=name)["id"] for name in ("A", "B", "C")]
    response = client.get(BASE)
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == list(reversed(ids))


def test_partial_update(client, valid_payload):
    created = _create(client, valid_payload)
    response = client.patch(f"{BASE}/{created['id']}", json={"status": "Approved"})
    assert response.status_code == 200
    updated = response.json()
    assert updated["status"] == "Approved"
    assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(created["updated_at"])
    for field in ("id", "id_share", "employee_name", "department_grade", "leave_date",
                  "location", "reason", "time_out", "time_back", "created_at"):
        assert updated[field] == created[field], field


def test_update_missing_returns_404(client, valid_payload):
    created = _create(client, valid_payload)
    response = client.patch(f"{BASE}/99999", json={"status": "Approved"})
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["errors"][0]["code"] == "LEAVE_REQUEST_NOT_FOUND"
    assert client.get(f"{BASE}/{created['id']}").json()["status"] == "Pending"


def test_update_rejects_invalid_values(client, valid_payload):
    created = _create(client, valid_payload)
    response = client.patch(f"{BASE}/{created['id']}", json={"time_back": "24:00", "reason": None})
    assert response.status_code == 422
    assert {e["field"] for e in response.json()["errors"]} == {"time_back", "reason"}


def test_delete_existing(client, valid_payload):
    keep = _create(client, valid_payload, employee_name="Keep")
    gone = _create(client, valid_payload, employee_name="Gone")
    response = client.delete(f"{BASE}/{gone['id']}")
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert [r["id"] for r in client.get(BASE).json()] == [keep["id"]]


def test_delete_missing(client, valid_payload):
    _create(client, valid_payload)
    response = client.delete(f"{BASE}/99999")
    assert response.status_code == 200
    assert response.json() == {"success": False, "message": "Leave request with ID 99999 not found."}
    assert len(client.get(BASE).json()) == 1


def test_options(client):
    response = client.get(f"{BASE}/options")
    assert response.status_code == 200
    assert response.json()["locations"] == ["Mambal", "Sembung G"]


@pytest.mark.parametrize("field,value", [
    ("time_back", "17:00\n"),
    ("time_out", "09:00\n"),
    ("leave_date", "2024-01-15 not a date"),
])
def test_create_rejects_values_with_trailing_text(client, valid_payload, field, value):
    response = client.post(BASE, json={**valid_payload, field: value})
    assert response.status_code == 422
    assert [e["field"] for e in response.json()["errors"]] == [field]
    assert client.get(BASE).json() == []


def test_update_missing_reports_id_in_details(client):
    response = client.patch(f"{BASE}/99999", json={"reason": "x"})
    assert response.status_code == 404
    assert response.json()["errors"][0]["details"] == {"id": 99999}
