"""
HTTP tests for package and appointment endpoints.
"""

from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from salon_packages.application.use_cases.appointment import AppointmentService
from salon_packages.application.use_cases.package_editor import PackageEditorUseCase
from salon_packages.application.use_cases.package_listing import PackageListingUseCase
from salon_packages.infrastructure.catalog.catalog_store import CatalogStore
from salon_packages.infrastructure.store.memory_store import MemoryAppointmentDraftStore, MemoryPackageStore
from salon_packages.infrastructure.store.seed_packages import DEMO_PACKAGES
from salon_packages.main import ContextFormatter, app
from salon_packages.wiring.dependencies import (
    get_appointment_service,
    get_catalog,
    get_package_editor,
    get_package_listing,
    get_package_store,
)


@pytest.fixture
def client():
    store = MemoryPackageStore(DEMO_PACKAGES)
    catalog = CatalogStore()
    drafts = MemoryAppointmentDraftStore()
    app.dependency_overrides[get_package_store] = lambda: store
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_package_editor] = lambda: PackageEditorUseCase(store=store, catalog=catalog)
    app.dependency_overrides[get_package_listing] = lambda: PackageListingUseCase(store=store)
    app.dependency_overrides[get_appointment_service] = lambda: AppointmentService(
        packages=store, catalog=catalog, drafts=drafts
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def _payload(**overrides):
    payload = {
        "name": "Hand and Foot",
        "validity": 30,
        "package_type": "Customizable",
        "min_selectable_services": 1,
        "max_selectable_services": 2,
        "extension_fee": 0,
        "available_durations": [60, 30],
        "services": [
            {"service_id": 4, "service_name": "Manicure", "sequence_number": 1, "rate": 800},
            {"service_id": 5, "service_name": "Pedicure", "sequence_number": 2, "rate": 900},
            {"service_id": 8, "service_name": "Steam Bath", "sequence_number": 3, "rate": 500, "is_selected": False},
        ],
    }
    payload.update(overrides)
    return payload


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_list_packages_with_search(client):
    response = client.get("/api/v1/packages")
    assert response.status_code == 200
    rows = response.json()
    assert [r["package_type"] for r in rows] == ["Fixed", "Customizable (3-5)"]
    assert rows[1]["extension_rule"] == "Free (Max: 1)"

    response = client.get("/api/v1/packages", params={"q": "hair spa"})
    assert [r["id"] for r in response.json()] == [2]


def test_prepaid_and_postpaid_lists(client):
    assert [p["id"] for p in client.get("/api/v1/packages/prepaid").json()] == [1]
    assert [p["id"] for p in client.get("/api/v1/packages/postpaid").json()] == [2]


def test_create_package(client):
    response = client.post("/api/v1/packages", json=_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 3
    assert body["available_durations"] == [30, 60]
    assert [s["service_name"] for s in body["services"]] == ["Manicure", "Pedicure"]

    assert client.get("/api/v1/packages/3").json()["name"] == "Hand and Foot"


def test_create_package_forces_complimentary_fee(client):
    response = client.post(
        "/api/v1/packages",
        json=_payload(is_complimentary_extension=True, extension_fee=300),
    )
    assert response.status_code == 201
    assert response.json()["extension_fee"] == 0


def test_create_invalid_package_returns_field_errors(client):
    response = client.post(
        "/api/v1/packages",
        json=_payload(name="Hand & Foot", min_selectable_services=4, max_selectable_services=2),
    )
    assert response.status_code == 422
    body = response.json()
    assert body["valid"] is False
    assert {(e["field"], e["kind"]) for e in body["errors"]} == {
        ("name", "invalid_characters"),
        ("min_selectable_services", "min_max_invalid"),
        ("max_selectable_services", "min_max_invalid"),
    }


def test_create_without_selected_services(client):
    services = [dict(s, is_selected=False) for s in _payload()["services"]]
    response = client.post("/api/v1/packages", json=_payload(services=services))
    assert response.status_code == 422
    assert response.json()["selection_errors"][0]["kind"] == "no_service_selected"


def test_validate_endpoint(client):
    ok = client.post("/api/v1/packages/validate", json=_payload()).json()
    assert ok == {"valid": True, "errors": [], "selection_errors": []}

    bad = client.post("/api/v1/packages/validate", json=_payload(validity=0)).json()
    assert bad["valid"] is False
    assert bad["errors"][0]["field"] == "validity"
    assert bad["errors"][0]["message"] == "Minimum value is 1"


def test_update_missing_package_is_404(client):
    response = client.put("/api/v1/packages/99", json=_payload())
    assert response.status_code == 404


def test_update_package(client):
    response = client.put("/api/v1/packages/2", json=_payload(name="Wellness Lite"))
    assert response.status_code == 200
    assert response.json()["id"] == 2
    assert client.get("/api/v1/packages/2").json()["name"] == "Wellness Lite"


def test_toggle_status_and_delete(client):
    assert client.post("/api/v1/packages/1/toggle-status").json()["is_active"] is False
    assert client.post("/api/v1/packages/99/toggle-status").status_code == 404
    assert client.delete("/api/v1/packages/1").status_code == 204
    assert client.delete("/api/v1/packages/1").status_code == 404
    assert client.get("/api/v1/packages/1").status_code == 404


def test_catalog_endpoints(client):
    assert len(client.get("/api/v1/services").json()) == 8
    assert len(client.get("/api/v1/outlets").json()) == 3
    assert client.get("/api/v1/clients").json()[1]["gender"] == "Female"


def test_customizable_appointment_flow(client):
    draft = client.post("/api/v1/appointments/drafts", json={"client_id": 2}).json()
    draft_id = draft["id"]

    offered = client.get(f"/api/v1/appointments/drafts/{draft_id}/packages").json()
    assert [p["id"] for p in offered] == [1, 2]

    chosen = client.put(f"/api/v1/appointments/drafts/{draft_id}/package", json={"package_id": 2}).json()
    assert chosen["is_package_appointment"] is True
    assert chosen["total_amount"] == 0

    for index in (0, 1, 2):
        result = client.post(f"/api/v1/appointments/drafts/{draft_id}/services/{index}/toggle").json()
        assert result["outcome"] == "applied"
    assert result["draft"]["total_amount"] == 4200

    result = client.post(f"/api/v1/appointments/drafts/{draft_id}/services/0/toggle").json()
    assert result["outcome"] == "rejected"
    assert result["reason"]["kind"] == "min_services_required"

    response = client.post(
        f"/api/v1/appointments/drafts/{draft_id}/submit",
        json={"appointment_date": "2026-11-02", "appointment_time": "11:00"},
    )
    assert response.status_code == 200
    assert response.json()["accepted"] is True
    assert client.get(f"/api/v1/appointments/drafts/{draft_id}").status_code == 404


def test_male_client_does_not_see_female_packages(client):
    draft = client.post("/api/v1/appointments/drafts", json={"client_id": 1}).json()
    offered = client.get(f"/api/v1/appointments/drafts/{draft['id']}/packages").json()
    assert [p["id"] for p in offered] == [1]


def test_parallel_confirmation_flow(client):
    payload = _payload(
        name="Parallel Pair",
        package_type="Fixed",
        is_booked_in_parallel=True,
        services=[dict(s, is_selected=True) for s in _payload()["services"]],
    )
    package_id = client.post("/api/v1/packages", json=payload).json()["id"]

    draft_id = client.post("/api/v1/appointments/drafts", json={"client_id": 1}).json()["id"]
    before = client.put(
        f"/api/v1/appointments/drafts/{draft_id}/package", json={"package_id": package_id}
    ).json()
    assert before["total_amount"] == 2200

    pending = client.post(f"/api/v1/appointments/drafts/{draft_id}/services/0/toggle").json()
    assert pending["outcome"] == "pending_confirmation"
    assert pending["prompt"] == "Remaining services will lapse if not availed in this appointment."

    locked = client.post(f"/api/v1/appointments/drafts/{draft_id}/services/1/toggle")
    assert locked.status_code == 409

    declined = client.post(f"/api/v1/appointments/drafts/{draft_id}/confirmation", json={"accepted": False}).json()
    assert declined["outcome"] == "rejected"
    assert declined["draft"] == before

    client.post(f"/api/v1/appointments/drafts/{draft_id}/services/0/toggle")
    accepted = client.post(f"/api/v1/appointments/drafts/{draft_id}/confirmation", json={"accepted": True}).json()
    assert accepted["outcome"] == "applied"
    assert accepted["draft"]["total_amount"] == 1400

    assert client.post(
        f"/api/v1/appointments/drafts/{draft_id}/confirmation", json={"accepted": True}
    ).status_code == 409


def test_submit_reports_errors(client):
    draft_id = client.post("/api/v1/appointments/drafts", json={}).json()["id"]
    client.put(f"/api/v1/appointments/drafts/{draft_id}/package", json={"package_id": 2})
    body = client.post(f"/api/v1/appointments/drafts/{draft_id}/submit", json={}).json()
    assert body["accepted"] is False
    assert {e["field"] for e in body["errors"]} == {"client_id", "appointment_date", "appointment_time"}
    assert body["selection_errors"][0]["kind"] == "no_service_selected"


def test_unknown_draft_and_bad_index(client):
    assert client.get("/api/v1/appointments/drafts/nope").status_code == 404
    draft_id = client.post("/api/v1/appointments/drafts", json={"client_id": 1}).json()["id"]
    client.put(f"/api/v1/appointments/drafts/{draft_id}/package", json={"package_id": 1})
    assert client.post(f"/api/v1/appointments/drafts/{draft_id}/services/9/toggle").status_code == 400
    assert client.post("/api/v1/appointments/drafts", json={"client_id": 99}).status_code == 400


def test_non_positive_durations_are_refused(client):
    response = client.post("/api/v1/packages", json=_payload(available_durations=[-15, 0, 30]))
    assert response.status_code == 422
    assert {(e["field"], e["kind"]) for e in response.json()["errors"]} == {
        ("available_durations[0]", "min"),
        ("available_durations[1]", "min"),
    }
    assert len(client.get("/api/v1/packages").json()) == 2


def test_context_formatter_appends_extra_fields():
    formatter = ContextFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("salon", logging.INFO, __file__, 1, "Package created", None, None)
    record.package_id = 3
    record.outcome = "applied"
    assert formatter.format(record) == "INFO Package created | package_id=3 outcome=applied"

    plain = logging.LogRecord("salon", logging.INFO, __file__, 1, "Started", None, None)
    assert formatter.format(plain) == "INFO Started"
