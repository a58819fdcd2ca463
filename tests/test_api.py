"""
Clinick API - HTTP tests
========================
Tests: liveness, health, report submission + fan-out, listing/filters,
       acknowledgement, CSV export, device tokens, error envelope, CORS
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.models.report import ReportResponse
from tests.fakes import local_time, seed_report

JANE = {
    "role": "reporter",
    "patientName": "Jane",
    "location": "Zone A",
    "incident": "fall",
    "severity": "high",
    "symptoms": "dizzy",
}


# ============================================================================
# Liveness & health
# ============================================================================

class TestHealth:

    def test_root_is_plain_text(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "Clinick API is running..."

    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "healthy"

    def test_db_health(self, client):
        client.post("/report", json=JANE)
        resp = client.get("/health/db")
        assert resp.status_code == 200
        assert resp.json()["collections_count"] >= 1

    def test_db_health_unreachable(self, client, db):
        db.failure = RuntimeError("unavailable")
        resp = client.get("/health/db")
        assert resp.status_code == 503

    def test_db_health_without_resources_is_503(self, test_settings):
        # No startup: nothing initialises Firebase
        client = TestClient(create_app(settings=test_settings))

        resp = client.get("/health/db")

        assert resp.status_code == 503
        assert resp.json()["detail"] == "Database not initialized"


# ============================================================================
# Submission
# ============================================================================

class TestSubmitReport:

    def test_end_to_end(self, client):
        before = datetime.now(timezone.utc)
        resp = client.post("/report", json=JANE)

        assert resp.status_code == 201
        body = resp.json()
        assert body["ok"] is True
        assert body["id"]

        reports = client.get("/reports").json()
        first = reports[0]
        assert first["id"] == body["id"]
        for field, value in JANE.items():
            assert first[field] == value
        assert first["seen"] is False
        assert ReportResponse.model_validate(first).created_at >= before

    def test_missing_symptoms_still_succeeds(self, client):
        payload = {k: v for k, v in JANE.items() if k != "symptoms"}
        resp = client.post("/report", json=payload)

        assert resp.status_code == 201
        assert client.get("/reports").json()[0]["symptoms"] is None

    def test_submission_fans_out_push_and_mail(self, client, pushes, smtp):
        client.post("/save-token", json={"token": "device-1"})
        client.post("/report", json=JANE)

        assert len(pushes) == 1
        assert pushes[0].notification.title == "high Emergency!"
        assert len(smtp.sessions[0].sent) == 1

    def test_no_devices_means_no_push(self, client, pushes):
        resp = client.post("/report", json=JANE)
        assert resp.status_code == 201
        assert pushes == []

    def test_push_failure_does_not_fail_submission(self, client, monkeypatch, smtp):
        from app.services import notification_service

        def boom(message, dry_run=False, app=None):
            raise RuntimeError("FCM unavailable")

        monkeypatch.setattr(notification_service.messaging, "send_each_for_multicast", boom)
        client.post("/save-token", json={"token": "device-1"})
        smtp.fail_on_send = True

        resp = client.post("/report", json=JANE)

        assert resp.status_code == 201
        assert len(client.get("/reports").json()) == 1

    def test_storage_failure_is_500_envelope(self, client, db):
        db.failure = RuntimeError("write rejected")
        resp = client.post("/report", json=JANE)

        assert resp.status_code == 500
        assert resp.json() == {"ok": False, "error": "Failed to process report"}

    def test_scalar_fields_are_stored_as_text(self, client):
        resp = client.post("/report", json={"role": "reporter", "patientName": "Jane", "severity": 3, "symptoms": True})

        assert resp.status_code == 201
        first = client.get("/reports").json()[0]
        assert first["severity"] == "3"
        assert first["symptoms"] == "true"

    def test_non_scalar_field_is_400(self, client):
        resp = client.post("/report", json={**JANE, "severity": {"level": 3}})
        assert resp.status_code == 400

    def test_missing_body_is_400(self, client):
        resp = client.post("/report")
        assert resp.status_code == 400
        assert resp.json()["ok"] is False


# ============================================================================
# Listing
# ============================================================================

class TestListReports:

    def test_non_increasing_created_at(self, client):
        for name in ("A", "B", "C"):
            client.post("/report", json={**JANE, "patientName": name})

        reports = client.get("/reports").json()
        assert [r["patientName"] for r in reports] == ["C", "B", "A"]
        stamps = [ReportResponse.model_validate(r).created_at for r in reports]
        assert stamps == sorted(stamps, reverse=True)

    def test_since_filter(self, client, db):
        cutoff = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)
        seed_report(db, datetime(2025, 6, 1, 11, 0, tzinfo=timezone.utc), patient_name="old")
        seed_report(db, datetime(2025, 6, 1, 13, 0, tzinfo=timezone.utc), patient_name="new")

        resp = client.get("/reports", params={"since": cutoff.isoformat()})

        assert resp.status_code == 200
        assert [r["patientName"] for r in resp.json()] == ["new"]

    def test_month_filter(self, client, db):
        seed_report(db, local_time(2025, 3, 31, 23, 59, 59), patient_name="march")
        seed_report(db, local_time(2025, 4, 1, 0, 0, 0), patient_name="april")

        resp = client.get("/reports", params={"month": 4, "year": 2025})
        assert [r["patientName"] for r in resp.json()] == ["april"]

    def test_month_without_year_is_400(self, client):
        resp = client.get("/reports", params={"month": 4})
        assert resp.status_code == 400
        assert resp.json()["ok"] is False

    def test_both_filter_modes_is_400(self, client):
        resp = client.get("/reports", params={"month": 4, "year": 2025, "since": "2025-01-01T00:00:00Z"})
        assert resp.status_code == 400

    def test_non_integer_month_is_400(self, client):
        resp = client.get("/reports", params={"month": "april", "year": 2025})
        assert resp.status_code == 400

    def test_storage_failure_is_500(self, client, db):
        db.failure = RuntimeError("unavailable")
        resp = client.get("/reports")
        assert resp.status_code == 500
        assert resp.json() == {"ok": False, "error": "Failed to load reports"}


# ============================================================================
# Acknowledgement
# ============================================================================

class TestMarkSeen:

    def test_mark_seen(self, client):
        report_id = client.post("/report", json=JANE).json()["id"]

        resp = client.put(f"/reports/{report_id}/seen")

        assert resp.status_code == 200
        assert resp.json()["id"] == report_id
        assert resp.json()["seen"] is True
        assert client.get("/reports").json()[0]["seen"] is True

    def test_mark_seen_idempotent(self, client):
        report_id = client.post("/report", json=JANE).json()["id"]
        client.put(f"/reports/{report_id}/seen")
        resp = client.put(f"/reports/{report_id}/seen")

        assert resp.status_code == 200
        assert resp.json()["seen"] is True

    def test_unknown_id_is_404(self, client, db):
        resp = client.put("/reports/nope/seen")

        assert resp.status_code == 404
        assert resp.json()["ok"] is False
        assert client.get("/reports").json() == []


# ============================================================================
# Export
# ============================================================================

class TestExport:

    def test_export_csv(self, client, db):
        seed_report(db, local_time(2025, 3, 10, 9, 0), symptoms='He said "help"')
        seed_report(db, local_time(2025, 3, 11, 9, 0))
        seed_report(db, local_time(2025, 2, 11, 9, 0))

        resp = client.get("/export-reports", params={"month": 3, "year": 2025})

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.headers["content-disposition"] == 'attachment; filename="reports-2025-03.csv"'
        lines = resp.text.splitlines()
        assert lines[0] == "Role,Patient Name,Location,Incident,Severity,Symptoms,Date"
        assert len(lines) == 3
        assert '"He said ""help"""' in lines[2]

    @pytest.mark.parametrize("params", [{}, {"month": 3}, {"year": 2025}])
    def test_missing_month_or_year_is_400(self, client, params):
        resp = client.get("/export-reports", params=params)
        assert resp.status_code == 400
        assert resp.json() == {"ok": False, "error": "Month and year are required"}

    def test_storage_failure_is_500(self, client, db):
        db.failure = RuntimeError("unavailable")
        resp = client.get("/export-reports", params={"month": 3, "year": 2025})
        assert resp.status_code == 500


# ============================================================================
# Device tokens
# ============================================================================

class TestSaveToken:

    def test_save_token_twice_stores_one(self, client, db):
        assert client.post("/save-token", json={"token": "abc"}).json() == {"ok": True}
        assert client.post("/save-token", json={"token": "abc"}).json() == {"ok": True}
        assert len(db.data["device_tokens"]) == 1

    def test_missing_token_is_400(self, client):
        resp = client.post("/save-token", json={})
        assert resp.status_code == 400
        assert resp.json() == {"ok": False, "error": "Token is required"}

    def test_storage_failure_is_500(self, client, db):
        db.failure = RuntimeError("unavailable")
        resp = client.post("/save-token", json={"token": "abc"})
        assert resp.status_code == 500


# ============================================================================
# Wiring
# ============================================================================

class TestWiring:

    def test_cors_allows_configured_origin(self, client):
        resp = client.options("/reports", headers={
            "Origin": "https://clinick-frontend.vercel.app",
            "Access-Control-Request-Method": "GET",
        })
        assert resp.headers["access-control-allow-origin"] == "https://clinick-frontend.vercel.app"
        assert resp.headers["access-control-allow-credentials"] == "true"

    def test_cors_rejects_unknown_origin(self, client):
        resp = client.get("/", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in resp.headers

    def test_uninitialized_resources_answer_500(self, test_settings):
        app = create_app(settings=test_settings)
        # No startup: nothing initialises Firebase
        client = TestClient(app)

        resp = client.get("/reports")

        assert resp.status_code == 500
        assert resp.json() == {"ok": False, "error": "Database not initialized"}
