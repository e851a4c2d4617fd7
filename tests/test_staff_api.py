"""Staff compliance records over HTTP."""
from datetime import date, timedelta

import pytest

from app.models.staff_compliance import StaffCompliance


def _payload(name="Alice Driver", days=120, **extra):
    body = {
        "staff_name": name,
        "role": "Operations",
        "dbs_expiry_date": (date.today() + timedelta(days=400)).isoformat(),
        "license_expiry_date": (date.today() + timedelta(days=days)).isoformat(),
    }
    body.update(extra)
    return body


class TestAdminCrud:

    def test_create_and_read(self, client, admin_headers, admin_user):
        r = client.post("/api/v1/staff", json=_payload(), headers=admin_headers)
        assert r.status_code == 201
        body = r.json()
        assert body["id"]
        assert body["compliance_status"] == "Compliant"
        assert body["compliance_color"] == "#d4edda"
        assert body["created_by"] == admin_user.id

        got = client.get(f"/api/v1/staff/{body['id']}", headers=admin_headers)
        assert got.status_code == 200
        assert got.json()["staff_name"] == "Alice Driver"

    def test_list_is_ordered_by_name(self, client, admin_headers, make_staff):
        make_staff("Zed", 100)
        make_staff("Amy", 100)
        make_staff("Mo", 100)
        names = [s["staff_name"] for s in client.get("/api/v1/staff", headers=admin_headers).json()]
        assert names == ["Amy", "Mo", "Zed"]

    def test_partial_update(self, client, admin_headers, make_staff):
        s = make_staff("Bob", 100)
        new_expiry = (date.today() + timedelta(days=5)).isoformat()
        r = client.put(
            f"/api/v1/staff/{s.id}",
            json={"license_expiry_date": new_expiry},
            headers=admin_headers,
        )
        assert r.status_code == 200
        body = r.json()
        assert body["staff_name"] == "Bob"
        assert body["license_expiry_date"] == new_expiry
        assert body["compliance_status"] == "Expiring Soon"

    def test_delete(self, client, admin_headers, make_staff):
        s = make_staff("Carl", 100)
        assert client.delete(f"/api/v1/staff/{s.id}", headers=admin_headers).status_code == 204
        assert client.get(f"/api/v1/staff/{s.id}", headers=admin_headers).status_code == 404

    def test_missing_record(self, client, admin_headers):
        assert client.get("/api/v1/staff/nope", headers=admin_headers).status_code == 404
        assert client.put("/api/v1/staff/nope", json={}, headers=admin_headers).status_code == 404
        assert client.delete("/api/v1/staff/nope", headers=admin_headers).status_code == 404


class TestValidation:

    def test_blank_name_rejected(self, client, admin_headers):
        r = client.post("/api/v1/staff", json=_payload(name="   "), headers=admin_headers)
        assert r.status_code == 422
        assert r.json()["error"]["type"] == "validation_error"

    def test_unknown_job_title_rejected(self, client, admin_headers):
        r = client.post("/api/v1/staff", json=_payload(role="Driver"), headers=admin_headers)
        assert r.status_code == 422

    def test_bad_date_rejected_on_write(self, client, admin_headers):
        r = client.post(
            "/api/v1/staff", json=_payload(license_expiry_date="31/12/2030"), headers=admin_headers
        )
        assert r.status_code == 422

    @pytest.mark.parametrize(
        "field", ["staff_name", "role", "dbs_expiry_date", "license_expiry_date"]
    )
    def test_null_on_update_rejected(self, client, admin_headers, make_staff, field):
        s = make_staff("Dee", 100)
        r = client.put(f"/api/v1/staff/{s.id}", json={field: None}, headers=admin_headers)
        assert r.status_code == 422
        after = client.get(f"/api/v1/staff/{s.id}", headers=admin_headers).json()
        assert after["staff_name"] == "Dee"
        assert after["role"] == "Operations"

    def test_empty_update_is_a_no_op(self, client, admin_headers, make_staff):
        s = make_staff("Eve", 100)
        r = client.put(f"/api/v1/staff/{s.id}", json={}, headers=admin_headers)
        assert r.status_code == 200
        assert r.json()["staff_name"] == "Eve"


class TestFreshStatus:

    def test_status_is_recomputed_not_read_from_label(self, client, db, ops_headers, make_staff):
        s = make_staff("Dana", -3)
        # stale label must not leak into decisions or output
        s.compliance_status_label = "Compliant"
        db.commit()
        body = client.get(f"/api/v1/staff/{s.id}", headers=ops_headers).json()
        assert body["compliance_status"] == "Non-Compliant"
        assert body["compliance_color"] == "#f8d7da"

    def test_label_written_on_create(self, client, db, admin_headers):
        r = client.post("/api/v1/staff", json=_payload(days=10), headers=admin_headers)
        db.expire_all()
        row = db.get(StaffCompliance, r.json()["id"])
        assert row.compliance_status_label == "Expiring Soon"


class TestOpsIsReadOnly:

    def test_ops_can_list(self, client, ops_headers, make_staff):
        make_staff("Eve", 100)
        r = client.get("/api/v1/staff", headers=ops_headers)
        assert r.status_code == 200
        assert len(r.json()) == 1

    def test_ops_cannot_mutate(self, client, ops_headers, make_staff):
        s = make_staff("Finn", 100)
        assert client.post("/api/v1/staff", json=_payload(), headers=ops_headers).status_code == 403
        assert client.put(
            f"/api/v1/staff/{s.id}", json={"staff_name": "X"}, headers=ops_headers
        ).status_code == 403
        assert client.delete(f"/api/v1/staff/{s.id}", headers=ops_headers).status_code == 403


class TestStatusPreview:

    def test_preview_with_as_of(self, client, ops_headers):
        r = client.get(
            "/api/v1/compliance/status",
            params={"license_expiry_date": "2024-06-25", "as_of": "2024-06-01"},
            headers=ops_headers,
        )
        assert r.status_code == 200
        body = r.json()
        assert body["compliance_status"] == "Expiring Soon"
        assert body["compliance_color"] == "#fff3cd"
        assert body["as_of"] == "2024-06-01"

    def test_preview_malformed_fails_closed(self, client, ops_headers):
        r = client.get(
            "/api/v1/compliance/status",
            params={"license_expiry_date": "soon-ish"},
            headers=ops_headers,
        )
        assert r.status_code == 200
        assert r.json()["compliance_status"] == "Non-Compliant"
