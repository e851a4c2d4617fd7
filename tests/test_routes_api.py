"""Routes, the approval gate and the one-way approval transition."""
from app.crud.route import mark_route_approved
from app.models.route import Route


class TestCreateAndList:

    def test_create_starts_unapproved(self, client, admin_headers, admin_user, make_staff):
        s = make_staff("Alice", 100)
        r = client.post(
            "/api/v1/routes",
            json={"route_name": "North Loop", "planned_journey_minutes": 30, "staff_id": s.id},
            headers=admin_headers,
        )
        assert r.status_code == 201
        body = r.json()
        assert body["approved"] is False
        assert body["approval_status"] == "Pending"
        assert body["approved_at"] is None
        assert body["staff_name"] == "Alice"
        assert body["staff_status"] == "Compliant"
        assert body["created_by"] == admin_user.id

    def test_negative_minutes_rejected(self, client, admin_headers):
        r = client.post(
            "/api/v1/routes",
            json={"route_name": "Bad", "planned_journey_minutes": -1},
            headers=admin_headers,
        )
        assert r.status_code == 422

    def test_list_ordered_with_cards(self, client, ops_headers, make_staff, make_route):
        fresh = make_staff("Fresh", 200)
        soon = make_staff("Soon", 10)
        make_route("C-long-fresh", 90, fresh.id)
        make_route("A-short", 20)
        make_route("B-long-soon", 60, soon.id)

        rows = client.get("/api/v1/routes", headers=ops_headers).json()
        assert [r["route_name"] for r in rows] == ["A-short", "B-long-soon", "C-long-fresh"]

        short, long_soon, long_fresh = rows
        assert short["staff_name"] == "Unassigned"
        assert short["requires_compliance_check"] is False
        assert short["compliance_alert"] == "Not Required"
        assert long_soon["staff_status"] == "Expiring Soon"
        assert long_soon["compliance_alert"] == "Not Compliant"
        assert long_fresh["compliance_alert"] == "Compliant"
        # ops can never approve
        assert not any(r["can_approve"] for r in rows)

    def test_admin_sees_eligibility(self, client, admin_headers, make_staff, make_route):
        soon = make_staff("Soon", 10)
        make_route("A", 45, soon.id)
        make_route("B", 46, soon.id)
        rows = client.get("/api/v1/routes", headers=admin_headers).json()
        assert [r["can_approve"] for r in rows] == [True, False]

    def test_dangling_staff_reference_is_unassigned(self, client, admin_headers, make_staff, make_route):
        s = make_staff("Gone", 200)
        route = make_route("Orphan", 90, s.id)
        client.delete(f"/api/v1/staff/{s.id}", headers=admin_headers)
        body = client.get(f"/api/v1/routes/{route.id}", headers=admin_headers).json()
        assert body["staff_id"] == s.id
        assert body["staff_name"] == "Unassigned"
        assert body["staff_status"] is None
        assert body["can_approve"] is False

    def test_ops_cannot_create_or_delete(self, client, ops_headers, make_route):
        r = make_route("X", 10)
        assert client.post(
            "/api/v1/routes",
            json={"route_name": "Y", "planned_journey_minutes": 10},
            headers=ops_headers,
        ).status_code == 403
        assert client.delete(f"/api/v1/routes/{r.id}", headers=ops_headers).status_code == 403

    def test_delete(self, client, admin_headers, make_route):
        r = make_route("X", 10)
        assert client.delete(f"/api/v1/routes/{r.id}", headers=admin_headers).status_code == 204
        assert client.get(f"/api/v1/routes/{r.id}", headers=admin_headers).status_code == 404


class TestApprove:

    def test_short_route_with_non_compliant_staff(self, client, admin_headers, admin_user, make_staff, make_route):
        s = make_staff("Expired", -10)
        route = make_route("Short", 45, s.id)
        r = client.post(f"/api/v1/routes/{route.id}/approve", headers=admin_headers)
        assert r.status_code == 200
        body = r.json()
        assert body["approved"] is True
        assert body["approval_status"] == "Approved"
        assert body["approved_at"] is not None
        assert body["approved_by"] == admin_user.id
        assert body["can_approve"] is False

    def test_long_route_with_compliant_staff(self, client, admin_headers, make_staff, make_route):
        s = make_staff("Fresh", 31)
        route = make_route("Long", 46, s.id)
        assert client.post(f"/api/v1/routes/{route.id}/approve", headers=admin_headers).status_code == 200

    def test_long_route_with_expiring_staff_denied(self, client, db, admin_headers, make_staff, make_route):
        s = make_staff("Soon", 30)
        route = make_route("Long", 46, s.id)
        r = client.post(f"/api/v1/routes/{route.id}/approve", headers=admin_headers)
        assert r.status_code == 403
        details = r.json()["error"]["details"]
        assert details["reason"] == "staff_not_compliant"
        assert details["staff_status"] == "Expiring Soon"
        db.expire_all()
        assert db.get(Route, route.id).approved is False

    def test_long_route_unassigned_denied(self, client, admin_headers, make_route):
        route = make_route("Long", 46)
        r = client.post(f"/api/v1/routes/{route.id}/approve", headers=admin_headers)
        assert r.status_code == 403
        assert r.json()["error"]["details"]["reason"] == "staff_unassigned"

    def test_ops_denied_by_policy(self, client, ops_headers, make_route):
        route = make_route("Short", 10)
        r = client.post(f"/api/v1/routes/{route.id}/approve", headers=ops_headers)
        assert r.status_code == 403
        assert r.json()["error"]["details"]["reason"] == "not_admin"

    def test_second_approval_conflicts(self, client, db, admin_headers, make_route):
        route = make_route("Short", 10)
        first = client.post(f"/api/v1/routes/{route.id}/approve", headers=admin_headers)
        stamped = first.json()["approved_at"]
        second = client.post(f"/api/v1/routes/{route.id}/approve", headers=admin_headers)
        assert second.status_code == 409
        after = client.get(f"/api/v1/routes/{route.id}", headers=admin_headers).json()
        assert after["approved_at"] == stamped

    def test_missing_route(self, client, admin_headers):
        assert client.post("/api/v1/routes/nope/approve", headers=admin_headers).status_code == 404


class TestMarkApproved:

    def test_conditional_update_only_wins_once(self, db, make_route):
        route = make_route("R", 10)
        assert mark_route_approved(db, route.id, user_id=None) is True
        assert mark_route_approved(db, route.id, user_id=None) is False
        db.expire_all()
        row = db.get(Route, route.id)
        assert row.approved is True
        assert row.approved_at is not None

    def test_unknown_id(self, db):
        assert mark_route_approved(db, "missing") is False
