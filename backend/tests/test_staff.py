from tests.conftest import auth_headers


def test_staff_endpoints_require_manager(client, seed_users):
    headers = auth_headers(client, "staff1@example.com")
    assert client.get("/api/staff", headers=headers).status_code == 403
    assert client.get("/api/staff/status", headers=headers).status_code == 403


def test_list_staff_sorted_by_name(client, seed_users):
    headers = auth_headers(client, "manager@example.com")
    resp = client.get("/api/staff", headers=headers)
    assert resp.status_code == 200
    assert [u["name"] for u in resp.json()] == ["Hanako", "Ichiro"]


def test_create_staff_validation(client, seed_users):
    headers = auth_headers(client, "manager@example.com")
    bad_email = client.post("/api/staff", json={"email": "not-an-email", "name": "Taro"}, headers=headers)
    assert bad_email.status_code == 400
    short_name = client.post("/api/staff", json={"email": "t@example.com", "name": "T"}, headers=headers)
    assert short_name.status_code == 400
    duplicate = client.post("/api/staff", json={"email": "Staff1@example.com", "name": "Dup"}, headers=headers)
    assert duplicate.status_code == 409

    created = client.post(
        "/api/staff", json={"email": "taro@example.com", "name": " Taro ", "phone": "090"}, headers=headers
    )
    assert created.status_code == 200
    assert created.json()["role"] == "staff"
    assert created.json()["name"] == "Taro"


def test_toggle_active_flags(client, seed_users):
    headers = auth_headers(client, "manager@example.com")
    staff_id = seed_users["staff2"].user_id

    resp = client.patch(f"/api/staff/{staff_id}/active", json={"active": False}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["is_active"] is False

    resp = client.patch(f"/api/staff/{staff_id}/next-day-active", json={"next_day_active": False}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["next_day_active"] is False

    invalid = client.patch(f"/api/staff/{staff_id}/active", json={"active": "yes"}, headers=headers)
    assert invalid.status_code == 400
    assert invalid.json()["code"] == "VALIDATION_ERROR"

    missing = client.patch("/api/staff/9999/active", json={"active": True}, headers=headers)
    assert missing.status_code == 404

    manager_id = seed_users["manager"].user_id
    not_staff = client.patch(f"/api/staff/{manager_id}/active", json={"active": False}, headers=headers)
    assert not_staff.status_code == 404


def test_status_board_aggregates_today(client, seed_users):
    staff_headers = auth_headers(client, "staff1@example.com")
    client.post("/api/attendance/wake-up", json={"timestamp": "2024-06-01T06:00:00Z"}, headers=staff_headers)
    client.post("/api/reports/daily", json={"content": "done"}, headers=staff_headers)

    resp = client.get("/api/staff/status", headers=auth_headers(client, "manager@example.com"))
    assert resp.status_code == 200
    body = resp.json()
    assert body["work_date"] == "2024-06-01"
    assert body["stats"] == {"totalStaff": 2, "activeToday": 1, "completedReports": 1, "activityRate": 50}

    first, second = body["staff"]
    assert first["user"]["email"] == "staff1@example.com"
    assert first["activityScore"] == 2
    assert first["lastLogin"] is not None
    assert second["todayAttendance"] is None
    assert second["lastLogin"] is None


def test_staff_history(client, seed_users):
    staff_headers = auth_headers(client, "staff1@example.com")
    client.post("/api/attendance/complete-day", headers=staff_headers)
    client.post("/api/attendance/start-new-day", headers=staff_headers)

    staff_id = seed_users["staff"].user_id
    resp = client.get(f"/api/staff/{staff_id}/history", headers=auth_headers(client, "manager@example.com"))
    assert resp.status_code == 200
    assert [r["status"] for r in resp.json()] == ["active", "reset"]
