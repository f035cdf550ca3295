from datetime import datetime

from app.models.attendance import AttendanceRecord
from app.models.report import DailyReport
from tests.conftest import TODAY, auth_headers


def _at(hour):
    return datetime(TODAY.year, TODAY.month, TODAY.day, hour, 0)


def _reports(db, staff_id):
    db.expire_all()
    return (
        db.query(DailyReport)
        .filter(DailyReport.staff_id == staff_id, DailyReport.date == TODAY)
        .order_by(DailyReport.id.asc())
        .all()
    )


def test_submit_requires_content(client, db, seed_users):
    headers = auth_headers(client, "staff1@example.com")
    resp = client.post("/api/reports/daily", json={"content": "   "}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "MISSING_FIELD"
    assert _reports(db, seed_users["staff"].user_id) == []


def test_submit_twice_supersedes_earlier_report(client, db, seed_users):
    headers = auth_headers(client, "staff1@example.com")
    first = client.post("/api/reports/daily", json={"content": "first"}, headers=headers)
    second = client.post(
        "/api/reports/daily",
        json={"content": "second", "workHours": 7.5, "achievements": "done", "tomorrow": "more"},
        headers=headers,
    )
    assert first.status_code == 200 and second.status_code == 200

    reports = _reports(db, seed_users["staff"].user_id)
    assert [r.status for r in reports] == ["superseded", "submitted"]
    assert reports[1].id == second.json()["reportId"]
    assert reports[1].work_hours == 7.5
    assert reports[1].tomorrow_plan == "more"
    assert reports[1].submitted_at is not None

    active = client.get("/api/reports/daily", headers=headers).json()["report"]
    assert active["content"] == "second"


def test_get_active_report_when_none(client, seed_users):
    headers = auth_headers(client, "staff1@example.com")
    resp = client.get("/api/reports/daily", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["report"] is None


def test_submit_completes_fully_reported_cycle(client, db, seed_users):
    staff_id = seed_users["staff"].user_id
    record = AttendanceRecord(
        staff_id=staff_id,
        date=TODAY,
        status="active",
        wake_up_time=_at(6),
        departure_time=_at(7),
        arrival_time=_at(8),
        updated_at=datetime(2024, 1, 1),
    )
    db.add(record)
    db.commit()

    headers = auth_headers(client, "staff1@example.com")
    resp = client.post("/api/reports/daily", json={"content": "all done"}, headers=headers)
    assert resp.status_code == 200

    db.expire_all()
    completed = db.get(AttendanceRecord, record.id)
    assert completed.status == "complete"
    assert completed.updated_at > datetime(2024, 1, 1)
    report = db.get(DailyReport, resp.json()["reportId"])
    assert report.attendance_record_id == record.id


def test_submit_leaves_partial_cycle_open(client, db, seed_users):
    headers = auth_headers(client, "staff1@example.com")
    client.post("/api/attendance/wake-up", json={"timestamp": "2024-06-01T06:00:00Z"}, headers=headers)

    client.post("/api/reports/daily", json={"content": "half day"}, headers=headers)

    status = client.get("/api/attendance/status", headers=headers).json()
    assert status["status"]["dailyReportSubmitted"] is True
    assert status["status"]["dayCompleted"] is False
    assert status["attendanceRecord"]["status"] == "partial"


def test_history_lists_all_statuses(client, db, seed_users):
    headers = auth_headers(client, "staff1@example.com")
    client.post("/api/reports/daily", json={"content": "first"}, headers=headers)
    client.post("/api/reports/daily", json={"content": "second"}, headers=headers)

    resp = client.get("/api/reports/daily/history", headers=headers)
    assert resp.status_code == 200
    assert [r["status"] for r in resp.json()] == ["submitted", "superseded"]


def test_history_of_other_staff_requires_manager(client, seed_users):
    staff2_id = seed_users["staff2"].user_id
    denied = client.get(
        f"/api/reports/daily/history?staff_id={staff2_id}",
        headers=auth_headers(client, "staff1@example.com"),
    )
    assert denied.status_code == 403

    allowed = client.get(
        f"/api/reports/daily/history?staff_id={staff2_id}",
        headers=auth_headers(client, "manager@example.com"),
    )
    assert allowed.status_code == 200
    assert allowed.json() == []
