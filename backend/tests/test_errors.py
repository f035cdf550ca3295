"""입력 검증 오류 응답과 저장소 오류/보조 쓰기 실패 처리 회귀 테스트입니다."""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query

from app.models.attendance import AttendanceRecord
from app.models.report import DailyReport, PreviousDayReport
from app.services import attendance_service
from tests.conftest import TODAY, auth_headers


def _fail(*args, **kwargs):
    raise SQLAlchemyError("database is locked")


def test_non_string_timestamp_is_invalid_time_format(client, db, seed_users):
    headers = auth_headers(client, "staff1@example.com")
    resp = client.post("/api/attendance/wake-up", json={"timestamp": 1717200000}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_TIME_FORMAT"
    assert db.query(AttendanceRecord).count() == 0


def test_badly_typed_fields_are_validation_errors(client, db, seed_users):
    headers = auth_headers(client, "staff1@example.com")

    link = client.post(
        "/api/attendance/link-previous-day",
        json={"attendance_record_id": 1, "report_date": "bogus"},
        headers=headers,
    )
    assert link.status_code == 400
    assert link.json()["code"] == "VALIDATION_ERROR"
    assert "report_date" in link.json()["detail"]

    report = client.post("/api/reports/daily", json={"content": "work", "workHours": "lots"}, headers=headers)
    assert report.status_code == 400
    assert report.json()["code"] == "VALIDATION_ERROR"
    assert db.query(DailyReport).count() == 0

    status = client.get("/api/attendance/link-previous-day?date=not-a-date", headers=headers)
    assert status.status_code == 400
    assert status.json()["code"] == "VALIDATION_ERROR"


def test_storage_failure_is_rendered_as_storage_error(client, seed_users, monkeypatch):
    headers = auth_headers(client, "staff1@example.com")
    monkeypatch.setattr(attendance_service, "get_current_record", _fail)

    resp = client.post("/api/attendance/complete-day", headers=headers)
    assert resp.status_code == 500
    assert resp.json() == {"detail": "データベース処理に失敗しました", "code": "STORAGE_ERROR"}


def test_complete_day_survives_report_transition_failure(client, db, seed_users, monkeypatch):
    headers = auth_headers(client, "staff1@example.com")
    staff_id = seed_users["staff"].user_id
    draft = DailyReport(staff_id=staff_id, date=TODAY, content="work", status="draft")
    db.add(draft)
    db.commit()
    db.refresh(draft)

    monkeypatch.setattr(Query, "update", _fail)
    resp = client.post("/api/attendance/complete-day", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["record"]["status"] == "complete"

    db.expire_all()
    assert db.get(DailyReport, draft.id).status == "draft"
    records = db.query(AttendanceRecord).filter(AttendanceRecord.staff_id == staff_id).all()
    assert [r.status for r in records] == ["complete"]


def test_previous_day_submission_survives_archive_failure(client, db, seed_users, monkeypatch):
    headers = auth_headers(client, "staff1@example.com")
    client.post("/api/attendance/wake-up", json={"timestamp": "2024-06-01T06:00:00Z"}, headers=headers)

    monkeypatch.setattr(attendance_service, "get_current_record", _fail)
    monkeypatch.setattr(Query, "update", _fail)
    resp = client.post(
        "/api/attendance/previous-day",
        json={
            "next_wake_up_time": "06:00",
            "next_departure_time": "07:00",
            "next_arrival_time": "08:00",
            "appearance_photo_url": "a.jpg",
            "route_photo_url": "r.png",
        },
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["report_date"] == "2024-06-02"

    db.expire_all()
    assert db.query(PreviousDayReport).count() == 1
    assert db.query(AttendanceRecord).one().status == "partial"
