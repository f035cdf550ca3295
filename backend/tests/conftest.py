import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from app.database import Base, get_db
from app.main import app
from app.models.user import User
from app.models.worksite import Worksite, StaffAvailability
from app.utils.clock import get_current_date
from datetime import date

TEST_DB_URL = "sqlite:///./test_staff_attendance.db"
TODAY = date(2024, 6, 1)

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


def override_get_current_date():
    return TODAY


app.dependency_overrides[get_db] = override_get_db
app.dependency_overrides[get_current_date] = override_get_current_date


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def seed_users(db):
    users = {
        "manager": User(email="manager@example.com", name="Manager", role="manager"),
        "staff": User(email="staff1@example.com", name="Hanako", role="staff"),
        "staff2": User(email="staff2@example.com", name="Ichiro", role="staff"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_worksite(db, seed_users):
    site = Worksite(name="Shinjuku", address="Tokyo", description="Office renovation")
    db.add(site)
    db.flush()
    availability = StaffAvailability(staff_id=seed_users["staff"].user_id, date=TODAY, worksite_id=site.id)
    db.add(availability)
    db.commit()
    db.refresh(site)
    return site


def get_token(client, email: str) -> str:
    resp = client.post("/api/auth/login", json={"email": email})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, email: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email)}"}
