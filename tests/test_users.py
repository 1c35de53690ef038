from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_create_user_with_defaults():
    client = TestClient(app)
    resp = client.post("/api/users", json={"fullName": "Hoda Parent", "email": "hoda@example.com", "role": "PARENT"})

    assert resp.status_code == 201
    body = resp.json()
    assert body["fullName"] == "Hoda Parent"
    assert body["role"] == "PARENT"
    assert body["status"] == "active"
    assert body["language"] == "ar"
    assert body["username"].startswith("hoda")
    assert body["avatar"].endswith(body["username"])
    assert body["educationPath"] is None


def test_duplicate_email_is_rejected():
    client = TestClient(app)
    payload = {"fullName": "Hoda Parent", "email": "hoda@example.com", "role": "PARENT", "username": "hoda"}
    assert client.post("/api/users", json=payload).status_code == 201

    resp = client.post("/api/users", json={**payload, "username": "hoda2"})
    assert resp.status_code == 400
    assert resp.json()["kind"] == "user_already_exists"


def test_invalid_role_is_rejected():
    client = TestClient(app)
    resp = client.post("/api/users", json={"fullName": "X", "email": "x@example.com", "role": "JANITOR"})
    assert resp.status_code == 422


def test_read_and_list_users():
    client = TestClient(app)
    user_id = client.post("/api/users", json={"fullName": "Salma", "email": "salma@example.com"}).json()["id"]

    resp = client.get(f"/api/users/{user_id}")
    assert resp.status_code == 200
    assert resp.json()["role"] == "STUDENT"

    listed = client.get("/api/users").json()
    assert [user["id"] for user in listed] == [user_id]

    missing = client.get("/api/users/unknown")
    assert missing.status_code == 404
    assert missing.json()["kind"] == "not_found"


def test_update_education_path():
    client = TestClient(app)
    user_id = client.post("/api/users", json={"fullName": "Salma", "email": "salma@example.com"}).json()["id"]

    resp = client.patch(
        f"/api/users/{user_id}/education-path",
        json={"educationPath": {"category": "azhar", "stage": "preparatory", "grade": "1"}},
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    user = client.get(f"/api/users/{user_id}").json()
    assert user["educationPath"] == {"category": "azhar", "stage": "preparatory", "branch": None, "grade": "1"}


def test_join_date_is_sent_as_utc():
    client = TestClient(app)
    body = client.post("/api/users", json={"fullName": "Salma", "email": "salma@example.com"}).json()
    fetched = client.get(f"/api/users/{body['id']}").json()

    join_date = datetime.fromisoformat(fetched["joinDate"])
    assert join_date.utcoffset() == timedelta(0)
