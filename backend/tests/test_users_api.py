from __future__ import annotations

from app.models import User
from app.seed.seed_data import seed_users


def test_list_users_empty(client):
    response = client.get("/users")

    assert response.status_code == 200
    assert response.json() == []


def test_create_user_and_list(client):
    payload = {"username": "Maria", "password": "geheim", "full_name": "Maria Muster", "role": "admin"}

    create_response = client.post("/users", json=payload)

    assert create_response.status_code == 201
    created = create_response.json()
    assert created["username"] == "Maria"
    assert created["full_name"] == "Maria Muster"
    assert created["role"] == "admin"
    assert created["id"] > 0
    assert "password" not in created and "hashed_password" not in created

    users = client.get("/users").json()
    assert [u["username"] for u in users] == ["Maria"]


def test_create_user_duplicate_username_rejected_case_insensitive(client):
    payload = {"username": "Udo", "password": "abcd", "full_name": "Udo Ditges"}

    first = client.post("/users", json=payload)
    second = client.post("/users", json={**payload, "username": "UDO"})

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["detail"] == "User already exists"


def test_change_password(client, db_session):
    seed_users(db_session)
    db_session.commit()

    response = client.put("/users/ralf/password", json={"password": "neues"})

    assert response.status_code == 200
    assert client.post("/auth/login", json={"username": "Ralf", "password": "neues"}).status_code == 200
    assert client.post("/auth/login", json={"username": "Ralf", "password": "JANSEN"}).status_code == 401


def test_change_password_too_short(client, db_session):
    seed_users(db_session)
    db_session.commit()

    response = client.put("/users/Ralf/password", json={"password": "abc"})

    assert response.status_code == 422


def test_change_password_unknown_user(client):
    response = client.put("/users/nobody/password", json={"password": "abcd"})

    assert response.status_code == 404


def test_seed_users_only_into_empty_table(db_session):
    assert seed_users(db_session) == 13
    db_session.commit()
    assert seed_users(db_session) == 0

    admin = db_session.query(User).filter(User.username == "Ahmed").one()
    assert admin.role == "admin"
    assert admin.full_name == "Ahmed Al-Dajani"
