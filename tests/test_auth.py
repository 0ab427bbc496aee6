# File: tests/test_auth.py

from sqlalchemy.exc import OperationalError

from login_portal.models.account import Account
from login_portal.services.account_store import AccountStore
from login_portal.services.errors import TransactionError

from conftest import ANN, row_counts


def register(client, **overrides):
    body = dict(ANN)
    body.update(overrides)
    return client.post("/api/register", json=body)


def test_register_then_login_with_email(client):
    resp = register(client)
    assert resp.status_code == 201
    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "User registered successfully!"
    user = data["user"]
    assert user["username"] == "annl"
    assert user["fullName"] == "Ann Lee"
    assert user["email"] == "ann@x.com"
    assert "createdAt" in user
    assert "password" not in user
    assert "password_hash" not in user

    resp = client.post("/api/login", json={"username": "ann@x.com", "password": "secret1"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "Login successful!"
    assert data["user"] == {
        "id": user["id"],
        "fullName": "Ann Lee",
        "email": "ann@x.com",
        "username": "annl",
    }


def test_login_with_username(client):
    created = register(client).json()["user"]
    resp = client.post("/api/login", json={"username": "annl", "password": "secret1"})
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == created["id"]


def test_register_stores_hash_not_plaintext(client, db):
    register(client)
    account = db.query(Account).filter(Account.username == "annl").one()
    assert account.password_hash != "secret1"
    assert account.password_hash.startswith("$2")


def test_register_records_optional_fields_and_client_info(client, db):
    resp = client.post(
        "/api/register",
        json={**ANN, "phone": "555-0100", "address": "", "dateOfBirth": "1990-04-02"},
        headers={"User-Agent": "pytest-agent"},
    )
    assert resp.status_code == 201

    account = db.query(Account).filter(Account.username == "annl").one()
    assert account.phone == "555-0100"
    assert account.address is None
    assert account.date_of_birth.isoformat() == "1990-04-02"
    assert account.registration.registration_source == "web"
    assert account.registration.user_agent == "pytest-agent"
    assert account.registration.is_verified is False
    assert account.registration.verification_token is None


def test_register_missing_fields(client, db):
    for field in ("fullName", "email", "username", "password"):
        body = {k: v for k, v in ANN.items() if k != field}
        resp = client.post("/api/register", json=body)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "All fields are required"}

    resp = register(client, fullName="")
    assert resp.status_code == 400
    assert row_counts(db) == (0, 0)


def test_register_short_password_writes_nothing(client, db):
    resp = register(client, password="12345")
    assert resp.status_code == 400
    assert resp.json() == {
        "success": False,
        "message": "Password must be at least 6 characters long",
    }
    assert row_counts(db) == (0, 0)


def test_register_duplicate_email_or_username(client, db):
    assert register(client).status_code == 201

    for overrides in ({"username": "other"}, {"email": "other@x.com"}):
        resp = register(client, **overrides)
        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "message": "User with this email or username already exists",
        }

    assert row_counts(db) == (1, 1)


def test_duplicate_caught_by_unique_constraint(client, db, monkeypatch):
    # Pre-check misses, as it would when two registrations race
    assert register(client).status_code == 201
    monkeypatch.setattr(AccountStore, "exists_by_email_or_username", lambda self, e, u: [])

    resp = register(client, email="second@x.com")
    assert resp.status_code == 400
    assert resp.json()["message"] == "User with this email or username already exists"
    assert row_counts(db) == (1, 1)


def test_register_store_failure_is_internal_error(client, db, monkeypatch):
    def boom(self, data, client_info=None):
        raise TransactionError("connection reset by peer")

    monkeypatch.setattr(AccountStore, "create_account", boom)

    resp = register(client)
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}
    assert row_counts(db) == (0, 0)


def test_register_invalid_date_of_birth(client):
    resp = register(client, dateOfBirth="not-a-date")
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Invalid request body"}


def test_invalid_credentials_are_indistinguishable(client):
    register(client)

    wrong_password = client.post("/api/login", json={"username": "annl", "password": "nope123"})
    unknown_user = client.post("/api/login", json={"username": "ghost", "password": "nope123"})

    assert wrong_password.status_code == 401
    assert unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {
        "success": False,
        "message": "Invalid credentials",
    }


def test_login_missing_fields(client):
    resp = client.post("/api/login", json={"username": "annl"})
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "Username and password are required"}


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_register_over_long_fields_rejected(client, db):
    for overrides in (
        {"phone": "1" * 21},
        {"username": "u" * 51},
        {"email": "e" * 95 + "@x.com"},
        {"fullName": "N" * 101},
    ):
        resp = register(client, **overrides)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Invalid request body"}

    assert row_counts(db) == (0, 0)


def test_login_store_failure_is_internal_error(client, monkeypatch):
    register(client)

    def boom(self, username):
        raise OperationalError("SELECT ...", {}, Exception("server closed the connection"))

    monkeypatch.setattr(AccountStore, "find_by_username", boom)

    resp = client.post("/api/login", json={"username": "annl", "password": "secret1"})
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "Internal server error"}
