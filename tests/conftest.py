import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from login_portal.core.config import Settings
from login_portal.db.init_db import drop_db
from login_portal.main import create_application
from login_portal.models.registration import RegistrationMetadata
from login_portal.services.account_store import AccountStore


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        database_url_override="sqlite://",
        bcrypt_rounds=4,
        create_tables_on_startup=True,
        admin_token=None,
        static_dir=str(tmp_path / "no-login-form"),
        todo_dir=str(tmp_path / "no-todo-list"),
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def app(settings):
    return create_application(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan, which creates the tables
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db(client, app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()
        drop_db(app.state.engine)


@pytest.fixture
def store(db):
    return AccountStore(db)


def row_counts(db):
    db.expire_all()
    accounts = AccountStore(db).count()
    metadata = db.scalar(select(func.count()).select_from(RegistrationMetadata))
    return accounts, metadata


ANN = {
    "fullName": "Ann Lee",
    "email": "ann@x.com",
    "username": "annl",
    "password": "secret1",
}
