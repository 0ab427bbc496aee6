# File: login_portal/api/deps.py

from collections.abc import Generator
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from login_portal.core.config import Settings
from login_portal.core.security import tokens_match
from login_portal.services.account_store import AccountStore
from login_portal.services.errors import AdminAccessDenied


def get_settings_dep(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a SQLAlchemy session.

    The session factory lives on app.state; the session is closed when
    the request finishes, whatever the outcome.

    Usage in route functions:
        db: Session = Depends(get_db)
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_account_store(db: Session = Depends(get_db)) -> AccountStore:
    return AccountStore(db)


def require_admin(
    settings: Settings = Depends(get_settings_dep),
    x_admin_token: Optional[str] = Header(default=None),
) -> None:
    """
    Gate for the admin endpoints.

    Open when no ADMIN_TOKEN is configured.
    """
    if settings.admin_token is None:
        return
    if not tokens_match(x_admin_token, settings.admin_token):
        raise AdminAccessDenied()
