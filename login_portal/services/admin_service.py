# File: login_portal/services/admin_service.py

"""Read-only account views for the admin panel."""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from login_portal.schemas.account import AccountSearchItem, AccountSummary, RegistrationStats
from login_portal.services.account_store import AccountStore
from login_portal.services.errors import InternalError, ValidationError

logger = logging.getLogger(__name__)


def list_users(store: AccountStore) -> List[AccountSummary]:
    try:
        accounts = store.list_all()
    except SQLAlchemyError:
        logger.exception("Listing accounts failed")
        raise InternalError()
    return [AccountSummary.from_account(a) for a in accounts]


def search_users(store: AccountStore, term: str | None) -> List[AccountSearchItem]:
    if not term:
        raise ValidationError("Search query is required")
    try:
        accounts = store.search(term)
    except SQLAlchemyError:
        logger.exception("Account search failed")
        raise InternalError()
    return [AccountSearchItem.from_account(a) for a in accounts]


def registration_stats(store: AccountStore) -> RegistrationStats:
    try:
        return store.registration_stats()
    except SQLAlchemyError:
        logger.exception("Computing registration stats failed")
        raise InternalError()
