# File: login_portal/services/auth_service.py

"""
Registration and login.

Both operations are stateless: they validate the request, talk to the
AccountStore they are given, and return the public view of the account.
Store failures are logged here and surfaced as InternalError so no
database detail reaches the caller.
"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from login_portal.core.security import (
    DEFAULT_ROUNDS,
    burn_password_check,
    hash_password,
    verify_password,
)
from login_portal.models.account import Account
from login_portal.schemas.account import (
    AccountCreate,
    ClientInfo,
    LoginRequest,
    RegisteredUser,
    RegisterRequest,
    UserPublic,
)
from login_portal.services.account_store import AccountStore
from login_portal.services.errors import (
    ConstraintViolation,
    DuplicateAccount,
    InternalError,
    InvalidCredentials,
    TransactionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def register_user(
    store: AccountStore,
    payload: RegisterRequest,
    *,
    client_info: Optional[ClientInfo] = None,
    bcrypt_rounds: int = DEFAULT_ROUNDS,
) -> RegisteredUser:
    """
    Create a new account.

    Steps:
      - all of fullName / email / username / password must be non-empty
      - password must be at least MIN_PASSWORD_LENGTH characters
      - friendly duplicate check (the unique constraints still decide)
      - transactional insert of the account plus its registration row
    """
    if not (payload.full_name and payload.email and payload.username and payload.password):
        raise ValidationError("All fields are required")

    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )

    try:
        if store.exists_by_email_or_username(payload.email, payload.username):
            logger.info("Registration rejected, duplicate email/username: %s", payload.username)
            raise DuplicateAccount()

        data = AccountCreate(
            full_name=payload.full_name,
            email=payload.email,
            username=payload.username,
            password_hash=hash_password(payload.password, rounds=bcrypt_rounds),
            phone=payload.phone,
            address=payload.address,
            date_of_birth=payload.date_of_birth,
        )
        account = store.create_account(data, client_info)
    except ConstraintViolation:
        # Lost a race with a concurrent registration for the same identity
        logger.info("Registration hit unique constraint: %s", payload.username)
        raise DuplicateAccount()
    except (TransactionError, SQLAlchemyError):
        logger.exception("Registration failed for %s", payload.username)
        raise InternalError()

    logger.info("Registered account id=%s username=%s", account.id, account.username)
    return RegisteredUser.from_account(account)


def _lookup(store: AccountStore, identifier: str) -> Optional[Account]:
    return store.find_by_username(identifier) or store.find_by_email(identifier)


def authenticate_user(
    store: AccountStore,
    payload: LoginRequest,
    *,
    bcrypt_rounds: int = DEFAULT_ROUNDS,
) -> UserPublic:
    """
    Check a username-or-email plus password.

    Unknown identifier and wrong password raise the same InvalidCredentials.
    """
    if not (payload.username and payload.password):
        raise ValidationError("Username and password are required")

    try:
        account = _lookup(store, payload.username)
    except SQLAlchemyError:
        logger.exception("Login lookup failed")
        raise InternalError()

    if account is None:
        burn_password_check(payload.password, rounds=bcrypt_rounds)
        logger.warning("Login failed: unknown identifier")
        raise InvalidCredentials()

    if not verify_password(payload.password, account.password_hash):
        logger.warning("Login failed: bad password for account id=%s", account.id)
        raise InvalidCredentials()

    logger.info("Login succeeded for account id=%s", account.id)
    return UserPublic.from_account(account)
