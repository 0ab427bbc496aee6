# File: login_portal/services/account_store.py

"""
Account store.

All reads and writes of the users / registration_info tables go through
AccountStore. A store wraps one SQLAlchemy session; the API builds one
per request and closes the session when the request ends.
"""

import logging
from datetime import datetime, time, timedelta, timezone
from typing import List, NamedTuple, Optional

from sqlalchemy import case, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from login_portal.models.account import Account
from login_portal.models.registration import RegistrationMetadata
from login_portal.schemas.account import AccountCreate, ClientInfo, RegistrationStats
from login_portal.services.errors import ConstraintViolation, TransactionError

logger = logging.getLogger(__name__)


class AccountIdentity(NamedTuple):
    id: int
    email: str
    username: str


def _window_start(days: int, now: Optional[datetime] = None) -> datetime:
    """Midnight (UTC) of today minus ``days``."""
    now = now or datetime.now(timezone.utc)
    return datetime.combine(now.date() - timedelta(days=days), time.min, tzinfo=timezone.utc)


class AccountStore:
    def __init__(self, db: Session):
        self.db = db

    def _accounts(self):
        return select(Account).options(selectinload(Account.registration))

    # ---------- writes ----------

    def create_account(self, data: AccountCreate, client_info: Optional[ClientInfo] = None) -> Account:
        """
        Insert the account and its registration metadata in one transaction.

        Raises ConstraintViolation when the email or username is taken,
        TransactionError for any other failure. Either way nothing is
        left behind.
        """
        client_info = client_info or ClientInfo()

        account = Account(
            full_name=data.full_name,
            email=data.email,
            username=data.username,
            password_hash=data.password_hash,
            phone=data.phone,
            address=data.address,
            date_of_birth=data.date_of_birth,
        )

        try:
            self.db.add(account)
            try:
                self.db.flush()
            except IntegrityError as exc:
                raise ConstraintViolation(
                    f"email or username already exists: {data.email!r} / {data.username!r}"
                ) from exc

            account.registration = RegistrationMetadata(
                registration_source=client_info.source,
                ip_address=client_info.ip_address,
                user_agent=client_info.user_agent,
            )
            self.db.flush()
            self.db.commit()
        except ConstraintViolation:
            self.db.rollback()
            raise
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise TransactionError(f"registration transaction failed: {exc}") from exc

        logger.debug("Created account id=%s", account.id)
        return account

    # ---------- lookups ----------

    def get(self, account_id: int) -> Optional[Account]:
        return self.db.scalars(self._accounts().where(Account.id == account_id)).first()

    def find_by_email(self, email: str) -> Optional[Account]:
        return self.db.scalars(self._accounts().where(Account.email == email)).first()

    def find_by_username(self, username: str) -> Optional[Account]:
        return self.db.scalars(self._accounts().where(Account.username == username)).first()

    def exists_by_email_or_username(self, email: str, username: str) -> List[AccountIdentity]:
        rows = self.db.execute(
            select(Account.id, Account.email, Account.username).where(
                or_(Account.email == email, Account.username == username)
            )
        ).all()
        return [AccountIdentity(*row) for row in rows]

    def list_all(self) -> List[Account]:
        stmt = self._accounts().order_by(Account.created_at.desc(), Account.id.desc())
        return list(self.db.scalars(stmt))

    def search(self, term: str) -> List[Account]:
        stmt = (
            self._accounts()
            .where(
                or_(
                    Account.full_name.icontains(term, autoescape=True),
                    Account.email.icontains(term, autoescape=True),
                    Account.username.icontains(term, autoescape=True),
                )
            )
            .order_by(Account.created_at.desc(), Account.id.desc())
        )
        return list(self.db.scalars(stmt))

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(Account)) or 0

    # ---------- stats ----------

    def registration_stats(self, now: Optional[datetime] = None) -> RegistrationStats:
        last_7 = _window_start(7, now)
        last_30 = _window_start(30, now)

        stmt = select(
            func.count(Account.id),
            func.count(case((RegistrationMetadata.is_verified.is_(True), 1))),
            func.count(case((RegistrationMetadata.is_verified.is_(False), 1))),
            func.count(case((Account.created_at >= last_7, 1))),
            func.count(case((Account.created_at >= last_30, 1))),
        ).select_from(Account).outerjoin(
            RegistrationMetadata, RegistrationMetadata.user_id == Account.id
        )

        total, verified, unverified, week, month = self.db.execute(stmt).one()
        return RegistrationStats(
            total_users=total,
            verified_users=verified,
            unverified_users=unverified,
            users_last_7_days=week,
            users_last_30_days=month,
        )
