# File: login_portal/models/registration.py

"""
RegistrationMetadata model.

Records how and when an account was registered. The verification
columns are reserved for an e-mail verification flow and are only
ever written with their defaults for now.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from login_portal.models.base import Base, utcnow

if TYPE_CHECKING:
    from login_portal.models.account import Account

DEFAULT_REGISTRATION_SOURCE = "web"


class RegistrationMetadata(Base):
    __tablename__ = "registration_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    registration_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    registration_source: Mapped[str] = mapped_column(
        String(50),
        default=DEFAULT_REGISTRATION_SOURCE,
        server_default=DEFAULT_REGISTRATION_SOURCE,
        nullable=False,
    )
    # Long enough for a textual IPv6 address
    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    is_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    verification_token: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    verification_expires: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    account: Mapped["Account"] = relationship(back_populates="registration")
