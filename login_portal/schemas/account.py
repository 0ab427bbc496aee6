# File: login_portal/schemas/account.py

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from login_portal.models.account import Account


# -----------------------------
# Request bodies
# -----------------------------

class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Bounds mirror the users table columns
    full_name: Optional[str] = Field(default=None, alias="fullName", max_length=100)
    email: Optional[str] = Field(default=None, max_length=100)
    username: Optional[str] = Field(default=None, max_length=50)
    password: Optional[str] = None
    phone: Optional[str] = Field(default=None, max_length=20)
    address: Optional[str] = None
    date_of_birth: Optional[date] = Field(default=None, alias="dateOfBirth")

    @field_validator("phone", "address", "date_of_birth", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class LoginRequest(BaseModel):
    # "username" accepts either a username or an e-mail address
    username: Optional[str] = None
    password: Optional[str] = None


# -----------------------------
# Store inputs
# -----------------------------

class AccountCreate(BaseModel):
    full_name: str
    email: str
    username: str
    password_hash: str
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None


class ClientInfo(BaseModel):
    source: str = "web"
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# -----------------------------
# Responses
# -----------------------------

class UserPublic(BaseModel):
    """Fields of an account that may be shown back to its owner."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    full_name: str = Field(alias="fullName")
    email: str
    username: str

    @classmethod
    def from_account(cls, account: Account) -> "UserPublic":
        return cls(
            id=account.id,
            full_name=account.full_name,
            email=account.email,
            username=account.username,
        )


class RegisteredUser(UserPublic):
    created_at: datetime = Field(alias="createdAt")

    @classmethod
    def from_account(cls, account: Account) -> "RegisteredUser":
        return cls(
            id=account.id,
            full_name=account.full_name,
            email=account.email,
            username=account.username,
            created_at=account.created_at,
        )


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    user: RegisteredUser


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    user: UserPublic


class AccountSummary(BaseModel):
    """Admin listing row: account columns joined with registration_info."""

    id: int
    full_name: str
    email: str
    username: str
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[date] = None
    created_at: datetime
    updated_at: datetime
    registration_date: Optional[datetime] = None
    is_verified: Optional[bool] = None
    registration_source: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountSummary":
        reg = account.registration
        return cls(
            id=account.id,
            full_name=account.full_name,
            email=account.email,
            username=account.username,
            phone=account.phone,
            address=account.address,
            date_of_birth=account.date_of_birth,
            created_at=account.created_at,
            updated_at=account.updated_at,
            registration_date=reg.registration_date if reg else None,
            is_verified=reg.is_verified if reg else None,
            registration_source=reg.registration_source if reg else None,
        )


class AccountSearchItem(BaseModel):
    id: int
    full_name: str
    email: str
    username: str
    phone: Optional[str] = None
    created_at: datetime
    is_verified: Optional[bool] = None
    registration_source: Optional[str] = None

    @classmethod
    def from_account(cls, account: Account) -> "AccountSearchItem":
        reg = account.registration
        return cls(
            id=account.id,
            full_name=account.full_name,
            email=account.email,
            username=account.username,
            phone=account.phone,
            created_at=account.created_at,
            is_verified=reg.is_verified if reg else None,
            registration_source=reg.registration_source if reg else None,
        )


class UserListResponse(BaseModel):
    success: bool = True
    users: List[AccountSummary]


class UserSearchResponse(BaseModel):
    success: bool = True
    users: List[AccountSearchItem]


class RegistrationStats(BaseModel):
    total_users: int
    verified_users: int
    unverified_users: int
    users_last_7_days: int
    users_last_30_days: int


class StatsResponse(BaseModel):
    success: bool = True
    stats: RegistrationStats


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
