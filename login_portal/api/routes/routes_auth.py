# File: login_portal/api/routes/routes_auth.py

"""
Registration and login endpoints.

POST /api/register and POST /api/login. Failures are raised as
AccountServiceError subclasses and rendered by the handler in main.py.
"""

from fastapi import APIRouter, Depends, Request, status

from login_portal.api.deps import get_account_store, get_settings_dep
from login_portal.core.config import Settings
from login_portal.schemas.account import (
    ClientInfo,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from login_portal.services.account_store import AccountStore
from login_portal.services.auth_service import authenticate_user, register_user

router = APIRouter()


def _client_info(request: Request) -> ClientInfo:
    return ClientInfo(
        source="web",
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Register a new account",
)
def register(
    payload: RegisterRequest,
    request: Request,
    store: AccountStore = Depends(get_account_store),
    settings: Settings = Depends(get_settings_dep),
):
    user = register_user(
        store,
        payload,
        client_info=_client_info(request),
        bcrypt_rounds=settings.bcrypt_rounds,
    )
    return RegisterResponse(message="User registered successfully!", user=user)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Log in with username or e-mail",
)
def login(
    payload: LoginRequest,
    store: AccountStore = Depends(get_account_store),
    settings: Settings = Depends(get_settings_dep),
):
    user = authenticate_user(store, payload, bcrypt_rounds=settings.bcrypt_rounds)
    return LoginResponse(message="Login successful!", user=user)
