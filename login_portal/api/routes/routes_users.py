# File: login_portal/api/routes/routes_users.py

"""
Admin panel endpoints: account listing, search and registration stats.

Guarded by require_admin (X-Admin-Token) when ADMIN_TOKEN is configured.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from login_portal.api.deps import get_account_store, require_admin
from login_portal.schemas.account import StatsResponse, UserListResponse, UserSearchResponse
from login_portal.services import admin_service
from login_portal.services.account_store import AccountStore

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/users", response_model=UserListResponse, summary="List accounts, newest first")
def list_users(store: AccountStore = Depends(get_account_store)):
    return UserListResponse(users=admin_service.list_users(store))


@router.get("/users/search", response_model=UserSearchResponse, summary="Search accounts")
def search_users(
    q: Optional[str] = None,
    store: AccountStore = Depends(get_account_store),
):
    return UserSearchResponse(users=admin_service.search_users(store, q))


@router.get("/stats", response_model=StatsResponse, summary="Registration statistics")
def stats(store: AccountStore = Depends(get_account_store)):
    return StatsResponse(stats=admin_service.registration_stats(store))
