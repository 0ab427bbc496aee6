from fastapi import APIRouter

from login_portal.api.routes.routes_auth import router as auth_router
from login_portal.api.routes.routes_users import router as users_router


api_router = APIRouter()

api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(users_router, tags=["admin"])
