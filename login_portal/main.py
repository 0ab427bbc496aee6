# login_portal/main.py

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from login_portal.api.router import api_router
from login_portal.core.config import Settings, get_settings
from login_portal.core.logging_config import configure_logging
from login_portal.db.init_db import init_db
from login_portal.db.session import build_engine, build_session_factory
from login_portal.services.errors import AccountServiceError, InternalError

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AccountServiceError)
    async def account_error_handler(request: Request, exc: AccountServiceError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
        return _error(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return _error(InternalError.status_code, InternalError.message)


def mount_static_bundles(app: FastAPI, settings: Settings) -> None:
    # The todo-list bundle has to be mounted before the catch-all "/"
    bundles = [
        ("/todo-list", settings.todo_dir, "todo-list"),
        ("/", settings.static_dir, "login-form"),
    ]
    for path, directory, name in bundles:
        if Path(directory).is_dir():
            app.mount(path, StaticFiles(directory=directory, html=True), name=name)
        else:
            logger.info("Static bundle %s not found, %s not served", directory, path)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    engine = build_engine(settings)
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.create_tables_on_startup:
            init_db(engine)
        if settings.admin_token is None:
            logger.warning("ADMIN_TOKEN is not set; /api/users and /api/stats are unauthenticated")
        yield
        engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = session_factory

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ---------- ROUTERS ----------
    @app.get("/healthz", tags=["health"])
    def healthz():
        return {"status": "ok"}

    app.include_router(api_router, prefix="/api")

    # ---------- STATIC FILES ----------
    mount_static_bundles(app, settings)

    return app


app = create_application()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("login_portal.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
