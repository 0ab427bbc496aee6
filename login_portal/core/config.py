# File: login_portal/core/config.py

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy.engine import URL

# The original deployment kept its connection settings in config.env
load_dotenv(os.getenv("CONFIG_ENV_FILE", "config.env"))


def _env(name: str, default: Optional[str] = None):
    return lambda: os.getenv(name) or default


class Settings(BaseModel):
    # Env lookups happen per instance so tests can monkeypatch os.environ
    model_config = ConfigDict(validate_default=True)

    PROJECT_NAME: str = "Login Portal API"
    VERSION: str = "0.1.0"

    port: int = Field(default_factory=_env("PORT", "3000"))
    log_level: str = Field(default_factory=_env("LOG_LEVEL", "INFO"))

    # Database
    db_host: str = Field(default_factory=_env("DB_HOST", "localhost"))
    db_port: int = Field(default_factory=_env("DB_PORT", "5433"))
    db_user: str = Field(default_factory=_env("DB_USER", "postgres"))
    db_password: str = Field(default_factory=_env("DB_PASSWORD", "1234"))
    db_name: str = Field(default_factory=_env("DB_NAME", "postgres"))
    db_connect_timeout: int = Field(default_factory=_env("DB_CONNECT_TIMEOUT", "10"))

    # Overrides the URL composed from the db_* fields when set
    database_url_override: Optional[str] = Field(default_factory=_env("DATABASE_URL"))

    create_tables_on_startup: bool = Field(
        default_factory=_env("CREATE_TABLES_ON_STARTUP", "true")
    )

    # Security
    bcrypt_rounds: int = Field(default_factory=_env("BCRYPT_ROUNDS", "12"))
    admin_token: Optional[str] = Field(default_factory=_env("ADMIN_TOKEN"))

    # Static bundles
    static_dir: str = Field(default_factory=_env("STATIC_DIR", "responsive-login-form"))
    todo_dir: str = Field(default_factory=_env("TODO_DIR", "todo-list"))

    @field_validator("bcrypt_rounds")
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("bcrypt_rounds must be between 4 and 31")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @property
    def database_url(self) -> str:
        if self.database_url_override:
            return self.database_url_override
        return URL.create(
            "postgresql+psycopg",
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
