"""
Database initialization helpers.

Models are imported here so their tables get registered on Base.metadata
before create_all runs.
"""

import logging

from sqlalchemy.engine import Engine

from login_portal.models.base import Base
from login_portal.models import account, registration  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Create the users and registration_info tables if they don't exist.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


def drop_db(engine: Engine) -> None:
    Base.metadata.drop_all(bind=engine)
