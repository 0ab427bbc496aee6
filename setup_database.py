"""
Create the users and registration_info tables.

Run this from the project root:

    (.venv) python setup_database.py

Connection settings come from the DB_* environment variables (or
config.env). Existing tables are left untouched.
"""

import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from login_portal.core.config import get_settings
from login_portal.core.logging_config import configure_logging
from login_portal.db.init_db import init_db
from login_portal.db.session import build_engine

logger = logging.getLogger("setup_database")


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)

    engine = build_engine(settings)
    try:
        logger.info("Connecting to %s", engine.url.render_as_string(hide_password=True))
        init_db(engine)
    except SQLAlchemyError as exc:
        logger.error("Database setup error: %s", exc)
        return 1
    finally:
        engine.dispose()

    logger.info("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
