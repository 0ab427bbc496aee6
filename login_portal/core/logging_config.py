# File: login_portal/core/logging_config.py

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install the root handler used by the API and the setup script.

    Safe to call more than once; an existing root handler is left alone.
    """
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
