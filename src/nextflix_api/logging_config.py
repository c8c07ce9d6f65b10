"""Logging setup shared by the application and the CLI entry point."""

import logging

from nextflix_api.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> logging.Logger:
    """Configure the root logger from settings and return the app logger.

    Handlers installed by whoever runs the app (uvicorn, pytest) are kept;
    only the level is adjusted in that case.
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    root.setLevel(settings.log_level)

    logger = logging.getLogger("nextflix_api")
    logger.setLevel(settings.log_level)
    return logger
