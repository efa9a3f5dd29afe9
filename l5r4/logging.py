import logging
import os


def get_logger(name: str) -> logging.Logger:
    """Return a module-level logger configured with basicConfig.

    ``L5R4_LOG_LEVEL`` (e.g. ``DEBUG``) overrides the default INFO level.
    """
    level = getattr(logging, os.getenv("L5R4_LOG_LEVEL", "INFO").upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")
    return logging.getLogger(name)
