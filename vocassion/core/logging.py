"""
Process-wide logging setup.

Everything goes to stdout; gunicorn and the hosting platform collect it.
"""
import logging

from vocassion.core.config import settings

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def configure_logging(level_name: str | None = None) -> None:
    name = (level_name or settings.LOG_LEVEL).upper()
    level = getattr(logging, name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("vocassion").setLevel(level)
    logging.getLogger("vocassion").info("logging configured: level=%s", name)
