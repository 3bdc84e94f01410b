import logging.config
from typing import Any


# Libraries that are noisy at INFO
QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "aiosqlite")


def setup_logging(level: str = "INFO") -> dict[str, Any]:
    """Configure console logging for the API, scripts and tracking client."""
    config: dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        "root": {"level": level.upper(), "handlers": ["console"]},
    }

    logging.config.dictConfig(config)
    return config
