import logging
import logging.config

from conduit.config import settings


def setup_logging(level: str | None = None) -> None:
    """
    Configure the root logger once at application startup.

    Every module logs through ``logging.getLogger(__name__)`` so output is
    grouped under the ``conduit.*`` hierarchy.  SQLAlchemy's engine logger
    is left to the ``echo`` flag on the engine.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "conduit": {
                    "handlers": ["console"],
                    "level": (level or settings.LOG_LEVEL).upper(),
                    "propagate": False,
                },
            },
        }
    )
