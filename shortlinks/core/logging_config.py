import logging
import sys

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s'
LOG_DATEFMT = '%Y-%m-%d %H:%M:%S'

# Third-party loggers that drown out request logs at INFO
NOISY_LOGGERS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "httpx": logging.WARNING,
}


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Route shortlinks logs to stdout at ``level``; returns the package logger.

    Safe to call more than once (the root handler is only installed the first time).
    """
    level = level.upper()
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # uvicorn logs through the root handler; per-request access lines are left out
    logging.getLogger("uvicorn.error").propagate = True
    logging.getLogger("uvicorn.access").disabled = True

    for name, noisy_level in NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)

    app_logger = logging.getLogger("shortlinks")
    app_logger.setLevel(level)
    return app_logger
