# scraper/logger.py
import json
import logging
from pathlib import Path

LOGGER_NAME = "scraper"
LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class MetadataFormatter(logging.Formatter):
    """Append the `extra` metadata of a record as JSON after the message."""

    def format(self, record):
        line = super().format(record)
        metadata = {k: v for k, v in vars(record).items() if k not in _RESERVED}
        if metadata:
            line += " " + json.dumps(metadata, default=str)
        return line


def configure_logging(log_dir="logs", console=True):
    """
    Configure the ``scraper`` logger used by every module of the project.

    Adds two file handlers, ``{log_dir}/error.log`` for ERROR and above and
    ``{log_dir}/combined.log`` for everything, plus a console handler when
    ``console`` is true. Any entry in error.log means the run failed.
    Calling it again replaces the handlers instead of stacking them.

    Args:
        log_dir (str | Path): Directory for the log files, created if missing
        console (bool): Also log to stderr

    Returns:
        logging.Logger: The configured ``scraper`` logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    formatter = MetadataFormatter(LOG_FORMAT)

    error_handler = logging.FileHandler(log_dir / "error.log", encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    combined_handler = logging.FileHandler(log_dir / "combined.log", encoding="utf-8")
    handlers = [error_handler, combined_handler]
    if console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger
