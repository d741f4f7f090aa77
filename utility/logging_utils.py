# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Updated: 2026-10-02
# Description: logging_utils.py
# -----------------------------------------------------------------------------

# logging_utils.py
import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

import colorlog

BASE_LOGGER_NAME = "tabflow"

_CONSOLE_FORMAT = (
    "%(log_color)s%(asctime)s [%(levelname)s] "
    "%(name)s:%(lineno)d:%(reset)s %(message_log_color)s%(message)s"
)
_FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _truthy(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(
        colorlog.ColoredFormatter(
            fmt=_CONSOLE_FORMAT,
            datefmt=_DATE_FORMAT,
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "bold_red",
            },
            secondary_log_colors={
                "message": {
                    "INFO": "white",
                    "WARNING": "yellow",
                    "ERROR": "light_red",
                    "CRITICAL": "red",
                }
            },
            style="%",
        )
    )
    return handler


def _file_handler() -> logging.Handler | None:
    # Off by default: the API usually runs in a container that ships stdout.
    if not _truthy(os.getenv("TABFLOW_LOG_TO_FILE", "0")):
        return None

    log_path = Path(os.getenv("TABFLOW_LOG_FILE", "./logs/tabflow.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        filename=str(log_path),
        maxBytes=int(os.getenv("TABFLOW_LOG_MAX_BYTES", str(5 * 1024 * 1024))),
        backupCount=int(os.getenv("TABFLOW_LOG_BACKUP_COUNT", "5")),
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt=_FILE_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def _create_logger(full_name: str) -> logging.Logger:
    """
    Configure a named logger once; later calls return the same instance.
    """
    logger = logging.getLogger(full_name)
    if logger.handlers:
        return logger

    logger.addHandler(_console_handler())
    file_handler = _file_handler()
    if file_handler is not None:
        logger.addHandler(file_handler)

    level_name = os.getenv("TABFLOW_LOG_LEVEL", "INFO").upper()
    logger.setLevel(getattr(logging, level_name, logging.INFO))
    logger.propagate = False
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Generic logger that does not include a class name.
    """
    full_name = f"{BASE_LOGGER_NAME}.{name}" if name else BASE_LOGGER_NAME
    return _create_logger(full_name)


def get_class_logger(cls: type) -> logging.Logger:
    """
    Returns a logger whose name includes module + class, e.g.:

      tabflow.embedding.TabEmbedder.TabEmbedder
      tabflow.ranking.SimilarityRanker.SimilarityRanker
    """
    module = getattr(cls, "__module__", "unknown_module")
    classname = getattr(cls, "__name__", "UnknownClass")
    return _create_logger(f"{BASE_LOGGER_NAME}.{module}.{classname}")
