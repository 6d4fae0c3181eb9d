"""
Logging configuration for pydistcalc.

The library itself only creates ``logging.getLogger(__name__)`` loggers;
applications call :func:`setup` to route them to stderr and a rich console.
"""

from __future__ import annotations

import logging
import logging.config
from logging import LogRecord
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

#: Name of the logger all package modules log under.
PACKAGE_LOGGER = "pydistcalc"


class AppFilter(logging.Filter):
    """
    Attach the stem of the emitting source file to every record.
    """

    def filter(self, record: LogRecord) -> bool:
        record.filenameStem = Path(record.filename).stem
        return True


def rich_handler_factory() -> RichHandler:
    return RichHandler(
        console=Console(width=160),
        rich_tracebacks=True,
        tracebacks_suppress=[],
        markup=True,
    )


def logging_config(level: int | str = "INFO", *, rich: bool = True) -> dict[str, Any]:
    """
    Build a :func:`logging.config.dictConfig` dictionary.

    Args:
        level: Level of the ``pydistcalc`` logger.
        rich: Also render records on a rich console. Without it only the plain
            stderr handler is installed, which suits log files and CI output.

    Returns:
        dict: A fresh configuration dictionary.
    """
    root_handlers = ["default", "rich"] if rich else ["default"]
    handlers: dict[str, Any] = {
        "default": {
            "formatter": "standard",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
    }
    if rich:
        handlers["rich"] = {
            "()": rich_handler_factory,
            "formatter": "pretty",
            "filters": ["appfilter"],
        }
    return {
        "version": 1,
        "disable_existing_loggers": True,
        "filters": {
            "appfilter": {
                "()": AppFilter,
            }
        },
        "formatters": {
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            },
            "pretty": {"format": "[[yellow]%(filenameStem)s[/]] %(message)s"},
        },
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": root_handlers,
                "level": "WARNING",
                "propagate": False,
            },
            PACKAGE_LOGGER: {
                "handlers": [],
                "level": level.upper() if isinstance(level, str) else level,
                "propagate": True,
            },
        },
    }


LOGGING_CONFIG = logging_config()


def setup(level: int | str | None = None, *, rich: bool = True) -> None:
    """
    Initialize logging for applications using pydistcalc.

    Args:
        level: Optional override for the level of the ``pydistcalc`` logger,
            INFO by default.
        rich: Install the rich console handler next to the plain one.
    """
    config = logging_config("INFO" if level is None else level, rich=rich)
    logging.config.dictConfig(config)


__all__ = ("LOGGING_CONFIG", "PACKAGE_LOGGER", "logging_config", "setup")
