"""Logging helpers shared by the inkreflow command-line entry point.

The library modules only create module loggers; handlers are attached here,
by the CLI, so embedding applications keep full control of log routing.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from inkreflow.exceptions import ValidationError

LOG_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(log_level: int | str) -> int:
    """Translate a level name or number into a numeric logging level.

    Raises
    ------
    ValidationError
        If ``log_level`` is a string that does not name a logging level.

    """
    if isinstance(log_level, int):
        return log_level
    name = str(log_level).strip().upper()
    if name not in LOG_LEVEL_NAMES:
        raise ValidationError(
            f"Unknown log level {log_level!r}; expected one of {', '.join(LOG_LEVEL_NAMES)}",
            parameter_name="log_level",
            parameter_value=log_level,
        )
    return getattr(logging, name)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Install console (and optional file) handlers on the ``inkreflow`` logger.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Optional path to a log file for teeing log output.
    trace_mode : bool, default False
        When true, emit timestamps and logger names for debugging traces.

    Returns
    -------
    logging.Logger
        The configured package logger.

    """
    level = resolve_log_level(log_level)

    package_logger = logging.getLogger("inkreflow")
    package_logger.setLevel(level)
    package_logger.handlers.clear()
    package_logger.propagate = False

    if trace_mode:
        formatter = logging.Formatter(
            "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
    else:
        formatter = logging.Formatter("%(levelname)s: %(message)s")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:  # pragma: no cover - depends on filesystem
            package_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
            package_logger.debug("Logging to file: %s", log_file)

    return package_logger


__all__ = ["configure_logging", "resolve_log_level"]
