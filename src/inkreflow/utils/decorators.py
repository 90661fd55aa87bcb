#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/inkreflow/utils/decorators.py
"""Utility decorators for inkreflow front-ends.

The Markdown and web front-ends depend on optional packages; the
:func:`requires_dependencies` decorator turns a missing package into a
:class:`~inkreflow.exceptions.DependencyError` with an install hint instead of
a bare ``ImportError`` deep inside the call.

"""

from __future__ import annotations

import importlib
import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, List, Tuple

from inkreflow.exceptions import DependencyError


def requires_dependencies(converter_name: str, packages: List[Tuple[str, str, str]]) -> Callable:
    """Check required packages are importable before running the function.

    Parameters
    ----------
    converter_name : str
        Name of the front-end (e.g., "markdown", "web"), used in messages.
    packages : list of tuple
        Required packages as (install_name, import_name, version_spec) tuples.

    Returns
    -------
    Callable
        Decorated function that checks dependencies before execution

    Raises
    ------
    DependencyError
        If any required package cannot be imported.

    Examples
    --------
        >>> @requires_dependencies("markdown", [("mistune", "mistune", ">=3.0.0")])
        ... def markdown_to_html(text):
        ...     import mistune
        ...     return mistune.html(text)

    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            missing = []
            original_error = None

            for install_name, import_name, version_spec in packages:
                try:
                    # nosemgrep: python.lang.security.audit.non-literal-import.non-literal-import
                    importlib.import_module(import_name)
                except ImportError as e:
                    missing.append((install_name, version_spec))
                    if original_error is None:
                        original_error = e

            if missing:
                raise DependencyError(
                    converter_name=converter_name,
                    missing_packages=missing,
                    install_command=f"pip install 'inkreflow[{converter_name}]'",
                    original_import_error=original_error,
                ) from original_error

            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time the enclosed block and log the elapsed time at DEBUG level.

    Nothing is measured unless DEBUG logging is enabled for ``logger``.

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Rendering"):
        ...     result = render_html(markup)
        ... # Logs: "Rendering completed in 0.01s" at DEBUG level

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug("%s completed in %.3fs", operation, elapsed)
    else:
        yield


__all__ = ["requires_dependencies", "debug_timer"]
