#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sheet2csv/utils/decorators.py
"""Decorators and context managers wrapped around workbook loading."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from functools import wraps
from typing import Any, Callable, Generator, Optional, Sequence

from sheet2csv.exceptions import DependencyError
from sheet2csv.utils.packages import Requirement, check_requirements


def requires_dependencies(
    component: str, packages: Sequence[Requirement], extra: Optional[str] = None
) -> Callable:
    """Refuse to run the wrapped function until its optional packages import.

    Parameters
    ----------
    component : str
        Short name of the feature (e.g., "xlsx"), used in the error message
    packages : Sequence[tuple[str, str, str]]
        ``(install_name, import_name, version_spec)`` tuples
    extra : str, optional
        Name of the ``sheet2csv`` extra that installs the packages. When set,
        the error suggests ``pip install "sheet2csv[<extra>]"``.

    Raises
    ------
    DependencyError
        If a package is missing or its installed version is incompatible

    Examples
    --------
        >>> @requires_dependencies("xlsx", [("openpyxl", "openpyxl", ">=3.1")], extra="xlsx")
        ... def open_workbook(path):
        ...     import openpyxl
        ...     return openpyxl.load_workbook(path)

    """
    install_command = f'pip install "sheet2csv[{extra}]"' if extra else ""

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            report = check_requirements(packages)
            if not report.satisfied:
                raise DependencyError(
                    converter_name=component,
                    missing_packages=report.missing,
                    version_mismatches=report.mismatches,
                    install_command=install_command,
                    original_import_error=report.import_error,
                ) from report.import_error
            return func(*args, **kwargs)

        return wrapper

    return decorator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long a block took at DEBUG level, including when it fails.

    Examples
    --------
        >>> with debug_timer(logger, "Loading workbook"):
        ...     wb = openpyxl.load_workbook(path)
        ... # Logs: "Loading workbook completed in 0.12s"

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return

    start_time = time.perf_counter()
    try:
        yield
    except Exception:
        logger.debug("%s failed after %.2fs", operation, time.perf_counter() - start_time)
        raise
    logger.debug("%s completed in %.2fs", operation, time.perf_counter() - start_time)
