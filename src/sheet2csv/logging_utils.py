"""Logging setup for the sheet2csv command.

Standard output may carry the CSV itself, so every handler installed here
writes to stderr or to a log file. Warnings raised through the ``warnings``
module (openpyxl reports unsupported workbook features that way) are routed
into the same handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from sheet2csv.exceptions import FileAccessError

PLAIN_FORMAT = "%(levelname)s: %(message)s"
TRACE_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
TRACE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_level(log_level: int | str) -> int:
    """Turn a level name such as ``"info"`` into its numeric value.

    Raises
    ------
    ValueError
        If the name is not a standard logging level

    """
    if isinstance(log_level, int):
        return log_level
    level = logging.getLevelName(str(log_level).upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")
    return level


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Replace the root logger's handlers with sheet2csv's.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name.
    log_file : str, optional
        Append log records to this file as well as stderr.
    trace_mode : bool, default False
        Include timestamps and logger names in every record.

    Returns
    -------
    logging.Logger
        The configured root logger.

    Raises
    ------
    FileAccessError
        If ``log_file`` cannot be opened for appending.
    ValueError
        If ``log_level`` is not a known level name.

    """
    level = resolve_log_level(log_level)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            raise FileAccessError(
                file_path=log_file, message=f"Cannot open log file {log_file}: {e}", original_error=e
            ) from e

    if trace_mode:
        formatter = logging.Formatter(TRACE_FORMAT, datefmt=TRACE_DATE_FORMAT)
    else:
        formatter = logging.Formatter(PLAIN_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.captureWarnings(True)
    if log_file:
        root_logger.debug("Logging to file: %s", log_file)
    return root_logger
