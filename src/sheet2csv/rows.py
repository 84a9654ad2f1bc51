#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sheet2csv/rows.py
"""Row selection and cell stringification.

Rows arrive here already decoded by the spreadsheet library. This module
stringifies cell values, applying simple number formats, and picks the
requested sub-range.
"""

from __future__ import annotations

import datetime
import logging
import math
import re
from typing import Any, Sequence

from sheet2csv.exceptions import EmptySheetError, RowRangeError
from sheet2csv.options import ExtractOptions

logger = logging.getLogger(__name__)

Row = list[str]


# "0", "0.00", "#,##0.00", "0%", "0.0%" and the like
_FIXED_NUMBER_FORMAT = re.compile(r"^(?P<digits>[#,]*0+)(?:\.(?P<decimals>0+))?(?P<percent>%)?$")


def format_number(value: int | float, number_format: str | None) -> str | None:
    """Render a number through a fixed-decimal or percent number format.

    Only the plain digit formats Excel offers by default are understood.
    Anything else (``General``, currency, scientific, conditional sections
    applied to negative values) returns None so the raw value is used.

    Examples
    --------
    >>> format_number(0.125, "0.0%")
    '12.5%'
    >>> format_number(1234.5, "#,##0.00")
    '1,234.50'
    >>> format_number(2, "General") is None
    True

    """
    if not number_format:
        return None

    sections = number_format.split(";")
    if len(sections) > 1 and value < 0:
        return None

    match = _FIXED_NUMBER_FORMAT.match(sections[0].strip())
    if match is None:
        return None

    decimals = len(match.group("decimals") or "")
    grouping = "," if "," in match.group("digits") else ""
    if match.group("percent"):
        return f"{value * 100:{grouping}.{decimals}f}%"
    return f"{value:{grouping}.{decimals}f}"


def cell_to_text(value: Any, number_format: str | None = None) -> str:
    """Convert a cell value to the text written to CSV.

    Parameters
    ----------
    value : Any
        Cell value as returned by openpyxl
    number_format : str, optional
        The cell's number format. Percent and fixed-decimal formats are
        applied to numeric values.

    Returns
    -------
    str
        Cell text

    Examples
    --------
    >>> cell_to_text(None)
    ''
    >>> cell_to_text(3.0)
    '3'
    >>> cell_to_text(0.5, "0%")
    '50%'
    >>> cell_to_text(datetime.datetime(2024, 5, 1))
    '2024-05-01'

    """
    if value is None:
        return ""

    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"

    if isinstance(value, datetime.datetime):
        if value.time() == datetime.time(0, 0) and value.tzinfo is None:
            return value.date().isoformat()
        return value.isoformat(sep=" ", timespec="seconds")

    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()

    if isinstance(value, (int, float)) and math.isfinite(value):
        formatted = format_number(value, number_format)
        if formatted is not None:
            return formatted
        if isinstance(value, float) and value.is_integer():
            return str(int(value))

    return str(value)


def select_rows(rows: Sequence[Row], options: ExtractOptions) -> list[Row]:
    """Select the requested row range, optionally prefixed by a header row.

    When ``start_line`` is -1 every row is returned and both ``limit`` and
    ``header_line`` are ignored. Otherwise rows ``start_line`` up to
    ``start_line + limit`` are returned, clamped to the end of the sheet,
    with row ``header_line`` prepended when it is set.

    Parameters
    ----------
    rows : Sequence[list[str]]
        All rows of the sheet
    options : ExtractOptions
        Row selection options

    Returns
    -------
    list[list[str]]
        Selected rows

    Raises
    ------
    EmptySheetError
        If a range is requested from a sheet with no rows
    RowRangeError
        If ``start_line`` or ``header_line`` is beyond the last row

    """
    if not options.wants_range:
        return list(rows)

    num_rows = len(rows)
    if num_rows == 0:
        raise EmptySheetError()

    start = options.start_line
    if start >= num_rows:
        raise RowRangeError(start, num_rows, parameter_name="start_line")

    end = num_rows
    if options.limit > 0:
        end = min(start + options.limit, num_rows)

    selected = list(rows[start:end])
    logger.debug("Selected rows %d to %d of %d", start, end - 1, num_rows)

    if options.header_line > -1:
        if options.header_line >= num_rows:
            raise RowRangeError(options.header_line, num_rows, parameter_name="header_line")
        selected.insert(0, rows[options.header_line])

    return selected
