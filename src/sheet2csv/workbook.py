#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sheet2csv/workbook.py
"""XLSX workbook access.

This module opens workbooks with openpyxl, resolves the requested worksheet
and reads its rows as lists of strings. Decoding of the XLSX container is
left entirely to openpyxl.

"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import IO, Any, Union

from sheet2csv.constants import DEPS_XLSX, XLSX_EXTRA
from sheet2csv.exceptions import (
    FileAccessError,
    FileNotFoundError,
    MalformedFileError,
    SheetNotFoundError,
    ValidationError,
)
from sheet2csv.options import ExtractOptions
from sheet2csv.rows import Row, cell_to_text
from sheet2csv.utils.decorators import debug_timer, requires_dependencies

logger = logging.getLogger(__name__)

WorkbookSource = Union[str, Path, IO[bytes], bytes]


def _resolve_source(source: WorkbookSource) -> tuple[Any, str | None]:
    """Validate a workbook source and convert it for openpyxl.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        Path to the workbook, binary file-like object, or raw bytes

    Returns
    -------
    tuple[Any, str | None]
        Tuple of (openpyxl-compatible input, file path when the source is a path)

    Raises
    ------
    FileNotFoundError
        If the path does not exist
    ValidationError
        If the path is not a regular file or the source type is unsupported

    """
    if isinstance(source, (str, Path)):
        path_str = str(source)
        if not os.path.exists(path_str):
            raise FileNotFoundError(file_path=path_str)
        if not os.path.isfile(path_str):
            raise ValidationError(f"Path is not a file: {path_str}", parameter_name="source", parameter_value=source)
        return path_str, path_str

    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(source), None

    if hasattr(source, "read"):
        if isinstance(source, io.TextIOBase):
            raise ValidationError(
                "Workbook streams must be opened in binary mode", parameter_name="source", parameter_value=source
            )
        return source, None

    raise ValidationError(
        f"Unsupported workbook source type: {type(source).__name__}. Expected a path, binary file object, or bytes",
        parameter_name="source",
        parameter_value=source,
    )


@requires_dependencies("xlsx", DEPS_XLSX, extra=XLSX_EXTRA)
def open_workbook(source: WorkbookSource, render_formulas: bool = True) -> Any:
    """Open an XLSX workbook.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        The workbook to open
    render_formulas : bool, default True
        Load cached formula results instead of formula text

    Returns
    -------
    openpyxl.Workbook
        The loaded workbook

    Raises
    ------
    FileNotFoundError
        If the workbook path does not exist
    FileAccessError
        If the workbook cannot be read due to permissions
    MalformedFileError
        If openpyxl fails to load the workbook
    DependencyError
        If openpyxl (the ``xlsx`` extra) is missing or too old

    """
    import openpyxl

    workbook_input, file_path = _resolve_source(source)

    try:
        with debug_timer(logger, "Loading workbook"):
            workbook = openpyxl.load_workbook(workbook_input, data_only=render_formulas)
    except PermissionError as e:
        raise FileAccessError(file_path=file_path or "<stream>", original_error=e) from e
    except Exception as e:
        raise MalformedFileError(f"Failed to open workbook: {e}", file_path=file_path, original_error=e) from e

    logger.debug("Opened workbook with %d worksheet(s)", len(workbook.worksheets))
    return workbook


def list_sheets(workbook: Any) -> list[str]:
    """Return worksheet names in workbook order.

    Chart sheets are not listed since they hold no cells.
    """
    return [sheet.title for sheet in workbook.worksheets]


def select_sheet(workbook: Any, options: ExtractOptions) -> Any:
    """Resolve the worksheet named by ``options``.

    ``sheet_name`` takes precedence over ``sheet_index``.

    Parameters
    ----------
    workbook : openpyxl.Workbook
        Loaded workbook
    options : ExtractOptions
        Sheet selector

    Returns
    -------
    openpyxl.worksheet.worksheet.Worksheet
        The selected worksheet

    Raises
    ------
    SheetNotFoundError
        If no sheet has the requested name, the workbook has no sheets,
        or the index is out of range

    """
    sheets = list(workbook.worksheets)
    names = [sheet.title for sheet in sheets]

    if options.sheet_name:
        for sheet in sheets:
            if sheet.title == options.sheet_name:
                logger.debug("Selected sheet %r by name", sheet.title)
                return sheet
        raise SheetNotFoundError(
            f'no sheet named "{options.sheet_name}" available', sheet=options.sheet_name, available=names
        )

    num_sheets = len(sheets)
    if num_sheets == 0:
        raise SheetNotFoundError("this XLSX file contains no sheets", sheet=options.sheet_index)

    if options.sheet_index >= num_sheets:
        raise SheetNotFoundError(
            f"no sheet {options.sheet_index} available, please select a sheet between 0 and {num_sheets - 1}",
            sheet=options.sheet_index,
            available=names,
        )

    sheet = sheets[options.sheet_index]
    logger.debug("Selected sheet %r at index %d", sheet.title, options.sheet_index)
    return sheet


def read_rows(sheet: Any) -> list[Row]:
    """Read every row of a worksheet as a list of strings.

    Rows start at the first sheet row and column, so row index 0 is
    spreadsheet row 1 even when it is blank. A sheet with no values has
    no rows. Percent and fixed-decimal number formats are applied.

    Parameters
    ----------
    sheet : openpyxl.worksheet.worksheet.Worksheet
        Worksheet to read

    Returns
    -------
    list[list[str]]
        Sheet rows

    """
    cell_rows = [list(row) for row in sheet.iter_rows()]

    # openpyxl reports a lone blank A1 for sheets that were never written to
    if len(cell_rows) == 1 and all(cell.value is None for cell in cell_rows[0]):
        cell_rows = []

    logger.debug("Read %d row(s) from sheet %r", len(cell_rows), sheet.title)
    return [[cell_to_text(cell.value, cell.number_format) for cell in row] for row in cell_rows]
