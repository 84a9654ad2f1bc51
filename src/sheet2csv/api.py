#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sheet2csv/api.py
"""High-level functions for extracting a worksheet as CSV.

Examples
--------
Extract rows 10-19 of the "Data" sheet with row 0 as header:

    >>> from sheet2csv import ExtractOptions, sheet_to_csv
    >>> options = ExtractOptions(sheet_name="Data", header_line=0, start_line=10, limit=10)
    >>> csv_text = sheet_to_csv("report.xlsx", options=options)

"""

from __future__ import annotations

import logging

from sheet2csv.options import CsvWriterOptions, ExtractOptions
from sheet2csv.rows import Row, select_rows
from sheet2csv.workbook import WorkbookSource, open_workbook, read_rows, select_sheet
from sheet2csv.writer import CsvSheetWriter, OutputTarget

logger = logging.getLogger(__name__)


def extract_sheet(source: WorkbookSource, options: ExtractOptions | None = None) -> list[Row]:
    """Open a workbook and return the selected rows of the selected sheet.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        Workbook to read
    options : ExtractOptions, optional
        Sheet and row selection. Defaults to the whole first sheet.

    Returns
    -------
    list[list[str]]
        Selected rows of cell text

    Raises
    ------
    Sheet2CsvError
        Any of the library errors raised while opening the workbook,
        resolving the sheet or selecting rows

    """
    options = options or ExtractOptions()
    workbook = open_workbook(source, render_formulas=options.render_formulas)
    sheet = select_sheet(workbook, options)
    rows = select_rows(read_rows(sheet), options)
    logger.debug("Extracted %d row(s) from sheet %r", len(rows), sheet.title)
    return rows


def sheet_to_csv(
    source: WorkbookSource,
    output: OutputTarget | None = None,
    options: ExtractOptions | None = None,
    writer_options: CsvWriterOptions | None = None,
) -> str | None:
    """Extract a worksheet and encode it as CSV.

    Parameters
    ----------
    source : str, Path, IO[bytes], or bytes
        Workbook to read
    output : str, Path, IO[bytes], IO[str], or None
        Destination. When None the CSV text is returned.
    options : ExtractOptions, optional
        Sheet and row selection
    writer_options : CsvWriterOptions, optional
        CSV dialect

    Returns
    -------
    str or None
        CSV text when ``output`` is None, otherwise None

    """
    rows = extract_sheet(source, options)
    writer = CsvSheetWriter(writer_options)

    if output is None:
        return writer.render_to_string(rows)

    writer.write(rows, output)
    return None
