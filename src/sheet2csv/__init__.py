"""sheet2csv - Print one worksheet of an XLSX workbook as CSV.

sheet2csv opens a workbook with openpyxl, picks a worksheet by index or
name, optionally slices a row range (with a header row injected from
elsewhere in the sheet) and writes the string cells through Python's csv
module.

Examples
--------
Whole first sheet as a CSV string:

    >>> from sheet2csv import sheet_to_csv
    >>> csv_text = sheet_to_csv("report.xlsx")

Rows 10-19 of the "Data" sheet, with row 0 as header, to a file:

    >>> from sheet2csv import ExtractOptions, sheet_to_csv
    >>> sheet_to_csv(
    ...     "report.xlsx",
    ...     "data.csv",
    ...     options=ExtractOptions(sheet_name="Data", header_line=0, start_line=10, limit=10),
    ... )

"""

__version__ = "1.0.0"

from sheet2csv.api import extract_sheet, sheet_to_csv
from sheet2csv.exceptions import (
    DependencyError,
    EmptySheetError,
    FileError,
    MalformedFileError,
    OutputWriteError,
    RenderingError,
    RowRangeError,
    Sheet2CsvError,
    SheetNotFoundError,
    ValidationError,
)
from sheet2csv.options import CsvWriterOptions, ExtractOptions
from sheet2csv.writer import CsvSheetWriter

__all__ = [
    "__version__",
    "extract_sheet",
    "sheet_to_csv",
    "ExtractOptions",
    "CsvWriterOptions",
    "CsvSheetWriter",
    "Sheet2CsvError",
    "ValidationError",
    "SheetNotFoundError",
    "RowRangeError",
    "FileError",
    "MalformedFileError",
    "EmptySheetError",
    "RenderingError",
    "OutputWriteError",
    "DependencyError",
]
