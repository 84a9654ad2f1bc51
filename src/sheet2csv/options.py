#  Copyright (c) 2025 Tom Villani, Ph.D.

# sheet2csv/options.py
"""Configuration options for sheet extraction and CSV output.

This module defines the two frozen option records used across the library:
``ExtractOptions`` decides which sheet and which rows are read, and
``CsvWriterOptions`` decides how the selected rows are encoded.
"""

from __future__ import annotations

import codecs
import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from sheet2csv.constants import (
    CSV_QUOTING_CHOICES,
    DEFAULT_CSV_DELIMITER,
    DEFAULT_CSV_ESCAPE_CHAR,
    DEFAULT_CSV_INCLUDE_BOM,
    DEFAULT_CSV_LINE_TERMINATOR,
    DEFAULT_CSV_QUOTE_CHAR,
    DEFAULT_CSV_QUOTING,
    DEFAULT_HEADER_LINE,
    DEFAULT_LIMIT,
    DEFAULT_OUTPUT_ENCODING,
    DEFAULT_RENDER_FORMULAS,
    DEFAULT_SHEET_INDEX,
    DEFAULT_START_LINE,
    CsvQuotingMode,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ExtractOptions(CloneFrozenMixin):
    """Options selecting a worksheet and a row range.

    Parameters
    ----------
    sheet_index : int, default 0
        Zero-based index of the worksheet to read.
    sheet_name : str or None, default None
        Name of the worksheet to read. Takes precedence over ``sheet_index``.
    header_line : int, default -1
        Index of a row to prepend to the selection as header. -1 disables it.
        Only used together with ``start_line``.
    start_line : int, default -1
        Index of the first row to emit. -1 emits the whole sheet.
    limit : int, default 0
        Maximum number of rows to emit from ``start_line``. 0 means no limit.
        Ignored when ``start_line`` is -1.
    render_formulas : bool, default True
        Emit the cached result of formula cells. When False, the formula
        text itself (e.g. ``=SUM(A1:A3)``) is emitted.

    """

    sheet_index: int = field(
        default=DEFAULT_SHEET_INDEX,
        metadata={"help": "Index of worksheet.", "cli_name": "sheet-index", "short": "-i"},
    )
    sheet_name: str | None = field(
        default=None,
        metadata={"help": "Name of worksheet.", "cli_name": "sheet-name", "short": "-n"},
    )
    header_line: int = field(
        default=DEFAULT_HEADER_LINE,
        metadata={"help": "Index of header line.", "cli_name": "header-line"},
    )
    start_line: int = field(
        default=DEFAULT_START_LINE,
        metadata={"help": "Index of start line.", "cli_name": "start-line"},
    )
    limit: int = field(
        default=DEFAULT_LIMIT,
        metadata={"help": "Limit number of lines to retrieve from --start-line.", "cli_name": "limit"},
    )
    render_formulas: bool = field(
        default=DEFAULT_RENDER_FORMULAS,
        metadata={"help": "Emit formula text instead of cached values.", "cli_name": "formulas"},
    )

    def __post_init__(self) -> None:
        """Validate index ranges.

        Raises
        ------
        ValueError
            If any field value is outside its valid range.

        """
        if self.sheet_index < 0:
            raise ValueError(f"sheet_index must be non-negative, got {self.sheet_index}")

        if self.header_line < -1:
            raise ValueError(f"header_line must be -1 or a row index, got {self.header_line}")

        if self.start_line < -1:
            raise ValueError(f"start_line must be -1 or a row index, got {self.start_line}")

        if self.limit < 0:
            raise ValueError(f"limit must be non-negative, got {self.limit}")

    @property
    def wants_range(self) -> bool:
        """Whether a row range (rather than the whole sheet) was requested."""
        return self.start_line > -1


@dataclass(frozen=True)
class CsvWriterOptions(CloneFrozenMixin):
    r"""Configuration options for CSV output.

    Parameters
    ----------
    delimiter : str, default=","
        CSV field delimiter character. Common values: "," (comma), "\\t" (tab), ";" (semicolon).
    quote_char : str, default='"'
        Character used to quote fields.
    quoting : Literal["minimal", "all", "nonnumeric", "none"], default="minimal"
        CSV quoting style (maps to csv.QUOTE_* constants):
        - "minimal": Quote fields only when needed (special chars present)
        - "all": Quote all fields
        - "nonnumeric": Quote all non-numeric fields
        - "none": Never quote (requires escape_char for special chars)
    escape_char : str or None, default=None
        Character used to escape the delimiter when quoting is "none".
    line_terminator : str, default="\\n"
        String written after each row.
    include_bom : bool, default=False
        Prefix the output with a UTF-8 byte order mark for Excel compatibility.
    encoding : str, default="utf-8"
        Encoding used when writing to a path or a binary stream.

    """

    delimiter: str = field(
        default=DEFAULT_CSV_DELIMITER,
        metadata={"help": "CSV field delimiter (e.g., ',', '\\t', ';', '|')"},
    )
    quote_char: str = field(
        default=DEFAULT_CSV_QUOTE_CHAR,
        metadata={"help": "Quote character"},
    )
    quoting: CsvQuotingMode = field(
        default=DEFAULT_CSV_QUOTING,
        metadata={"help": "Quoting style", "choices": list(CSV_QUOTING_CHOICES)},
    )
    escape_char: str | None = field(
        default=DEFAULT_CSV_ESCAPE_CHAR,
        metadata={"help": "Escape character (needed with --quoting none)"},
    )
    line_terminator: str = field(
        default=DEFAULT_CSV_LINE_TERMINATOR,
        metadata={"help": "Row terminator (e.g., '\\n', '\\r\\n')"},
    )
    include_bom: bool = field(
        default=DEFAULT_CSV_INCLUDE_BOM,
        metadata={"help": "Prefix output with a UTF-8 byte order mark"},
    )
    encoding: str = field(
        default=DEFAULT_OUTPUT_ENCODING,
        metadata={"help": "Output encoding"},
    )

    def __post_init__(self) -> None:
        """Validate dialect characters.

        Raises
        ------
        ValueError
            If a dialect character is not a single character, quoting is unknown
            or the encoding has no codec.

        """
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")

        if len(self.quote_char) != 1:
            raise ValueError(f"quote_char must be a single character, got {self.quote_char!r}")

        if self.escape_char is not None and len(self.escape_char) != 1:
            raise ValueError(f"escape_char must be a single character, got {self.escape_char!r}")

        if self.quoting not in CSV_QUOTING_CHOICES:
            raise ValueError(f"quoting must be one of {', '.join(CSV_QUOTING_CHOICES)}, got {self.quoting!r}")

        if not self.line_terminator:
            raise ValueError("line_terminator must not be empty")

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ValueError(f"encoding is not a known codec, got {self.encoding!r}") from e
