#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sheet2csv/writer.py
"""CSV output for selected sheet rows.

This module provides the CsvSheetWriter class which streams rows of string
cells through Python's csv module into a file, a text stream or a binary
stream, with configurable dialect settings and optional BOM for Excel.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import IO, Any, Iterable, Union

from sheet2csv.exceptions import OutputWriteError, RenderingError
from sheet2csv.options import CsvWriterOptions

logger = logging.getLogger(__name__)

OutputTarget = Union[str, Path, IO[bytes], IO[str]]

_QUOTING_MAP = {
    "minimal": csv.QUOTE_MINIMAL,
    "all": csv.QUOTE_ALL,
    "nonnumeric": csv.QUOTE_NONNUMERIC,
    "none": csv.QUOTE_NONE,
}


class CsvSheetWriter:
    """Write rows of string cells as CSV.

    Parameters
    ----------
    options : CsvWriterOptions or None, default = None
        CSV output options

    Examples
    --------
    Render rows to a string:

        >>> writer = CsvSheetWriter()
        >>> print(writer.render_to_string([["Name", "Age"], ["Alice", "30"]]), end="")
        Name,Age
        Alice,30

    Tab-separated output to a file:

        >>> writer = CsvSheetWriter(CsvWriterOptions(delimiter="\\t"))
        >>> writer.write(rows, "out.tsv")

    """

    def __init__(self, options: CsvWriterOptions | None = None):
        """Initialize the writer with options."""
        if options is not None and not isinstance(options, CsvWriterOptions):
            raise TypeError(f"options must be CsvWriterOptions, got {type(options).__name__}")
        self.options: CsvWriterOptions = options or CsvWriterOptions()

    def _writer_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "delimiter": self.options.delimiter,
            "quotechar": self.options.quote_char,
            "quoting": _QUOTING_MAP[self.options.quoting],
            "lineterminator": self.options.line_terminator,
        }
        if self.options.escape_char is not None:
            kwargs["escapechar"] = self.options.escape_char
        return kwargs

    def write_rows(self, rows: Iterable[list[str]], stream: IO[str]) -> int:
        """Encode rows into an open text stream.

        Parameters
        ----------
        rows : Iterable[list[str]]
            Rows of cell text
        stream : IO[str]
            Text stream, opened with ``newline=""`` when it is a file

        Returns
        -------
        int
            Number of rows written

        Raises
        ------
        RenderingError
            If a row cannot be encoded with the configured dialect

        """
        if self.options.include_bom:
            stream.write("\ufeff")

        writer = csv.writer(stream, **self._writer_kwargs())
        count = 0
        try:
            for row in rows:
                writer.writerow(row)
                count += 1
        except csv.Error as e:
            raise RenderingError(
                f"Cannot encode row {count} as CSV: {e}", rendering_stage="encode", original_error=e
            ) from e
        return count

    def render_to_string(self, rows: Iterable[list[str]]) -> str:
        """Render rows to a CSV string.

        Parameters
        ----------
        rows : Iterable[list[str]]
            Rows of cell text

        Returns
        -------
        str
            Rendered CSV content

        """
        buffer = io.StringIO()
        self.write_rows(rows, buffer)
        return buffer.getvalue()

    def write(self, rows: Iterable[list[str]], output: OutputTarget) -> int:
        """Write rows to a file path or stream.

        Parameters
        ----------
        rows : Iterable[list[str]]
            Rows of cell text
        output : str, Path, IO[bytes], or IO[str]
            Output destination. Paths are created or truncated and binary
            streams receive text in the configured encoding. Text streams
            keep whatever encoding they were opened with.

        Returns
        -------
        int
            Number of rows written

        Raises
        ------
        OutputWriteError
            If the output file cannot be opened or written
        RenderingError
            If a row cannot be encoded with the configured dialect

        """
        if isinstance(output, (str, Path)):
            path_str = str(output)
            try:
                with open(path_str, "w", encoding=self.options.encoding, newline="") as f:
                    count = self.write_rows(rows, f)
            except OSError as e:
                raise OutputWriteError(
                    path_str, message=f"Failed to write output file {path_str}: {e}", original_error=e
                ) from e
            logger.info("Wrote %d row(s) to %s", count, path_str)
            return count

        if isinstance(output, io.TextIOBase) or hasattr(output, "encoding"):
            count = self.write_rows(rows, output)  # type: ignore[arg-type]
            output.flush()
            return count

        if hasattr(output, "write"):
            wrapper = io.TextIOWrapper(output, encoding=self.options.encoding, newline="")  # type: ignore[arg-type]
            try:
                count = self.write_rows(rows, wrapper)
                wrapper.flush()
            finally:
                # leave the caller's stream open
                wrapper.detach()
            return count

        raise TypeError(f"Unsupported output type: {type(output).__name__}")
