#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for parser construction and exit code mapping."""

import sys

import pytest

from sheet2csv import __version__
from sheet2csv.cli.actions import provided_args
from sheet2csv.cli.builder import (
    EXIT_DEPENDENCY_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_PARSING_ERROR,
    EXIT_RENDERING_ERROR,
    EXIT_VALIDATION_ERROR,
    build_options,
    configurable_dests,
    create_parser,
    get_exit_code_for_exception,
    unescape_text,
    version_line,
)
from sheet2csv.exceptions import (
    DependencyError,
    EmptySheetError,
    FileNotFoundError,
    MalformedFileError,
    OutputWriteError,
    RowRangeError,
    SheetNotFoundError,
    ValidationError,
)


@pytest.mark.unit
class TestCreateParser:
    """Test the generated argument parser."""

    def test_defaults(self):
        args = create_parser().parse_args(["book.xlsx"])

        assert args.input == "book.xlsx"
        assert args.output_file is None
        assert args.sheet_index == 0
        assert args.sheet_name is None
        assert args.header_line == -1
        assert args.start_line == -1
        assert args.limit == 0
        assert args.render_formulas is True
        assert args.delimiter == ","
        assert args.quoting == "minimal"
        assert args.log_level == "WARNING"

    def test_short_flags(self):
        args = create_parser().parse_args(["-o", "out.csv", "-i", "2", "-n", "Data", "book.xlsx"])

        assert args.output_file == "out.csv"
        assert args.sheet_index == 2
        assert args.sheet_name == "Data"

    def test_row_flags(self):
        args = create_parser().parse_args(["--header-line", "0", "--start-line", "10", "--limit", "5", "x.xlsx"])

        assert (args.header_line, args.start_line, args.limit) == (0, 10, 5)

    def test_formulas_flag(self):
        args = create_parser().parse_args(["--formulas", "x.xlsx"])
        assert args.render_formulas is False

    def test_include_bom_flag(self):
        args = create_parser().parse_args(["--include-bom", "x.xlsx"])
        assert args.include_bom is True

    def test_log_level_is_case_insensitive(self):
        args = create_parser().parse_args(["--log-level", "debug", "x.xlsx"])
        assert args.log_level == "DEBUG"

    def test_non_integer_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--limit", "many", "x.xlsx"])

    def test_configurable_dests(self):
        dests = configurable_dests()

        assert "start_line" in dests
        assert "delimiter" in dests
        assert "output_file" in dests
        assert "input" not in dests

    def test_provided_args_tracked(self):
        """Test that options typed on the command line are remembered."""
        args = create_parser().parse_args(["-i", "0", "--formulas", "-o", "out.csv", "x.xlsx"])

        assert provided_args(args) == {"sheet_index", "render_formulas", "output_file"}

    def test_nothing_provided(self):
        assert provided_args(create_parser().parse_args(["x.xlsx"])) == set()

    def test_version_line_names_backend(self, monkeypatch):
        """Test that the version line reports a missing backend."""
        monkeypatch.setitem(sys.modules, "openpyxl", None)

        assert version_line() == f"sheet2csv {__version__} (openpyxl not installed)"

    def test_flag_meaning_fixed_at_build_time(self):
        """Test that a changed default does not flip what a flag stores."""
        parser = create_parser()
        parser.set_defaults(render_formulas=False, include_bom=True)

        args = parser.parse_args(["--formulas", "--include-bom", "x.xlsx"])

        assert args.render_formulas is False
        assert args.include_bom is True
        assert parser.parse_args(["x.xlsx"]).render_formulas is False


@pytest.mark.unit
class TestUnescapeText:
    """Test backslash escape decoding for dialect characters."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("\\t", "\t"),
            ("\\r\\n", "\r\n"),
            (";", ";"),
            ("\\\\", "\\"),
            ("é", "é"),
        ],
    )
    def test_unescape(self, raw, expected):
        assert unescape_text(raw) == expected


@pytest.mark.unit
class TestBuildOptions:
    """Test building option records from parsed arguments."""

    def test_build(self):
        args = create_parser().parse_args(["--sheet-name", "Data", "--delimiter", "\\t", "x.xlsx"])
        extract_options, writer_options = build_options(args)

        assert extract_options.sheet_name == "Data"
        assert writer_options.delimiter == "\t"

    def test_invalid_value_becomes_validation_error(self):
        args = create_parser().parse_args(["--start-line", "-7", "x.xlsx"])

        with pytest.raises(ValidationError):
            build_options(args)

    def test_invalid_delimiter(self):
        args = create_parser().parse_args(["--delimiter", ";;", "x.xlsx"])

        with pytest.raises(ValidationError, match="delimiter"):
            build_options(args)


@pytest.mark.unit
class TestExitCodes:
    """Test mapping exceptions onto exit codes."""

    @pytest.mark.parametrize(
        "exception,expected",
        [
            (DependencyError("xlsx", [("openpyxl", ">=3.1")]), EXIT_DEPENDENCY_ERROR),
            (ImportError("openpyxl"), EXIT_DEPENDENCY_ERROR),
            (SheetNotFoundError("no sheet named \"x\" available", sheet="x"), EXIT_VALIDATION_ERROR),
            (RowRangeError(9, 3), EXIT_VALIDATION_ERROR),
            (FileNotFoundError("book.xlsx"), EXIT_FILE_ERROR),
            (MalformedFileError("broken", file_path="book.xlsx"), EXIT_FILE_ERROR),
            (EmptySheetError(), EXIT_PARSING_ERROR),
            (OutputWriteError("out.csv"), EXIT_RENDERING_ERROR),
            (RuntimeError("boom"), EXIT_ERROR),
        ],
    )
    def test_mapping(self, exception, expected):
        assert get_exit_code_for_exception(exception) == expected
