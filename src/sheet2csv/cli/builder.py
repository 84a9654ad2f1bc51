#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Argument parser construction for the sheet2csv CLI.

Option flags for sheet selection and CSV output are generated from the
field metadata of ``ExtractOptions`` and ``CsvWriterOptions`` so that the
command line, config files and library options share one set of names.
"""

from __future__ import annotations

import argparse
import codecs
from dataclasses import MISSING, Field, fields
from typing import Any

from sheet2csv import __version__
from sheet2csv.cli.actions import DynamicVersionAction, TrackingFlagAction, TrackingStoreAction
from sheet2csv.constants import DEFAULT_LOG_LEVEL, DEPS_XLSX
from sheet2csv.exceptions import (
    DependencyError,
    FileError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from sheet2csv.options import CsvWriterOptions, ExtractOptions
from sheet2csv.utils.packages import describe_requirements

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

# Destinations that are not option fields but may still come from a config file
EXTRA_CONFIG_DESTS = ("output_file", "log_level", "log_file")

USAGE_DESCRIPTION = "Print a sheet from a XLSX file to standard output (stdout) as CSV format."


def unescape_text(value: str) -> str:
    r"""Decode backslash escapes so that ``\t`` on the command line means a tab."""
    return codecs.decode(value.encode("latin-1", "backslashreplace"), "unicode_escape")


def _add_dataclass_field(group: argparse._ArgumentGroup, field: Field) -> None:
    """Add one option field to the parser using its metadata."""
    meta = field.metadata
    cli_name = meta.get("cli_name", field.name.replace("_", "-"))
    flags = [f"--{cli_name}"]
    if meta.get("short"):
        flags.insert(0, meta["short"])

    default: Any = field.default if field.default is not MISSING else None
    kwargs: dict[str, Any] = {"dest": field.name, "help": meta.get("help"), "default": default}

    if isinstance(default, bool):
        kwargs["action"] = TrackingFlagAction
    else:
        kwargs["action"] = TrackingStoreAction
        if "choices" in meta:
            kwargs["choices"] = meta["choices"]
        if isinstance(default, int):
            kwargs["type"] = int
            kwargs["metavar"] = "N"
        elif field.name in ("delimiter", "quote_char", "escape_char", "line_terminator"):
            kwargs["type"] = unescape_text

    group.add_argument(*flags, **kwargs)


def version_line() -> str:
    """Return the program version followed by the installed workbook backend."""
    return f"sheet2csv {__version__} ({describe_requirements(DEPS_XLSX)})"


def option_dests() -> list[str]:
    """Return every parser destination that maps onto an option field."""
    return [f.name for f in fields(ExtractOptions)] + [f.name for f in fields(CsvWriterOptions)]


def configurable_dests() -> list[str]:
    """Return the parser destinations that a config file may set."""
    return option_dests() + list(EXTRA_CONFIG_DESTS)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the sheet2csv command.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="sheet2csv",
        description=USAGE_DESCRIPTION,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("input", nargs="?", help="XLSX file to read")
    parser.add_argument(
        "-o", "--output-file", dest="output_file", default=None, action=TrackingStoreAction, help="CSV output file."
    )
    parser.add_argument("--version", action=DynamicVersionAction, version_callback=version_line)
    parser.add_argument(
        "--list-sheets",
        action="store_true",
        help="Print the index and name of every worksheet and exit",
    )

    selection = parser.add_argument_group("sheet selection")
    for field in fields(ExtractOptions):
        _add_dataclass_field(selection, field)

    output = parser.add_argument_group("CSV output")
    for field in fields(CsvWriterOptions):
        _add_dataclass_field(output, field)

    config = parser.add_argument_group("configuration")
    config.add_argument("--config", default=None, help="Configuration file (.toml, .yaml, .json, pyproject.toml)")
    config.add_argument("--no-config", action="store_true", help="Ignore discovered configuration files")

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        help="Logging level",
    )
    logging_group.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    logging_group.add_argument("--log-file", default=None, help="Also write log records to this file")
    logging_group.add_argument(
        "--trace", action="store_true", help="Debug logging with timestamps and logger names"
    )

    return parser


def build_options(parsed_args: argparse.Namespace) -> tuple[ExtractOptions, CsvWriterOptions]:
    """Build option records from parsed arguments.

    Raises
    ------
    ValidationError
        If any value is outside its valid range

    """
    extract_kwargs = {f.name: getattr(parsed_args, f.name) for f in fields(ExtractOptions)}
    writer_kwargs = {f.name: getattr(parsed_args, f.name) for f in fields(CsvWriterOptions)}
    try:
        return ExtractOptions(**extract_kwargs), CsvWriterOptions(**writer_kwargs)
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e), original_error=e) from e


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (DependencyError, ImportError)):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR

    if isinstance(exception, ParsingError):
        return EXIT_PARSING_ERROR

    if isinstance(exception, RenderingError):
        return EXIT_RENDERING_ERROR

    return EXIT_ERROR


def check_config_values(parser: argparse.ArgumentParser, config: dict[str, Any]) -> None:
    """Validate config values the way argparse validates typed arguments.

    argparse converts string defaults with the action's ``type`` but never
    checks them against ``choices``, and leaves non-string defaults alone.

    Raises
    ------
    argparse.ArgumentTypeError
        If a value cannot be converted or is not an allowed choice

    """
    for action in parser._actions:
        if action.dest not in config:
            continue
        raw = config[action.dest]
        value = raw
        if isinstance(raw, str) and action.type is not None:
            try:
                value = action.type(raw)  # type: ignore[operator]
            except (TypeError, ValueError) as e:
                raise argparse.ArgumentTypeError(f"Invalid value for '{action.dest}' in config: {raw!r}") from e
        elif action.type is int and (isinstance(raw, bool) or not isinstance(raw, int)):
            raise argparse.ArgumentTypeError(
                f"Invalid value for '{action.dest}' in config: {raw!r} (expected an integer)"
            )

        if action.choices is not None and value not in action.choices:
            choices = ", ".join(map(str, action.choices))
            raise argparse.ArgumentTypeError(
                f"Invalid value for '{action.dest}' in config: {raw!r} (choose from {choices})"
            )
