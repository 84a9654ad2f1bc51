"""Command-line interface for sheet2csv.

Prints one worksheet of an XLSX workbook as CSV, to standard output or to
a file.

Configuration
-------------
Option defaults may come from a configuration file: ``--config PATH``, else
the file named by the ``SHEET2CSV_CONFIG`` environment variable, else the
first ``.sheet2csv.toml``/``.yaml``/``.yml``/``.json`` or ``pyproject.toml``
with a ``[tool.sheet2csv]`` section found from the working directory upwards
or in the home directory. CLI arguments always override config values.

Examples
--------
Print the first sheet::

    $ sheet2csv report.xlsx

Select a sheet by name and write to a file::

    $ sheet2csv --sheet-name Data --output-file data.csv report.xlsx

Rows 100-149 with row 0 as header::

    $ sheet2csv --header-line 0 --start-line 100 --limit 50 report.xlsx

"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from sheet2csv.cli.actions import provided_args
from sheet2csv.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    build_options,
    check_config_values,
    configurable_dests,
    create_parser,
    get_exit_code_for_exception,
)
from sheet2csv.cli.config import discover_config_file, load_config_file, normalize_config_keys
from sheet2csv.constants import CONFIG_ENV_VAR
from sheet2csv.exceptions import Sheet2CsvError
from sheet2csv.logging_utils import configure_logging, resolve_log_level

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = resolve_log_level(parsed_args.log_level)

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _resolve_config_path(parsed_args: argparse.Namespace) -> Path | None:
    """Pick the config file to apply, or None when configs are disabled or absent."""
    if parsed_args.no_config:
        return None
    if parsed_args.config:
        return Path(parsed_args.config)
    env_config = os.environ.get(CONFIG_ENV_VAR)
    if env_config:
        return Path(env_config)
    return discover_config_file()


def _apply_config(parser: argparse.ArgumentParser, args: list[str] | None) -> argparse.Namespace:
    """Parse arguments, re-parsing on top of config file defaults when one applies.

    Raises
    ------
    argparse.ArgumentTypeError
        If the config file cannot be loaded or names unknown options

    """
    parsed_args = parser.parse_args(args)
    config_path = _resolve_config_path(parsed_args)
    if config_path is None:
        return parsed_args

    config: dict[str, Any] = normalize_config_keys(load_config_file(config_path), configurable_dests())
    check_config_values(parser, config)

    # --sheet-index on the command line beats a sheet name from the config
    explicit = provided_args(parsed_args)
    if "sheet_index" in explicit and "sheet_name" not in explicit:
        config.pop("sheet_name", None)

    if not config:
        return parsed_args

    parser.set_defaults(**config)
    parsed_args = parser.parse_args(args)
    parsed_args.loaded_config = config_path
    return parsed_args


def _list_sheets(input_path: str) -> int:
    from sheet2csv.workbook import list_sheets, open_workbook

    workbook = open_workbook(input_path)
    for index, name in enumerate(list_sheets(workbook)):
        print(f"{index}\t{name}")
    return EXIT_SUCCESS


def _convert(parsed_args: argparse.Namespace) -> int:
    from sheet2csv.api import extract_sheet
    from sheet2csv.writer import CsvSheetWriter

    extract_options, writer_options = build_options(parsed_args)
    rows = extract_sheet(parsed_args.input, extract_options)

    writer = CsvSheetWriter(writer_options)
    if parsed_args.output_file:
        writer.write(rows, parsed_args.output_file)
        return EXIT_SUCCESS

    # the underlying byte stream honours --encoding and keeps line endings untranslated
    sys.stdout.flush()
    writer.write(rows, getattr(sys.stdout, "buffer", sys.stdout))
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the sheet2csv command.

    Parameters
    ----------
    args : list[str], optional
        Command-line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()

    try:
        parsed_args = _apply_config(parser, args)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    if not parsed_args.input:
        parser.print_usage(sys.stderr)
        print("Error: Input file is required", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        _setup_logging_level(parsed_args)
        if getattr(parsed_args, "loaded_config", None):
            logger.debug("Loaded configuration from %s", parsed_args.loaded_config)

        if parsed_args.list_sheets:
            return _list_sheets(parsed_args.input)
        return _convert(parsed_args)
    except Sheet2CsvError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
