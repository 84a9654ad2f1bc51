#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for sheet2csv.

This module centralizes the defaults shared by the options classes, the
command-line interface and the configuration loader.

Constants are organized by category:
1. Type Definitions - Literal types
2. Extraction Defaults - sheet and row selection
3. CSV Output Defaults - dialect settings for the writer
4. Dependencies and Configuration - package requirements and config discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

CsvQuotingMode = Literal["minimal", "all", "nonnumeric", "none"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# =============================================================================
# Extraction Defaults
# =============================================================================

# -1 means "unset" for the row indices, 0 means "no limit"
DEFAULT_SHEET_INDEX = 0
DEFAULT_HEADER_LINE = -1
DEFAULT_START_LINE = -1
DEFAULT_LIMIT = 0
DEFAULT_RENDER_FORMULAS = True

# =============================================================================
# CSV Output Defaults
# =============================================================================

DEFAULT_CSV_DELIMITER = ","
DEFAULT_CSV_QUOTE_CHAR = '"'
DEFAULT_CSV_QUOTING: CsvQuotingMode = "minimal"
DEFAULT_CSV_ESCAPE_CHAR = None
DEFAULT_CSV_LINE_TERMINATOR = "\n"
DEFAULT_CSV_INCLUDE_BOM = False
DEFAULT_OUTPUT_ENCODING = "utf-8"

CSV_QUOTING_CHOICES: tuple[CsvQuotingMode, ...] = ("minimal", "all", "nonnumeric", "none")

# =============================================================================
# Dependencies and Configuration
# =============================================================================

# (install_name, import_name, version_spec)
# openpyxl is installed through the "xlsx" extra
XLSX_EXTRA = "xlsx"
DEPS_XLSX = [("openpyxl", "openpyxl", ">=3.1")]

CONFIG_ENV_VAR = "SHEET2CSV_CONFIG"
CONFIG_FILENAMES = [".sheet2csv.toml", ".sheet2csv.yaml", ".sheet2csv.yml", ".sheet2csv.json"]
PYPROJECT_TOOL_SECTION = "sheet2csv"

DEFAULT_LOG_LEVEL: LogLevel = "WARNING"
