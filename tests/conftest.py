"""Pytest configuration and shared fixtures for the sheet2csv test suite.

Workbooks are generated with openpyxl and written to per-test temporary
directories so tests never depend on checked-in binary files.
"""

import logging
from pathlib import Path

import pytest
from fixtures.generators.xlsx_fixtures import (
    create_xlsx_basic_table,
    create_xlsx_report_with_preamble,
    create_xlsx_with_empty_sheet,
    create_xlsx_with_multiple_sheets,
    create_xlsx_with_number_formats,
    create_xlsx_with_typed_cells,
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep config discovery away from the developer's real files.

    The working directory and HOME point at empty temporary directories and
    SHEET2CSV_CONFIG is cleared for every test.
    """
    home = tmp_path_factory.mktemp("home")
    work = tmp_path_factory.mktemp("work")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("SHEET2CSV_CONFIG", raising=False)
    monkeypatch.chdir(work)
    return work


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Drop root logger handlers and warning capture installed by the CLI during a test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        # pytest manages its own capture handlers
        if handler in handlers or type(handler).__module__.startswith("_pytest"):
            continue
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def _write(path: Path, data: bytes) -> Path:
    path.write_bytes(data)
    return path


@pytest.fixture
def basic_xlsx(tmp_path) -> Path:
    """Single-sheet workbook: header plus three employees."""
    return _write(tmp_path / "basic.xlsx", create_xlsx_basic_table())


@pytest.fixture
def multi_sheet_xlsx(tmp_path) -> Path:
    """Workbook with Summary, Data and Notes sheets."""
    return _write(tmp_path / "multi.xlsx", create_xlsx_with_multiple_sheets())


@pytest.fixture
def report_xlsx(tmp_path) -> Path:
    """Sheet with a title block, header at row 2 and ten data rows."""
    return _write(tmp_path / "report.xlsx", create_xlsx_report_with_preamble())


@pytest.fixture
def empty_sheet_xlsx(tmp_path) -> Path:
    """Workbook whose second sheet holds no cells."""
    return _write(tmp_path / "empty.xlsx", create_xlsx_with_empty_sheet())


@pytest.fixture
def typed_xlsx(tmp_path) -> Path:
    """Sheet with dates, booleans, floats, a formula and quoted text."""
    return _write(tmp_path / "typed.xlsx", create_xlsx_with_typed_cells())


@pytest.fixture
def number_format_xlsx(tmp_path) -> Path:
    """Sheet with percent, fixed-decimal and grouped number formats."""
    return _write(tmp_path / "formats.xlsx", create_xlsx_with_number_formats())
