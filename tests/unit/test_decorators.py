#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Tests for the dependency guard and debug timer."""

import logging
import sys
from unittest.mock import patch

import pytest

from sheet2csv.exceptions import DependencyError
from sheet2csv.utils.decorators import debug_timer, requires_dependencies
from sheet2csv.utils.packages import (
    check_requirements,
    check_version_requirement,
    describe_requirements,
    get_package_version,
)
from sheet2csv.workbook import open_workbook


@pytest.mark.unit
class TestRequiresDependencies:
    """Tests for requires_dependencies decorator."""

    def test_available_dependency(self):
        """Test that the wrapped function runs when packages are importable."""

        @requires_dependencies("xlsx", [("openpyxl", "openpyxl", "")])
        def load():
            return "loaded"

        assert load() == "loaded"

    def test_missing_dependency(self):
        """Test that a missing module raises DependencyError with an install hint."""

        @requires_dependencies("xlsx", [("no-such-package", "no_such_module_for_sheet2csv", "")])
        def load():
            return "loaded"

        with pytest.raises(DependencyError) as exc_info:
            load()

        message = str(exc_info.value)
        assert "XLSX support requires" in message
        assert "no-such-package" in message
        assert "pip install" in message
        assert exc_info.value.missing_packages == [("no-such-package", "")]

    def test_version_mismatch(self):
        """Test that an unsatisfied version spec is reported."""

        @requires_dependencies("xlsx", [("openpyxl", "openpyxl", ">=999.0")])
        def load():
            return "loaded"

        with pytest.raises(DependencyError) as exc_info:
            load()

        assert "version mismatches" in str(exc_info.value)

    def test_extra_install_hint(self):
        """Test that naming an extra suggests installing sheet2csv with it."""

        @requires_dependencies("xlsx", [("no-such-package", "no_such_module_for_sheet2csv", "")], extra="xlsx")
        def load():
            return "loaded"

        with pytest.raises(DependencyError) as exc_info:
            load()

        assert exc_info.value.install_command == 'pip install "sheet2csv[xlsx]"'
        assert 'Install with: pip install "sheet2csv[xlsx]"' in str(exc_info.value)

    def test_import_error_chained(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "openpyxl", None)

        @requires_dependencies("xlsx", [("openpyxl", "openpyxl", "")])
        def load():
            return "loaded"

        with pytest.raises(DependencyError) as exc_info:
            load()

        assert isinstance(exc_info.value.__cause__, ImportError)
        assert exc_info.value.original_import_error is exc_info.value.__cause__

    def test_open_workbook_without_backend(self, basic_xlsx, monkeypatch):
        """Test that open_workbook refuses to run without openpyxl."""
        monkeypatch.setitem(sys.modules, "openpyxl", None)

        with pytest.raises(DependencyError) as exc_info:
            open_workbook(basic_xlsx)

        assert exc_info.value.missing_packages == [("openpyxl", ">=3.1")]
        assert "sheet2csv[xlsx]" in str(exc_info.value)

    def test_preserves_metadata(self):
        @requires_dependencies("xlsx", [])
        def load():
            """Load something."""

        assert load.__name__ == "load"
        assert load.__doc__ == "Load something."


@pytest.mark.unit
class TestPackages:
    """Tests for installed package version checks."""

    def test_unknown_package_version(self):
        assert get_package_version("no-such-package-for-sheet2csv") is None

    def test_requirement_met(self):
        met, version = check_version_requirement("openpyxl", ">=3.0")
        assert met is True
        assert version

    def test_requirement_for_missing_package(self):
        met, version = check_version_requirement("no-such-package-for-sheet2csv", ">=1.0")
        assert met is False
        assert version is None

    def test_invalid_version_string(self):
        with patch("sheet2csv.utils.packages.get_package_version", return_value="not a version"):
            met, _ = check_version_requirement("openpyxl", ">=1.0")
        assert met is False

    def test_empty_spec_accepts_any_version(self):
        met, version = check_version_requirement("openpyxl", "")
        assert met is True
        assert version == get_package_version("openpyxl")

    def test_invalid_spec(self):
        met, _ = check_version_requirement("openpyxl", "about three")
        assert met is False


@pytest.mark.unit
class TestCheckRequirements:
    """Tests for check_requirements and describe_requirements."""

    def test_satisfied(self):
        report = check_requirements([("openpyxl", "openpyxl", ">=3.0")])

        assert report.satisfied
        assert report.missing == []
        assert report.import_error is None

    def test_missing_and_mismatched(self):
        report = check_requirements(
            [
                ("no-such-package", "no_such_module_for_sheet2csv", ">=1.0"),
                ("openpyxl", "openpyxl", ">=999.0"),
            ]
        )

        assert not report.satisfied
        assert report.missing == [("no-such-package", ">=1.0")]
        assert report.mismatches == [("openpyxl", ">=999.0", get_package_version("openpyxl"))]
        assert isinstance(report.import_error, ImportError)

    def test_describe_installed(self):
        version = get_package_version("openpyxl")
        assert describe_requirements([("openpyxl", "openpyxl", ">=3.1")]) == f"openpyxl {version}"

    def test_describe_missing(self, monkeypatch):
        monkeypatch.setitem(sys.modules, "openpyxl", None)
        assert describe_requirements([("openpyxl", "openpyxl", ">=3.1")]) == "openpyxl not installed"


@pytest.mark.unit
class TestDebugTimer:
    """Tests for debug_timer context manager."""

    def test_logs_when_debug_enabled(self, caplog):
        logger = logging.getLogger("sheet2csv.tests.timer")

        with caplog.at_level(logging.DEBUG, logger="sheet2csv.tests.timer"):
            with debug_timer(logger, "Loading workbook"):
                pass

        assert any("Loading workbook completed in" in record.message for record in caplog.records)

    def test_silent_above_debug(self, caplog):
        logger = logging.getLogger("sheet2csv.tests.timer")

        with caplog.at_level(logging.INFO, logger="sheet2csv.tests.timer"):
            with debug_timer(logger, "Loading workbook"):
                pass

        assert not caplog.records

    def test_logs_failure_and_reraises(self, caplog):
        logger = logging.getLogger("sheet2csv.tests.timer")

        with caplog.at_level(logging.DEBUG, logger="sheet2csv.tests.timer"):
            with pytest.raises(RuntimeError, match="boom"):
                with debug_timer(logger, "Loading workbook"):
                    raise RuntimeError("boom")

        messages = [record.message for record in caplog.records]
        assert any("Loading workbook failed after" in message for message in messages)
        assert not any("completed" in message for message in messages)
