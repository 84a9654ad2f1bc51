#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the sheet2csv library.

This module defines the exception classes raised while opening a workbook,
selecting a sheet and row range, and writing CSV output. Every failure the
command-line tool reports is one of these, so callers can catch the base
class to handle all library errors at once.

Exception Hierarchy
-------------------
- Sheet2CsvError (base exception)

  - ValidationError (parameter/option validation)
    - SheetNotFoundError (unknown sheet name, out-of-range sheet index)
    - RowRangeError (out-of-range row index)

  - FileError (file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, locked files)
    - MalformedFileError (workbook cannot be opened)

  - ParsingError (sheet content problems)
    - EmptySheetError (sheet has no rows)

  - RenderingError (CSV output failures)
    - OutputWriteError (file write failures)

  - DependencyError (missing/incompatible packages)

"""

from typing import Any


class Sheet2CsvError(Exception):
    """Base exception class for all sheet2csv-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Sheet2CsvError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    parameter_name : str or None
        The name of the problematic parameter
    parameter_value : any
        The value that caused the error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class SheetNotFoundError(ValidationError):
    """Exception raised when the requested worksheet does not exist.

    Raised for an unknown sheet name, an out-of-range sheet index, or a
    workbook that holds no sheets at all.

    Parameters
    ----------
    message : str
        Description of the lookup failure
    sheet : str or int, optional
        The sheet name or index that was requested
    available : list[str], optional
        Names of the sheets present in the workbook

    """

    def __init__(self, message: str, sheet: str | int | None = None, available: list[str] | None = None):
        """Initialize the sheet lookup error."""
        parameter_name = "sheet_name" if isinstance(sheet, str) else "sheet_index"
        super().__init__(message, parameter_name=parameter_name, parameter_value=sheet)
        self.sheet = sheet
        self.available = available or []


class RowRangeError(ValidationError):
    """Exception raised when a row index falls outside the sheet.

    Parameters
    ----------
    row_index : int
        The requested row index
    row_count : int
        Number of rows in the sheet
    parameter_name : str, default "start_line"
        Which option carried the bad index
    message : str, optional
        Custom error message. If not provided, generates one naming the valid range

    """

    def __init__(
        self,
        row_index: int,
        row_count: int,
        parameter_name: str = "start_line",
        message: str | None = None,
    ):
        """Initialize the row range error."""
        if message is None:
            message = f"no row {row_index} available, please select a row between 0 and {row_count - 1}"
        super().__init__(message, parameter_name=parameter_name, parameter_value=row_index)
        self.row_index = row_index
        self.row_count = row_count


class FileError(Sheet2CsvError):
    """Base exception for file access and I/O errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when a file cannot be found.

    Parameters
    ----------
    file_path : str
        Path to the file that was not found
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when a file cannot be accessed.

    This includes permission errors, locked files, etc.

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class MalformedFileError(FileError):
    """Exception raised when a workbook cannot be opened by the spreadsheet library."""

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the malformed file error."""
        super().__init__(message, file_path=file_path, original_error=original_error)


class ParsingError(Sheet2CsvError):
    """Exception raised when sheet content cannot be turned into rows.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    parsing_stage : str, optional
        The stage of parsing where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the parsing failure

    """

    def __init__(self, message: str, parsing_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the parsing error."""
        super().__init__(message, original_error)
        self.parsing_stage = parsing_stage


class EmptySheetError(ParsingError):
    """Exception raised when a row range is requested from a sheet with no rows."""

    def __init__(self, message: str | None = None, sheet_title: str | None = None):
        """Initialize the empty sheet error."""
        if message is None:
            message = "this worksheet contains no rows"
        super().__init__(message, parsing_stage="row_selection")
        self.sheet_title = sheet_title


class RenderingError(Sheet2CsvError):
    """Exception raised when CSV output generation fails.

    Parameters
    ----------
    message : str
        Description of the rendering failure
    rendering_stage : str, optional
        The stage of rendering where the error occurred
    original_error : Exception, optional
        The underlying exception that caused the rendering failure

    """

    def __init__(self, message: str, rendering_stage: str | None = None, original_error: Exception | None = None):
        """Initialize the rendering error."""
        super().__init__(message, original_error)
        self.rendering_stage = rendering_stage


class OutputWriteError(RenderingError):
    """Exception raised when writing the output file fails.

    Parameters
    ----------
    file_path : str
        Path to the output file that failed to write
    message : str, optional
        Custom error message. If not provided, uses default message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, rendering_stage="file_write", original_error=original_error)
        self.file_path = file_path


class DependencyError(Sheet2CsvError):
    """Exception raised when required dependencies are not available.

    Parameters
    ----------
    converter_name : str
        Name of the component requiring dependencies
    missing_packages : list[tuple[str, str]]
        List of (package_name, version_spec) tuples for missing packages
    version_mismatches : list[tuple[str, str, str]], optional
        List of (package_name, required_version, installed_version) tuples
    install_command : str, optional
        Suggested pip install command to resolve the issue
    message : str, optional
        Custom error message. If not provided, generates a helpful message

    """

    def __init__(
        self,
        converter_name: str,
        missing_packages: list[tuple[str, str]],
        version_mismatches: list[tuple[str, str, str]] | None = None,
        install_command: str = "",
        message: str | None = None,
        original_import_error: ImportError | None = None,
    ):
        """Initialize the dependency error with package details."""
        version_mismatches = version_mismatches or []
        self.original_import_error = original_import_error
        if message is None:
            message_parts = []

            if missing_packages:
                pkg_list = ", ".join(f"'{name}{spec}'" if spec else f"'{name}'" for name, spec in missing_packages)
                message_parts.append(f"{converter_name.upper()} support requires the following packages: {pkg_list}")

            if version_mismatches:
                mismatch_str = ", ".join(
                    f"'{name}' (requires {required}, but {installed} is installed)"
                    for name, required, installed in version_mismatches
                )
                message_parts.append(f"{converter_name.upper()} support has version mismatches: {mismatch_str}")

            message = "\n".join(message_parts)

            if install_command:
                message += f"\nInstall with: {install_command}"
            else:
                all_packages = missing_packages + [(name, req) for name, req, _ in version_mismatches]
                if all_packages:
                    packages_str = " ".join(f'"{name}{spec}"' if spec else name for name, spec in all_packages)
                    message += f"\nInstall with: pip install --upgrade {packages_str}"

        super().__init__(message)
        self.converter_name = converter_name
        self.missing_packages = missing_packages
        self.version_mismatches = version_mismatches
        self.install_command = install_command
