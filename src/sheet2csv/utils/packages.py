#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sheet2csv/utils/packages.py
"""Inspection of the optional workbook backend.

openpyxl ships as the ``xlsx`` extra, so whether it is importable and
recent enough is decided at runtime. The results feed both the guard in
``utils.decorators`` and the ``--version`` output of the CLI.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from importlib import metadata
from typing import Optional, Sequence, Tuple

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

# (install_name, import_name, version_spec)
Requirement = Tuple[str, str, str]


@dataclass
class RequirementReport:
    """Outcome of checking a group of requirements.

    Attributes
    ----------
    missing : list[tuple[str, str]]
        ``(install_name, version_spec)`` for packages that failed to import
    mismatches : list[tuple[str, str, str]]
        ``(install_name, version_spec, installed_version)`` for packages
        whose installed version does not satisfy the spec
    import_error : ImportError or None
        First import failure, kept for chaining

    """

    missing: list[tuple[str, str]] = field(default_factory=list)
    mismatches: list[tuple[str, str, str]] = field(default_factory=list)
    import_error: Optional[ImportError] = None

    @property
    def satisfied(self) -> bool:
        """Whether nothing is missing or outdated."""
        return not self.missing and not self.mismatches


def get_package_version(package_name: str) -> Optional[str]:
    """Return the installed version of a distribution, or None if absent."""
    try:
        return metadata.version(package_name)
    except metadata.PackageNotFoundError:
        return None


def check_version_requirement(package_name: str, version_spec: str) -> Tuple[bool, Optional[str]]:
    """Check if an installed package meets a version requirement.

    An empty ``version_spec`` accepts any installed version. Versions or
    specs that ``packaging`` cannot parse never satisfy the requirement.

    Returns
    -------
    tuple
        (meets_requirement, installed_version)

    """
    installed_version = get_package_version(package_name)
    if not installed_version:
        return False, None
    if not version_spec:
        return True, installed_version

    try:
        return Version(installed_version) in SpecifierSet(version_spec), installed_version
    except (InvalidSpecifier, InvalidVersion):
        return False, installed_version


def check_requirements(requirements: Sequence[Requirement]) -> RequirementReport:
    """Import each required module and compare its version with the spec.

    Parameters
    ----------
    requirements : Sequence[tuple[str, str, str]]
        ``(install_name, import_name, version_spec)`` tuples

    Returns
    -------
    RequirementReport
        Missing packages and version mismatches

    """
    report = RequirementReport()
    for install_name, import_name, version_spec in requirements:
        try:
            importlib.import_module(import_name)
        except ImportError as e:
            report.missing.append((install_name, version_spec))
            if report.import_error is None:
                report.import_error = e
            continue

        if version_spec:
            meets, installed = check_version_requirement(install_name, version_spec)
            if not meets:
                report.mismatches.append((install_name, version_spec, installed or "unknown"))

    return report


def describe_requirements(requirements: Sequence[Requirement]) -> str:
    """Summarize installed versions, e.g. ``openpyxl 3.1.2``.

    Packages that cannot be imported are reported as ``not installed``.
    """
    parts = []
    for install_name, import_name, _ in requirements:
        try:
            importlib.import_module(import_name)
        except ImportError:
            parts.append(f"{install_name} not installed")
            continue
        parts.append(f"{install_name} {get_package_version(install_name) or 'unknown'}")
    return ", ".join(parts)
