#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argparse actions that remember which options were typed on the command line.

Config files are applied as parser defaults, so a parsed value alone cannot
tell ``--sheet-index 0`` apart from the default. These actions record the
destination of every option the user actually passed in
``namespace._provided_args``.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Callable, Optional, Sequence, Union


def provided_args(namespace: argparse.Namespace) -> set[str]:
    """Return the destinations explicitly given on the command line."""
    return set(getattr(namespace, "_provided_args", ()))


def _mark_provided(namespace: argparse.Namespace, dest: str) -> None:
    if not hasattr(namespace, "_provided_args"):
        namespace._provided_args = set()
    namespace._provided_args.add(dest)


class TrackingStoreAction(argparse.Action):
    """Store a value and mark the option as explicitly provided."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Store the value and record the destination."""
        setattr(namespace, self.dest, values)
        _mark_provided(namespace, self.dest)


class TrackingFlagAction(argparse.Action):
    """Boolean flag that stores the opposite of its initial default.

    Behaves like ``store_true`` for a ``False`` default and ``store_false``
    for a ``True`` default. The stored constant is fixed when the parser is
    built, so a config file changing the default does not change what the
    flag means.
    """

    def __init__(
        self,
        option_strings: Sequence[str],
        dest: str,
        default: bool = False,
        required: bool = False,
        help: Optional[str] = None,
    ) -> None:
        """Initialize the flag with ``const`` set to ``not default``."""
        super().__init__(
            option_strings=option_strings,
            dest=dest,
            nargs=0,
            const=not default,
            default=default,
            required=required,
            help=help,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Store the flag constant and record the destination."""
        setattr(namespace, self.dest, self.const)
        _mark_provided(namespace, self.dest)


class DynamicVersionAction(argparse._VersionAction):
    """Print a version string computed when the flag is used, then exit."""

    def __init__(
        self, option_strings: Sequence[str], version_callback: Optional[Callable[[], str]] = None, **kwargs: Any
    ) -> None:
        """Initialize with a callback that builds the version line."""
        self.version_callback = version_callback
        kwargs.setdefault("version", "")
        kwargs.setdefault("dest", argparse.SUPPRESS)
        kwargs.setdefault("default", argparse.SUPPRESS)
        super().__init__(option_strings, **kwargs)

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        """Print the version to stdout and exit."""
        version = self.version_callback() if self.version_callback else self.version
        parser._print_message(f"{version}\n", sys.stdout)
        parser.exit()
