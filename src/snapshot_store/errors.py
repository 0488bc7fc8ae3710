"""
Exceptions raised by the snapshot store.

Mismatches and missing snapshots are not errors; they are reported as
values. Only malformed snapshot files and invalid call sites raise.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .parser import SourceLocation


class SnapshotError(Exception):
    """Base class for snapshot store errors."""


class SnapshotParseError(SnapshotError):
    """A snapshot file does not follow the snapshot grammar."""

    def __init__(
        self,
        description: str,
        path: Optional[Path] = None,
        location: Optional["SourceLocation"] = None,
    ):
        self.description = description
        self.path = path
        self.location = location
        super().__init__(self._format())

    def _format(self) -> str:
        where = str(self.path) if self.path is not None else "<snapshot>"
        if self.location is not None:
            where = f"{where}:{self.location.line}:{self.location.column}"
        return f"{where}: {self.description}"


class InvalidCallSiteError(SnapshotError, ValueError):
    """An inline snapshot update was requested without a usable line/column."""
