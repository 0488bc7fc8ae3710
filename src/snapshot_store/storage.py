"""
Snapshot storage and management.

The ``SnapshotManager`` owns every snapshot file touched by one test file:
it loads each file at most once, answers ``get``/``set`` calls from tests,
matches inline snapshots and hands the final state to a writer.
"""
from __future__ import annotations

import dataclasses
import logging
import os
from pathlib import Path
from typing import Any, Optional, Protocol, Union

from .config import SnapshotConfig
from .errors import InvalidCallSiteError
from .filesystem import LocalFileSystem
from .formatting import Formatter, pretty_format, string_or_pretty_format
from .inline import MISSING, CallSite, InlineSnapshotUpdate, InlineSnapshotValue, MatchStatus
from .locking import PathLocker
from .records import EntryKey, Snapshot, SnapshotEntry, snapshot_from_text

logger = logging.getLogger(__name__)

SNAPSHOT_EXT = ".test.md"


class FileSystem(Protocol):
    async def exists(self, path: Path) -> bool: ...

    async def read_text(self, path: Path) -> str: ...


def _is_literal(value: Any) -> bool:
    return value is None or type(value) in (bool, int, float, str)


class SnapshotManager:
    """Manages snapshot loading, lookup and updates for one test file."""

    def __init__(
        self,
        test_path: Union[str, Path],
        config: Optional[SnapshotConfig] = None,
        *,
        file_system: Optional[FileSystem] = None,
        formatter: Formatter = pretty_format,
    ):
        self.test_path = Path(os.path.abspath(test_path))
        self.config = config or SnapshotConfig()
        self.file_system = file_system or LocalFileSystem()
        self.formatter = formatter
        self.default_snapshot_path = self.test_path.with_name(f"{self.test_path.stem}{SNAPSHOT_EXT}")

        self.snapshots: dict[Path, Snapshot] = {}
        self.inline_snapshot_updates: list[InlineSnapshotUpdate] = []
        self._locker = PathLocker()

    def normalize_snapshot_path(self, filename: Optional[Union[str, Path]] = None) -> Path:
        """Resolve an optional snapshot file name to an absolute path."""
        if filename is None:
            return self.default_snapshot_path

        path = Path(os.path.normpath(self.test_path.parent / filename))
        if path.name.endswith(SNAPSHOT_EXT):
            return path
        return path.with_name(f"{path.name}{SNAPSHOT_EXT}")

    async def init(self) -> None:
        """Load the default snapshot file, if there is one."""
        await self._load_snapshot(self.default_snapshot_path)

    async def _load_snapshot(self, path: Path) -> Optional[Snapshot]:
        async with self._locker.lock(path):
            # Another task may have finished loading while we waited
            loaded = self.snapshots.get(path)
            if loaded is not None:
                return loaded

            if not await self.file_system.exists(path):
                # set() may have created a pending record meanwhile
                return self.snapshots.get(path)

            content = await self.file_system.read_text(path)
            snapshot = snapshot_from_text(content, path)
            logger.debug(f"Loaded {len(snapshot.entries)} snapshot entries from {path}")

            pending = self.snapshots.get(path)
            if pending is None:
                self.snapshots[path] = snapshot
                return snapshot

            # Entries set while the file was being read take precedence
            for key, entry in snapshot.entries.items():
                pending.entries.setdefault(key, entry)
            pending.exists_on_disk = True
            pending.raw = snapshot.raw
            return pending

    async def get(
        self,
        test_name: str,
        entry_name: str,
        filename: Optional[Union[str, Path]] = None,
    ) -> Optional[str]:
        """
        Return the stored value for an entry, or None if there is none.

        In update mode every entry is reported missing so that the caller
        regenerates it.
        """
        snapshot_path = self.normalize_snapshot_path(filename)
        snapshot = self.snapshots.get(snapshot_path)
        if snapshot is None:
            snapshot = await self._load_snapshot(snapshot_path)
        if snapshot is None:
            return None

        snapshot.used = True

        if self.config.update_snapshots:
            return None

        entry = snapshot.get_entry(test_name, entry_name)
        if entry is None:
            return None
        entry.used = True
        return entry.value

    def set(
        self,
        test_name: str,
        entry_name: str,
        value: str,
        language: Optional[str] = None,
        filename: Optional[Union[str, Path]] = None,
    ) -> None:
        """Record ``value`` as the new expectation for an entry."""
        snapshot_path = self.normalize_snapshot_path(filename)
        snapshot = self.snapshots.get(snapshot_path)
        if snapshot is None:
            snapshot = Snapshot(exists_on_disk=False, used=True)
            self.snapshots[snapshot_path] = snapshot
            logger.debug(f"Creating snapshot {snapshot_path}")

        snapshot.add_entry(
            SnapshotEntry(
                test_name=test_name,
                entry_name=entry_name,
                value=value,
                language=language,
                used=True,
            )
        )

    def match_inline(
        self,
        call_site: Optional[CallSite],
        received: Any,
        expected: Union[InlineSnapshotValue, Any] = MISSING,
    ) -> MatchStatus:
        """
        Compare a received value against an inline snapshot literal.

        Returns UPDATE when the literal has to be (re)written, in which case
        an ``InlineSnapshotUpdate`` is queued unless snapshots are frozen.

        Raises:
            InvalidCallSiteError: if an update is needed but ``call_site``
                has no line or column.
        """
        received_format = string_or_pretty_format(received, self.formatter)
        if expected is not MISSING:
            if received_format == string_or_pretty_format(expected, self.formatter):
                return MatchStatus.MATCH

        if not (self.config.update_snapshots or expected is MISSING):
            return MatchStatus.NO_MATCH

        if call_site is None or not call_site.is_valid():
            raise InvalidCallSiteError(f"Call site has no line or column: {call_site!r}")

        if not self.config.freeze_snapshots:
            snapshot = received if _is_literal(received) else received_format
            self.inline_snapshot_updates.append(
                InlineSnapshotUpdate(line=call_site.line, column=call_site.column, snapshot=snapshot)
            )
        return MatchStatus.UPDATE

    def get_modified_snapshots(self) -> dict[Path, Snapshot]:
        """
        Return copies of every snapshot, ready to be written.

        Unused entries are dropped unless this is a partial run, where other
        workers may own them and the merge step decides what survives.
        """
        modified: dict[Path, Snapshot] = {}
        for path, snapshot in self.snapshots.items():
            if self.config.partial:
                entries: dict[EntryKey, SnapshotEntry] = dict(snapshot.entries)
            else:
                entries = snapshot.used_entries()
            modified[path] = dataclasses.replace(snapshot, entries=entries)
        return modified
