"""
Writes the final state of a run's snapshots to disk.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .builder import build_snapshot
from .config import SnapshotConfig
from .filesystem import write_snapshot_text
from .records import Snapshot

logger = logging.getLogger(__name__)


@dataclass
class WriteReport:
    """What happened to each snapshot file."""

    created: list[Path] = field(default_factory=list)
    updated: list[Path] = field(default_factory=list)
    deleted: list[Path] = field(default_factory=list)
    unchanged: list[Path] = field(default_factory=list)
    frozen: list[Path] = field(default_factory=list)
    unmerged: list[Path] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.created or self.updated or self.deleted)


class SnapshotWriter:
    """
    Builds snapshot text and writes, deletes or skips each file.

    In a partial run each worker only sees part of a snapshot file, so the
    views must be combined with ``merge_partial_snapshots`` first. A view
    that still holds unused entries is not merged; it is reported in
    ``WriteReport.unmerged`` and left untouched on disk.
    """

    def __init__(self, config: Optional[SnapshotConfig] = None, root: Optional[Path] = None):
        self.config = config or SnapshotConfig()
        self.root = Path(root) if root is not None else None

    def _relative(self, path: Path) -> Optional[str]:
        if self.root is None:
            return None
        return os.path.relpath(path, self.root)

    def write(self, snapshots: Mapping[Path, Snapshot]) -> WriteReport:
        report = WriteReport()

        for path in sorted(snapshots):
            snapshot = snapshots[path]

            if not snapshot.entries:
                if snapshot.exists_on_disk and not self.config.partial:
                    self._delete(path, report)
                else:
                    report.unchanged.append(path)
                continue

            if self.config.partial and any(not entry.used for entry in snapshot.entries.values()):
                logger.warning(f"Snapshot {path} comes from an unmerged partial run; not writing it")
                report.unmerged.append(path)
                continue

            text = build_snapshot(path, snapshot.entries.values(), self._relative(path))
            if snapshot.exists_on_disk and text == snapshot.raw:
                report.unchanged.append(path)
                continue

            if self.config.freeze_snapshots:
                logger.warning(f"Snapshot {path} is out of date but snapshots are frozen")
                report.frozen.append(path)
                continue

            write_snapshot_text(path, text)
            if snapshot.exists_on_disk:
                logger.info(f"Updated snapshot {path}")
                report.updated.append(path)
            else:
                logger.info(f"Created snapshot {path}")
                report.created.append(path)

        return report

    def _delete(self, path: Path, report: WriteReport) -> None:
        if self.config.freeze_snapshots:
            logger.warning(f"Snapshot {path} is no longer used but snapshots are frozen")
            report.frozen.append(path)
            return

        if path.exists():
            path.unlink()
            logger.info(f"Deleted unused snapshot {path}")
            report.deleted.append(path)
        else:
            report.unchanged.append(path)
