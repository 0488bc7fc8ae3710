"""
Merging of snapshot views produced by partial (sharded) runs.

Each worker of a partial run reports every entry of the snapshot files it
touched, used or not. Merging keeps an entry when at least one worker used
it; when several workers used the same entry the last one wins.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from pathlib import Path

from .records import EntryKey, Snapshot, SnapshotEntry


def merge_partial_snapshots(views: Iterable[Mapping[Path, Snapshot]]) -> dict[Path, Snapshot]:
    merged: dict[Path, Snapshot] = {}
    entries_by_path: dict[Path, dict[EntryKey, SnapshotEntry]] = {}

    for view in views:
        for path, snapshot in view.items():
            current = merged.get(path)
            if current is None:
                merged[path] = Snapshot(
                    exists_on_disk=snapshot.exists_on_disk,
                    used=snapshot.used,
                    raw=snapshot.raw,
                )
                entries_by_path[path] = {}
            else:
                current.exists_on_disk = current.exists_on_disk or snapshot.exists_on_disk
                current.used = current.used or snapshot.used
                if not current.raw:
                    current.raw = snapshot.raw

            entries = entries_by_path[path]
            for key, entry in snapshot.entries.items():
                if entry.used:
                    entries[key] = entry

    for path, snapshot in merged.items():
        snapshot.entries = {
            key: dataclasses.replace(entry) for key, entry in entries_by_path[path].items()
        }
    return merged
