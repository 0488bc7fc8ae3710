"""
In-memory representation of snapshot files.

A ``Snapshot`` holds every entry of one snapshot file, keyed by
``EntryKey(test_name, entry_name)``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple, Optional

from .errors import SnapshotParseError
from .parser import CodeBlock, Heading, clean_heading, parse_snapshot

ANONYMOUS_ENTRY = "0"


class EntryKey(NamedTuple):
    test_name: str
    entry_name: str


@dataclass
class SnapshotEntry:
    """One recorded expectation."""

    test_name: str
    entry_name: str
    value: str
    language: Optional[str] = None
    used: bool = False

    @property
    def key(self) -> EntryKey:
        return EntryKey(self.test_name, self.entry_name)


@dataclass
class Snapshot:
    """One snapshot file, either loaded from disk or pending creation."""

    exists_on_disk: bool
    used: bool = False
    raw: str = ""
    entries: dict[EntryKey, SnapshotEntry] = field(default_factory=dict)

    def add_entry(self, entry: SnapshotEntry) -> None:
        self.entries[entry.key] = entry

    def get_entry(self, test_name: str, entry_name: str) -> Optional[SnapshotEntry]:
        return self.entries.get(EntryKey(test_name, entry_name))

    def used_entries(self) -> dict[EntryKey, SnapshotEntry]:
        return {key: entry for key, entry in self.entries.items() if entry.used}


def snapshot_from_text(text: str, path: Optional[Path] = None) -> Snapshot:
    """
    Build a ``Snapshot`` from the contents of a snapshot file.

    The title heading is skipped. Every level 2 heading opens a test group
    which holds either ``### name`` + code block pairs or one bare code
    block, stored under the anonymous entry name.

    Raises:
        SnapshotParseError: if the text is malformed. No partial snapshot
            is returned.
    """
    nodes = parse_snapshot(text, path)
    snapshot = Snapshot(exists_on_disk=True, used=False, raw=text)

    pos = 0
    while pos < len(nodes):
        node = nodes[pos]
        pos += 1

        if not (isinstance(node, Heading) and node.level == 2):
            continue

        test_name = clean_heading(node.text)

        while pos < len(nodes):
            child = nodes[pos]

            if isinstance(child, Heading) and child.level == 3:
                pos += 1
                entry_name = clean_heading(child.text)
                code_block = nodes[pos] if pos < len(nodes) else None
                if not isinstance(code_block, CodeBlock):
                    raise SnapshotParseError(
                        "Expected a code block after this heading", path, child.location
                    )
                pos += 1
                snapshot.add_entry(
                    SnapshotEntry(
                        test_name=test_name,
                        entry_name=entry_name,
                        language=code_block.language,
                        value=code_block.text,
                    )
                )
                continue

            if isinstance(child, CodeBlock):
                pos += 1
                snapshot.add_entry(
                    SnapshotEntry(
                        test_name=test_name,
                        entry_name=ANONYMOUS_ENTRY,
                        language=child.language,
                        value=child.text,
                    )
                )

            break

    return snapshot
