"""Tests for merging partial run results."""

from pathlib import Path

from snapshot_store import Snapshot, SnapshotEntry, merge_partial_snapshots
from snapshot_store.records import EntryKey

PATH = Path("/project/test_example.test.md")


def view(*entries, exists_on_disk=True, raw="raw"):
    snapshot = Snapshot(exists_on_disk=exists_on_disk, used=True, raw=raw)
    for entry in entries:
        snapshot.add_entry(entry)
    return {PATH: snapshot}


class TestMergePartialSnapshots:
    """Tests for merge_partial_snapshots."""

    def test_union_of_used_entries(self):
        first = view(SnapshotEntry("a", "0", "1", used=True), SnapshotEntry("b", "0", "2"))
        second = view(SnapshotEntry("a", "0", "1"), SnapshotEntry("b", "0", "2", used=True))

        merged = merge_partial_snapshots([first, second])

        assert set(merged[PATH].entries) == {EntryKey("a", "0"), EntryKey("b", "0")}

    def test_entries_nobody_used_are_dropped(self):
        first = view(SnapshotEntry("a", "0", "1", used=True), SnapshotEntry("stale", "0", "x"))
        second = view(SnapshotEntry("stale", "0", "x"))

        merged = merge_partial_snapshots([first, second])

        assert list(merged[PATH].entries) == [EntryKey("a", "0")]

    def test_used_entry_beats_unused(self):
        first = view(SnapshotEntry("a", "0", "new", used=True))
        second = view(SnapshotEntry("a", "0", "old"))

        merged = merge_partial_snapshots([first, second])

        assert merged[PATH].get_entry("a", "0").value == "new"

    def test_last_used_entry_wins(self):
        first = view(SnapshotEntry("a", "0", "first", used=True))
        second = view(SnapshotEntry("a", "0", "second", used=True))

        merged = merge_partial_snapshots([first, second])

        assert merged[PATH].get_entry("a", "0").value == "second"

    def test_flags_are_combined(self):
        first = view(exists_on_disk=False, raw="")
        second = view(exists_on_disk=True, raw="on disk")

        merged = merge_partial_snapshots([first, second])[PATH]

        assert merged.exists_on_disk is True
        assert merged.raw == "on disk"

    def test_inputs_are_not_mutated(self):
        entry = SnapshotEntry("a", "0", "1", used=True)
        first = view(entry)

        merged = merge_partial_snapshots([first])
        merged[PATH].get_entry("a", "0").value = "changed"

        assert entry.value == "1"
        assert first[PATH].entries is not merged[PATH].entries
