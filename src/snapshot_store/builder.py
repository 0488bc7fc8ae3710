"""
Serialization of snapshot entries back into snapshot file text.

Output is deterministic: tests are sorted by name, entries in natural
order, and only used entries are written.
"""
from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Union

from .records import ANONYMOUS_ENTRY, SnapshotEntry

_DIGITS_RE = re.compile(r"(\d+)")
_BACKTICK_RUN_RE = re.compile(r"`+")


def natural_sort_key(name: str) -> tuple[Union[str, int], ...]:
    """Sort key comparing runs of digits numerically ("2" < "10")."""
    parts = _DIGITS_RE.split(name)
    # split() with a capture group puts the digit runs at the odd indices
    return tuple(int(part) if i % 2 else part for i, part in enumerate(parts))


def _fence_for(value: str) -> str:
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(value)), default=0)
    return "`" * max(3, longest + 1)


def build_snapshot(
    path: Path,
    entries: Iterable[SnapshotEntry],
    relative: Optional[Union[str, Path]] = None,
) -> str:
    """Render entries as the text of the snapshot file at ``path``."""
    lines: list[str] = []

    def push_newline() -> None:
        if lines and lines[-1] != "":
            lines.append("")

    lines.append(f"# `{Path(path).name}`")
    push_newline()
    hint = "Run the tests with `--update-snapshots` to update"
    if relative is not None:
        hint = f"{hint} `{Path(relative).as_posix()}`"
    lines.append(f"**DO NOT MODIFY**. This file has been autogenerated. {hint}.")
    push_newline()

    by_test: dict[str, dict[str, SnapshotEntry]] = {}
    for entry in entries:
        if not entry.used:
            continue
        by_test.setdefault(entry.test_name, {})[entry.entry_name] = entry

    for test_name in sorted(by_test):
        test_entries = by_test[test_name]
        lines.append(f"## `{test_name}`")
        push_newline()

        entry_names = sorted(test_entries, key=natural_sort_key)
        skip_heading = len(entry_names) == 1 and entry_names[0] == ANONYMOUS_ENTRY

        for entry_name in entry_names:
            entry = test_entries[entry_name]
            if not skip_heading:
                lines.append(f"### `{entry_name}`")
            push_newline()

            fence = _fence_for(entry.value)
            lines.append(fence + (entry.language or ""))
            lines.append(entry.value)
            lines.append(fence)
            push_newline()

    return "\n".join(lines)
