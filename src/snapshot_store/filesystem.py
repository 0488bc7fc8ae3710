"""
File access used by the snapshot manager.

Reads run in a worker thread so that loading a snapshot file is a
suspension point for the event loop.
"""
from __future__ import annotations

import asyncio
from pathlib import Path


def read_snapshot_text(path: Path) -> str:
    """Read a snapshot file without translating line endings."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_snapshot_text(path: Path, text: str) -> None:
    """Write a snapshot file without translating line endings."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


class LocalFileSystem:
    """Reads snapshot files from the local disk."""

    async def exists(self, path: Path) -> bool:
        return await asyncio.to_thread(path.is_file)

    async def read_text(self, path: Path) -> str:
        return await asyncio.to_thread(read_snapshot_text, path)
