"""
Pytest configuration and shared fixtures for snapshot_store tests.
"""

import asyncio
import shutil
import tempfile
from collections import Counter
from pathlib import Path

import pytest

from snapshot_store import SnapshotConfig, SnapshotManager


class FakeFileSystem:
    """In-memory files that count reads and yield to the event loop."""

    def __init__(self, files=None, read_delay=0.01):
        self.files = {Path(path): text for path, text in (files or {}).items()}
        self.read_delay = read_delay
        self.reads = Counter()

    async def exists(self, path):
        await asyncio.sleep(0)
        return Path(path) in self.files

    async def read_text(self, path):
        self.reads[Path(path)] += 1
        await asyncio.sleep(self.read_delay)
        return self.files[Path(path)]


@pytest.fixture
def fake_file_system():
    """Factory for in-memory file systems."""
    return FakeFileSystem


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path)


@pytest.fixture
def test_file(temp_dir):
    """A test module the snapshots belong to."""
    path = temp_dir / "test_example.py"
    path.write_text("def test_example():\n    pass\n")
    return path


@pytest.fixture
def snapshot_path(test_file):
    """Default snapshot file of ``test_file``."""
    return test_file.with_name("test_example.test.md")


@pytest.fixture
def make_manager(test_file):
    """Factory for managers of ``test_file`` with a given config."""

    def factory(**config):
        return SnapshotManager(test_file, SnapshotConfig(**config))

    return factory


SAMPLE_SNAPSHOT = """# `test_example.test.md`

**DO NOT MODIFY**. This file has been autogenerated. Run the tests with `--update-snapshots` to update.

## `adds numbers`

```
3
```

## `renders page`

### `1`

```html
<p>one</p>
```

### `2`

```html
<p>two</p>
```
"""


@pytest.fixture
def sample_snapshot():
    return SAMPLE_SNAPSHOT
