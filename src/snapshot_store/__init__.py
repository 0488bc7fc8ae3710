"""
Markdown snapshot store for test frameworks.

This package stores expected test outputs in Markdown snapshot files,
matches them against actual results and queues updates for inline
snapshots written directly in test source.
"""

import logging
import sys

__version__ = "0.1.0"

# Configure logging for the package
def configure_logging(level=logging.INFO):
    """Configure logging for the snapshot_store package."""
    logger = logging.getLogger('snapshot_store')

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(level)

    return logger

# Configure logging by default
configure_logging()

# Import main classes for public API
from .aggregate import merge_partial_snapshots
from .builder import build_snapshot, natural_sort_key
from .cli import SnapshotCLI, main
from .config import ConfigManager, SnapshotConfig
from .errors import InvalidCallSiteError, SnapshotError, SnapshotParseError
from .formatting import pretty_format
from .inline import MISSING, CallSite, InlineSnapshotUpdate, MatchStatus, capture_call_site
from .parser import CodeBlock, Heading, SourceLocation, clean_heading, parse_snapshot
from .records import ANONYMOUS_ENTRY, EntryKey, Snapshot, SnapshotEntry, snapshot_from_text
from .storage import SNAPSHOT_EXT, SnapshotManager
from .writer import SnapshotWriter, WriteReport

__all__ = [
    # Version
    "__version__",
    "configure_logging",
    # Parser
    "CodeBlock",
    "Heading",
    "SourceLocation",
    "clean_heading",
    "parse_snapshot",
    # Records
    "ANONYMOUS_ENTRY",
    "EntryKey",
    "Snapshot",
    "SnapshotEntry",
    "snapshot_from_text",
    # Builder
    "build_snapshot",
    "natural_sort_key",
    # Storage
    "SNAPSHOT_EXT",
    "SnapshotManager",
    # Inline snapshots
    "MISSING",
    "CallSite",
    "InlineSnapshotUpdate",
    "MatchStatus",
    "capture_call_site",
    "pretty_format",
    # Finalization
    "SnapshotWriter",
    "WriteReport",
    "merge_partial_snapshots",
    # Config
    "ConfigManager",
    "SnapshotConfig",
    # Errors
    "InvalidCallSiteError",
    "SnapshotError",
    "SnapshotParseError",
    # CLI
    "SnapshotCLI",
    "main",
]
