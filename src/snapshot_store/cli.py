"""
Command-line interface for inspecting and normalizing snapshot files.
"""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

from .builder import natural_sort_key
from .config import ConfigManager
from .errors import SnapshotError
from .filesystem import read_snapshot_text
from .records import Snapshot, snapshot_from_text
from .writer import SnapshotWriter

logger = logging.getLogger(__name__)


def _read_snapshot(path: Path) -> Snapshot:
    return snapshot_from_text(read_snapshot_text(path), path)


class SnapshotCLI:
    """Command-line interface for snapshot files."""

    def __init__(self):
        self.config_manager: Optional[ConfigManager] = None
        self.config = None

    def run(self, args: Optional[list[str]] = None) -> int:
        """Run the CLI with given arguments."""
        parser = self._create_parser()
        parsed_args = parser.parse_args(args)

        if not hasattr(parsed_args, "func"):
            parser.print_help()
            return 1

        package_logger = logging.getLogger("snapshot_store")
        if parsed_args.verbose:
            package_logger.setLevel(logging.DEBUG)
        elif parsed_args.quiet:
            package_logger.setLevel(logging.WARNING)

        self.config_manager = ConfigManager(parsed_args.config)
        self.config = self.config_manager.with_overrides(
            update_snapshots=parsed_args.update_snapshots or None,
            freeze_snapshots=parsed_args.freeze_snapshots or None,
            partial=parsed_args.partial or None,
        )

        try:
            return parsed_args.func(parsed_args)
        except KeyboardInterrupt:
            logger.info("\nInterrupted by user")
            return 1
        except (SnapshotError, OSError) as e:
            logger.error(f"Error: {e}")
            return 1

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="snapshot-store",
            description="Inspect and normalize Markdown snapshot files",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        parser.add_argument("--config", "-c", type=Path, help="Configuration file path")
        parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
        parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")
        parser.add_argument(
            "--update-snapshots", action="store_true", help="Regenerate every snapshot"
        )
        parser.add_argument(
            "--freeze-snapshots", action="store_true", help="Never write snapshot files"
        )
        parser.add_argument(
            "--partial", action="store_true", help="Snapshots are shared by several workers"
        )

        subparsers = parser.add_subparsers(dest="command", help="Available commands")

        # Check command
        check_parser = subparsers.add_parser("check", help="Validate snapshot files")
        check_parser.add_argument("paths", nargs="+", type=Path, help="Snapshot files")
        check_parser.set_defaults(func=self._check_command)

        # List command
        list_parser = subparsers.add_parser("list", help="List the entries of a snapshot file")
        list_parser.add_argument("path", type=Path, help="Snapshot file")
        list_parser.set_defaults(func=self._list_command)

        # Format command
        format_parser = subparsers.add_parser(
            "format", help="Rewrite snapshot files in canonical form"
        )
        format_parser.add_argument("paths", nargs="+", type=Path, help="Snapshot files")
        format_parser.add_argument(
            "--check",
            action="store_true",
            help="Report files that are not in canonical form without rewriting them",
        )
        format_parser.add_argument(
            "--root", type=Path, help="Directory the update hint in the header is relative to"
        )
        format_parser.set_defaults(func=self._format_command)

        # Config command
        config_parser = subparsers.add_parser("config", help="Configuration management")
        config_parser.add_argument(
            "--init", action="store_true", help="Initialize default configuration file"
        )
        config_parser.add_argument("--show", action="store_true", help="Show current configuration")
        config_parser.set_defaults(func=self._config_command)

        return parser

    def _check_command(self, args) -> int:
        """Handle the check command."""
        failed = 0
        for path in args.paths:
            try:
                snapshot = _read_snapshot(path)
            except (SnapshotError, OSError) as e:
                logger.error(f"FAIL {e}")
                failed += 1
                continue
            tests = {key.test_name for key in snapshot.entries}
            logger.info(f"OK   {path}: {len(snapshot.entries)} entries in {len(tests)} tests")

        logger.info(f"Checked {len(args.paths)} files, {failed} failed")
        return 1 if failed else 0

    def _list_command(self, args) -> int:
        """Handle the list command."""
        snapshot = _read_snapshot(args.path)

        by_test: dict[str, list[str]] = {}
        for key in snapshot.entries:
            by_test.setdefault(key.test_name, []).append(key.entry_name)

        for test_name in sorted(by_test):
            logger.info(test_name)
            for entry_name in sorted(by_test[test_name], key=natural_sort_key):
                language = snapshot.get_entry(test_name, entry_name).language
                suffix = f" ({language})" if language else ""
                logger.info(f"  {entry_name}{suffix}")
        return 0

    def _format_command(self, args) -> int:
        """Handle the format command."""
        config = self.config
        if args.check:
            config = dataclasses.replace(config, freeze_snapshots=True)

        snapshots = {}
        for path in args.paths:
            snapshot = _read_snapshot(path)
            if not snapshot.entries:
                logger.info(f"Skipping {path}: no entries")
                continue
            for entry in snapshot.entries.values():
                entry.used = True
            snapshots[path.absolute()] = snapshot

        report = SnapshotWriter(config, root=args.root).write(snapshots)
        for path in report.frozen:
            logger.info(f"Would reformat {path}")

        logger.info(
            f"{len(report.updated)} reformatted, {len(report.unchanged)} unchanged, "
            f"{len(report.frozen)} not written"
        )
        return 1 if report.frozen else 0

    def _config_command(self, args) -> int:
        """Handle the config command."""
        if args.init:
            self.config_manager.create_default_config()
            return 0

        if args.show:
            logger.info("Current configuration:")
            for key, value in self.config.to_dict().items():
                logger.info(f"  {key}: {value}")
            return 0

        logger.info("Use --init to create default config or --show to display current config")
        return 0


def main():
    """Main entry point for the CLI."""
    cli = SnapshotCLI()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
