"""Tests for the snapshot-store command-line interface."""

import json

import pytest

from snapshot_store.cli import SnapshotCLI


@pytest.fixture
def cli():
    return SnapshotCLI()


@pytest.fixture
def config_path(temp_dir):
    return temp_dir / "snapshot_store.json"


class TestCheckCommand:
    """Tests for the check command."""

    def test_valid_file(self, cli, config_path, snapshot_path, sample_snapshot, caplog):
        snapshot_path.write_text(sample_snapshot)

        assert cli.run(["-c", str(config_path), "check", str(snapshot_path)]) == 0
        assert "3 entries in 2 tests" in caplog.text

    def test_invalid_file(self, cli, config_path, temp_dir):
        path = temp_dir / "broken.test.md"
        path.write_text("## `t`\n\n### `entry`\n")

        assert cli.run(["-c", str(config_path), "check", str(path)]) == 1

    def test_missing_file(self, cli, config_path, temp_dir):
        assert cli.run(["-c", str(config_path), "check", str(temp_dir / "nope.test.md")]) == 1


class TestListCommand:
    """Tests for the list command."""

    def test_lists_entries(self, cli, config_path, snapshot_path, sample_snapshot, caplog):
        snapshot_path.write_text(sample_snapshot)

        assert cli.run(["-c", str(config_path), "list", str(snapshot_path)]) == 0
        assert "renders page" in caplog.text
        assert "  2 (html)" in caplog.text

    def test_parse_error(self, cli, config_path, temp_dir):
        path = temp_dir / "broken.test.md"
        path.write_text("```\nunclosed\n")

        assert cli.run(["-c", str(config_path), "list", str(path)]) == 1


class TestFormatCommand:
    """Tests for the format command."""

    NON_CANONICAL = "# title\n## `b`\n```\n2\n```\n## `a`\n```\n1\n```\n"

    def test_rewrites_file(self, cli, config_path, snapshot_path):
        snapshot_path.write_text(self.NON_CANONICAL)

        assert cli.run(["-c", str(config_path), "format", str(snapshot_path)]) == 0

        text = snapshot_path.read_text()
        assert text.index("## `a`") < text.index("## `b`")
        assert text.startswith("# `test_example.test.md`\n\n")

    def test_check_does_not_write(self, cli, config_path, snapshot_path):
        snapshot_path.write_text(self.NON_CANONICAL)

        assert cli.run(["-c", str(config_path), "format", "--check", str(snapshot_path)]) == 1
        assert snapshot_path.read_text() == self.NON_CANONICAL

    def test_canonical_file_passes_check(self, cli, config_path, snapshot_path, sample_snapshot):
        snapshot_path.write_text(sample_snapshot)

        assert cli.run(["-c", str(config_path), "format", "--check", str(snapshot_path)]) == 0

    def test_freeze_flag(self, cli, config_path, snapshot_path):
        snapshot_path.write_text(self.NON_CANONICAL)

        args = ["-c", str(config_path), "--freeze-snapshots", "format", str(snapshot_path)]
        assert cli.run(args) == 1
        assert snapshot_path.read_text() == self.NON_CANONICAL


class TestConfigCommand:
    """Tests for the config command."""

    def test_init(self, cli, config_path):
        assert cli.run(["-c", str(config_path), "config", "--init"]) == 0
        assert json.loads(config_path.read_text()) == {
            "update_snapshots": False,
            "freeze_snapshots": False,
            "partial": False,
        }

    def test_show_applies_flags(self, cli, config_path, caplog):
        assert cli.run(["-c", str(config_path), "--partial", "config", "--show"]) == 0
        assert "partial: True" in caplog.text

    def test_no_command(self, cli):
        assert cli.run([]) == 1
