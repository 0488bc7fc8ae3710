"""
Configuration management for the snapshot store.

The run configuration is an immutable value handed to the
``SnapshotManager`` when it is created.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotConfig:
    """Run-wide snapshot settings."""

    # Treat every stored expectation as absent and regenerate it
    update_snapshots: bool = False
    # Forbid writing snapshot files and inline updates
    freeze_snapshots: bool = False
    # Tests are split across cooperating workers sharing snapshot files
    partial: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SnapshotConfig":
        """Create from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
        invalid = sorted(key for key, value in data.items() if not isinstance(value, bool))
        if invalid:
            raise ValueError(f"Configuration values must be true or false: {', '.join(invalid)}")
        return cls(**data)

    @classmethod
    def from_file(cls, config_path: Path) -> "SnapshotConfig":
        """Load configuration from JSON file."""
        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return cls.from_dict(data)
        except (OSError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
            return cls()

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or Path("snapshot_store.json")
        self.config = SnapshotConfig.from_file(self.config_path)

    def get_config(self) -> SnapshotConfig:
        """Get the current configuration."""
        return self.config

    def with_overrides(self, **kwargs: Optional[bool]) -> SnapshotConfig:
        """Return the configuration with every non-None override applied."""
        changes = {key: value for key, value in kwargs.items() if value is not None}
        self.config = replace(self.config, **changes)
        return self.config

    def save_config(self) -> None:
        """Save configuration to file."""
        self.config.save_to_file(self.config_path)

    def create_default_config(self) -> None:
        """Create a default configuration file."""
        SnapshotConfig().save_to_file(self.config_path)
        logger.info(f"Created default configuration at {self.config_path}")
