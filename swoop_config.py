#!/usr/bin/env python3
"""
Swoop Configuration Manager

Stores default options and lifetime cleanup statistics in a .swoop
directory under the user's home.
"""

import json
import pathlib
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Optional


def _default_stats() -> dict:
    return {"total_runs": 0, "total_reclaimed_bytes": 0}


@dataclass
class SwoopConfig:
    """Persistent configuration for swoop"""

    version: str = "1.0"
    show_empty: bool = False
    follow_symlinks: bool = False
    last_run: Optional[str] = None
    stats: dict = field(default_factory=_default_stats)

    def record_run(self, reclaimed: int):
        """Count a completed run and the bytes it reclaimed"""
        self.stats["total_runs"] = self.stats.get("total_runs", 0) + 1
        self.stats["total_reclaimed_bytes"] = self.stats.get("total_reclaimed_bytes", 0) + reclaimed
        self.last_run = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "SwoopConfig":
        """Create from dictionary"""
        stats = _default_stats()
        stored_stats = data.get("stats")
        if isinstance(stored_stats, dict):
            stats.update(stored_stats)
        return cls(
            version=data.get("version", "1.0"),
            show_empty=bool(data.get("show_empty", False)),
            follow_symlinks=bool(data.get("follow_symlinks", False)),
            last_run=data.get("last_run"),
            stats=stats,
        )


class SwoopConfigManager:
    """Manages loading and saving swoop configuration"""

    def __init__(self, config_dir: Optional[pathlib.Path] = None):
        """Initialize configuration manager

        Args:
            config_dir: Override default .swoop directory location
        """
        if config_dir:
            self.config_dir = pathlib.Path(config_dir)
        else:
            self.config_dir = pathlib.Path.home() / ".swoop"

        self.config_file = self.config_dir / "config.json"

        # Ensure directory exists
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> SwoopConfig:
        """Load configuration from file"""
        if self.config_file.exists():
            try:
                with self.config_file.open() as f:
                    data = json.load(f)
                    return SwoopConfig.from_dict(data)
            except (json.JSONDecodeError, KeyError, AttributeError, TypeError):
                # If config is corrupted, return default
                return SwoopConfig()
        return SwoopConfig()

    def save(self, config: SwoopConfig):
        """Save configuration to file"""
        with self.config_file.open("w") as f:
            json.dump(config.to_dict(), f, indent=2)
