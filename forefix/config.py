"""Application configuration for ForeFix."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Config:
    """Application configuration settings."""

    # Storage; empty means ~/.forefix/data
    data_dir: str = ""

    # Dashboard
    analysis_delay: float = 2.0  # seconds
    default_category: str = "mobile"
    preferred_theme: str = "light"

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def load(cls, filepath: Optional[Path] = None) -> "Config":
        """Load configuration from file."""
        if filepath is None:
            filepath = cls._default_config_path()

        if filepath.exists():
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    data = json.load(f)
                return cls(**data)
            except (json.JSONDecodeError, TypeError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", filepath, exc)

        return cls()

    def resolved_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return self._default_config_path().parent / "data"

    @staticmethod
    def _default_config_path() -> Path:
        return Path.home() / ".forefix" / "config.json"
