"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/FlowState/settings.json

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)

The countdown length is fixed at 25 minutes and is not a setting.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FlowState"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        self.sound_volume = max(0, min(int(self.sound_volume), 100))
        level = str(self.log_level).upper()
        self.log_level = level if level in LOG_LEVELS else "INFO"


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        logger.warning("Ignoring unreadable settings file %s", SETTINGS_PATH)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
