# app/settings.py
from __future__ import annotations
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Any
import json
import logging

from app.errors import SettingsError

log = logging.getLogger(__name__)


@dataclass
class Settings:
    # mismatches the position estimate absorbs before it moves
    precision: int = 5
    font_family: str = "Inter, Segoe UI, Roboto, Arial"
    font_size: int = 48
    line_spacing: int = 100
    background: str = "#0f1115"
    primary: str = "#e5e7eb"
    secondary: str = "#6b7280"
    accent: str = "#eab308"
    default_text_path: str = "assets/texts/default.txt"
    log_level: str = "INFO"
    log_file: str = "typealong.log"
    frame_interval_ms: int = 16


DEFAULT_SETTINGS_FILE = Path("settings.json")

_DEFAULTS = Settings()
_POSITIVE_INTS = {"font_size", "line_spacing", "frame_interval_ms"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


# -------- helpers --------
def settings_from_dict(d: Dict[str, Any]) -> Settings:
    """Validate a settings payload; missing keys keep their defaults."""
    known = {f.name for f in fields(Settings)}
    unknown = set(d.keys()) - known
    if unknown:
        raise SettingsError(f"Unknown settings keys: {', '.join(sorted(unknown))}")

    values: Dict[str, Any] = {}
    for key, raw in d.items():
        if isinstance(getattr(_DEFAULTS, key), int):
            # bool is an int subclass, reject it explicitly
            if isinstance(raw, bool) or not isinstance(raw, int):
                raise SettingsError(f"{key} must be an integer, got {raw!r}")
            if key in _POSITIVE_INTS and raw <= 0:
                raise SettingsError(f"{key} must be > 0, got {raw}")
            if key == "precision" and raw < 0:
                raise SettingsError(f"precision must be >= 0, got {raw}")
            values[key] = raw
        else:
            values[key] = str(raw)

    if "log_level" in values:
        level = values["log_level"].upper()
        if level not in _LOG_LEVELS:
            raise SettingsError(f"Unknown log level: {values['log_level']}")
        values["log_level"] = level
    return Settings(**values)


# -------- public API --------
def load_settings(path: Path = DEFAULT_SETTINGS_FILE) -> Settings:
    """Load settings.json (if present); fall back to defaults on any problem."""
    path = Path(path)
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Failed to read settings from %s: %s", path, e)
        return Settings()
    if not isinstance(data, dict):
        log.warning("Ignoring %s: expected a JSON object", path)
        return Settings()
    try:
        return settings_from_dict(data)
    except SettingsError as e:
        log.warning("Ignoring invalid settings in %s: %s", path, e)
        return Settings()
