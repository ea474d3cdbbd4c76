"""Configuration management for todolist."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TODOLIST_HOME = Path(os.environ.get("TODOLIST_HOME", Path.home() / ".todolist"))
CONFIG_FILE = TODOLIST_HOME / "config" / "todolist.conf"
DATA_DIR = TODOLIST_HOME / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """todolist configuration."""

    storage_file: str = ""
    notification_seconds: float = 3.0
    due_soon_hours: float = 24.0
    log_level: str = "WARNING"
    color: bool = True

    @property
    def storage_path(self) -> Path:
        """Resolved storage file, defaulting into the data directory."""
        if self.storage_file:
            return Path(self.storage_file).expanduser()
        return DATA_DIR / "storage.json"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_float(key: str, value: str, default: float) -> float:
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Invalid number for {key.upper()}: {value!r}")
        return default


def load_config(path: Path | None = None) -> Config:
    """Load configuration from todolist.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "storage_file":
                config.storage_file = value
            case "notification_seconds":
                config.notification_seconds = _parse_float(key, value, config.notification_seconds)
            case "due_soon_hours":
                config.due_soon_hours = _parse_float(key, value, config.due_soon_hours)
            case "log_level":
                config.log_level = value.upper()
            case "color":
                if value.lower() in _TRUE:
                    config.color = True
                elif value.lower() in _FALSE:
                    config.color = False
                else:
                    logger.warning(f"Invalid boolean for COLOR: {value!r}")
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config
