"""Configuration management for Muistutin."""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .core.clock import parse_local_datetime

logger = logging.getLogger(__name__)

MUISTUTIN_HOME = Path(os.environ.get("MUISTUTIN_HOME", Path.home() / "muistutin"))
CONFIG_FILE = MUISTUTIN_HOME / "config" / "muistutin.conf"
DATA_DIR = MUISTUTIN_HOME / "data"


@dataclass
class Config:
    """Muistutin configuration."""

    data_dir: str = ""
    default_view: str = "today"
    default_deadline: str = "08:00"
    refresh_seconds: int = 60
    clock_override: datetime | None = None


def _unquote(value: str) -> str:
    """Strip matching quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from muistutin.conf file."""
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
            case "data_dir":
                config.data_dir = value
            case "default_view":
                if value in ("today", "all"):
                    config.default_view = value
                else:
                    logger.warning(f"Ignoring DEFAULT_VIEW {value!r}, expected today or all")
            case "default_deadline":
                config.default_deadline = value
            case "refresh_seconds":
                try:
                    config.refresh_seconds = max(1, int(value))
                except ValueError:
                    logger.warning(f"Ignoring REFRESH_SECONDS {value!r}, not a number")
            case "clock_override":
                try:
                    config.clock_override = parse_local_datetime(value) if value else None
                except ValueError:
                    logger.warning(f"Ignoring CLOCK_OVERRIDE {value!r}, not a local ISO date-time")

    return config
