"""Configuration management for Cadence."""

import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .core.filtering import SUNDAY
from .core.overlap import OverlapPolicy

logger = logging.getLogger(__name__)

CADENCE_HOME = Path(os.environ.get("CADENCE_HOME", Path.home() / ".cadence"))
CONFIG_FILE = CADENCE_HOME / "config" / "cadence.conf"
DATA_DIR = CADENCE_HOME / "data"

# Horizon used when a repeating event is saved without an explicit end date
DEFAULT_REPEAT_HORIZON_DAYS = 365

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


@dataclass
class Config:
    """Cadence configuration."""

    # Empty means use the local JSON file store
    api_base_url: str = ""
    events_file: str = ""
    week_start: int = SUNDAY
    repeat_horizon_days: int = DEFAULT_REPEAT_HORIZON_DAYS
    # Absolute horizon; takes precedence over repeat_horizon_days when set
    default_repeat_end: date | None = None
    overlap_policy: OverlapPolicy = OverlapPolicy.FULL
    remind_interval_seconds: int = 60

    @property
    def events_path(self) -> Path:
        if self.events_file:
            return Path(self.events_file).expanduser()
        return DATA_DIR / "events.json"


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def parse_weekday(value: str) -> int:
    """Weekday name or number (0 = Monday) to date.weekday() numbering."""
    value = value.strip().lower()
    if value.isdigit() and int(value) < 7:
        return int(value)
    for i, name in enumerate(_WEEKDAYS):
        if len(value) >= 3 and name.startswith(value):
            return i
    raise ValueError(f"Unknown weekday: {value}")


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from cadence.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        try:
            match key:
                case "api_base_url":
                    config.api_base_url = value
                case "events_file":
                    config.events_file = value
                case "week_start":
                    config.week_start = parse_weekday(value)
                case "repeat_horizon_days":
                    config.repeat_horizon_days = int(value)
                case "default_repeat_end":
                    config.default_repeat_end = date.fromisoformat(value) if value else None
                case "overlap_policy":
                    config.overlap_policy = OverlapPolicy(value.lower())
                case "remind_interval_seconds":
                    config.remind_interval_seconds = int(value)
                case _:
                    logger.debug(f"Ignoring unknown config key: {key}")
        except ValueError as e:
            logger.warning(f"Invalid value for {key.upper()}: {value!r} ({e})")

    return config
