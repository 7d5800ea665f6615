from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from typespeed.core.session import DEFAULT_DURATION

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "data" / "config.yaml"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class AppConfig:
    text: str
    duration: int = DEFAULT_DURATION
    log_level: str = DEFAULT_LOG_LEVEL


def parse_duration(value: Any, default: int = DEFAULT_DURATION) -> int:
    """Return ``value`` as a positive number of seconds, or ``default``.

    Accepts ints and numeric strings. Anything else (None, garbage, zero,
    negatives, booleans) falls back to the default.
    """
    if value is None:
        return default
    if isinstance(value, bool):
        logger.warning("Ignoring invalid duration %r, using %ds", value, default)
        return default
    try:
        seconds = int(str(value).strip())
    except ValueError:
        logger.warning("Ignoring invalid duration %r, using %ds", value, default)
        return default
    if seconds <= 0:
        logger.warning("Ignoring non-positive duration %r, using %ds", value, default)
        return default
    return seconds


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load and validate the YAML config, defaulting to the bundled file."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if not raw or not isinstance(raw, dict):
        raise ValueError(f"{config_path.name}: expected YAML mapping with 'text'")

    text = raw.get("text")
    if text is None or not isinstance(text, str):
        raise ValueError(f"{config_path.name}: missing or invalid 'text'")
    # the reference text is a single line of space-separated words
    text = " ".join(text.split())
    if not text:
        raise ValueError(f"{config_path.name}: 'text' is empty")

    duration = parse_duration(raw.get("duration"), DEFAULT_DURATION)

    log_level = raw.get("log_level", DEFAULT_LOG_LEVEL)
    if not isinstance(log_level, str) or not log_level.strip():
        logger.warning("%s: invalid 'log_level' %r, using %s", config_path.name, log_level, DEFAULT_LOG_LEVEL)
        log_level = DEFAULT_LOG_LEVEL

    return AppConfig(text=text, duration=duration, log_level=log_level.strip().upper())
