"""Runtime settings for pocketcalc, read from the environment.

    POCKETCALC_LOG_LEVEL   — logging level name (default WARNING)
    POCKETCALC_LOG_FILE    — also write logs to this file
    POCKETCALC_ERROR_TEXT  — show this instead of Infinity/NaN (e.g. "Error")

CLI options take precedence over these.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

_DEFAULT_LEVEL = logging.WARNING


@dataclass
class Settings:
    """Resolved runtime settings."""

    log_level: int = _DEFAULT_LEVEL
    log_file: Optional[str] = None
    error_text: Optional[str] = None


def parse_level(name: Optional[str]) -> int:
    """Turn 'debug', 'INFO', '10' ... into a logging level; unknown → WARNING."""
    if not name:
        return _DEFAULT_LEVEL
    name = name.strip()
    if name.isdigit():
        return int(name)
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else _DEFAULT_LEVEL


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from POCKETCALC_* variables (os.environ by default)."""
    env = os.environ if env is None else env
    return Settings(
        log_level=parse_level(env.get("POCKETCALC_LOG_LEVEL")),
        log_file=env.get("POCKETCALC_LOG_FILE") or None,
        error_text=env.get("POCKETCALC_ERROR_TEXT") or None,
    )
