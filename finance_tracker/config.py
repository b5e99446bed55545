"""Configuration management for the finance tracker.

This module centralizes all configuration values including paths,
defaults, and environment variable overrides.
"""

from __future__ import annotations

import os
from pathlib import Path

# Base project root - assumes this file is in finance_tracker/
_PROJECT_ROOT = Path(__file__).parent.parent.resolve()


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Data directories
DATA_DIR = Path(os.getenv("FINTRACK_DATA_DIR", _PROJECT_ROOT / "data"))
EXPORTS_DIR = Path(os.getenv("FINTRACK_EXPORTS_DIR", DATA_DIR / "exports"))

# Database
DB_PATH = Path(
    os.getenv("FINTRACK_DB_PATH", DATA_DIR / "finance.db")
).resolve()

# Display and calculation defaults
DEFAULT_CURRENCY = os.getenv("FINTRACK_CURRENCY", "USD").upper()
TRAILING_DAYS = _int_env("FINTRACK_TRAILING_DAYS", 30)
TOP_CATEGORY_LIMIT = _int_env("FINTRACK_TOP_CATEGORIES", 6)
RECENT_LIMIT = _int_env("FINTRACK_RECENT_LIMIT", 5)
DEFAULT_CATEGORY_ICON = "circle"


def ensure_data_directories() -> None:
    """Create all required data directories if they don't exist."""
    for directory in [DATA_DIR, EXPORTS_DIR, DB_PATH.parent]:
        directory.mkdir(parents=True, exist_ok=True)


def get_db_path() -> str:
    """Get the database path as a string."""
    return str(DB_PATH)
