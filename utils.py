"""
Utility functions for SplitGroups
"""
from __future__ import annotations
import os
import uuid


def new_id() -> str:
    """Random unique id for groups, people and items"""
    return str(uuid.uuid4())


def safe_float(x: str, default: float = 0.0) -> float:
    """Convert string to float safely, returning default on error"""
    try:
        return float(x)
    except (TypeError, ValueError):
        return default


def parse_bool(x, default: bool = False) -> bool:
    """Parse the usual spellings of a boolean from CSV or JSON text"""
    if isinstance(x, bool):
        return x
    s = "" if x is None else str(x).strip().lower()
    if not s:
        return default
    if s in ("1", "true", "yes", "y"):
        return True
    if s in ("0", "false", "no", "n"):
        return False
    return default


def app_dir() -> str:
    """
    Get application data directory.
    SPLITGROUPS_DATA_DIR overrides the default ~/.splitgroups.
    Creates directory if it doesn't exist.
    """
    path = os.getenv("SPLITGROUPS_DATA_DIR") or os.path.join(os.path.expanduser("~"), ".splitgroups")
    os.makedirs(path, exist_ok=True)
    return path
