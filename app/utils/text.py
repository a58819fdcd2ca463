"""Rendering helpers for alert text built from optional report fields."""

from typing import Optional

UNKNOWN = "Unknown"


def or_unknown(value: Optional[str]) -> str:
    """Empty and missing values read as "Unknown" in alerts."""
    return value if value else UNKNOWN
