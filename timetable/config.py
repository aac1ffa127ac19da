"""Runtime configuration read from the environment.

All schedule times and the "current instant" are interpreted in one
timezone, ``COURSEFORGE_TIMEZONE``. There is no per-user timezone support.
"""

import os
from typing import Optional
from zoneinfo import ZoneInfo


DEFAULT_TIMEZONE = "Africa/Accra"
DEFAULT_HORIZON_DAYS = 7


def get_timezone(name: Optional[str] = None) -> ZoneInfo:
    """Return the configured timezone.

    Args:
        name: Explicit zone name; falls back to ``COURSEFORGE_TIMEZONE``.

    Raises:
        ValueError: If the zone name is unknown.
    """
    zone = name or os.environ.get("COURSEFORGE_TIMEZONE") or DEFAULT_TIMEZONE
    try:
        return ZoneInfo(zone)
    except (KeyError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {zone!r}") from e


def get_horizon_days() -> int:
    """Return the default projection horizon in days."""
    raw = os.environ.get("COURSEFORGE_HORIZON_DAYS", str(DEFAULT_HORIZON_DAYS))
    try:
        days = int(raw)
    except ValueError:
        raise ValueError(f"COURSEFORGE_HORIZON_DAYS must be an integer, got {raw!r}") from None
    if days < 0:
        raise ValueError("COURSEFORGE_HORIZON_DAYS must not be negative")
    return days


def get_credentials_path() -> Optional[str]:
    """Return the Firebase service account path, if one is configured."""
    return (
        os.environ.get("FIREBASE_CREDENTIALS")
        or os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
        or None
    )
