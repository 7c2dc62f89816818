from __future__ import annotations

from datetime import datetime, timezone


def parse_rfc3339(value: str) -> datetime:
    """
    Parse an RFC3339 timestamp string into a tz-aware UTC datetime.

    Accepts strings like:
      - 2025-01-01T12:34:56Z
      - 2025-01-01T12:34:56.123Z
      - 2025-01-01T12:34:56+09:00
    """
    if not isinstance(value, str) or not value:
        raise ValueError("RFC3339 value must be a non-empty string")

    s = value.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"

    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        raise ValueError("RFC3339 value must carry a timezone offset")
    return dt.astimezone(timezone.utc)
