from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z' for UTC."""
    v = str(value or "").strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(v)
    except ValueError:
        raise ValidationError(f"Invalid timestamp (ISO-8601): {value!r}")


def resolve_timezone(name: Optional[str]) -> Optional[tzinfo]:
    """Map a configured IANA zone name to tzinfo; empty means host local time."""
    if not name:
        return None
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        raise ValueError(f"Unknown timezone: {name!r}")


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current time in ``tz`` (naive host-local time when ``tz`` is None)."""
    return datetime.now(tz)


def local_date(moment: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of ``moment`` as seen from ``tz``."""
    if tz is not None and moment.tzinfo is not None:
        return moment.astimezone(tz).date()
    return moment.date()


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def date_range(start: date, days: int) -> list[date]:
    return [start + timedelta(days=i) for i in range(days)]


def in_zone(moment: Optional[datetime], tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """Bring ``moment`` onto the same footing as timestamps created in ``tz``.

    With a zone, naive values are taken as wall-clock time there and aware
    values are converted to it. Without one, aware values become naive host
    local time. MySQL DATETIME columns come back naive, so stored and incoming
    timestamps both pass through here before they are compared.
    """
    if moment is None:
        return None
    if tz is None:
        return moment.astimezone().replace(tzinfo=None) if moment.tzinfo else moment
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)
