from __future__ import annotations

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from cadence.errors import InvalidDateError, InvalidTimezoneError


InstantInput = str | date | datetime


def resolve_timezone(tz_name: str) -> ZoneInfo:
    if not isinstance(tz_name, str) or not tz_name.strip():
        raise InvalidTimezoneError("Invalid timezone.")
    tz_name = tz_name.strip()
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        # ValueError covers malformed keys such as absolute paths.
        raise InvalidTimezoneError(f"Invalid timezone: {tz_name}") from exc


def _ensure_timezone(dt: datetime, tz: ZoneInfo) -> datetime:
    # The UTC round-trip moves wall times inside a DST gap forward.
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    try:
        return dt.astimezone(timezone.utc).astimezone(tz)
    except OverflowError as exc:
        raise InvalidDateError(f"Date value {dt.isoformat()} is outside the supported range") from exc


def parse_instant(value: InstantInput, tz: ZoneInfo) -> datetime:
    """Resolve an ISO-8601 string, date or datetime to an instant in ``tz``.

    Naive values are read as wall-clock time in ``tz``, a time skipped by a
    DST change resolving forward; aware values are converted into it.
    """
    if isinstance(value, datetime):
        return _ensure_timezone(value, tz)
    if isinstance(value, date):
        return _ensure_timezone(datetime.combine(value, time.min), tz)
    if not isinstance(value, str):
        raise InvalidDateError(f"Unable to parse date value {value!r}")

    raw = value.strip()
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise InvalidDateError(f"Unable to parse date value {value!r}") from exc
    return _ensure_timezone(parsed, tz)
