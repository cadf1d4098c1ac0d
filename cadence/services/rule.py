from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from cadence.errors import InvalidArgumentError
from cadence.services.intervals import CanonicalInterval, IntervalSpec, estimate_duration_ms, normalize_interval
from cadence.services.recurrence_engine import occurrence_at, occurrences_between
from cadence.services.time_parsing import InstantInput, parse_instant, resolve_timezone

logger = logging.getLogger(__name__)


def _require_non_negative_int(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"{name} must be non-negative, got {value}")
    return value


class RecurrenceRule:
    """A start instant repeated every ``interval`` in a fixed timezone.

    Rules are immutable; every query is a pure function of the rule and its
    arguments.
    """

    __slots__ = ("_start", "_interval", "_tz")

    def __init__(self, start: InstantInput, interval: IntervalSpec, timezone_name: str) -> None:
        self._tz = resolve_timezone(timezone_name)
        self._start = parse_instant(start, self._tz)
        self._interval = normalize_interval(interval)
        logger.debug(
            "Recurrence rule created start=%s interval=%s timezone=%s",
            self._start.isoformat(),
            self._interval.as_dict(),
            self._tz.key,
        )

    @property
    def start(self) -> datetime:
        return self._start

    @property
    def interval(self) -> CanonicalInterval:
        return self._interval

    @property
    def timezone(self) -> str:
        return self._tz.key

    @property
    def tzinfo(self) -> ZoneInfo:
        return self._tz

    @property
    def average_interval_ms(self) -> int:
        return estimate_duration_ms(self._interval)

    def __repr__(self) -> str:
        return (
            f"RecurrenceRule(start={self._start.isoformat()!r}, "
            f"interval={self._interval.as_dict()!r}, timezone={self._tz.key!r})"
        )

    def occurrence(self, index: int) -> datetime:
        index = _require_non_negative_int("index", index)
        return occurrence_at(self._start, self._interval, index)

    # Published name of ``occurrence``.
    occurance = occurrence

    def first(self, count: int) -> list[datetime]:
        count = _require_non_negative_int("count", count)
        return [occurrence_at(self._start, self._interval, index) for index in range(count)]

    def between(
        self, range_start: InstantInput, range_end: InstantInput, *, limit: int | None = None
    ) -> list[datetime]:
        if limit is not None:
            limit = _require_non_negative_int("limit", limit)
        return occurrences_between(
            start=self._start,
            interval=self._interval,
            range_start=parse_instant(range_start, self._tz),
            range_end=parse_instant(range_end, self._tz),
            limit=limit,
        )


def to_date(instants: Iterable[datetime]) -> list[datetime]:
    """Convert occurrences to absolute UTC datetimes."""
    return [instant.astimezone(timezone.utc) for instant in instants]
