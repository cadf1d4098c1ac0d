from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from dateutil.relativedelta import relativedelta

from cadence.errors import OccurrenceOutOfRangeError, TooManyOccurrencesError
from cadence.services.intervals import CanonicalInterval, estimate_duration_ms

logger = logging.getLogger(__name__)


def _calendar_offset(interval: CanonicalInterval, index: int) -> relativedelta:
    # Quarters fold into months so that one month addition clamps the day once.
    return relativedelta(
        years=interval.years * index,
        months=(interval.months + 3 * interval.quarters) * index,
        days=(interval.days + 7 * interval.weeks) * index,
    )


def _elapsed_offset(interval: CanonicalInterval, index: int) -> timedelta:
    return timedelta(
        hours=interval.hours * index,
        minutes=interval.minutes * index,
        seconds=interval.seconds * index,
    )


def _utc(instant: datetime) -> datetime:
    # Same-zone datetimes compare by wall clock and ignore fold, so ordering
    # is always decided on UTC.
    return instant.astimezone(timezone.utc)


def occurrence_at(start: datetime, interval: CanonicalInterval, index: int) -> datetime:
    """Exact instant of occurrence ``index``.

    Every unit count is scaled by ``index`` and applied in a single addition:
    years, months and days move the wall clock in ``start``'s zone (clamping
    to month end), hours, minutes and seconds add elapsed time. A wall time
    that falls in a DST gap resolves forward. Raises
    ``OccurrenceOutOfRangeError`` when the result is not representable.
    """
    if index == 0:
        return start
    try:
        shifted = _utc(start + _calendar_offset(interval, index)) + _elapsed_offset(interval, index)
        return shifted.astimezone(start.tzinfo)
    except (ValueError, OverflowError) as exc:
        raise OccurrenceOutOfRangeError(f"Occurrence {index} is outside the supported date range") from exc


def _utc_occurrence_or_none(start: datetime, interval: CanonicalInterval, index: int) -> datetime | None:
    try:
        return _utc(occurrence_at(start, interval, index))
    except OccurrenceOutOfRangeError:
        return None


def _is_at_or_after(start: datetime, interval: CanonicalInterval, index: int, bound: datetime) -> bool:
    # Past datetime.max counts as after every bound.
    instant = _utc_occurrence_or_none(start, interval, index)
    return instant is None or instant >= bound


def _estimate_index(start: datetime, range_start: datetime, avg_ms: int) -> int:
    elapsed_ms = (_utc(range_start) - _utc(start)) / timedelta(milliseconds=1)
    return max(0, round(elapsed_ms / avg_ms))


def _first_index_at_or_after(
    start: datetime, interval: CanonicalInterval, range_start: datetime, guess: int
) -> int:
    bound = _utc(range_start)
    index = guess
    steps = 0
    if _is_at_or_after(start, interval, index, bound):
        while index > 0 and _is_at_or_after(start, interval, index - 1, bound):
            index -= 1
            steps += 1
    else:
        while not _is_at_or_after(start, interval, index, bound):
            index += 1
            steps += 1
    logger.debug("Range index corrected guess=%s index=%s steps=%s", guess, index, steps)
    return index


def occurrences_between(
    *,
    start: datetime,
    interval: CanonicalInterval,
    range_start: datetime,
    range_end: datetime,
    limit: int | None = None,
) -> list[datetime]:
    """Occurrences ``x`` with ``range_start <= x < range_end``, ascending.

    The first index is seeded from the interval's average duration and then
    walked to the exact boundary, so distant windows cost about as much as
    near ones. Windows opening before ``start`` are clamped to index 0.
    Enumeration stops at the last representable datetime. With ``limit``
    set, a window holding more occurrences raises ``TooManyOccurrencesError``
    as soon as the limit is passed.
    """
    end = _utc(range_end)
    if end <= _utc(range_start):
        return []

    avg_ms = estimate_duration_ms(interval)
    if avg_ms == 0:
        if _utc(range_start) <= _utc(start) < end:
            return [start]
        return []

    guess = _estimate_index(start, range_start, avg_ms)
    index = _first_index_at_or_after(start, interval, range_start, guess)

    results: list[datetime] = []
    while True:
        try:
            current = occurrence_at(start, interval, index)
        except OccurrenceOutOfRangeError:
            break
        if _utc(current) >= end:
            break
        if limit is not None and len(results) >= limit:
            raise TooManyOccurrencesError(f"Range yields more than {limit} occurrences; narrow it.")
        results.append(current)
        index += 1
    return results
