from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cadence.errors import InvalidArgumentError


SECOND_MS = 1_000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS
# Average Gregorian month: 365.2425 / 12 days.
MONTH_MS = 2_629_746_000
QUARTER_MS = 3 * MONTH_MS
YEAR_MS = 12 * MONTH_MS


class Unit(str, Enum):
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS = "hours"
    DAYS = "days"
    WEEKS = "weeks"
    MONTHS = "months"
    QUARTERS = "quarters"
    YEARS = "years"


@dataclass(frozen=True)
class UnitSpec:
    long_name: str
    short_name: str
    duration_ms: int


UNIT_TABLE: dict[Unit, UnitSpec] = {
    Unit.SECONDS: UnitSpec("seconds", "s", SECOND_MS),
    Unit.MINUTES: UnitSpec("minutes", "m", MINUTE_MS),
    Unit.HOURS: UnitSpec("hours", "h", HOUR_MS),
    Unit.DAYS: UnitSpec("days", "d", DAY_MS),
    Unit.WEEKS: UnitSpec("weeks", "w", WEEK_MS),
    Unit.MONTHS: UnitSpec("months", "M", MONTH_MS),
    Unit.QUARTERS: UnitSpec("quarters", "Q", QUARTER_MS),
    Unit.YEARS: UnitSpec("years", "y", YEAR_MS),
}


def _build_token_lookup() -> dict[str, Unit]:
    lookup: dict[str, Unit] = {}
    for unit, spec in UNIT_TABLE.items():
        lookup[spec.long_name] = unit
        lookup[spec.long_name[:-1]] = unit  # singular, e.g. "month"
        lookup[spec.short_name] = unit
    return lookup


_TOKEN_LOOKUP = _build_token_lookup()


def parse_unit(token: str) -> Unit:
    """Resolve a long, singular or shorthand unit token. Tokens are case-sensitive."""
    if not isinstance(token, str) or token not in _TOKEN_LOOKUP:
        raise InvalidArgumentError(f"Unsupported interval unit: {token!r}")
    return _TOKEN_LOOKUP[token]
