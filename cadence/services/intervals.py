from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields

from cadence.errors import InvalidArgumentError
from cadence.services.units import UNIT_TABLE, Unit, parse_unit


@dataclass(frozen=True)
class CanonicalInterval:
    seconds: int = 0
    minutes: int = 0
    hours: int = 0
    days: int = 0
    weeks: int = 0
    months: int = 0
    quarters: int = 0
    years: int = 0

    def count(self, unit: Unit) -> int:
        return getattr(self, unit.value)

    def is_zero(self) -> bool:
        return all(getattr(self, f.name) == 0 for f in fields(self))

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


IntervalSpec = Mapping[str, int] | CanonicalInterval | None


def _validate_count(token: str, value: object) -> int:
    # bool is an int subclass but never a meaningful count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"Interval count for {token!r} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidArgumentError(f"Interval count for {token!r} must be non-negative, got {value}")
    return value


def normalize_interval(spec: IntervalSpec) -> CanonicalInterval:
    """Build a CanonicalInterval from a mapping of unit tokens to counts.

    Keys may be long names (``months``), singular names (``month``) or
    shorthand tokens (``M``). Absent units default to 0. When the same unit
    is given twice, the later key wins.
    """
    if spec is None:
        return CanonicalInterval()
    if isinstance(spec, CanonicalInterval):
        return spec
    if not isinstance(spec, Mapping):
        raise InvalidArgumentError(f"Interval must be a mapping of unit to count, got {type(spec).__name__}")

    counts: dict[str, int] = {}
    for token, value in spec.items():
        unit = parse_unit(token)
        counts[unit.value] = _validate_count(token, value)
    return CanonicalInterval(**counts)


def estimate_duration_ms(interval: CanonicalInterval) -> int:
    """Average length of one interval cycle in milliseconds.

    Months, quarters and years contribute their long-run Gregorian average,
    so the result is only good for estimating how many occurrences fit in a
    span, never for placing one.
    """
    return sum(interval.count(unit) * spec.duration_ms for unit, spec in UNIT_TABLE.items())


def get_avg_interval(spec: IntervalSpec) -> int:
    return estimate_duration_ms(normalize_interval(spec))
