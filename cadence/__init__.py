from cadence.errors import InvalidArgumentError, InvalidDateError, InvalidTimezoneError, RecurrenceError
from cadence.services.intervals import CanonicalInterval, get_avg_interval
from cadence.services.rule import RecurrenceRule, to_date
from cadence.services.units import Unit

# camelCase names kept for callers of the published API.
toDate = to_date
getAvgInterval = get_avg_interval

__all__ = [
    "CanonicalInterval",
    "InvalidArgumentError",
    "InvalidDateError",
    "InvalidTimezoneError",
    "RecurrenceError",
    "RecurrenceRule",
    "Unit",
    "get_avg_interval",
    "getAvgInterval",
    "to_date",
    "toDate",
]
