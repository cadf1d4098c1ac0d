from __future__ import annotations


class RecurrenceError(ValueError):
    pass


class InvalidDateError(RecurrenceError):
    pass


class InvalidTimezoneError(RecurrenceError):
    pass


class InvalidArgumentError(RecurrenceError):
    pass


class OccurrenceOutOfRangeError(InvalidArgumentError):
    pass


class TooManyOccurrencesError(InvalidArgumentError):
    pass
