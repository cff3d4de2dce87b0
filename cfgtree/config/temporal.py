"""
Date and time value types of a configuration.

The types follow RFC 3339 as used by TOML: a calendar :class:`Date`, a
:class:`Time` of day with nanosecond resolution, a :class:`TimeOffset` from
UTC, and a :class:`DateTime` combining all three. A date-time without an
offset is a *local* date-time and never equals an offset-bearing one.

Equality and ordering compare a single packed integer per value, with the
most significant field in the highest bits.
"""

import datetime as _dt
import functools
import re
from dataclasses import dataclass

from cfgtree.config.constants import (
    DATE_TIME_SEPARATORS,
    MAX_DATE_YEAR,
    MAX_YEAR,
    MIN_YEAR,
    MINUTES_PER_DAY,
    NANOSECONDS_PER_SECOND,
    SUBSECOND_DIGITS,
    TIME_OFFSET_START,
)
from cfgtree.config.errors import ConfigParseError, ConfigTypeError, ConfigValueError

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DIGITS_RE = re.compile(r"[0-9]+")

_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Bits reserved for the time-of-day (nanoseconds per day < 2**47)
_TIME_BITS = 47


def is_leap_year(year: int) -> bool:
    """Return whether ``year`` is a leap year in the proleptic Gregorian calendar."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def last_day_of_month(year: int, month: int) -> int:
    """Return the number of days of the given month."""
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_PER_MONTH[month - 1]


def _is_valid_date(year: int, month: int, day: int) -> bool:
    if not MIN_YEAR <= year <= MAX_DATE_YEAR or not 1 <= month <= 12:
        return False
    return 1 <= day <= last_day_of_month(year, month)


def _is_valid_time(hour: int, minute: int, second: int, nanosecond: int) -> bool:
    return (
        0 <= hour < 24
        and 0 <= minute < 60
        and 0 <= second < 60
        and 0 <= nanosecond < NANOSECONDS_PER_SECOND
    )


def _invalid_representation(text: str, type_label: str) -> ConfigParseError:
    return ConfigParseError(f"Invalid string representation for a {type_label}: `{text}`!")


def _parse_number(
    token: str, min_value: int, max_value: int, type_label: str, text: str
) -> int:
    # Only [+-][0-9]+ is accepted, no white space and no fractions
    if not _INTEGER_RE.fullmatch(token):
        raise _invalid_representation(text, type_label)

    parsed = int(token)
    if not min_value <= parsed <= max_value:
        raise ConfigParseError(
            f"Invalid number {parsed} while parsing a `{type_label}`. "
            f"Value must be in [{min_value}, {max_value}]!"
        )
    return parsed


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Date:
    """
    A calendar date with a year between 0 and 65535.

    Parsed dates are limited to four-digit years. Larger years only arise
    from day arithmetic, e.g. when converting 9999-12-31T23:30:00-01:00
    to UTC.
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not _is_valid_date(self.year, self.month, self.day):
            raise ConfigValueError(
                f"Cannot create a valid `date` from {self.year}, {self.month}, "
                f"{self.day}!"
            )

    @classmethod
    def from_string(cls, text: str) -> "Date":
        """
        Parse a date from ``YYYY-MM-DD`` or ``DD.MM.YYYY``.

        A single trailing delimiter is ignored.

        :param text: String representation
        :type text: str
        :return: The parsed date
        :rtype: Date
        :raises ConfigParseError: If the string is malformed or out of range
        """
        if "-" in text:
            tokens = _split_date(text, "-")
            year_token, month_token, day_token = tokens
        elif "." in text:
            tokens = _split_date(text, ".")
            day_token, month_token, year_token = tokens
        else:
            raise _invalid_representation(text, "date")

        year = _parse_number(year_token, MIN_YEAR, MAX_YEAR, "date", text)
        month = _parse_number(month_token, 1, 12, "date", text)
        day = _parse_number(day_token, 1, last_day_of_month(year, month), "date", text)
        return cls(year, month, day)

    @classmethod
    def from_date(cls, value: _dt.date) -> "Date":
        """Create a date from a :class:`datetime.date`."""
        return cls(value.year, value.month, value.day)

    def to_date(self) -> _dt.date:
        """
        Convert to a :class:`datetime.date`.

        :raises ConfigValueError: For year 0 and years above 9999, which
            Python cannot represent
        """
        if not _dt.MINYEAR <= self.year <= _dt.MAXYEAR:
            raise ConfigValueError(f"Cannot represent `{self}` as datetime.date!")
        return _dt.date(self.year, self.month, self.day)

    def next_day(self) -> "Date":
        """Return the following calendar day."""
        if self.day < last_day_of_month(self.year, self.month):
            return Date(self.year, self.month, self.day + 1)
        if self.month < 12:
            return Date(self.year, self.month + 1, 1)
        return Date(self.year + 1, 1, 1)

    def previous_day(self) -> "Date":
        """
        Return the preceding calendar day.

        :raises ConfigValueError: When decrementing 0000-01-01
        """
        if self.day > 1:
            return Date(self.year, self.month, self.day - 1)
        if self.month > 1:
            return Date(
                self.year, self.month - 1, last_day_of_month(self.year, self.month - 1)
            )
        if self.year == MIN_YEAR:
            raise ConfigValueError("Cannot decrement date beyond 0000-01-01!")
        return Date(self.year - 1, 12, 31)

    def packed(self) -> int:
        return (self.year << 9) | (self.month << 5) | self.day

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.packed() == other.packed()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self.packed() < other.packed()

    def __hash__(self) -> int:
        return hash(("date", self.packed()))

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


def _split_date(text: str, delimiter: str) -> list[str]:
    tokens = text.split(delimiter)
    if len(tokens) == 4 and tokens[-1] == "":
        tokens.pop()
    if len(tokens) != 3:
        raise _invalid_representation(text, "date")
    return tokens


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Time:
    """A time of day with nanosecond resolution (no leap seconds)."""

    hour: int
    minute: int
    second: int = 0
    nanosecond: int = 0

    def __post_init__(self) -> None:
        if not _is_valid_time(self.hour, self.minute, self.second, self.nanosecond):
            raise ConfigValueError(
                f"Cannot create a valid `time` from {self.hour}:{self.minute}:"
                f"{self.second}.{self.nanosecond}!"
            )

    @classmethod
    def from_string(cls, text: str) -> "Time":
        """
        Parse a time from ``HH:MM[:SS[(.|,)fraction]]``.

        The fraction must have 1, 2, 3, 6 or 9 digits.

        :param text: String representation
        :type text: str
        :return: The parsed time
        :rtype: Time
        :raises ConfigParseError: If the string is malformed or out of range
        """
        tokens = text.split(":")
        if len(tokens) not in (2, 3):
            raise _invalid_representation(text, "time")

        hour = _parse_number(tokens[0], 0, 23, "time", text)
        minute = _parse_number(tokens[1], 0, 59, "time", text)
        second = 0
        nanosecond = 0
        if len(tokens) == 3:
            match = re.search(r"[.,]", tokens[2])
            if match is None:
                second = _parse_number(tokens[2], 0, 59, "time", text)
            else:
                second = _parse_number(tokens[2][: match.start()], 0, 59, "time", text)
                fraction = tokens[2][match.end():]
                if len(fraction) not in SUBSECOND_DIGITS:
                    raise ConfigParseError(
                        f"Invalid string representation for a time: `{text}`. "
                        "Specify sub-second component by 1, 2, 3 (ms), 6 (us) "
                        "or 9 (ns) digits!"
                    )
                if not _DIGITS_RE.fullmatch(fraction):
                    raise _invalid_representation(text, "time")
                nanosecond = int(fraction) * 10 ** (9 - len(fraction))
        return cls(hour, minute, second, nanosecond)

    @classmethod
    def from_time(cls, value: _dt.time) -> "Time":
        """Create a time from a :class:`datetime.time`, ignoring its tzinfo."""
        return cls(value.hour, value.minute, value.second, value.microsecond * 1000)

    def to_time(self) -> _dt.time:
        """Convert to a :class:`datetime.time`, truncating to microseconds."""
        return _dt.time(self.hour, self.minute, self.second, self.nanosecond // 1000)

    def packed(self) -> int:
        seconds = (self.hour * 60 + self.minute) * 60 + self.second
        return seconds * NANOSECONDS_PER_SECOND + self.nanosecond

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.packed() == other.packed()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self.packed() < other.packed()

    def __hash__(self) -> int:
        return hash(("time", self.packed()))

    def __str__(self) -> str:
        text = f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        if self.nanosecond == 0:
            return text
        if self.nanosecond % 1_000_000 == 0:
            return f"{text}.{self.nanosecond // 1_000_000:03d}"
        if self.nanosecond % 1000 == 0:
            return f"{text}.{self.nanosecond // 1000:06d}"
        return f"{text}.{self.nanosecond:09d}"


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class TimeOffset:
    """Signed offset from UTC in minutes, strictly within +-24 hours."""

    minutes: int = 0

    def __post_init__(self) -> None:
        if not -MINUTES_PER_DAY < self.minutes < MINUTES_PER_DAY:
            raise ConfigValueError(
                f"Invalid time offset of {self.minutes} minutes. The offset "
                "must be less than 24 hours!"
            )

    @classmethod
    def from_hours_minutes(cls, hours: int, minutes: int) -> "TimeOffset":
        """
        Create an offset from separate hour and minute parts.

        The sign of ``hours`` applies to the combined offset, i.e.
        ``from_hours_minutes(-1, 30)`` is -90 minutes.

        :raises ConfigValueError: If ``|hours| > 23`` or ``|minutes| > 59``
        """
        if not -23 <= hours <= 23 or not -59 <= minutes <= 59:
            raise ConfigValueError(
                f"Invalid parameters h={hours}, m={minutes} for time offset. "
                "Values must be -24 < h < 24 and -60 < m < 60!"
            )
        if hours < 0:
            return cls(hours * 60 - abs(minutes))
        return cls(hours * 60 + minutes)

    @classmethod
    def from_string(cls, text: str) -> "TimeOffset":
        """
        Parse an offset from ``Z``, ``z`` or ``[+-]HH:MM``.

        :raises ConfigParseError: If the string is malformed or out of range
        """
        if ":" not in text:
            if text not in ("Z", "z"):
                raise _invalid_representation(text, "time_offset")
            return cls(0)

        hours_token, minutes_token = text.split(":", 1)
        hours = _parse_number(hours_token, -23, 23, "time_offset", text)
        minutes = _parse_number(minutes_token, 0, 59, "time_offset", text)
        # "-00:30" is negative although the hour part is zero
        if hours < 0 or text.startswith("-"):
            return cls(hours * 60 - minutes)
        return cls(hours * 60 + minutes)

    def packed(self) -> int:
        return self.minutes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeOffset):
            return NotImplemented
        return self.minutes == other.minutes

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TimeOffset):
            return NotImplemented
        return self.minutes < other.minutes

    def __hash__(self) -> int:
        return hash(("time_offset", self.minutes))

    def __str__(self) -> str:
        if self.minutes == 0:
            return "Z"
        sign = "+" if self.minutes > 0 else "-"
        hours, minutes = divmod(abs(self.minutes), 60)
        return f"{sign}{hours:02d}:{minutes:02d}"


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class DateTime:
    """
    A date and time, optionally with an offset from UTC.

    Without an offset the value is a local date-time. Local values only
    equal local values with identical fields; offset-bearing values are
    compared as UTC instants.
    """

    date: Date
    time: Time
    offset: TimeOffset | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.date, Date) or not isinstance(self.time, Time):
            raise ConfigTypeError("A `date_time` requires a `Date` and a `Time`!")
        if self.offset is not None and not isinstance(self.offset, TimeOffset):
            raise ConfigTypeError("The offset of a `date_time` must be a `TimeOffset`!")

    @classmethod
    def from_string(cls, text: str) -> "DateTime":
        """
        Parse an RFC 3339 date-time.

        Date and time may be separated by ``T``, ``t``, a space or ``_``.
        The offset is optional.

        :raises ConfigParseError: If the string is malformed or out of range
        """
        # 19 characters would be RFC compliant, 16 lacks the seconds
        if len(text) <= 16 or text[10] not in DATE_TIME_SEPARATORS:
            raise _invalid_representation(text, "date_time")

        day = Date.from_string(text[:10])
        time_text = text[11:]
        offset_match = re.search(f"[{re.escape(TIME_OFFSET_START)}]", time_text)
        if offset_match is None:
            return cls(day, Time.from_string(time_text))
        return cls(
            day,
            Time.from_string(time_text[: offset_match.start()]),
            TimeOffset.from_string(time_text[offset_match.start():]),
        )

    @classmethod
    def from_datetime(cls, value: _dt.datetime) -> "DateTime":
        """Create a date-time from a :class:`datetime.datetime`."""
        utc_offset = value.utcoffset()
        offset = None
        if utc_offset is not None:
            offset = TimeOffset(int(utc_offset.total_seconds() // 60))
        return cls(Date.from_date(value.date()), Time.from_time(value.time()), offset)

    def to_datetime(self) -> _dt.datetime:
        """Convert to a :class:`datetime.datetime`, truncating to microseconds."""
        tzinfo = None
        if self.offset is not None:
            tzinfo = _dt.timezone(_dt.timedelta(minutes=self.offset.minutes))
        return _dt.datetime.combine(self.date.to_date(), self.time.to_time(), tzinfo)

    def is_local(self) -> bool:
        """Return whether the date-time has no offset."""
        return self.offset is None

    def utc(self) -> "DateTime":
        """
        Return the same instant expressed in UTC (offset ``Z``).

        Local date-times are returned unchanged.
        """
        if self.offset is None:
            return self

        minutes = self.time.hour * 60 + self.time.minute - self.offset.minutes
        day = self.date
        while minutes >= MINUTES_PER_DAY:
            day = day.next_day()
            minutes -= MINUTES_PER_DAY
        while minutes < 0:
            day = day.previous_day()
            minutes += MINUTES_PER_DAY

        hour, minute = divmod(minutes, 60)
        return DateTime(
            day,
            Time(hour, minute, self.time.second, self.time.nanosecond),
            TimeOffset(0),
        )

    def packed(self) -> int:
        if self.offset is None:
            wall_clock = (self.date.packed() << _TIME_BITS) | self.time.packed()
            return wall_clock << 1
        utc = self.utc()
        instant = (utc.date.packed() << _TIME_BITS) | utc.time.packed()
        return (instant << 1) | 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.packed() == other.packed()

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.packed() < other.packed()

    def __hash__(self) -> int:
        return hash(("date_time", self.packed()))

    def __str__(self) -> str:
        text = f"{self.date}T{self.time}"
        if self.offset is not None:
            text += str(self.offset)
        return text
