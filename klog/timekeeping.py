"""
Times of day, durations, and time ranges.

These are immutable values.  Arithmetic and updates return new
instances.  Each value renders back to its Klog notation with `render`
(also `str`) and describes itself as plain data with `to_dict`.

Times carry a day shift so that a range can start yesterday (`<23:00`)
or end tomorrow (`2:00>`).  All comparisons are done on minutes since
midnight of the record's day, which is negative for yesterday and at
least 1440 for tomorrow.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


from .errors import InvalidRangeError, InvalidTimeError
from .formats import DayShift, RangeDashFormat, TimeFormat


MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

SIGNS = ('', '+', '-')


# Durations


class Duration:
    """A signed amount of time, counted in minutes."""

    def __init__(
            self,
            hours=0,
            minutes=0,
            explicit_positive=False,
            zero_sign='',
    ):
        if zero_sign not in SIGNS:
            raise ValueError(f'Not a sign: {zero_sign!r}')
        self._value = hours * MINUTES_PER_HOUR + minutes
        self._explicit_positive = bool(explicit_positive)
        self._zero_sign = zero_sign

    @classmethod
    def from_minutes(cls, total, explicit_positive=False, zero_sign=''):
        hours, minutes = _split_minutes(total)
        return cls(hours, minutes, explicit_positive, zero_sign)

    @classmethod
    def from_ast(cls, node):
        return cls.from_minutes(
            node.value,
            explicit_positive=(node.sign == '+'),
            zero_sign=(node.sign if node.value == 0 else ''),
        )

    @property
    def hours(self):
        return _split_minutes(self._value)[0]

    @property
    def minutes(self):
        return _split_minutes(self._value)[1]

    @property
    def explicit_positive(self):
        return self._explicit_positive

    @property
    def zero_sign(self):
        return self._zero_sign

    @property
    def sign(self):
        """The sign shown when rendering, accounting for `zero_sign`."""
        if self._value == 0:
            return self._zero_sign
        elif self._value < 0:
            return '-'
        else:
            return '+' if self._explicit_positive else ''

    def _options(self):
        return dict(
            explicit_positive=self._explicit_positive,
            zero_sign=self._zero_sign,
        )

    def add(self, other):
        return Duration.from_minutes(
            self._value + other.to_minutes(), **self._options())

    def subtract(self, other):
        return Duration.from_minutes(
            self._value - other.to_minutes(), **self._options())

    def equals(self, other):
        return self._value == other.to_minutes()

    def to_minutes(self):
        return self._value

    def render(self):
        if self._value == 0:
            return f'{self.sign}0m'
        hours = f'{abs(self.hours)}h' if self.hours != 0 else ''
        minutes = f'{abs(self.minutes)}m' if self.minutes != 0 else ''
        return f'{self.sign}{hours}{minutes}'

    def to_dict(self):
        return {
            'hours': self.hours,
            'minutes': self.minutes,
            'explicit_positive': self._explicit_positive,
            'zero_sign': self._zero_sign,
        }

    def __eq__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash(self._value)

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f'Duration({self.hours!r}, {self.minutes!r})'


def _split_minutes(total):
    # Both parts take the sign of the total
    sign = -1 if total < 0 else 1
    hours, minutes = divmod(abs(total), MINUTES_PER_HOUR)
    return sign * hours, sign * minutes


# Times


class Time:
    """A time of day, possibly shifted to the previous or next day."""

    def __init__(
            self,
            hour,
            minute,
            day_shift=DayShift.TODAY,
            format=TimeFormat.TWENTY_FOUR_HOUR,
    ):
        day_shift = DayShift(day_shift)
        if not Time.is_valid_value(hour, minute, day_shift):
            raise InvalidTimeError(hour, minute, day_shift)
        # `24:00` is `0:00` of the next day.  `24:00>` would be two days
        # ahead, which cannot be expressed.
        if hour == 24:
            hour = 0
            day_shift = DayShift(day_shift + 1)
        self._hour = hour
        self._minute = minute
        self._day_shift = day_shift
        self._format = TimeFormat(format)

    @classmethod
    def from_ast(cls, node):
        return cls(node.hour, node.minute, node.shift, node.format)

    @staticmethod
    def is_valid_value(hour, minute, day_shift=DayShift.TODAY):
        if hour == 24 and minute == 0:
            return day_shift != DayShift.TOMORROW
        return 0 <= hour <= 23 and 0 <= minute <= 59

    @property
    def hour(self):
        return self._hour

    @property
    def minute(self):
        return self._minute

    @property
    def day_shift(self):
        return self._day_shift

    @property
    def format(self):
        return self._format

    def duration_since_midnight(self):
        return Duration.from_minutes(
            self._hour * MINUTES_PER_HOUR + self._minute
            + self._day_shift * MINUTES_PER_DAY)

    def minutes_since_midnight(self):
        return self.duration_since_midnight().to_minutes()

    def equals(self, other):
        return (self.minutes_since_midnight()
                == other.minutes_since_midnight())

    def after_or_equals(self, other):
        return (self.minutes_since_midnight()
                >= other.minutes_since_midnight())

    def render(self, format_override=None):
        prefix = '<' if self._day_shift == DayShift.YESTERDAY else ''
        suffix = '>' if self._day_shift == DayShift.TOMORROW else ''
        hour = self._hour
        period = ''
        format = (TimeFormat(format_override)
                  if format_override is not None
                  else self._format)
        if format == TimeFormat.TWELVE_HOUR:
            period = 'am' if hour < 12 else 'pm'
            hour = hour % 12 or 12
        return f'{prefix}{hour}:{self._minute:02}{period}{suffix}'

    def to_dict(self):
        return {
            'hour': self._hour,
            'minute': self._minute,
            'day_shift': self._day_shift.name.lower(),
            'format': self._format.value,
        }

    def __eq__(self, other):
        if not isinstance(other, Time):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash(self.minutes_since_midnight())

    def __str__(self):
        return self.render()

    def __repr__(self):
        return (f'Time({self._hour!r}, {self._minute!r}, '
                f'DayShift.{self._day_shift.name}, {self._format!s})')


# Ranges


class Range:
    """A span of time from a start time to an optional end time.

    A range without an end is open: work that has started and not yet
    stopped.  It counts as zero minutes and renders its missing end
    with `placeholder_count` question marks.
    """

    def __init__(
            self,
            start,
            end=None,
            format=RangeDashFormat.SPACES,
            placeholder_count=1,
    ):
        if end is not None and not end.after_or_equals(start):
            raise InvalidRangeError(start, end)
        if placeholder_count < 1:
            raise ValueError(
                f'Placeholder count must be positive: '
                f'{placeholder_count!r}')
        self._start = start
        self._end = end
        self._format = RangeDashFormat(format)
        self._placeholder_count = placeholder_count

    @classmethod
    def from_ast(cls, node):
        start = Time.from_ast(node.start)
        end = None if node.open else Time.from_ast(node.end)
        return cls(
            start,
            end,
            format=node.format,
            placeholder_count=(node.placeholder_count
                               if node.open else 1),
        )

    @property
    def start(self):
        return self._start

    @property
    def end(self):
        return self._end

    @property
    def format(self):
        return self._format

    @property
    def placeholder_count(self):
        return self._placeholder_count

    @property
    def open(self):
        return self._end is None

    def with_end(self, end):
        """Return a copy of this range that ends at the given time.

        Raises `InvalidRangeError` if `end` is before the start.
        """
        return Range(self._start, end, self._format,
                     self._placeholder_count)

    def to_minutes(self):
        if self.open:
            return 0
        return (self._end.minutes_since_midnight()
                - self._start.minutes_since_midnight())

    def to_duration(self):
        return Duration.from_minutes(self.to_minutes())

    def render(self):
        dash = ' - ' if self._format == RangeDashFormat.SPACES else '-'
        end = ('?' * self._placeholder_count
               if self.open
               else self._end.render())
        return f'{self._start.render()}{dash}{end}'

    def to_dict(self):
        return {
            'start': self._start.to_dict(),
            'end': None if self.open else self._end.to_dict(),
            'format': self._format.value,
            'placeholder_count': self._placeholder_count,
        }

    def __str__(self):
        return self.render()

    def __repr__(self):
        return (f'Range({self._start!r}, {self._end!r}, '
                f'{self._format!s}, {self._placeholder_count!r})')
