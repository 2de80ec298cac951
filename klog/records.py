"""
Entries and records.

A record is one day's block of a Klog file: a date, an optional target
duration ("should total"), an optional summary, and a list of entries.
An entry is either a duration or a time range, with an optional summary.

    2018-03-24 (9h!)
    First day at my new job
        8:30 - 17:00
        -45m Lunch break

At most one entry of a record may be an open range (`9:00 - ?`).  Use
`Record.start` and `Record.end` to track time while keeping to that
rule.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


from .errors import AlreadyOpenError, NoOpenEntryError
from .formats import DateFormat, Indentation, indent_text
from .summary import Summary
from .timekeeping import Duration, Range


def _as_summary(summary):
    if summary is None:
        return None
    if not isinstance(summary, Summary):
        summary = Summary(summary)
    # Nothing to write, and nothing would be read back
    if not any(summary.lines):
        return None
    return summary


# Entries


class Entry:

    def __init__(self, value, summary=None):
        if not isinstance(value, (Duration, Range)):
            raise TypeError(
                f'Entry value must be a Duration or a Range: {value!r}')
        self._value = value
        self.summary = _as_summary(summary)

    @classmethod
    def from_ast(cls, node):
        if node.value.type == 'duration':
            value = Duration.from_ast(node.value)
        elif node.value.type == 'time_range':
            value = Range.from_ast(node.value)
        else:
            raise TypeError(f'Not an entry value: {node.value!r}')
        summary = None if node.summary is None else Summary(node.summary)
        return cls(value, summary)

    @property
    def value(self):
        return self._value

    @property
    def open(self):
        return isinstance(self._value, Range) and self._value.open

    def to_duration(self):
        if isinstance(self._value, Duration):
            # A copy, so callers never share the stored duration
            return Duration.from_minutes(self._value.to_minutes())
        else:
            return self._value.to_duration()

    def to_minutes(self):
        return self._value.to_minutes()

    def render(self, indentation=Indentation.FOUR_SPACES):
        text = indent_text(indentation) + self._value.render()
        if self.summary is None:
            return text
        lines = self.summary.lines
        if lines and lines[0] == '':
            return text + Summary(lines[1:]).render(
                indentation, start_on_next_line=True)
        return text + ' ' + self.summary.render(indentation)

    def to_dict(self):
        return {
            'value': self._value.to_dict(),
            'summary': (None if self.summary is None
                        else self.summary.to_dict()),
        }

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f'Entry({self._value!r}, {self.summary!r})'


# Records


class Record:

    # Whether a should-total of zero minutes is rendered as `(0m!)`.
    # Zero is never a target for `should_total_diff`.
    render_zero_should_total = True

    def __init__(
            self,
            date,
            entries=(),
            summary=None,
            should_total=None,
            date_format=DateFormat.DASHES,
            indentation=Indentation.FOUR_SPACES,
    ):
        self.date = date
        self.entries = list(entries)
        self.summary = _as_summary(summary)
        self.should_total = should_total
        self.date_format = DateFormat(date_format)
        self.indentation = Indentation(indentation)

    @classmethod
    def from_ast(cls, node):
        return cls(
            node.date,
            [Entry.from_ast(entry) for entry in node.entries],
            None if node.summary is None else Summary(node.summary),
            (None if node.should_total is None
             else Duration.from_ast(node.should_total)),
            node.date_format,
            node.indentation,
        )

    @property
    def open_entry(self):
        for entry in self.entries:
            if entry.open:
                return entry
        return None

    @property
    def date_string(self):
        sep = self.date_format.value
        return (f'{self.date.year:04}{sep}{self.date.month:02}'
                f'{sep}{self.date.day:02}')

    def to_minutes(self):
        return sum(entry.to_minutes() for entry in self.entries)

    def to_duration(self):
        return Duration.from_minutes(self.to_minutes())

    def should_total_diff(self):
        """Return how far the total is above (or below) the target.

        Without a target, this is the total itself.
        """
        actual = self.to_duration()
        if self.should_total is None or self.should_total.to_minutes() == 0:
            return actual
        return actual.subtract(self.should_total)

    def start(self, start_time, summary=None):
        """Append a new open range starting at the given time."""
        open_entry = self.open_entry
        if open_entry is not None:
            raise AlreadyOpenError(open_entry)
        self.entries.append(Entry(Range(start_time), summary))

    def end(self, end_time):
        """Close the open range at the given time.

        The record is unchanged if this raises.
        """
        for idx, entry in enumerate(self.entries):
            if entry.open:
                # Raises `InvalidRangeError` before anything is replaced
                closed = entry.value.with_end(end_time)
                self.entries[idx] = Entry(closed, entry.summary)
                return
        raise NoOpenEntryError()

    def render(self, indentation=None, render_zero_should_total=None):
        if indentation is None:
            indentation = self.indentation
        if render_zero_should_total is None:
            render_zero_should_total = self.render_zero_should_total
        headline = self.date_string
        if self.should_total is not None and (
                render_zero_should_total
                or self.should_total.to_minutes() != 0):
            headline += f' ({self.should_total.render()}!)'
        lines = [headline]
        if self.summary is not None:
            lines.append(self.summary.render())
        lines.extend(entry.render(indentation) for entry in self.entries)
        return '\n'.join(lines)

    def to_dict(self):
        return {
            'date': self.date.isoformat(),
            'date_format': self.date_format.name.lower(),
            'should_total': (None if self.should_total is None
                             else self.should_total.to_dict()),
            'summary': (None if self.summary is None
                        else self.summary.to_dict()),
            'entries': [entry.to_dict() for entry in self.entries],
        }

    def __str__(self):
        return self.render()

    def __repr__(self):
        return (f'Record({self.date!r}, {self.entries!r}, '
                f'{self.summary!r}, {self.should_total!r})')
