"""
Abstract syntax of Klog files.

`AstBuilder` turns the parse tree from `klog.grammar` into plain AST
nodes.  Along the way it checks what the grammar leaves open: that dates
are real calendar dates written with one kind of divider, that times are
valid, and that indentation is consistent.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import datetime
from enum import Enum
import logging

from .errors import (
    InvalidDateError,
    InvalidIndentationError,
    InvalidTimeError,
    ParseError,
)
from .formats import (
    DateFormat,
    DayShift,
    Indentation,
    RangeDashFormat,
    TimeFormat,
)
from .grammar import Rule
from .timekeeping import MINUTES_PER_HOUR, Time


logger = logging.getLogger(__name__)


# AST nodes


def _plain(value):
    if isinstance(value, AstNode):
        return value.to_dict()
    elif isinstance(value, list):
        return [_plain(item) for item in value]
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime.date):
        return value.isoformat()
    return value


class AstNode:

    type = None

    fields = ()

    def to_dict(self):
        data = {'type': self.type}
        for field in self.fields:
            data[field] = _plain(getattr(self, field))
        return data

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self):
        args = ', '.join(
            f'{field}={getattr(self, field)!r}' for field in self.fields)
        return f'{type(self).__name__}({args})'


class FileNode(AstNode):

    type = 'file'

    fields = ('records',)

    def __init__(self, records=()):
        self.records = list(records)


class RecordNode(AstNode):

    type = 'record'

    fields = ('date', 'date_format', 'should_total', 'summary',
              'indentation', 'entries')

    def __init__(
            self,
            date,
            date_format=DateFormat.DASHES,
            should_total=None,
            summary=None,
            indentation=Indentation.FOUR_SPACES,
            entries=(),
    ):
        self.date = date
        self.date_format = date_format
        self.should_total = should_total
        self.summary = summary
        self.indentation = indentation
        self.entries = list(entries)


class EntryNode(AstNode):

    type = 'entry'

    fields = ('value', 'summary')

    def __init__(self, value, summary=None):
        self.value = value
        self.summary = summary


class TimeRangeNode(AstNode):

    type = 'time_range'

    fields = ('open', 'start', 'end', 'format', 'placeholder_count')

    def __init__(
            self,
            start,
            end=None,
            format=RangeDashFormat.SPACES,
            placeholder_count=1,
    ):
        self.open = end is None
        self.start = start
        self.end = end
        self.format = format
        self.placeholder_count = placeholder_count


class TimeNode(AstNode):

    type = 'time'

    fields = ('hour', 'minute', 'shift', 'format')

    def __init__(
            self,
            hour,
            minute,
            shift=DayShift.TODAY,
            format=TimeFormat.TWENTY_FOUR_HOUR,
    ):
        self.hour = hour
        self.minute = minute
        self.shift = shift
        self.format = format


class DurationNode(AstNode):
    """A duration as a signed number of minutes and the sign as written
    (`'+'`, `'-'`, or `''`)."""

    type = 'duration'

    fields = ('value', 'sign')

    def __init__(self, value, sign=''):
        self.value = value
        self.sign = sign


# Building


class AstBuilder:
    """Builds AST nodes from parse tree nodes, one transform per rule."""

    def __init__(self, filename=None):
        self.filename = filename
        self._transforms = {
            Rule.FILE: self._file,
            Rule.RECORD: self._record,
            Rule.RECORD_HEAD: self._record_head,
            Rule.DATE: self._date,
            Rule.SHOULD_TOTAL: self._should_total,
            Rule.RECORD_SUMMARY: self._record_summary,
            Rule.ENTRY: self._entry,
            Rule.SUMMARY_CONTINUATION: self._summary_continuation,
            Rule.TIME_RANGE_OPEN: self._time_range_open,
            Rule.TIME_RANGE_CLOSED: self._time_range_closed,
            Rule.BACKWARDS_SHIFTED_TIME: self._backwards_shifted_time,
            Rule.FORWARDS_SHIFTED_TIME: self._forwards_shifted_time,
            Rule.TIME_TWELVE_HOUR: self._time_twelve_hour,
            Rule.TIME_TWENTY_FOUR_HOUR: self._time_twenty_four_hour,
            Rule.DURATION_HOUR_MINUTE: self._duration,
            Rule.DURATION_HOUR: self._duration,
            Rule.DURATION_MINUTE: self._duration,
        }
        # Leaves build to their text
        for rule in (
                Rule.YEAR, Rule.MONTH, Rule.DAY, Rule.DIVIDER,
                Rule.SUMMARY_LINE, Rule.INDENT, Rule.ENTRY_SUMMARY,
                Rule.SPACE, Rule.DASH, Rule.PLACEHOLDER,
                Rule.HOUR, Rule.MINUTE, Rule.PERIOD,
                Rule.SIGN, Rule.HOURS, Rule.MINUTES,
        ):
            self._transforms[rule] = self._text

    def build(self, node):
        transform = self._transforms.get(node.rule)
        if transform is None:
            raise ParseError(self.filename, node.line, node.column,
                             node.text, f'Cannot build {node.rule.value}')
        return transform(node)

    def _text(self, node):
        return node.text

    # Records

    def _file(self, node):
        records = [self.build(child) for child in node.children]
        logger.debug('Built %d record(s) from %r',
                     len(records), self.filename)
        return FileNode(records)

    def _record(self, node):
        date, date_format, should_total = self.build(
            node.child(Rule.RECORD_HEAD))
        summary = node.child(Rule.RECORD_SUMMARY)
        entry_nodes = node.children_of(Rule.ENTRY)
        return RecordNode(
            date,
            date_format,
            should_total,
            None if summary is None else self.build(summary),
            self._record_indentation(entry_nodes),
            [self.build(entry) for entry in entry_nodes],
        )

    def _record_head(self, node):
        should_total = node.child(Rule.SHOULD_TOTAL)
        date = node.child(Rule.DATE)
        return (
            self.build(date),
            DateFormat(date.child(Rule.DIVIDER).text),
            None if should_total is None else self.build(should_total),
        )

    def _date(self, node):
        first, second = [div.text for div in node.children_of(Rule.DIVIDER)]
        if first != second:
            raise InvalidDateError(
                node.text, self.filename, node.line, node.column,
                'Date dividers must be both dashes or both slashes')
        try:
            return datetime.date(
                int(node.child(Rule.YEAR).text),
                int(node.child(Rule.MONTH).text),
                int(node.child(Rule.DAY).text),
            )
        except ValueError as e:
            raise InvalidDateError(
                node.text, self.filename, node.line, node.column,
                f'Invalid date: {e}')

    def _should_total(self, node):
        return self.build(node.children[0])

    def _record_summary(self, node):
        return '\n'.join(
            self.build(line) for line in node.children_of(Rule.SUMMARY_LINE))

    def _record_indentation(self, entry_nodes):
        """Return the indentation shared by all the entries.

        Records without entries have the default indentation.
        """
        if not entry_nodes:
            return Indentation.FOUR_SPACES
        expected = entry_nodes[0].child(Rule.INDENT)
        self._check_indent(expected)
        for entry in entry_nodes[1:]:
            actual = entry.child(Rule.INDENT)
            if actual.text != expected.text:
                raise InvalidIndentationError(
                    expected.text, actual.text, self.filename,
                    actual.line, actual.column,
                    'All entries of a record must have the same '
                    'indentation')
        return Indentation(expected.text)

    def _check_indent(self, indent):
        allowed = [indentation.value for indentation in Indentation]
        if indent.text not in allowed:
            raise InvalidIndentationError(
                allowed, indent.text, self.filename,
                indent.line, indent.column)

    # Entries

    def _entry(self, node):
        indent = node.child(Rule.INDENT)
        self._check_indent(indent)
        # The value follows the indent
        value = self.build(node.children[1])
        lines = []
        summary = node.child(Rule.ENTRY_SUMMARY)
        continuations = node.children_of(Rule.SUMMARY_CONTINUATION)
        if summary is not None or continuations:
            # A summary that starts on the next line has an empty first
            # line
            lines.append('' if summary is None else self.build(summary))
        for continuation in continuations:
            continuation_indent = continuation.child(Rule.INDENT)
            if continuation_indent.text != indent.text * 2:
                raise InvalidIndentationError(
                    indent.text * 2, continuation_indent.text,
                    self.filename, continuation_indent.line,
                    continuation_indent.column,
                    'Summary lines of an entry must be indented twice')
            lines.append(self.build(continuation))
        return EntryNode(value, '\n'.join(lines) if lines else None)

    def _summary_continuation(self, node):
        return self.build(node.child(Rule.SUMMARY_LINE))

    # Time ranges

    def _range_format(self, node):
        if node.children_of(Rule.SPACE):
            return RangeDashFormat.SPACES
        return RangeDashFormat.NO_SPACES

    def _time_range_open(self, node):
        return TimeRangeNode(
            self.build(node.children[0]),
            None,
            self._range_format(node),
            len(node.child(Rule.PLACEHOLDER).text),
        )

    def _time_range_closed(self, node):
        return TimeRangeNode(
            self.build(node.children[0]),
            self.build(node.children[-1]),
            self._range_format(node),
        )

    # Times

    def _shifted(self, node, shift):
        time = self.build(node.children[0])
        self._check_time(node, time.hour, time.minute, shift)
        return TimeNode(time.hour, time.minute, shift, time.format)

    def _backwards_shifted_time(self, node):
        return self._shifted(node, DayShift.YESTERDAY)

    def _forwards_shifted_time(self, node):
        return self._shifted(node, DayShift.TOMORROW)

    def _time_twelve_hour(self, node):
        hour = int(node.child(Rule.HOUR).text)
        minute = int(node.child(Rule.MINUTE).text)
        period = node.child(Rule.PERIOD).text.lower()
        if period == 'am' and hour == 12:
            hour = 0
        elif period == 'pm' and hour != 12:
            hour += 12
        self._check_time(node, hour, minute)
        return TimeNode(hour, minute, DayShift.TODAY, TimeFormat.TWELVE_HOUR)

    def _time_twenty_four_hour(self, node):
        hour = int(node.child(Rule.HOUR).text)
        minute = int(node.child(Rule.MINUTE).text)
        self._check_time(node, hour, minute)
        return TimeNode(
            hour, minute, DayShift.TODAY, TimeFormat.TWENTY_FOUR_HOUR)

    def _check_time(self, node, hour, minute, shift=DayShift.TODAY):
        if not Time.is_valid_value(hour, minute, shift):
            logger.debug('Invalid time %r at line %s, column %s',
                         node.text, node.line, node.column)
            raise InvalidTimeError(hour, minute, shift)

    # Durations

    def _duration(self, node):
        sign = node.child(Rule.SIGN)
        sign = '' if sign is None else self.build(sign)
        hours = node.child(Rule.HOURS)
        minutes = node.child(Rule.MINUTES)
        value = (
            (0 if hours is None else int(self.build(hours)))
            * MINUTES_PER_HOUR
            + (0 if minutes is None else int(self.build(minutes))))
        if sign == '-':
            value = -value
        return DurationNode(value, sign)
