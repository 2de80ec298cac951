"""
Concrete syntax of Klog files.

Matching text against the grammar produces a generic parse tree of
`Node`s: one node per rule, with the matched text, its children, and its
position.  Turning that tree into meaningful values is the job of
`klog.syntax`.


Grammar
-------

Lines are separated by `\\n` or `\\r\\n`.  Whitespace within a line
(`<sp>`) is spaces and tabs.

```
<file> ::= <blank-line>* (<record> <blank-line>+)* <record>? <blank-line>*

<record> ::=
    <record-head> <newline>
    (<record-summary-line> <newline>)*
    (<entry> <newline>)*

<record-head> ::= <date> (<sp> <should-total>)? <sp>?
<date> ::= <digit>{4} ("-" | "/") <digit>{2} ("-" | "/") <digit>{2}
<should-total> ::= "(" <duration> "!)"
<record-summary-line> ::= !<sp> <text>

<entry> ::=
    <indent> (<time-range> | <duration>) (<sp> <text>)? <sp>?
    (<newline> <indent> <indent> <text>)*

<duration> ::= ("+" | "-")? (<digit>+ "h" <digit>{1,2} "m"
                             | <digit>+ "h" | <digit>+ "m")
<time-range> ::=
    | <time> <sp>? "-" <sp>? <time>
    | <time> <sp>? "-" <sp>? "?"+
<time> ::= "<"? (<twelve-hour-time> | <twenty-four-hour-time>) ">"?
<twelve-hour-time> ::= <digit>{1,2} ":" <digit>{2} ("am" | "pm")
<twenty-four-hour-time> ::= <digit>{1,2} ":" <digit>{2}
```

The grammar is deliberately lenient about things that are better
reported with a specific error by the AST builder: mixed date dividers,
impossible calendar dates, and indentation.  Any indented line that does
not start like an entry value, or that is indented twice as deep as the
entry before it, is read as a continuation of that entry's summary.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


from enum import Enum
import logging
import re

from .errors import ParseError


logger = logging.getLogger(__name__)


class Rule(Enum):
    FILE = 'file'
    RECORD = 'record'
    RECORD_HEAD = 'record_head'
    DATE = 'date'
    YEAR = 'year'
    MONTH = 'month'
    DAY = 'day'
    DIVIDER = 'divider'
    SHOULD_TOTAL = 'should_total'
    RECORD_SUMMARY = 'record_summary'
    SUMMARY_LINE = 'summary_line'
    ENTRY = 'entry'
    INDENT = 'indent'
    ENTRY_SUMMARY = 'entry_summary'
    SUMMARY_CONTINUATION = 'summary_continuation'
    TIME_RANGE_OPEN = 'time_range_open'
    TIME_RANGE_CLOSED = 'time_range_closed'
    SPACE = 'space'
    DASH = 'dash'
    PLACEHOLDER = 'placeholder'
    BACKWARDS_SHIFTED_TIME = 'backwards_shifted_time'
    FORWARDS_SHIFTED_TIME = 'forwards_shifted_time'
    TIME_TWELVE_HOUR = 'time_twelve_hour'
    TIME_TWENTY_FOUR_HOUR = 'time_twenty_four_hour'
    HOUR = 'hour'
    MINUTE = 'minute'
    PERIOD = 'period'
    DURATION_HOUR = 'duration_hour'
    DURATION_MINUTE = 'duration_minute'
    DURATION_HOUR_MINUTE = 'duration_hour_minute'
    SIGN = 'sign'
    HOURS = 'hours'
    MINUTES = 'minutes'


class Node:

    def __init__(self, rule, text, children=(), line=None, column=None):
        self.rule = rule
        self.text = text
        self.children = tuple(children)
        self.line = line
        self.column = column

    def child(self, rule):
        for child in self.children:
            if child.rule == rule:
                return child
        return None

    def children_of(self, rule):
        return [child for child in self.children if child.rule == rule]

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __repr__(self):
        return (f'Node({self.rule!s}, {self.text!r}, '
                f'{list(self.children)!r}, {self.line!r}, {self.column!r})')


# Patterns

_newline_pattern = re.compile(r'\r?\n')
_blank_line_pattern = re.compile(r'[ \t]*')
_space_pattern = re.compile(r'[ \t]+')
_indent_pattern = re.compile(r'[ \t]+')
# Text up to trailing whitespace at the end of the line
_text_pattern = re.compile(r'(.*?)[ \t]*$')

_date_pattern = re.compile(r'(\d{4})([-/])(\d{2})([-/])(\d{2})(?!\d)')

_sign = r'([+-])?'
_duration_hour_minute_pattern = re.compile(
    _sign + r'(\d+)h([0-5]?\d)m(?!\w)')
_duration_hour_pattern = re.compile(_sign + r'(\d+)h(?!\w)')
_duration_minute_pattern = re.compile(_sign + r'(\d+)m(?!\w)')

_time_twelve_hour_pattern = re.compile(
    r'(0?[1-9]|1[0-2]):([0-5]\d)([aApP][mM])')
_time_twenty_four_hour_pattern = re.compile(
    r'([01]?\d|2[0-4]):([0-5]\d)(?!\d)')
_backwards_shift_pattern = re.compile('<')
_forwards_shift_pattern = re.compile('>')
_dash_pattern = re.compile('-')
_placeholder_pattern = re.compile(r'\?+')

_should_total_open_pattern = re.compile(r'\(')
_should_total_close_pattern = re.compile(r'!\)')

# How a time range starts, as opposed to a duration
_time_start_pattern = re.compile(r'<?\d{1,2}:')
# How any entry value starts, as opposed to summary text
_entry_value_start_pattern = re.compile(r'[-+<]?\d')


# Scanning


class LineScanner:
    """Matches patterns at a cursor that advances along one line."""

    def __init__(self, text, line=1, filename=None):
        self.text = text
        self.line = line
        self.filename = filename
        self.idx = 0

    def at_end(self):
        return self.idx >= len(self.text)

    def peek(self, pattern):
        return pattern.match(self.text, self.idx)

    def match(self, pattern):
        match = pattern.match(self.text, self.idx)
        if match is not None:
            self.idx = match.end()
        return match

    def expect(self, pattern, message):
        match = self.match(pattern)
        if match is None:
            raise self.error(message)
        return match

    def expect_end(self, message='Unexpected text'):
        self.match(_space_pattern)
        if not self.at_end():
            raise self.error(message)

    def error(self, message, idx=None):
        idx = self.idx if idx is None else idx
        return ParseError(
            self.filename, self.line, idx + 1, self.text[idx:], message)

    def leaf(self, rule, match, group=0):
        """Return a node for a group of a match, or `None` if the group
        did not participate in the match."""
        if match.group(group) is None:
            return None
        return Node(rule, match.group(group), (), self.line,
                    match.start(group) + 1)

    def take(self, rule, pattern):
        """Match an optional leaf, returning `None` if it is absent."""
        match = self.match(pattern)
        if match is None:
            return None
        return self.leaf(rule, match)

    def span(self, rule, start_idx, children):
        return Node(rule, self.text[start_idx:self.idx],
                    [child for child in children if child is not None],
                    self.line, start_idx + 1)


class LineCursor:
    """Steps through the lines of a source text."""

    def __init__(self, source, filename=None):
        self.lines = _newline_pattern.split(source)
        self.filename = filename
        self.idx = 0

    def at_end(self):
        return self.idx >= len(self.lines)

    def current(self):
        return self.lines[self.idx]

    def line_number(self):
        return self.idx + 1

    def is_blank(self):
        return _blank_line_pattern.fullmatch(self.current()) is not None

    def scanner(self):
        return LineScanner(self.current(), self.line_number(), self.filename)

    def advance(self):
        self.idx += 1

    def skip_blank_lines(self):
        while not self.at_end() and self.is_blank():
            self.advance()

    def error(self, message):
        text = None if self.at_end() else self.current()
        return ParseError(
            self.filename, self.line_number(), 1, text, message)


# Grammar


class Grammar:
    """Matches Klog text and builds its parse tree.

    `match` accepts the name of the rule to match against so that
    fragments (a single entry, a time) can be matched on their own.
    """

    line_rules = ('date', 'duration', 'time', 'time_range')

    block_rules = ('file', 'record', 'entry')

    def match(self, source, rule='file', filename=None):
        cursor = LineCursor(source, filename)
        if rule in self.block_rules:
            node = getattr(self, '_' + rule)(cursor)
        elif rule in self.line_rules:
            scanner = cursor.scanner()
            node = getattr(self, '_' + rule)(scanner)
            scanner.expect_end()
            cursor.advance()
        else:
            raise ValueError(f'Unknown rule: {rule!r}')
        cursor.skip_blank_lines()
        if not cursor.at_end():
            raise cursor.error('Unexpected text')
        logger.debug('Matched %r against rule %r: %d line(s)',
                     filename, rule, len(cursor.lines))
        return node

    # Blocks of lines

    def _file(self, cursor):
        records = []
        cursor.skip_blank_lines()
        while not cursor.at_end():
            records.append(self._record(cursor))
            cursor.skip_blank_lines()
        return Node(Rule.FILE, '\n'.join(cursor.lines), records, 1, 1)

    def _record(self, cursor):
        line = cursor.line_number()
        start_idx = cursor.idx
        scanner = cursor.scanner()
        children = [self._record_head(scanner)]
        cursor.advance()
        # Summary lines are not indented
        summary_lines = []
        while (not cursor.at_end()
               and not cursor.is_blank()
               and _indent_pattern.match(cursor.current()) is None):
            text = _text_pattern.match(cursor.current()).group(1)
            summary_lines.append(
                Node(Rule.SUMMARY_LINE, text, (),
                     cursor.line_number(), 1))
            cursor.advance()
        if summary_lines:
            children.append(Node(
                Rule.RECORD_SUMMARY,
                '\n'.join(node.text for node in summary_lines),
                summary_lines, summary_lines[0].line, 1))
        # Entries are indented
        while not cursor.at_end() and not cursor.is_blank():
            if _indent_pattern.match(cursor.current()) is None:
                raise cursor.error(
                    'Expected an indented entry; separate records '
                    'with a blank line')
            children.append(self._entry(cursor))
        return Node(Rule.RECORD,
                    '\n'.join(cursor.lines[start_idx:cursor.idx]),
                    children, line, 1)

    def _entry(self, cursor):
        line = cursor.line_number()
        start_idx = cursor.idx
        scanner = cursor.scanner()
        indent = scanner.expect(_indent_pattern, 'Expected an indentation')
        children = [scanner.leaf(Rule.INDENT, indent)]
        if scanner.peek(_entry_value_start_pattern) is None:
            raise scanner.error('Expected a duration or a time range')
        children.append(self._entry_value(scanner))
        if not scanner.at_end():
            scanner.expect(
                _space_pattern, 'Expected a space after the entry value')
            if not scanner.at_end():
                children.append(scanner.leaf(
                    Rule.ENTRY_SUMMARY,
                    scanner.match(_text_pattern), 1))
        cursor.advance()
        while self._is_continuation(cursor, indent.group(0)):
            children.append(self._summary_continuation(cursor))
            cursor.advance()
        return Node(Rule.ENTRY,
                    '\n'.join(cursor.lines[start_idx:cursor.idx]),
                    children, line, 1)

    def _is_continuation(self, cursor, indent):
        if cursor.at_end() or cursor.is_blank():
            return False
        match = _indent_pattern.match(cursor.current())
        if match is None:
            return False
        if match.group(0) == indent * 2:
            return True
        return _entry_value_start_pattern.match(
            cursor.current(), match.end()) is None

    def _summary_continuation(self, cursor):
        scanner = cursor.scanner()
        indent = scanner.match(_indent_pattern)
        text = scanner.match(_text_pattern)
        return scanner.span(Rule.SUMMARY_CONTINUATION, 0, [
            scanner.leaf(Rule.INDENT, indent),
            scanner.leaf(Rule.SUMMARY_LINE, text, 1),
        ])

    # Parts of lines

    def _record_head(self, scanner):
        children = [self._date(scanner)]
        if scanner.match(_space_pattern) and scanner.peek(
                _should_total_open_pattern):
            children.append(self._should_total(scanner))
        scanner.expect_end('Expected a should-total like "(8h!)"')
        return scanner.span(Rule.RECORD_HEAD, 0, children)

    def _date(self, scanner):
        start_idx = scanner.idx
        match = scanner.expect(_date_pattern, 'Expected a date')
        return scanner.span(Rule.DATE, start_idx, [
            scanner.leaf(Rule.YEAR, match, 1),
            scanner.leaf(Rule.DIVIDER, match, 2),
            scanner.leaf(Rule.MONTH, match, 3),
            scanner.leaf(Rule.DIVIDER, match, 4),
            scanner.leaf(Rule.DAY, match, 5),
        ])

    def _should_total(self, scanner):
        start_idx = scanner.idx
        scanner.expect(_should_total_open_pattern, 'Expected "("')
        duration = self._duration(scanner)
        scanner.expect(_should_total_close_pattern, 'Expected "!)"')
        return scanner.span(Rule.SHOULD_TOTAL, start_idx, [duration])

    def _entry_value(self, scanner):
        if scanner.peek(_time_start_pattern) is not None:
            return self._time_range(scanner)
        return self._duration(scanner)

    def _duration(self, scanner):
        start_idx = scanner.idx
        match = scanner.match(_duration_hour_minute_pattern)
        if match is not None:
            return scanner.span(Rule.DURATION_HOUR_MINUTE, start_idx, [
                scanner.leaf(Rule.SIGN, match, 1),
                scanner.leaf(Rule.HOURS, match, 2),
                scanner.leaf(Rule.MINUTES, match, 3),
            ])
        match = scanner.match(_duration_hour_pattern)
        if match is not None:
            return scanner.span(Rule.DURATION_HOUR, start_idx, [
                scanner.leaf(Rule.SIGN, match, 1),
                scanner.leaf(Rule.HOURS, match, 2),
            ])
        match = scanner.expect(
            _duration_minute_pattern,
            'Expected a duration like "1h30m", "2h", or "45m"')
        return scanner.span(Rule.DURATION_MINUTE, start_idx, [
            scanner.leaf(Rule.SIGN, match, 1),
            scanner.leaf(Rule.MINUTES, match, 2),
        ])

    def _time_range(self, scanner):
        start_idx = scanner.idx
        children = [self._time(scanner)]
        children.append(scanner.take(Rule.SPACE, _space_pattern))
        children.append(scanner.leaf(Rule.DASH, scanner.expect(
            _dash_pattern, 'Expected "-" in time range')))
        children.append(scanner.take(Rule.SPACE, _space_pattern))
        placeholder = scanner.match(_placeholder_pattern)
        if placeholder is not None:
            children.append(scanner.leaf(Rule.PLACEHOLDER, placeholder))
            return scanner.span(Rule.TIME_RANGE_OPEN, start_idx, children)
        children.append(self._time(scanner))
        return scanner.span(Rule.TIME_RANGE_CLOSED, start_idx, children)

    def _time(self, scanner):
        start_idx = scanner.idx
        backwards = scanner.match(_backwards_shift_pattern)
        time = self._unshifted_time(scanner)
        forwards = scanner.match(_forwards_shift_pattern)
        if backwards and forwards:
            raise scanner.error(
                'A time can be shifted to yesterday or to tomorrow, '
                'not both', start_idx)
        if backwards:
            return scanner.span(
                Rule.BACKWARDS_SHIFTED_TIME, start_idx, [time])
        if forwards:
            return scanner.span(
                Rule.FORWARDS_SHIFTED_TIME, start_idx, [time])
        return time

    def _unshifted_time(self, scanner):
        start_idx = scanner.idx
        match = scanner.match(_time_twelve_hour_pattern)
        if match is not None:
            return scanner.span(Rule.TIME_TWELVE_HOUR, start_idx, [
                scanner.leaf(Rule.HOUR, match, 1),
                scanner.leaf(Rule.MINUTE, match, 2),
                scanner.leaf(Rule.PERIOD, match, 3),
            ])
        match = scanner.expect(
            _time_twenty_four_hour_pattern,
            'Expected a time like "9:30", "17:00", or "5:00pm"')
        return scanner.span(Rule.TIME_TWENTY_FOUR_HOUR, start_idx, [
            scanner.leaf(Rule.HOUR, match, 1),
            scanner.leaf(Rule.MINUTE, match, 2),
        ])


_grammar = Grammar()


def match(source, rule='file', filename=None):
    return _grammar.match(source, rule, filename)
