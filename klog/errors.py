"""Errors raised while reading and manipulating Klog files."""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


class KlogError(Exception):
    """Base class of all errors raised by this package."""


# Syntax


class ParseError(KlogError):

    def __init__(
            self,
            filename=None,
            line=None,
            column=None,
            text=None,
            message=None,
    ):
        super().__init__(message)
        self.filename = filename
        self.line = line
        self.column = column
        self.text = text
        self.message = message

    def __str__(self):
        pieces = ['Parse error']
        if self.filename is not None:
            pieces.append(f' in {self.filename!r}')
        if self.line is not None:
            pieces.append(f' at line {self.line}')
        if self.column is not None:
            pieces.append(' at' if self.line is None else ',')
            pieces.append(f' column {self.column}')
        if self.message is not None:
            pieces.append(': ')
            pieces.append(self.message)
        if self.text is not None:
            pieces.append(': ')
            pieces.append(f'{self.text!r}')
        return ''.join(pieces)


class InvalidDateError(ParseError):

    def __init__(
            self,
            date_text,
            filename=None,
            line=None,
            column=None,
            message='Invalid date',
    ):
        super().__init__(filename, line, column, date_text, message)
        self.date_text = date_text


class InvalidIndentationError(ParseError):

    def __init__(
            self,
            expected,
            actual,
            filename=None,
            line=None,
            column=None,
            message=None,
    ):
        if message is None:
            message = f'Expected indentation {expected!r}'
        super().__init__(filename, line, column, actual, message)
        self.expected = expected
        self.actual = actual


# Values


class InvalidTimeError(KlogError, ValueError):

    def __init__(self, hour, minute, day_shift=None):
        super().__init__(
            f'Invalid time: hour={hour!r}, minute={minute!r}, '
            f'day_shift={day_shift!r}')
        self.hour = hour
        self.minute = minute
        self.day_shift = day_shift


class InvalidRangeError(KlogError, ValueError):

    def __init__(self, start, end):
        super().__init__(
            f'End of range cannot be before its start: {start} - {end}')
        self.start = start
        self.end = end


# Records


class AlreadyOpenError(KlogError):

    def __init__(self, open_entry):
        super().__init__(
            'Records can only have one open range at a time')
        self.open_entry = open_entry


class NoOpenEntryError(KlogError):

    def __init__(self):
        super().__init__(
            'Record does not have any currently open ranges')
