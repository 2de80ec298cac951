"""
Klog: plain-text time tracking.

Reads, manipulates, and writes Klog files, in which each day is a record
of time entries:

    2018-03-24 (8h!)
    Migrated the database
        8:00 - 12:30 #db
        -30m Lunch
        13:00 - ?

Use `parse` to read text into `Record`s and `render` to write them back.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import logging

from .errors import (
    AlreadyOpenError,
    InvalidDateError,
    InvalidIndentationError,
    InvalidRangeError,
    InvalidTimeError,
    KlogError,
    NoOpenEntryError,
    ParseError,
)
from .formats import (
    DateFormat,
    DayShift,
    Indentation,
    RangeDashFormat,
    TimeFormat,
)
from .parser import parse, parse_to_ast, render
from .records import Entry, Record
from .summary import EndOfLine, Summary, Tag, TextSegment
from .timekeeping import Duration, Range, Time


logging.getLogger(__name__).addHandler(logging.NullHandler())
