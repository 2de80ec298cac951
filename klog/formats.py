"""Formatting choices that Klog text can express and that rendering
reproduces."""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


from enum import Enum, IntEnum


class DayShift(IntEnum):
    """Which day a time of day belongs to, relative to its record."""
    YESTERDAY = -1
    TODAY = 0
    TOMORROW = 1


class TimeFormat(Enum):
    TWENTY_FOUR_HOUR = '24h'
    TWELVE_HOUR = '12h'


class RangeDashFormat(Enum):
    SPACES = 'spaces'
    NO_SPACES = 'no_spaces'


class DateFormat(Enum):
    DASHES = '-'
    SLASHES = '/'


class Indentation(Enum):
    """The allowed single-level indentations of entry lines."""
    FOUR_SPACES = '    '
    THREE_SPACES = '   '
    TWO_SPACES = '  '
    TAB = '\t'


def indent_text(indentation):
    """Return the whitespace for the given indentation.

    Accepts an `Indentation`, one of its values, or `None` (no
    indentation).
    """
    if indentation is None:
        return ''
    return Indentation(indentation).value
