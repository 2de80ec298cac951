"""Free-text summaries and the tags embedded in them.

A tag is `#name` or `#name=value`.  Names are made of letters, digits,
underscores and dashes, in any script.  Values are double-quoted,
single-quoted, or a bare word; quotes are kept as written.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import re

from .formats import indent_text


tag_pattern = re.compile(
    r'''#([\w-]+)(?:=("[^"]*"|'[^']*'|[\w-]*))?''')

# The tag pattern as a single group so that `re.split` alternates
# between surrounding text and whole tags
_split_pattern = re.compile(
    r'''(#[\w-]+(?:=(?:"[^"]*"|'[^']*'|[\w-]*))?)''')


# Segments


class Segment:

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __hash__(self):
        return hash((type(self).__name__,) + tuple(self.__dict__.values()))


class Tag(Segment):
    """A `#name` or `#name=value` tag.  `value` is `None` for a bare
    name."""

    def __init__(self, name, value=None):
        self.name = name
        self.value = value

    def to_dict(self):
        return {'name': self.name, 'value': self.value}

    def __repr__(self):
        return f'Tag({self.name!r}, {self.value!r})'


class TextSegment(Segment):

    def __init__(self, value):
        self.value = value

    def __repr__(self):
        return f'TextSegment({self.value!r})'


class EndOfLine(Segment):

    def __repr__(self):
        return 'EndOfLine()'


def _tag_from_match(match):
    return Tag(match.group(1), match.group(2))


class Summary:

    def __init__(self, text):
        if isinstance(text, str):
            self.lines = text.split('\n')
        else:
            self.lines = list(text)

    def set_text(self, text):
        self.lines = text.split('\n')

    @property
    def text(self):
        return '\n'.join(self.lines)

    @property
    def tags(self):
        return [_tag_from_match(match)
                for line in self.lines
                for match in tag_pattern.finditer(line)]

    def split_on_tags(self):
        """Split into text, tag, and end-of-line segments.

        Useful for rich text formatting.  Empty text segments are left
        out.  End-of-line segments separate lines; none follows the last
        line.
        """
        segments = []
        for line_idx, line in enumerate(self.lines):
            if line_idx > 0:
                segments.append(EndOfLine())
            # Odd pieces are tags, even pieces are the text around them
            for piece_idx, piece in enumerate(_split_pattern.split(line)):
                if piece_idx % 2 == 1:
                    segments.append(
                        _tag_from_match(tag_pattern.fullmatch(piece)))
                elif piece:
                    segments.append(TextSegment(piece))
        return segments

    def render(self, indentation=None, start_on_next_line=False):
        """Render the lines, indenting continuation lines twice.

        With `start_on_next_line`, the text starts with a newline and
        every line is indented.
        """
        indent = indent_text(indentation) * 2
        if start_on_next_line:
            return ''.join('\n' + indent + line for line in self.lines)
        return ('\n' + indent).join(self.lines)

    def to_dict(self):
        return {
            'lines': list(self.lines),
            'tags': [tag.to_dict() for tag in self.tags],
        }

    def __eq__(self, other):
        if not isinstance(other, Summary):
            return NotImplemented
        return self.lines == other.lines

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f'Summary({self.lines!r})'
