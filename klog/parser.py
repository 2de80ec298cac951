"""
Reading and writing Klog files.

`parse` reads the text of a Klog file into a list of `Record`s and
`render` writes records back as text.  `parse_to_ast` stops halfway and
returns the AST, optionally for a fragment of the grammar such as a
single entry or time.
"""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import logging

from . import grammar
from .records import Record
from .syntax import AstBuilder, FileNode


logger = logging.getLogger(__name__)


def parse_to_ast(source, rule=None, filename=None):
    """Parse the given text into an AST node.

    `rule` names the part of the grammar to match: `'file'` (the
    default), `'record'`, `'entry'`, `'date'`, `'duration'`, `'time'`,
    or `'time_range'`.

    Raises `ParseError` (or one of its subclasses) if the text does not
    match, and `InvalidTimeError` for impossible times.
    """
    logger.debug('Parsing %d characters of %r as %r',
                 len(source), filename, rule or 'file')
    if rule in (None, 'file') and not source.strip():
        return FileNode([])
    tree = grammar.match(source, rule or 'file', filename)
    return AstBuilder(filename).build(tree)


def parse(source, filename=None):
    """Parse the text of a Klog file into a list of records."""
    file_node = parse_to_ast(source, filename=filename)
    records = [Record.from_ast(node) for node in file_node.records]
    logger.debug('Parsed %d record(s) from %r', len(records), filename)
    return records


def render(records):
    """Render records as the text of a Klog file.

    Records are separated by a blank line.  The text ends with a newline
    unless there are no records.
    """
    if not records:
        return ''
    return '\n\n'.join(record.render() for record in records) + '\n'
