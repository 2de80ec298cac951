"""Tests entries and records."""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import datetime
import unittest

from .. import errors
from .. import records as rc
from ..formats import DateFormat, Indentation
from ..summary import Summary
from ..timekeeping import Duration, Range, Time


class EntryTest(unittest.TestCase):

    def test_bad_value(self):
        with self.assertRaises(TypeError):
            rc.Entry('1h')

    def test_render(self):
        cases = (
            (rc.Entry(Duration(1)), '    1h'),
            (rc.Entry(Duration(1), 'Meeting'), '    1h Meeting'),
            (rc.Entry(Duration.from_minutes(-45), 'Lunch break'),
             '    -45m Lunch break'),
            (rc.Entry(Range(Time(9, 0)), 'Started'), '    9:00 - ? Started'),
            (rc.Entry(Range(Time(9, 0), Time(10, 0)), 'One\nTwo'),
             '    9:00 - 10:00 One\n        Two'),
            (rc.Entry(Duration(minutes=30), '\nNext line'),
             '    30m\n        Next line'),
        )
        for entry, text in cases:
            with self.subTest(text):
                self.assertEqual(text, entry.render())

    def test_render_indentation(self):
        entry = rc.Entry(Duration(2), 'Line one\nLine two')
        self.assertEqual(
            '  2h Line one\n    Line two',
            entry.render(Indentation.TWO_SPACES))
        self.assertEqual(
            '\t2h Line one\n\t\tLine two', entry.render(Indentation.TAB))

    def test_to_duration(self):
        cases = (
            (rc.Entry(Duration(1, 15)), 75),
            (rc.Entry(Range(Time(8, 0), Time(9, 30))), 90),
            (rc.Entry(Range(Time(8, 0))), 0),
        )
        for entry, minutes in cases:
            with self.subTest(repr(entry)):
                self.assertEqual(minutes, entry.to_duration().to_minutes())
                self.assertEqual(minutes, entry.to_minutes())

    def test_open(self):
        self.assertTrue(rc.Entry(Range(Time(8, 0))).open)
        self.assertFalse(rc.Entry(Range(Time(8, 0), Time(9, 0))).open)
        self.assertFalse(rc.Entry(Duration(1)).open)

    def test_summary(self):
        entry = rc.Entry(Duration(1), 'Call #client')
        self.assertEqual(Summary('Call #client'), entry.summary)
        self.assertIsNone(rc.Entry(Duration(1)).summary)

    def test_empty_summary(self):
        for summary in ('', '\n', [''], Summary('')):
            with self.subTest(repr(summary)):
                entry = rc.Entry(Duration(1), summary)
                self.assertIsNone(entry.summary)
                self.assertEqual('    1h', entry.render())


class RecordTest(unittest.TestCase):

    date = datetime.date(2024, 2, 14)

    def test_render(self):
        record = rc.Record(self.date, [
            rc.Entry(Range(Time(9, 30), Time(14, 45))),
            rc.Entry(Duration.from_minutes(-60), 'Break'),
        ])
        self.assertEqual(
            '2024-02-14\n    9:30 - 14:45\n    -1h Break', record.render())
        self.assertEqual(record.render(), str(record))

    def test_render_headline(self):
        cases = (
            (rc.Record(self.date), '2024-02-14'),
            (rc.Record(self.date, should_total=Duration(8, 30)),
             '2024-02-14 (8h30m!)'),
            (rc.Record(self.date, should_total=Duration(9)),
             '2024-02-14 (9h!)'),
            (rc.Record(self.date, date_format=DateFormat.SLASHES),
             '2024/02/14'),
            (rc.Record(datetime.date(987, 1, 2)), '0987-01-02'),
        )
        for record, text in cases:
            with self.subTest(text):
                self.assertEqual(text, record.render())

    def test_render_zero_should_total(self):
        record = rc.Record(self.date, should_total=Duration())
        self.assertEqual('2024-02-14 (0m!)', record.render())
        self.assertEqual(
            '2024-02-14', record.render(render_zero_should_total=False))

    def test_render_summary_and_indentation(self):
        record = rc.Record(
            self.date,
            [rc.Entry(Range(Time(15, 15)))],
            summary='Valentine #holiday\nHalf day',
            indentation=Indentation.TAB,
        )
        self.assertEqual(
            '2024-02-14\nValentine #holiday\nHalf day\n\t15:15 - ?',
            record.render())
        self.assertEqual(
            '2024-02-14\nValentine #holiday\nHalf day\n  15:15 - ?',
            record.render(Indentation.TWO_SPACES))

    def test_totals(self):
        record = rc.Record(
            self.date,
            [
                rc.Entry(Duration(7)),
                rc.Entry(Range(Time(18, 0), Time(18, 45))),
                rc.Entry(Range(Time(20, 0))),
            ],
            should_total=Duration(8),
        )
        self.assertEqual(465, record.to_minutes())
        self.assertEqual(465, record.to_duration().to_minutes())
        self.assertEqual(-15, record.should_total_diff().to_minutes())

    def test_should_total_diff_without_target(self):
        entries = [rc.Entry(Duration(7))]
        self.assertEqual(
            420, rc.Record(self.date, entries).should_total_diff()
            .to_minutes())
        self.assertEqual(
            420,
            rc.Record(self.date, entries, should_total=Duration())
            .should_total_diff().to_minutes())

    def test_start_and_end(self):
        record = rc.Record(self.date, [rc.Entry(Duration(1))])
        self.assertIsNone(record.open_entry)
        record.start(Time(9, 0), 'Writing')
        self.assertIsNotNone(record.open_entry)
        self.assertEqual(
            '2024-02-14\n    1h\n    9:00 - ? Writing', record.render())
        record.end(Time(10, 30))
        self.assertIsNone(record.open_entry)
        self.assertEqual(
            '2024-02-14\n    1h\n    9:00 - 10:30 Writing',
            record.render())
        self.assertEqual(150, record.to_minutes())

    def test_start_with_empty_summary(self):
        record = rc.Record(self.date, summary='')
        record.start(Time(9, 0), summary='')
        self.assertIsNone(record.summary)
        self.assertIsNone(record.entries[0].summary)
        self.assertEqual('2024-02-14\n    9:00 - ?', record.render())

    def test_start_when_open(self):
        record = rc.Record(self.date)
        record.start(Time(9, 0))
        with self.assertRaises(errors.AlreadyOpenError) as context:
            record.start(Time(10, 0))
        self.assertIs(record.open_entry, context.exception.open_entry)
        self.assertEqual(1, len(record.entries))

    def test_end_when_not_open(self):
        record = rc.Record(self.date, [rc.Entry(Duration(1))])
        with self.assertRaises(errors.NoOpenEntryError):
            record.end(Time(10, 0))

    def test_end_before_start(self):
        record = rc.Record(self.date)
        record.start(Time(9, 0))
        with self.assertRaises(errors.InvalidRangeError):
            record.end(Time(8, 0))
        self.assertTrue(record.entries[0].open)

    def test_to_dict(self):
        record = rc.Record(
            self.date, [rc.Entry(Duration(1), 'Work')],
            should_total=Duration(8))
        data = record.to_dict()
        self.assertEqual('2024-02-14', data['date'])
        self.assertEqual('dashes', data['date_format'])
        self.assertEqual(8, data['should_total']['hours'])
        self.assertIsNone(data['summary'])
        self.assertEqual(['Work'], data['entries'][0]['summary']['lines'])
