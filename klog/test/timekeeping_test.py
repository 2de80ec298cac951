"""Tests durations, times, and ranges."""


# Copyright (c) 2020 Aubrey Barnard.
#
# This is free software released under the MIT License
# (https://choosealicense.com/licenses/mit/).


import unittest

from .. import errors
from .. import timekeeping as tk
from ..formats import DayShift, RangeDashFormat, TimeFormat


class DurationTest(unittest.TestCase):

    def test_from_minutes(self):
        cases = (
            (0, 0, 0),
            (59, 0, 59),
            (60, 1, 0),
            (61, 1, 1),
            (1501, 25, 1),
            (-61, -1, -1),
            (-30, 0, -30),
        )
        for total, hours, minutes in cases:
            with self.subTest(total):
                duration = tk.Duration.from_minutes(total)
                self.assertEqual(hours, duration.hours)
                self.assertEqual(minutes, duration.minutes)
                self.assertEqual(total, duration.to_minutes())

    def test_render(self):
        cases = (
            (tk.Duration(1, 30), '1h30m'),
            (tk.Duration(2), '2h'),
            (tk.Duration(minutes=45), '45m'),
            (tk.Duration.from_minutes(-90), '-1h30m'),
            (tk.Duration.from_minutes(-5), '-5m'),
            (tk.Duration(1, 30, explicit_positive=True), '+1h30m'),
            (tk.Duration(), '0m'),
            (tk.Duration(zero_sign='-'), '-0m'),
            (tk.Duration(zero_sign='+'), '+0m'),
        )
        for duration, text in cases:
            with self.subTest(text):
                self.assertEqual(text, duration.render())
                self.assertEqual(text, str(duration))

    def test_bad_zero_sign(self):
        with self.assertRaises(ValueError):
            tk.Duration(zero_sign='*')

    def test_arithmetic(self):
        hour = tk.Duration(1)
        half = tk.Duration(minutes=30)
        self.assertEqual(90, hour.add(half).to_minutes())
        self.assertEqual(30, hour.subtract(half).to_minutes())
        self.assertEqual(-30, half.subtract(hour).to_minutes())
        # Operands are unchanged
        self.assertEqual(60, hour.to_minutes())
        self.assertEqual(30, half.to_minutes())

    def test_arithmetic_keeps_options(self):
        plus = tk.Duration(1, explicit_positive=True)
        self.assertEqual('+30m', plus.subtract(tk.Duration(0, 30)).render())

    def test_equality(self):
        self.assertEqual(tk.Duration(1, 30), tk.Duration(minutes=90))
        self.assertTrue(tk.Duration(1).equals(tk.Duration(minutes=60)))
        self.assertNotEqual(tk.Duration(1), tk.Duration(2))
        self.assertEqual(hash(tk.Duration(1)), hash(tk.Duration(0, 60)))

    def test_sign(self):
        self.assertEqual('', tk.Duration(1).sign)
        self.assertEqual('+', tk.Duration(1, explicit_positive=True).sign)
        self.assertEqual('-', tk.Duration.from_minutes(-1).sign)
        self.assertEqual('-', tk.Duration(zero_sign='-').sign)


class TimeTest(unittest.TestCase):

    def test_invalid(self):
        cases = (
            (25, 0, DayShift.TODAY),
            (-1, 0, DayShift.TODAY),
            (12, 60, DayShift.TODAY),
            (24, 1, DayShift.TODAY),
            (24, 0, DayShift.TOMORROW),
        )
        for hour, minute, shift in cases:
            with self.subTest((hour, minute, shift)):
                self.assertFalse(tk.Time.is_valid_value(hour, minute, shift))
                with self.assertRaises(errors.InvalidTimeError):
                    tk.Time(hour, minute, shift)

    def test_midnight_of_next_day(self):
        time = tk.Time(24, 0)
        self.assertEqual(0, time.hour)
        self.assertEqual(0, time.minute)
        self.assertEqual(DayShift.TOMORROW, time.day_shift)
        self.assertEqual(1440, time.minutes_since_midnight())
        # From yesterday's point of view, 24:00 is today
        time = tk.Time(24, 0, DayShift.YESTERDAY)
        self.assertEqual(DayShift.TODAY, time.day_shift)
        self.assertEqual(0, time.minutes_since_midnight())

    def test_minutes_since_midnight(self):
        cases = (
            (tk.Time(0, 0), 0),
            (tk.Time(9, 30), 570),
            (tk.Time(23, 0, DayShift.YESTERDAY), -60),
            (tk.Time(1, 0, DayShift.TOMORROW), 1500),
        )
        for time, minutes in cases:
            with self.subTest(repr(time)):
                self.assertEqual(minutes, time.minutes_since_midnight())
                self.assertEqual(
                    minutes, time.duration_since_midnight().to_minutes())

    def test_comparison(self):
        early = tk.Time(23, 0, DayShift.YESTERDAY)
        late = tk.Time(1, 0)
        self.assertTrue(late.after_or_equals(early))
        self.assertFalse(early.after_or_equals(late))
        self.assertTrue(late.after_or_equals(tk.Time(1, 0)))
        self.assertEqual(
            tk.Time(13, 0), tk.Time(13, 0, format=TimeFormat.TWELVE_HOUR))

    def test_render(self):
        cases = (
            (tk.Time(9, 5), '9:05'),
            (tk.Time(17, 0), '17:00'),
            (tk.Time(0, 0, format=TimeFormat.TWELVE_HOUR), '12:00am'),
            (tk.Time(12, 0, format=TimeFormat.TWELVE_HOUR), '12:00pm'),
            (tk.Time(13, 30, format=TimeFormat.TWELVE_HOUR), '1:30pm'),
            (tk.Time(23, 0, DayShift.YESTERDAY), '<23:00'),
            (tk.Time(2, 0, DayShift.TOMORROW), '2:00>'),
            (tk.Time(11, 59, DayShift.TOMORROW, TimeFormat.TWELVE_HOUR),
             '11:59am>'),
        )
        for time, text in cases:
            with self.subTest(text):
                self.assertEqual(text, time.render())

    def test_render_format_override(self):
        time = tk.Time(15, 45)
        self.assertEqual('3:45pm', time.render(TimeFormat.TWELVE_HOUR))
        self.assertEqual('15:45', time.render())

    def test_to_dict(self):
        self.assertEqual(
            {'hour': 23, 'minute': 15, 'day_shift': 'yesterday',
             'format': '24h'},
            tk.Time(23, 15, DayShift.YESTERDAY).to_dict())


class RangeTest(unittest.TestCase):

    def test_end_before_start(self):
        with self.assertRaises(errors.InvalidRangeError):
            tk.Range(tk.Time(9, 0), tk.Time(8, 59))
        with self.assertRaises(errors.InvalidRangeError):
            tk.Range(tk.Time(1, 0, DayShift.TOMORROW), tk.Time(23, 0))

    def test_to_minutes(self):
        cases = (
            (tk.Range(tk.Time(8, 30), tk.Time(17, 0)), 510),
            (tk.Range(tk.Time(9, 0), tk.Time(9, 0)), 0),
            (tk.Range(tk.Time(23, 0, DayShift.YESTERDAY), tk.Time(1, 0)),
             120),
            (tk.Range(tk.Time(22, 0), tk.Time(2, 0, DayShift.TOMORROW)),
             240),
            (tk.Range(tk.Time(23, 0), tk.Time(24, 0)), 60),
            (tk.Range(tk.Time(9, 0)), 0),
        )
        for rng, minutes in cases:
            with self.subTest(repr(rng)):
                self.assertEqual(minutes, rng.to_minutes())
                self.assertEqual(minutes, rng.to_duration().to_minutes())

    def test_render(self):
        cases = (
            (tk.Range(tk.Time(9, 0), tk.Time(10, 30)), '9:00 - 10:30'),
            (tk.Range(tk.Time(9, 0), tk.Time(10, 30),
                      RangeDashFormat.NO_SPACES), '9:00-10:30'),
            (tk.Range(tk.Time(15, 15)), '15:15 - ?'),
            (tk.Range(tk.Time(15, 15), placeholder_count=3), '15:15 - ???'),
            (tk.Range(tk.Time(15, 15), None, RangeDashFormat.NO_SPACES, 2),
             '15:15-??'),
        )
        for rng, text in cases:
            with self.subTest(text):
                self.assertEqual(text, rng.render())

    def test_bad_placeholder_count(self):
        with self.assertRaises(ValueError):
            tk.Range(tk.Time(9, 0), placeholder_count=0)

    def test_with_end(self):
        rng = tk.Range(tk.Time(9, 0), format=RangeDashFormat.NO_SPACES)
        closed = rng.with_end(tk.Time(10, 0))
        self.assertTrue(rng.open)
        self.assertFalse(closed.open)
        self.assertEqual(60, closed.to_minutes())
        self.assertEqual('9:00-10:00', closed.render())
        with self.assertRaises(errors.InvalidRangeError):
            rng.with_end(tk.Time(8, 0))
        self.assertTrue(rng.open)
