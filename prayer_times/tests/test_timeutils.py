from datetime import datetime, time
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase

from prayer_times.exceptions import TimeParseFailure
from prayer_times.timeutils import (
    LocalClock, auto_jumat, clean_time, parse_hhmm, parse_strict_hhmm, strip_annotation,
)


class FixedClock(LocalClock):
    def __init__(self, moment):
        super().__init__(moment.tzinfo)
        self.moment = moment

    def now(self):
        return self.moment


class AutoJumatTests(SimpleTestCase):
    def test_thirty_minutes_before_dzuhur(self):
        self.assertEqual(auto_jumat("12:00"), "11:30")
        self.assertEqual(auto_jumat("11:52"), "11:22")
        self.assertEqual(auto_jumat("12:29"), "11:59")

    def test_wraps_across_midnight(self):
        self.assertEqual(auto_jumat("00:10"), "23:40")
        self.assertEqual(auto_jumat("00:30"), "00:00")

    def test_accepts_seconds_and_time_objects(self):
        self.assertEqual(auto_jumat("12:05:00"), "11:35")
        self.assertEqual(auto_jumat(time(13, 0)), "12:30")

    def test_bad_input_falls_back_and_logs(self):
        with self.assertLogs("prayer_times.timeutils", level="WARNING"):
            self.assertEqual(auto_jumat("noon"), "11:30")
        with self.assertLogs("prayer_times.timeutils", level="WARNING"):
            self.assertEqual(auto_jumat(None), "11:30")
        with self.assertLogs("prayer_times.timeutils", level="WARNING"):
            self.assertEqual(auto_jumat("24:10"), "11:30")


class ParsingTests(SimpleTestCase):
    def test_parse_hhmm(self):
        self.assertEqual(parse_hhmm("04:19"), time(4, 19))
        self.assertEqual(parse_hhmm(" 4:19 "), time(4, 19))
        for bad in ("", "4", "04:60", "25:00", "abc", 419):
            with self.assertRaises(TimeParseFailure):
                parse_hhmm(bad)

    def test_parse_strict_hhmm_requires_two_digit_fields(self):
        self.assertEqual(parse_strict_hhmm("09:05"), time(9, 5))
        self.assertEqual(parse_strict_hhmm(time(9, 5, 30)), time(9, 5))
        for bad in ("9:5", "9:05", "09:5", "12:00:30", " 11:45", "11:45 ", "11:45\n", "24:00", ""):
            with self.assertRaises(TimeParseFailure):
                parse_strict_hhmm(bad)

    def test_strip_annotation(self):
        self.assertEqual(strip_annotation("04:19 (WIB)"), "04:19")
        self.assertEqual(strip_annotation("04:19(+07)"), "04:19")
        self.assertEqual(strip_annotation(" 04:19 "), "04:19")
        self.assertIsNone(strip_annotation(None))

    def test_clean_time(self):
        self.assertEqual(clean_time("18:01 (WIB)"), "18:01")
        self.assertIsNone(clean_time("--:--"))
        self.assertIsNone(clean_time(None))


class LocalClockTests(SimpleTestCase):
    def test_seconds_until_midnight(self):
        tz = ZoneInfo("Asia/Jakarta")
        clock = FixedClock(datetime(2026, 3, 6, 23, 0, tzinfo=tz))
        self.assertEqual(clock.seconds_until_midnight(), 3600)
        self.assertEqual(clock.today().isoformat(), "2026-03-06")

    def test_never_zero(self):
        tz = ZoneInfo("Asia/Jakarta")
        clock = FixedClock(datetime(2026, 3, 6, 23, 59, 59, 900000, tzinfo=tz))
        self.assertEqual(clock.seconds_until_midnight(), 1)
