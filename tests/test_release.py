import unittest
from datetime import date, datetime, timedelta, timezone

from inflation_tracker.indicators.release import Countdown, parse_release_time, release_countdown
from inflation_tracker.ui.formatting import (
    PLACEHOLDER,
    format_countdown,
    format_level,
    format_month,
    format_pct,
)


class TestReleaseCountdown(unittest.TestCase):
    def test_parse_with_offset(self):
        parsed = parse_release_time("2025-09-11T08:30:00-04:00")
        self.assertEqual(parsed, datetime(2025, 9, 11, 12, 30, tzinfo=timezone.utc))

    def test_parse_invalid(self):
        with self.assertRaises(ValueError):
            parse_release_time("next thursday")

    def test_countdown_parts(self):
        now = datetime(2025, 9, 8, 9, 25, 54, tzinfo=timezone.utc)
        target = now + timedelta(days=3, hours=4, minutes=5, seconds=6)
        self.assertEqual(
            release_countdown(target, now),
            Countdown(days=3, hours=4, minutes=5, seconds=6, reached=False),
        )

    def test_countdown_from_iso_string(self):
        now = datetime(2025, 9, 11, 12, 0, tzinfo=timezone.utc)
        countdown = release_countdown("2025-09-11T08:30:00-04:00", now)
        self.assertEqual((countdown.days, countdown.hours, countdown.minutes), (0, 0, 30))

    def test_past_release_is_reached(self):
        now = datetime(2026, 1, 1, tzinfo=timezone.utc)
        countdown = release_countdown("2025-09-11T08:30:00-04:00", now)
        self.assertTrue(countdown.reached)
        self.assertEqual((countdown.days, countdown.hours, countdown.minutes, countdown.seconds), (0, 0, 0, 0))


class TestFormatting(unittest.TestCase):
    def test_pct(self):
        self.assertEqual(format_pct(2.94), "2.9%")
        self.assertEqual(format_pct(-0.06), "-0.1%")
        self.assertEqual(format_pct(None), PLACEHOLDER)
        self.assertEqual(format_pct(float("nan")), PLACEHOLDER)

    def test_level(self):
        self.assertEqual(format_level(322.1234), "322.12")
        self.assertEqual(format_level(None), PLACEHOLDER)

    def test_month(self):
        self.assertEqual(format_month(date(2025, 8, 1)), "August 2025")
        self.assertEqual(format_month(None), PLACEHOLDER)

    def test_countdown(self):
        self.assertEqual(format_countdown(Countdown(3, 4, 5, 6, False)), "03d 04h 05m 06s")


if __name__ == "__main__":
    unittest.main()
