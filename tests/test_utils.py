from __future__ import annotations

import unittest
from datetime import date, datetime

from shift_engine.models import Detection, NormalizedRect, ShiftCandidate
from shift_engine.utils import (
    format_confidence_report,
    format_shift_range,
    is_supported_file,
    recognized_text,
    sanitize_text,
    validate_shifts,
)

BOX = NormalizedRect(0.1, 0.1, 0.1, 0.02)


class TestReporting(unittest.TestCase):
    def test_format_shift_range(self) -> None:
        s = ShiftCandidate(date(2026, 8, 10), datetime(2026, 8, 10, 23, 0), datetime(2026, 8, 11, 7, 0), "11p-7a")
        self.assertEqual(format_shift_range(s), "Aug 10, 2026 11:00 PM → Aug 11, 2026 7:00 AM")

    def test_validate_shifts(self) -> None:
        self.assertEqual(validate_shifts([]), ["No shifts were extracted"])

        ok = ShiftCandidate(date(2026, 8, 10), datetime(2026, 8, 10, 7), datetime(2026, 8, 10, 15), "7a-3p")
        self.assertEqual(validate_shifts([ok]), [])

        long_low = ShiftCandidate(
            date(2026, 8, 10), datetime(2026, 8, 10, 6), datetime(2026, 8, 10, 23), "6a-11p", confidence=0.3
        )
        warnings = validate_shifts([ok, long_low])
        self.assertEqual(len(warnings), 2)
        self.assertIn("longer than 16 hours", warnings[0])
        self.assertIn("low confidence", warnings[1])

    def test_confidence_report(self) -> None:
        self.assertEqual(format_confidence_report([]), "No detections to analyze")

        dets = [Detection("a", 0.9, BOX), Detection("b", 0.6, BOX), Detection("c", 0.3, BOX)]
        report = format_confidence_report(dets)
        self.assertIn("Average: 60.00%", report)
        self.assertIn("Low (<50%): 1 detections", report)

    def test_recognized_text(self) -> None:
        dets = [Detection("10-Aug", 0.9, BOX), Detection("Sonu", 0.9, BOX)]
        self.assertEqual(recognized_text(dets), "10-Aug\nSonu")


class TestTextHelpers(unittest.TestCase):
    def test_sanitize_text(self) -> None:
        self.assertEqual(sanitize_text("  11p \t -\n7a\x00 "), "11p - 7a")
        self.assertEqual(sanitize_text(""), "")

    def test_is_supported_file(self) -> None:
        self.assertTrue(is_supported_file("roster.JPG"))
        self.assertTrue(is_supported_file("roster.png"))
        self.assertFalse(is_supported_file("roster.pdf"))
        self.assertFalse(is_supported_file("roster"))


if __name__ == "__main__":
    unittest.main()
