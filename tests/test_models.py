from __future__ import annotations

import unittest
from datetime import date, datetime, timedelta

from shift_engine.models import Detection, NormalizedRect, RowBand, ShiftCandidate


class TestNormalizedRect(unittest.TestCase):
    def test_pixel_polygon_is_flipped_to_bottom_left_origin(self) -> None:
        # 100 px wide box near the top of a 1000x500 image
        rect = NormalizedRect.from_pixel_polygon([[100, 50], [200, 50], [200, 100], [100, 100]], 1000, 500)

        self.assertAlmostEqual(rect.x, 0.1)
        self.assertAlmostEqual(rect.width, 0.1)
        self.assertAlmostEqual(rect.height, 0.1)
        self.assertAlmostEqual(rect.y, 0.8)
        self.assertAlmostEqual(rect.mid_y, 0.85)
        self.assertAlmostEqual(rect.max_y, 0.9)

    def test_pixel_polygon_is_clamped(self) -> None:
        rect = NormalizedRect.from_pixel_polygon([[-10, -5], [120, -5], [120, 30], [-10, 30]], 100, 100)

        self.assertEqual(rect.x, 0.0)
        self.assertEqual(rect.width, 1.0)
        self.assertAlmostEqual(rect.y, 0.7)

    def test_dict_form(self) -> None:
        rect = NormalizedRect(0.1, 0.2, 0.3, 0.04)
        self.assertEqual(NormalizedRect.from_dict(rect.to_dict()), rect)

        d = Detection(text="7a-3p", confidence=0.87, box=rect)
        self.assertEqual(d.to_dict()["box"], {"x": 0.1, "y": 0.2, "width": 0.3, "height": 0.04})


class TestRowBand(unittest.TestCase):
    def test_contains_is_inclusive(self) -> None:
        band = RowBand(min_y=0.3, max_y=0.4)
        self.assertTrue(band.contains(0.3))
        self.assertTrue(band.contains(0.4))
        self.assertFalse(band.contains(0.41))


class TestShiftCandidate(unittest.TestCase):
    def test_start_must_precede_end(self) -> None:
        start = datetime(2026, 8, 10, 7, 0)
        with self.assertRaises(ValueError):
            ShiftCandidate(date=date(2026, 8, 10), start=start, end=start, source_text="7a-7a")
        with self.assertRaises(ValueError):
            ShiftCandidate(date=date(2026, 8, 10), start=start, end=start - timedelta(hours=1), source_text="x")

    def test_duration(self) -> None:
        s = ShiftCandidate(
            date=date(2026, 8, 10),
            start=datetime(2026, 8, 10, 23, 0),
            end=datetime(2026, 8, 11, 7, 0),
            source_text="11p-7a",
        )
        self.assertEqual(s.duration, timedelta(hours=8))
        self.assertEqual(s.confidence, 1.0)


if __name__ == "__main__":
    unittest.main()
