from __future__ import annotations

import unittest
from datetime import date, datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from shift_engine.database import CalendarEvent, create_tables, event_title, get_db_engine, save_shifts_to_calendar
from shift_engine.models import ShiftCandidate


class TestCalendarSink(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = get_db_engine(":memory:")
        create_tables(self.engine)

    def test_each_shift_becomes_an_event(self) -> None:
        shifts = [
            ShiftCandidate(date(2026, 8, 10), datetime(2026, 8, 10, 23), datetime(2026, 8, 11, 7), "11p-7a"),
            ShiftCandidate(date(2026, 8, 11), datetime(2026, 8, 11, 15), datetime(2026, 8, 11, 23), "3p-11p"),
        ]

        with Session(self.engine) as session:
            saved = save_shifts_to_calendar(session, shifts, " sonu ")
            events = session.scalars(select(CalendarEvent).order_by(CalendarEvent.start)).all()

            self.assertEqual(saved, 2)
            self.assertEqual([e.title for e in events], ["Sonu shift", "Sonu shift"])
            self.assertEqual(events[0].start, datetime(2026, 8, 10, 23))
            self.assertEqual(events[0].end, datetime(2026, 8, 11, 7))
            self.assertEqual(events[0].notes, "Detected from OCR: 11p-7a")
            self.assertIsNotNone(events[0].created_at)

    def test_nothing_to_save(self) -> None:
        with Session(self.engine) as session:
            self.assertEqual(save_shifts_to_calendar(session, [], "sonu"), 0)
            self.assertEqual(session.scalars(select(CalendarEvent)).all(), [])

    def test_event_title(self) -> None:
        self.assertEqual(event_title("sonu m"), "Sonu M shift")


if __name__ == "__main__":
    unittest.main()
