"""Calendar storage for extracted shifts."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from sqlalchemy import Column, DateTime, Integer, String, create_engine
from sqlalchemy.orm import DeclarativeBase, Session

from .models import ShiftCandidate


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class CalendarEvent(Base):
    """A shift saved to the calendar."""
    __tablename__ = "calendar_events"

    id = Column(Integer, primary_key=True)
    title = Column(String(200), nullable=False)
    start = Column(DateTime, nullable=False)
    end = Column(DateTime, nullable=False)
    notes = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))


def event_title(person: str) -> str:
    return f"{person.strip().title()} shift"


def save_shifts_to_calendar(session: Session, shifts: Iterable[ShiftCandidate], person: str) -> int:
    """
    Add one calendar event per shift and commit.

    Args:
        session: Open SQLAlchemy session
        shifts: Shifts to save
        person: Name used in the event title

    Returns:
        Number of events saved
    """
    saved = 0
    for shift in shifts:
        session.add(CalendarEvent(
            title=event_title(person),
            start=shift.start,
            end=shift.end,
            notes=f"Detected from OCR: {shift.source_text}",
        ))
        saved += 1

    session.commit()
    return saved


def get_db_engine(db_path: str = "shift_calendar.db"):
    """
    Create and return a SQLAlchemy Engine connected to SQLite database.

    Args:
        db_path: Path to the SQLite database file, or ":memory:"

    Returns:
        sqlalchemy.Engine: Database engine instance
    """
    if db_path == ":memory:":
        return create_engine("sqlite://", echo=False)

    connection_string = f"sqlite:///{Path(db_path).resolve()}"
    return create_engine(connection_string, echo=False)


def create_tables(engine) -> None:
    """
    Create all database tables defined in Base.metadata.

    Args:
        engine: SQLAlchemy Engine instance
    """
    Base.metadata.create_all(engine)
