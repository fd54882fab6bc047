"""Parse schedule cells into concrete shift intervals."""

import re
from datetime import date, datetime, timedelta
from typing import List, Optional

from .models import Detection, HeaderColumn, ShiftCandidate

# Whole-cell shape: "7a-3p", "6:30a-1p", "11p - 7a", "7am–3pm"
TIME_RANGE_RE = re.compile(
    r'^\s*\d{1,2}(:\d{2})?\s*[ap](m)?\s*[-–]\s*\d{1,2}(:\d{2})?\s*[ap](m)?\s*$',
    re.IGNORECASE
)

# Single side of a range, spaces already removed: "7a", "6:30pm"
TIME_TOKEN_RE = re.compile(r'^(\d{1,2})(?::(\d{2}))?([ap])m?$')


def parse_time_token(token: str, base: date) -> Optional[datetime]:
    """
    Combine a shorthand time like "7a" or "6:30pm" with a calendar date.

    Args:
        token: One side of a time range
        base: Date supplying year, month and day

    Returns:
        datetime or None if the token is malformed
    """
    t = token.replace(' ', '').lower()
    match = TIME_TOKEN_RE.match(t)
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) else 0
    if minute > 59:
        return None

    hour = hour % 12
    if match.group(3) == 'p':
        hour += 12

    return datetime(base.year, base.month, base.day, hour, minute)


def nearest_header(center_x: float, headers: List[HeaderColumn]) -> Optional[HeaderColumn]:
    """Return the header column horizontally closest to center_x."""
    if not headers:
        return None
    return min(headers, key=lambda h: abs(h.center_x - center_x))


class CellParser:
    """Turns a time-range cell plus its column date into a ShiftCandidate."""

    def __init__(self, max_column_distance: Optional[float] = None):
        """
        Initialize cell parser.

        Args:
            max_column_distance: Reject cells farther than this from every
                header. None assigns every cell to its nearest column.
        """
        self.max_column_distance = max_column_distance

    def column_for(self, detection: Detection, headers: List[HeaderColumn]) -> Optional[HeaderColumn]:
        header = nearest_header(detection.box.mid_x, headers)
        if header is None:
            return None
        if (self.max_column_distance is not None
                and abs(header.center_x - detection.box.mid_x) > self.max_column_distance):
            return None
        return header

    def parse_detection(
        self,
        detection: Detection,
        headers: List[HeaderColumn]
    ) -> Optional[ShiftCandidate]:
        """
        Parse a classified cell against the header columns.

        Args:
            detection: Cell detection inside the row band
            headers: Ordered header columns

        Returns:
            ShiftCandidate or None for rest days and unreadable cells
        """
        header = self.column_for(detection, headers)
        if header is None:
            return None
        return self.parse_cell(detection.text, header.date, confidence=detection.confidence)

    def parse_cell(
        self,
        text: str,
        base_date: date,
        confidence: float = 1.0
    ) -> Optional[ShiftCandidate]:
        """
        Parse cell text such as "11p-7a" on a given date.

        An end time earlier than the start time is moved to the next day.

        Args:
            text: Raw cell text
            base_date: Date of the cell's column
            confidence: OCR confidence carried onto the candidate

        Returns:
            ShiftCandidate or None
        """
        if not text:
            return None

        raw = text.strip().lower()
        if 'off' in raw:
            return None

        parts = raw.replace('–', '-').split('-')
        if len(parts) != 2:
            return None

        start = parse_time_token(parts[0], base_date)
        if start is None:
            return None

        end = parse_time_token(parts[1], base_date)
        if end is None:
            return None
        if end < start:
            end = parse_time_token(parts[1], base_date + timedelta(days=1))

        # Zero-length ranges ("7a-7a") are not shifts
        if end <= start:
            return None

        return ShiftCandidate(
            date=base_date,
            start=start,
            end=end,
            source_text=text,
            confidence=confidence,
        )
