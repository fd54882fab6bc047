"""Date header detection for schedule columns."""

import re
from datetime import date
from typing import Iterable, List, Optional, Union

from .models import CellKind, ClassifiedDetection, Detection, HeaderColumn

# Day number, separator, month word: "10-Aug", "16 Aug", "3/Sept"
DATE_HEADER_RE = re.compile(r'(\d{1,2})\s*[-/ ]\s*([A-Za-z]{3,})', re.IGNORECASE)

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

# Headers closer than this (normalized width) are the same column read twice
DUPLICATE_COLUMN_THRESHOLD = 0.03


def month_number(name: str) -> Optional[int]:
    """
    Resolve a month word from its first three letters.

    Args:
        name: Month token as printed (e.g., "Aug", "AUGUST", "sept")

    Returns:
        Month number 1-12 or None if not recognized
    """
    if not name:
        return None
    return MONTHS.get(name[:3].lower())


def parse_date_header(text: str, year: int) -> Optional[date]:
    """
    Parse a column header like "10-Aug" into a date in the given year.

    Args:
        text: Detection text
        year: Year to assign (headers carry none)

    Returns:
        date or None if the text is not a usable date header
    """
    if not text or not isinstance(text, str):
        return None

    # OCR sometimes reads the hyphen as an em dash
    text = text.replace('—', '-')

    match = DATE_HEADER_RE.search(text)
    if not match:
        return None

    day = int(match.group(1))
    month = month_number(match.group(2))
    if month is None or not 1 <= day <= 31:
        return None

    try:
        return date(year, month, day)
    except ValueError:
        # e.g. "31-Feb"
        return None


class HeaderDetector:
    """Finds date headers and orders them into table columns."""

    def __init__(self, duplicate_threshold: float = DUPLICATE_COLUMN_THRESHOLD):
        """
        Initialize header detector.

        Args:
            duplicate_threshold: Minimum horizontal gap between two distinct columns
        """
        self.duplicate_threshold = duplicate_threshold

    def detect_headers(
        self,
        detections: Iterable[Union[Detection, ClassifiedDetection]],
        year: Optional[int] = None
    ) -> List[HeaderColumn]:
        """
        Collect date headers and merge repeated readings of the same column.

        Args:
            detections: Raw detections, or detections already classified
            year: Year for the resolved dates (default: current year)

        Returns:
            HeaderColumn list ordered left to right
        """
        if year is None:
            year = date.today().year

        headers = []
        for item in detections:
            if isinstance(item, ClassifiedDetection):
                if item.kind is not CellKind.HEADER or item.header_date is None:
                    continue
                headers.append(HeaderColumn(center_x=item.detection.box.mid_x, date=item.header_date))
            else:
                header_date = parse_date_header(item.text, year)
                if header_date is not None:
                    headers.append(HeaderColumn(center_x=item.box.mid_x, date=header_date))

        return self.merge_columns(headers)

    def merge_columns(self, headers: List[HeaderColumn]) -> List[HeaderColumn]:
        """
        Sort headers left to right and keep the first of each tight cluster.

        Args:
            headers: Unordered header columns

        Returns:
            Ordered columns with no two closer than the duplicate threshold
        """
        merged: List[HeaderColumn] = []
        for header in sorted(headers, key=lambda h: h.center_x):
            if merged and abs(header.center_x - merged[-1].center_x) < self.duplicate_threshold:
                continue
            merged.append(header)
        return merged
