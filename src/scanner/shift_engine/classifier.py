"""Classify detections by the shape of their text."""

from datetime import date
from typing import Iterable, List, Optional, Tuple

from .header_detector import parse_date_header
from .models import CellKind, ClassifiedDetection, Detection, RowBand
from .parser import TIME_RANGE_RE

OFF_MARKERS = {'off', 'r-off'}


def is_off_marker(text: str) -> bool:
    """Check if text is a rest-day marker, ignoring case and whitespace."""
    return ''.join((text or '').split()).lower() in OFF_MARKERS


def is_time_range(text: str) -> bool:
    """Check if text looks like a shift range such as "7a-3p"."""
    return bool(text) and TIME_RANGE_RE.match(text) is not None


def classify_text(text: str, year: int) -> Tuple[CellKind, Optional[date]]:
    """
    Classify a single text string.

    Args:
        text: Detection text
        year: Year used to resolve date headers

    Returns:
        (kind, header date or None)
    """
    header_date = parse_date_header(text, year)
    if header_date is not None:
        return CellKind.HEADER, header_date
    if is_time_range(text):
        return CellKind.TIME_RANGE, None
    if is_off_marker(text):
        return CellKind.OFF_MARKER, None
    return CellKind.UNCLASSIFIED, None


def classify_detections(
    detections: Iterable[Detection],
    year: Optional[int] = None
) -> List[ClassifiedDetection]:
    """Classify every detection once, preserving input order."""
    if year is None:
        year = date.today().year

    classified = []
    for detection in detections:
        kind, header_date = classify_text(detection.text, year)
        classified.append(ClassifiedDetection(detection=detection, kind=kind, header_date=header_date))
    return classified


class CellClassifier:
    """Selects the row cells worth parsing."""

    CELL_KINDS = (CellKind.TIME_RANGE, CellKind.OFF_MARKER)

    def select_cells(
        self,
        band: RowBand,
        classified: Iterable[ClassifiedDetection]
    ) -> List[Detection]:
        """
        Keep time-range and off-marker detections centred inside the band.

        Args:
            band: Row band for the target person
            classified: Detections with their precomputed kind

        Returns:
            Matching detections in input order
        """
        return [
            item.detection
            for item in classified
            if item.kind in self.CELL_KINDS and band.contains(item.detection.box.mid_y)
        ]
