"""Locate the table row that belongs to a person."""

from typing import Iterable, Optional

from .models import Detection, RowBand

MIN_BAND_HEIGHT = 0.05
BAND_HEIGHT_FACTOR = 2.0


class RowBandLocator:
    """Derives a row band from the detection holding a person's name."""

    def __init__(
        self,
        height_factor: float = BAND_HEIGHT_FACTOR,
        min_band_height: float = MIN_BAND_HEIGHT
    ):
        """
        Initialize row locator.

        Args:
            height_factor: Band height as a multiple of the name box height
            min_band_height: Lower bound on band height (absorbs OCR box jitter)
        """
        self.height_factor = height_factor
        self.min_band_height = min_band_height

    def find_name(self, name: str, detections: Iterable[Detection]) -> Optional[Detection]:
        """
        Return the first detection, in input order, whose text contains the name.

        Matching is a case-insensitive substring test on the trimmed name.
        """
        target = (name or '').strip().lower()
        if not target:
            return None

        for detection in detections:
            if target in detection.text.lower():
                return detection
        return None

    def locate(self, name: str, detections: Iterable[Detection]) -> Optional[RowBand]:
        """
        Find the row band for a person.

        Args:
            name: Person name as typed by the user
            detections: OCR detections

        Returns:
            RowBand centred on the name label, or None if the name is absent
        """
        hit = self.find_name(name, detections)
        if hit is None:
            return None

        h = max(hit.box.height * self.height_factor, self.min_band_height)
        mid_y = hit.box.mid_y
        return RowBand(min_y=max(0.0, mid_y - h / 2), max_y=min(1.0, mid_y + h / 2))
