"""Data models for shift extraction."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class NormalizedRect:
    """Bounding box as fractions of image size, origin at the bottom-left."""
    x: float
    y: float
    width: float
    height: float

    @property
    def mid_x(self) -> float:
        return self.x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.y + self.height / 2

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @classmethod
    def from_pixel_polygon(
        cls,
        points: Sequence[Sequence[float]],
        image_width: float,
        image_height: float
    ) -> 'NormalizedRect':
        """
        Build a normalized rect from a pixel polygon.

        Pixel coordinates have their origin at the top-left (OpenCV,
        PaddleOCR); the result is flipped so y grows upwards.

        Args:
            points: Polygon corners as [x, y] pairs
            image_width: Image width in pixels
            image_height: Image height in pixels

        Returns:
            NormalizedRect clamped to [0, 1]
        """
        xs = [float(p[0]) for p in points]
        ys = [float(p[1]) for p in points]

        left = _clamp(min(xs) / image_width)
        right = _clamp(max(xs) / image_width)
        top = _clamp(min(ys) / image_height)
        bottom = _clamp(max(ys) / image_height)

        return cls(x=left, y=1.0 - bottom, width=right - left, height=bottom - top)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'NormalizedRect':
        return cls(
            x=float(d["x"]),
            y=float(d["y"]),
            width=float(d["width"]),
            height=float(d["height"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class Detection:
    """A single OCR text observation."""
    text: str
    confidence: float
    box: NormalizedRect

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> 'Detection':
        return cls(
            text=str(d.get("text", "")),
            confidence=float(d.get("confidence", 0.0)),
            box=NormalizedRect.from_dict(d["box"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "confidence": self.confidence, "box": self.box.to_dict()}


@dataclass(frozen=True)
class HeaderColumn:
    """A date header and the horizontal position of its column."""
    center_x: float
    date: date


@dataclass(frozen=True)
class RowBand:
    """Horizontal stripe presumed to hold one person's row of cells."""
    min_y: float
    max_y: float

    def contains(self, y: float) -> bool:
        return self.min_y <= y <= self.max_y

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class ShiftCandidate:
    """A parsed shift interval taken from one table cell."""
    date: date
    start: datetime
    end: datetime
    source_text: str  # e.g. "11p-7a"
    confidence: float = 1.0

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(
                f"Shift start {self.start.isoformat()} must be before end {self.end.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def __str__(self) -> str:
        return f"{self.start.strftime('%Y-%m-%d %H:%M')} -> {self.end.strftime('%Y-%m-%d %H:%M')}"


class CellKind(Enum):
    """What a detection's text looks like."""
    HEADER = "header"
    TIME_RANGE = "time_range"
    OFF_MARKER = "off_marker"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class ClassifiedDetection:
    """A detection paired with its classification, computed once per extraction."""
    detection: Detection
    kind: CellKind
    header_date: Optional[date] = None
