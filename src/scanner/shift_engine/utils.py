"""Failure types, deduplication and reporting helpers for shift extraction."""

import re
from datetime import timedelta
from pathlib import Path
from typing import Iterable, List

from .models import Detection, ShiftCandidate

DEFAULT_DEDUP_TOLERANCE = timedelta(seconds=60)

# Longer than this is almost certainly a misread range
MAX_PLAUSIBLE_SHIFT = timedelta(hours=16)
LOW_CONFIDENCE = 0.5

SUPPORTED_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.bmp', '.tiff', '.tif'}


class ExtractionError(Exception):
    """Base class for extraction failures reported back to the caller."""
    title = "Extraction Failed"


class EmptyDetectionSet(ExtractionError):
    """Extraction was requested before any OCR pass produced detections."""
    title = "No OCR yet"


class NoDateHeaders(ExtractionError):
    """No detection looked like a date header."""
    title = "No Dates Found"


class NameNotFound(ExtractionError):
    """No detection contained the target name."""
    title = "Name Not Found"


class NoShiftsParsed(ExtractionError):
    """The row was found but none of its cells parsed into a shift."""
    title = "No Shifts Parsed"


def merge_duplicate_shifts(
    shifts: Iterable[ShiftCandidate],
    tolerance: timedelta = DEFAULT_DEDUP_TOLERANCE
) -> List[ShiftCandidate]:
    """
    Drop near-duplicate shifts and sort the rest chronologically.

    A shift is dropped when an already kept shift has both its start and
    its end within the tolerance.

    Args:
        shifts: Candidates in discovery order
        tolerance: Maximum start/end difference for two shifts to be the same

    Returns:
        Deduplicated shifts sorted by start
    """
    kept: List[ShiftCandidate] = []

    for shift in shifts:
        duplicate = any(
            abs(k.start - shift.start) < tolerance and abs(k.end - shift.end) < tolerance
            for k in kept
        )
        if not duplicate:
            kept.append(shift)

    return sorted(kept, key=lambda s: s.start)


def sanitize_text(text: str) -> str:
    """
    Collapse whitespace and strip NUL characters from OCR text.

    Args:
        text: Text to sanitize

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = re.sub(r'\s+', ' ', text)
    text = text.replace('\x00', '')
    return text.strip()


def recognized_text(detections: Iterable[Detection]) -> str:
    """Join detection texts one per line, in OCR order."""
    return '\n'.join(d.text for d in detections)


def format_shift_range(shift: ShiftCandidate) -> str:
    """Human-readable range, e.g. "Aug 10, 2026 11:00 PM → Aug 11, 2026 7:00 AM"."""
    def _fmt(dt):
        hour = dt.hour % 12 or 12
        return f"{dt.strftime('%b')} {dt.day}, {dt.year} {hour}:{dt.minute:02d} {dt.strftime('%p')}"

    return f"{_fmt(shift.start)} → {_fmt(shift.end)}"


def validate_shifts(shifts: List[ShiftCandidate]) -> List[str]:
    """
    Check extracted shifts and return warnings.

    Args:
        shifts: Extracted shifts

    Returns:
        List of validation warning messages
    """
    warnings = []

    if not shifts:
        warnings.append("No shifts were extracted")
        return warnings

    long_shifts = sum(1 for s in shifts if s.duration > MAX_PLAUSIBLE_SHIFT)
    if long_shifts > 0:
        warnings.append(f"{long_shifts} shifts are longer than {MAX_PLAUSIBLE_SHIFT.seconds // 3600} hours")

    low_confidence = sum(1 for s in shifts if s.confidence < LOW_CONFIDENCE)
    if low_confidence > 0:
        warnings.append(f"{low_confidence} shifts have low confidence (< 50%)")

    return warnings


def format_confidence_report(detections: List[Detection]) -> str:
    """
    Generate a confidence report for an OCR pass.

    Args:
        detections: Detections to analyze

    Returns:
        Formatted report string
    """
    if not detections:
        return "No detections to analyze"

    scores = [d.confidence for d in detections]

    avg_score = sum(scores) / len(scores)
    min_score = min(scores)
    max_score = max(scores)

    high_confidence = sum(1 for s in scores if s >= 0.8)
    medium_confidence = sum(1 for s in scores if 0.5 <= s < 0.8)
    low_confidence = sum(1 for s in scores if s < 0.5)

    report = f"""
Confidence Report:
  Average: {avg_score:.2%}
  Range: {min_score:.2%} - {max_score:.2%}

  Distribution:
    High (≥80%): {high_confidence} detections
    Medium (50-80%): {medium_confidence} detections
    Low (<50%): {low_confidence} detections
"""

    return report.strip()


def is_supported_file(file_path: str) -> bool:
    """
    Quick check if file is a supported photograph.

    Args:
        file_path: Path to check

    Returns:
        True if file extension is supported
    """
    try:
        return Path(file_path).suffix.lower() in SUPPORTED_EXTENSIONS
    except TypeError:
        return False
