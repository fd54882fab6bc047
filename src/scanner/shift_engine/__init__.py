"""Shift Engine Package for reading work schedules from OCR output."""

__version__ = "0.1.0"

from .main import extract_shifts, process_schedule, load_detections, save_detections, save_to_json
from .models import (
    CellKind,
    ClassifiedDetection,
    Detection,
    HeaderColumn,
    NormalizedRect,
    RowBand,
    ShiftCandidate,
)
from .header_detector import HeaderDetector, parse_date_header
from .row_locator import RowBandLocator
from .classifier import CellClassifier, classify_detections
from .parser import CellParser
from .utils import (
    ExtractionError,
    EmptyDetectionSet,
    NoDateHeaders,
    NameNotFound,
    NoShiftsParsed,
    merge_duplicate_shifts,
    format_shift_range,
    validate_shifts,
    is_supported_file,
)

__all__ = [
    'extract_shifts',
    'process_schedule',
    'load_detections',
    'save_detections',
    'save_to_json',
    'CellKind',
    'ClassifiedDetection',
    'Detection',
    'HeaderColumn',
    'NormalizedRect',
    'RowBand',
    'ShiftCandidate',
    'HeaderDetector',
    'parse_date_header',
    'RowBandLocator',
    'CellClassifier',
    'classify_detections',
    'CellParser',
    'ExtractionError',
    'EmptyDetectionSet',
    'NoDateHeaders',
    'NameNotFound',
    'NoShiftsParsed',
    'merge_duplicate_shifts',
    'format_shift_range',
    'validate_shifts',
    'is_supported_file',
]
