"""Core execution logic for shift extraction."""

import json
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import List, Optional, Sequence

from .classifier import CellClassifier, classify_detections
from .header_detector import HeaderDetector
from .models import Detection, ShiftCandidate
from .parser import CellParser
from .row_locator import RowBandLocator
from .utils import (
    DEFAULT_DEDUP_TOLERANCE,
    SUPPORTED_EXTENSIONS,
    EmptyDetectionSet,
    NameNotFound,
    NoDateHeaders,
    NoShiftsParsed,
    format_shift_range,
    merge_duplicate_shifts,
)


def extract_shifts(
    detections: Optional[Sequence[Detection]],
    target_name: str,
    *,
    year: Optional[int] = None,
    raise_on_empty: bool = False,
    header_detector: Optional[HeaderDetector] = None,
    row_locator: Optional[RowBandLocator] = None,
    cell_parser: Optional[CellParser] = None,
    dedup_tolerance: timedelta = DEFAULT_DEDUP_TOLERANCE,
) -> List[ShiftCandidate]:
    """
    Reconstruct one person's shifts from a photographed schedule's OCR output.

    Steps: date headers, the person's row band, time cells inside the band,
    per-cell parsing against the nearest header, deduplication.

    Args:
        detections: OCR detections; None means no OCR pass has completed
        target_name: Name to look for (case-insensitive substring)
        year: Year assigned to headers (default: current year)
        raise_on_empty: Raise NoShiftsParsed instead of returning []
        header_detector: Override header merging settings
        row_locator: Override row band settings
        cell_parser: Override column assignment settings
        dedup_tolerance: Start/end tolerance for duplicate shifts

    Returns:
        Shifts sorted by start time (possibly empty)

    Raises:
        EmptyDetectionSet: If detections is None
        NoDateHeaders: If no date header was recognized
        NameNotFound: If no detection contains the target name
        NoShiftsParsed: If raise_on_empty and nothing parsed
    """
    if detections is None:
        raise EmptyDetectionSet("Scan or choose a photo first.")

    detections = list(detections)
    if year is None:
        year = date.today().year

    header_detector = header_detector or HeaderDetector()
    row_locator = row_locator or RowBandLocator()
    cell_parser = cell_parser or CellParser()

    classified = classify_detections(detections, year=year)

    headers = header_detector.detect_headers(classified, year=year)
    if not headers:
        raise NoDateHeaders("Couldn't detect date headers like \"10-Aug\".")

    band = row_locator.locate(target_name, detections)
    if band is None:
        raise NameNotFound(f"Couldn't find \"{target_name}\" in the scan.")

    cells = CellClassifier().select_cells(band, classified)

    candidates = []
    for cell in cells:
        shift = cell_parser.parse_detection(cell, headers)
        if shift is not None:
            candidates.append(shift)

    shifts = merge_duplicate_shifts(candidates, tolerance=dedup_tolerance)

    if not shifts and raise_on_empty:
        raise NoShiftsParsed("Found the row, but couldn't parse any times.")

    return shifts


def process_schedule(
    file_path: str,
    target_name: str,
    use_gpu: bool = False,
    year: Optional[int] = None,
    detections_output: Optional[str] = None
) -> List[ShiftCandidate]:
    """
    Run OCR on a schedule photograph and extract one person's shifts.

    Args:
        file_path: Path to the photograph
        target_name: Name of the person whose row to read
        use_gpu: Whether to use GPU acceleration for OCR (default: False)
        year: Year assigned to date headers (default: current year)
        detections_output: Also write the raw detections to this JSON file

    Returns:
        Shifts sorted by start time

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file format is not supported
        ExtractionError: If the schedule cannot be read for this person
    """
    # OCR stack is heavy; load it only when a photo is actually processed
    from .ocr_extractor import OCRExtractor
    from .preprocessor import DocumentPreprocessor

    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise ValueError(
            f"Unsupported file format: {file_path.suffix}. "
            f"Supported formats: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    print(f"▶ Processing Schedule: {file_path.name}")

    print("\n[1/3] Preprocessing photo...")
    image = DocumentPreprocessor().process(file_path)
    print("✓ Image ready")

    print("\n[2/3] Extracting text with PaddleOCR...")
    ocr_extractor = OCRExtractor(use_gpu=use_gpu)
    detections = ocr_extractor.extract_text(image)
    avg_confidence = ocr_extractor.calculate_confidence_score(detections)
    print(f"✓ {len(detections)} text elements (avg confidence: {avg_confidence:.2%})")

    if detections_output:
        save_detections(detections, detections_output)
        print(f"  → Detections cached at: {detections_output}")

    print(f"\n[3/3] Finding shifts for \"{target_name}\"...")
    shifts = extract_shifts(detections, target_name, year=year)
    print(f"✓ Extracted {len(shifts)} shift(s)")
    for shift in shifts:
        print(f"    {format_shift_range(shift)}  \"{shift.source_text}\"")

    return shifts


def load_detections(input_path: str) -> List[Detection]:
    """
    Load a cached detection set written by save_detections().

    Args:
        input_path: Path to detections JSON

    Returns:
        Detections in file order
    """
    with open(input_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    items = data.get('detections', []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise ValueError(f"Expected a list of detections in {input_path}")

    return [Detection.from_dict(item) for item in items]


def save_detections(detections: Sequence[Detection], output_path: str) -> None:
    """Write a detection set so it can be re-parsed without running OCR."""
    data = {'detections': [d.to_dict() for d in detections]}

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def save_to_json(shifts: Sequence[ShiftCandidate], output_path: str, person: str = "") -> None:
    """
    Save extracted shifts to JSON file.

    Args:
        shifts: Shifts to save
        output_path: Path to output JSON file
        person: Name the shifts were extracted for
    """
    data = {
        'person': person,
        'extraction_timestamp': datetime.now().isoformat(),
        'shifts': [
            {
                'date': shift.date.isoformat(),
                'start': shift.start.isoformat(),
                'end': shift.end.isoformat(),
                'source_text': shift.source_text,
                'confidence': shift.confidence,
            }
            for shift in shifts
        ]
    }

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    print(f"✓ Saved to: {output_path}")
