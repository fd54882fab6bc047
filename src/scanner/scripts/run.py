"""Command-line entry point for the shift engine."""

import sys
from pathlib import Path

# Add parent directory to Python path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from shift_engine import (
    ExtractionError,
    extract_shifts,
    format_shift_range,
    is_supported_file,
    load_detections,
    process_schedule,
    save_to_json,
    validate_shifts,
)
from shift_engine.utils import format_confidence_report, recognized_text
from shift_engine.database import get_db_engine, create_tables, save_shifts_to_calendar
from sqlalchemy.orm import Session


def _option_value(name: str):
    """Return the argument following a --flag, or None."""
    if name in sys.argv:
        idx = sys.argv.index(name)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return None


def _print_usage() -> None:
    print("="*70)
    print("SHIFT SCANNER - Command Line Interface")
    print("="*70)
    print("\nUsage: python scripts/run.py <file_path> --name <person> [options]")
    print("\nArguments:")
    print("  file_path        Schedule photograph (or detections JSON with --detections)")
    print("  --name NAME      Person whose row to read (required)")
    print("\nOptions:")
    print("  --gpu            Use GPU acceleration for OCR")
    print("  --output FILE    Output JSON file path")
    print("  --year YEAR      Year for date headers (default: current year)")
    print("  --detections     Treat file_path as cached OCR detections JSON")
    print("  --cache FILE     Save OCR detections for later --detections runs")
    print("  --save-calendar  Save shifts as calendar events")
    print("  --db PATH        Calendar database (default: shift_calendar.db)")
    print("\nSupported formats: PNG, JPG, JPEG, BMP, TIFF")
    print("\nExamples:")
    print("  python scripts/run.py roster.jpg --name sonu")
    print("  python scripts/run.py roster.jpg --name sonu --cache roster_ocr.json")
    print("  python scripts/run.py roster_ocr.json --detections --name sonu --save-calendar")


def main():
    """Main entry point for command-line execution."""

    name = _option_value('--name')
    if len(sys.argv) < 2 or sys.argv[1].startswith('--') or not name:
        _print_usage()
        sys.exit(1)

    file_path = sys.argv[1]
    use_gpu = '--gpu' in sys.argv
    from_detections = '--detections' in sys.argv
    save_calendar = '--save-calendar' in sys.argv
    db_path = _option_value('--db') or "shift_calendar.db"
    output_path = _option_value('--output') or Path(file_path).stem + "_shifts.json"

    year = None
    if _option_value('--year'):
        try:
            year = int(_option_value('--year'))
        except ValueError:
            print(f"\n✗ Error: Invalid year: {_option_value('--year')}")
            sys.exit(1)

    if not from_detections and not is_supported_file(file_path):
        print("\n✗ Error: Unsupported file format")
        print("  Supported formats: PNG, JPG, JPEG, BMP, TIFF")
        sys.exit(1)

    try:
        if from_detections:
            detections = load_detections(file_path)
            print(f"▶ Loaded {len(detections)} detections from {file_path}")

            print("\n" + "="*70)
            print("RECOGNIZED TEXT")
            print("="*70)
            print(recognized_text(detections) or "—")

            print("\n" + "="*70)
            print("CONFIDENCE ANALYSIS")
            print("="*70)
            print(format_confidence_report(detections))

            shifts = extract_shifts(detections, name, year=year, raise_on_empty=True)
            for shift in shifts:
                print(f"    {format_shift_range(shift)}  \"{shift.source_text}\"")
        else:
            shifts = process_schedule(
                file_path,
                name,
                use_gpu=use_gpu,
                year=year,
                detections_output=_option_value('--cache'),
            )
            if not shifts:
                print("\n✗ No Shifts Parsed: Found the row, but couldn't parse any times.")
                sys.exit(1)

        warnings = validate_shifts(shifts)
        if warnings:
            print("\n" + "="*70)
            print("VALIDATION WARNINGS")
            print("="*70)
            for warning in warnings:
                print(f"⚠ {warning}")

        print("\n" + "="*70)
        print("SAVING RESULTS")
        print("="*70)
        save_to_json(shifts, output_path, person=name)

        if save_calendar:
            engine = get_db_engine(db_path=db_path)
            create_tables(engine)

            with Session(engine) as session:
                saved = save_shifts_to_calendar(session, shifts, name)

            print(f"✓ Saved {saved} shift{'' if saved == 1 else 's'} to calendar: {db_path}")

        print("\n✓ Processing completed successfully!")

    except ExtractionError as e:
        print(f"\n✗ {e.title}: {e}")
        sys.exit(1)
    except FileNotFoundError as e:
        print(f"\n✗ File Error: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"\n✗ Validation Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
