"""Main module for running the shift engine."""

import sys

from shift_engine.main import process_schedule
from shift_engine.utils import ExtractionError

if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python -m shift_engine <image_path> <name>")
        print("\nExample: python -m shift_engine /path/to/schedule.jpg sonu")
        sys.exit(1)

    try:
        process_schedule(sys.argv[1], sys.argv[2])
    except ExtractionError as e:
        print(f"\n✗ {e.title}: {e}")
        sys.exit(1)
