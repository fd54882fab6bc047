from __future__ import annotations

import contextlib
import importlib.util
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from shift_engine.main import save_detections
from shift_engine.models import Detection, NormalizedRect

RUN_SCRIPT = Path(__file__).resolve().parents[1] / "src" / "scanner" / "scripts" / "run.py"


def _load_run_script():
    spec = importlib.util.spec_from_file_location("shift_scanner_run", RUN_SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def det(text: str, cx: float, cy: float, w: float = 0.06, h: float = 0.02) -> Detection:
    return Detection(text=text, confidence=0.9, box=NormalizedRect(cx - w / 2, cy - h / 2, w, h))


class TestRunScriptWithCachedDetections(unittest.TestCase):
    def setUp(self) -> None:
        self.run = _load_run_script()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.detections_path = Path(self.tmp.name) / "roster_ocr.json"
        self.output_path = Path(self.tmp.name) / "shifts.json"

    def _main(self, *args: str) -> tuple[str, int]:
        argv = ["run.py", str(self.detections_path), "--detections", *args]
        out = io.StringIO()
        code = 0
        with mock.patch("sys.argv", argv), contextlib.redirect_stdout(out):
            try:
                self.run.main()
            except SystemExit as e:
                code = e.code
        return out.getvalue(), code

    def test_prints_recognized_text_and_writes_shifts(self) -> None:
        save_detections(
            [det("10-Aug", 0.2, 0.9), det("Sonu", 0.08, 0.41), det("11p-7a", 0.2, 0.41)],
            str(self.detections_path),
        )
        output, code = self._main("--name", "sonu", "--year", "2026", "--output", str(self.output_path))

        self.assertEqual(code, 0)
        self.assertIn("RECOGNIZED TEXT", output)
        self.assertIn("10-Aug\nSonu\n11p-7a", output)
        self.assertIn("CONFIDENCE ANALYSIS", output)

        data = json.loads(self.output_path.read_text(encoding="utf-8"))
        self.assertEqual(data["shifts"][0]["start"], "2026-08-10T23:00:00")
        self.assertEqual(data["shifts"][0]["end"], "2026-08-11T07:00:00")

    def test_failure_is_reported_with_exit_code(self) -> None:
        save_detections([det("Sonu", 0.08, 0.41)], str(self.detections_path))
        output, code = self._main("--name", "sonu", "--output", str(self.output_path))

        self.assertEqual(code, 1)
        self.assertIn("No Dates Found", output)
        self.assertFalse(self.output_path.exists())


if __name__ == "__main__":
    unittest.main()
