"""OCR extraction using PaddleOCR."""

from typing import List, Optional, Sequence
import numpy as np
from paddleocr import PaddleOCR

from .models import Detection, NormalizedRect
from .utils import sanitize_text


class OCRExtractor:
    """Turns a schedule photograph into a list of Detections using PaddleOCR."""

    def __init__(self, use_gpu: bool = False, lang: str = 'en'):
        """
        Initialize OCR extractor.

        Args:
            use_gpu: Whether to use GPU acceleration (note: gpu support requires paddlepaddle-gpu)
            lang: Language code for OCR (default: 'en')
        """
        self.use_gpu = use_gpu
        self.ocr = PaddleOCR(
            use_angle_cls=True,  # Enable angle classification for rotated text
            lang=lang,
            det_db_box_thresh=0.3,  # Lower threshold for better detection of faint text
            det_db_unclip_ratio=2.0,  # Expand detected boxes slightly
        )

    def extract_text(self, image: np.ndarray) -> List[Detection]:
        """
        Extract text from image using PaddleOCR.

        Args:
            image: Input image as numpy array (BGR format from OpenCV)

        Returns:
            Detections with boxes normalized to the image, origin bottom-left,
            in the order PaddleOCR reported them
        """
        if image is None or not isinstance(image, np.ndarray) or image.size == 0:
            print("    Warning: Received empty image")
            return []

        result = self.ocr.ocr(image)

        if not result or result[0] is None:
            print("    Warning: PaddleOCR returned no results")
            return []

        h, w = image.shape[:2]
        first = result[0]

        # PaddleOCR has had API changes: older versions return a list of
        # (bbox, (text, confidence)) tuples. Newer pipeline returns a single
        # dict inside a list with keys like 'rec_texts', 'rec_polys',
        # 'rec_scores' or 'rec_boxes'. Handle both.
        if isinstance(first, dict) and 'rec_texts' in first:
            return self._from_pipeline_result(first, w, h)
        return self._from_legacy_result(first, w, h)

    def _from_pipeline_result(self, first: dict, w: int, h: int) -> List[Detection]:
        rec_texts = first.get('rec_texts', [])
        rec_scores = first.get('rec_scores', [])
        rec_polys = first.get('rec_polys')
        if rec_polys is None:
            rec_polys = first.get('rec_boxes')

        detections = []
        for idx, text in enumerate(rec_texts):
            confidence = float(rec_scores[idx]) if idx < len(rec_scores) else 0.0
            poly = rec_polys[idx] if rec_polys is not None and idx < len(rec_polys) else None

            detection = self._make_detection(text, confidence, self._as_polygon(poly), w, h)
            if detection is not None:
                detections.append(detection)

        return detections

    def _from_legacy_result(self, lines: list, w: int, h: int) -> List[Detection]:
        detections = []
        for line in lines:
            try:
                bbox, (text, confidence) = line[0], line[1]
            except (IndexError, ValueError, TypeError) as line_error:
                print(f"    Warning: Skipping malformed OCR result: {line_error}")
                continue

            detection = self._make_detection(text, float(confidence), self._as_polygon(bbox), w, h)
            if detection is not None:
                detections.append(detection)

        return detections

    @staticmethod
    def _as_polygon(poly) -> Optional[List[List[float]]]:
        """Accept a 4-point polygon or an [x1, y1, x2, y2] rectangle."""
        if poly is None:
            return None

        values = np.asarray(poly, dtype=float)
        if values.shape == (4,):
            x1, y1, x2, y2 = values.tolist()
            return [[x1, y1], [x2, y1], [x2, y2], [x1, y2]]
        if values.ndim == 2 and values.shape[0] >= 4 and values.shape[1] >= 2:
            return values[:, :2].tolist()
        return None

    @staticmethod
    def _make_detection(
        text,
        confidence: float,
        polygon: Optional[Sequence[Sequence[float]]],
        w: int,
        h: int
    ) -> Optional[Detection]:
        text = sanitize_text(str(text)) if text else ''
        if not text or polygon is None:
            return None

        return Detection(
            text=text,
            confidence=max(0.0, min(1.0, confidence)),
            box=NormalizedRect.from_pixel_polygon(polygon, w, h),
        )

    @staticmethod
    def calculate_confidence_score(detections: List[Detection]) -> float:
        """
        Calculate average confidence score for extracted text.

        Args:
            detections: Extracted detections

        Returns:
            Average confidence score (0-1)
        """
        if not detections:
            return 0.0

        total = sum(d.confidence for d in detections)
        return total / len(detections)
