"""Photograph loading and enhancement ahead of OCR."""

from pathlib import Path
from typing import Union
import numpy as np
import cv2

from .utils import SUPPORTED_EXTENSIONS


class DocumentPreprocessor:
    """Loads a schedule photograph and prepares it for OCR."""

    def __init__(self, max_dimension: int = 3000, denoise: bool = True):
        """
        Initialize the preprocessor.

        Args:
            max_dimension: Longest side after resizing; phone photos are often larger
            denoise: Apply non-local means denoising before contrast enhancement
        """
        self.max_dimension = max_dimension
        self.denoise = denoise

    def process(self, file_path: Union[str, Path]) -> np.ndarray:
        """
        Load and preprocess a photograph.

        Args:
            file_path: Path to the image file

        Returns:
            Preprocessed image as numpy array (BGR)

        Raises:
            ValueError: If the file format is not supported or cannot be read
        """
        file_path = Path(file_path)
        extension = file_path.suffix.lower()

        if extension not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported file format: {extension}")

        # OpenCV returns BGR, which PaddleOCR expects
        image = cv2.imread(str(file_path))
        if image is None:
            raise ValueError(f"Failed to load image: {file_path}")

        print(f"  → Loaded image: shape={image.shape}, dtype={image.dtype}")

        image = self.resize_for_ocr(image, self.max_dimension)
        return self.enhance(image)

    def enhance(self, image: np.ndarray) -> np.ndarray:
        """
        Apply preprocessing to improve OCR accuracy.

        Args:
            image: Input image as numpy array (BGR format from OpenCV)

        Returns:
            Preprocessed image (BGR format)
        """
        if self.denoise:
            image = cv2.fastNlMeansDenoisingColored(image, None, 10, 10, 7, 21)

        # Enhance contrast using CLAHE on LAB color space
        lab = cv2.cvtColor(image, cv2.COLOR_BGR2LAB)
        l, a, b = cv2.split(lab)
        clahe = cv2.createCLAHE(clipLimit=3.0, tileGridSize=(8, 8))
        l = clahe.apply(l)
        enhanced = cv2.merge([l, a, b])
        return cv2.cvtColor(enhanced, cv2.COLOR_LAB2BGR)

    @staticmethod
    def resize_for_ocr(image: np.ndarray, max_dimension: int = 3000) -> np.ndarray:
        """
        Resize image if too large, maintaining aspect ratio.

        Args:
            image: Input image
            max_dimension: Maximum width or height

        Returns:
            Resized image
        """
        h, w = image.shape[:2]

        if max(h, w) > max_dimension:
            scale = max_dimension / max(h, w)
            new_w = int(w * scale)
            new_h = int(h * scale)
            return cv2.resize(image, (new_w, new_h), interpolation=cv2.INTER_AREA)

        return image
