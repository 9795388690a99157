"""Image classification services deciding whether a picture contains a cat."""

import os
from typing import List, Optional, Tuple

import cv2
import numpy as np

from ..config.defaults import CASCADE_SETTINGS
from ..logging_config import get_logger
from ..models.config import SecurityConfig
from .error_handler import ErrorSeverity, global_error_handler, safe_operation
from .interfaces import ImageServiceInterface

logger = get_logger("image_service")


class FakeImageService(ImageServiceInterface):
    """Image service that never sees a cat."""

    def classify(self, image: bytes, confidence_threshold: float) -> bool:
        return False


class OpenCVImageService(ImageServiceInterface):
    """Cat classifier using OpenCV Haar cascades.

    Each cascade hit is scored from its size and its distance to the frame
    center; the image contains a cat when the best hit scores at or above the
    requested threshold. Any internal failure answers False.
    """

    def __init__(self, cascade_path: Optional[str] = None):
        self.scale_factor = CASCADE_SETTINGS["scale_factor"]
        self.min_neighbors = CASCADE_SETTINGS["min_neighbors"]
        self.min_detection_size = CASCADE_SETTINGS["min_size"]
        self.max_detection_size = CASCADE_SETTINGS["max_size"]

        global_error_handler.register_component("image_service")
        self.cascade = self._load_cascade(cascade_path)

    @safe_operation(default_return=False, component_name="image_service", severity=ErrorSeverity.MEDIUM)
    def classify(self, image: bytes, confidence_threshold: float) -> bool:
        if not image:
            logger.warning("Input image is empty, cannot detect cats")
            return False

        frame = cv2.imdecode(np.frombuffer(image, dtype=np.uint8), cv2.IMREAD_COLOR)
        if frame is None:
            logger.error("Could not decode image bytes")
            return False

        hits = self._detect(self._preprocess_frame(frame))
        scores = [self._score_hit(hit, frame.shape) for hit in hits]
        if scores:
            detected = ", ".join(f"{score:.1f}%" for score in sorted(scores, reverse=True))
            logger.info(f"Cascade hits: [{detected}]")
        else:
            logger.info("Cascade found no cat candidates")

        return any(score >= confidence_threshold for score in scores)

    def _load_cascade(self, cascade_path: Optional[str]) -> "cv2.CascadeClassifier":
        """Load the configured cascade, else the first usable bundled one."""
        candidates = []
        if cascade_path:
            candidates.append(cascade_path)
        candidates.extend(cv2.data.haarcascades + name for name in CASCADE_SETTINGS["builtin_cascades"])

        for path in candidates:
            if not os.path.exists(path):
                logger.debug(f"Cascade not found: {path}")
                continue
            cascade = cv2.CascadeClassifier(path)
            if not cascade.empty():
                logger.info(f"Loaded cascade: {path}")
                return cascade
            logger.warning(f"Cascade could not be parsed: {path}")

        raise ValueError(f"No usable Haar cascade among {candidates}")

    def _preprocess_frame(self, frame: np.ndarray) -> np.ndarray:
        """Grayscale and equalize a BGR frame for the cascade."""
        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        return cv2.equalizeHist(gray)

    def _detect(self, gray: np.ndarray) -> List[Tuple[int, int, int, int]]:
        detections = self.cascade.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors,
            minSize=self.min_detection_size,
            maxSize=self.max_detection_size,
            flags=cv2.CASCADE_SCALE_IMAGE
        )
        return [(int(x), int(y), int(w), int(h)) for x, y, w, h in detections]

    def _score_hit(self, hit: Tuple[int, int, int, int], frame_shape: Tuple[int, ...]) -> float:
        """Score a hit in percent from its centering and its size.

        A full-size hit in the middle of the frame scores 100; a small hit
        near a corner scores well under 50.
        """
        x, y, w, h = hit
        frame_h, frame_w = frame_shape[:2]

        center_x = x + w // 2
        center_y = y + h // 2
        center_dist = ((center_x - frame_w // 2) ** 2 + (center_y - frame_h // 2) ** 2) ** 0.5
        max_dist = (frame_w ** 2 + frame_h ** 2) ** 0.5
        center_factor = 1.0 - (center_dist / max_dist)

        max_area = self.max_detection_size[0] * self.max_detection_size[1]
        size_factor = min(1.0, (w * h) / max_area)

        confidence = 0.5 * center_factor + 0.5 * size_factor
        return max(0.0, min(1.0, confidence)) * 100.0


def create_image_service(config: SecurityConfig) -> ImageServiceInterface:
    """Build the image service selected in the configuration."""
    if config.image_service == "opencv":
        return OpenCVImageService(config.cascade_path)
    if config.image_service == "fake":
        return FakeImageService()
    raise ValueError(f"Unknown image service: {config.image_service}")
