"""
Base Face Detector Interface
============================

Abstract base class defining the interface for all face detectors.

Detectors never raise to their caller: a model that cannot be loaded,
times out, or fails during inference is reported as unavailable
(``None``) so that the validation gate can fall back to pixel heuristics.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple
import asyncio
import logging

import numpy as np

from datelens_core.exceptions import ModelUnavailableError
from datelens_core.utils.device import get_device
from datelens_core.utils.image_utils import ImageBuffer


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FaceObservation:
    """
    A single detected face.

    Attributes:
        bbox: Bounding box coordinates (x1, y1, x2, y2) in pixels
        probability: Detection probability [0, 1]
    """
    bbox: Tuple[int, int, int, int]
    probability: float

    def __post_init__(self):
        if not 0.0 <= self.probability <= 1.0:
            raise ValueError(f"Face probability out of range: {self.probability}")

    @property
    def width(self) -> int:
        return self.bbox[2] - self.bbox[0]

    @property
    def height(self) -> int:
        return self.bbox[3] - self.bbox[1]

    @property
    def area(self) -> int:
        return self.width * self.height

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "bbox": list(self.bbox),
            "probability": float(self.probability),
            "width": self.width,
            "height": self.height,
        }


class FaceDetector(ABC):
    """
    Abstract base class for face detection models.

    Subclasses implement ``_detect()``, which may raise freely; the public
    ``detect_faces()`` applies the timeout and converts every failure into
    ``None``.
    """

    def __init__(
        self,
        confidence_threshold: float = 0.25,
        nms_threshold: float = 0.4,
        min_face_size: int = 20,
        max_faces: int = 20,
        device: str = "auto",
        timeout: Optional[float] = 30.0,
    ):
        """
        Initialize the face detector.

        Args:
            confidence_threshold: Minimum confidence for a candidate face
            nms_threshold: Non-maximum suppression threshold
            min_face_size: Minimum face size in pixels
            max_faces: Maximum number of faces to report
            device: Compute device (auto, cuda, mps, cpu)
            timeout: Seconds allowed per call, model load included (None disables)
        """
        self.confidence_threshold = confidence_threshold
        self.nms_threshold = nms_threshold
        self.min_face_size = min_face_size
        self.max_faces = max_faces
        self.timeout = timeout
        self._device = device
        self._resolved_device: Optional[str] = None

    @property
    def device(self) -> str:
        """Get the resolved compute device."""
        if self._resolved_device is None:
            self._resolved_device = get_device(self._device)
        return self._resolved_device

    @abstractmethod
    async def _detect(self, image: ImageBuffer) -> List[FaceObservation]:
        """
        Run the model on an image.

        Raises:
            ModelUnavailableError: If the model cannot be loaded
        """

    async def detect_faces(self, image: ImageBuffer) -> Optional[List[FaceObservation]]:
        """
        Detect faces in an image.

        Args:
            image: Decoded RGBA image

        Returns:
            Face observations sorted by probability, or None when the
            detector is unavailable
        """
        try:
            faces = await asyncio.wait_for(self._detect(image), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{self.__class__.__name__} timed out after {self.timeout}s")
            return None
        except ModelUnavailableError as e:
            logger.warning(f"{self.__class__.__name__} unavailable: {e}")
            return None
        except Exception as e:
            logger.warning(f"{self.__class__.__name__} inference failed: {e}")
            return None

        return self.filter_detections(faces)

    def filter_detections(
        self,
        detections: List[FaceObservation],
    ) -> List[FaceObservation]:
        """
        Filter detections based on size and limit.

        Args:
            detections: List of face observations

        Returns:
            Filtered list of observations, most probable first
        """
        filtered = [
            d for d in detections
            if d.width >= self.min_face_size and d.height >= self.min_face_size
        ]

        filtered.sort(key=lambda x: x.probability, reverse=True)
        return filtered[:self.max_faces]

    async def warmup(self) -> bool:
        """
        Load the model and run a dummy inference.

        Returns:
            True if the detector is usable
        """
        dummy = ImageBuffer.from_rgb(np.zeros((64, 64, 3), dtype=np.uint8))
        return await self.detect_faces(dummy) is not None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"confidence={self.confidence_threshold}, "
            f"nms={self.nms_threshold}, "
            f"device={self._device})"
        )
