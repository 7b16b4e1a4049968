"""
Base Body Segmenter Interface
=============================

Per-pixel person masks and the abstract segmenter contract. As with face
detectors, segmenters report failure as ``None`` instead of raising.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import asyncio
import logging

import numpy as np

from datelens_core.exceptions import ModelUnavailableError
from datelens_core.utils.device import get_device
from datelens_core.utils.image_utils import ImageBuffer


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SegmentationMask:
    """
    Foreground probability for one detected person.

    Attributes:
        probabilities: float32 array (H, W) with values in [0, 1]
        score: Instance confidence [0, 1]
    """
    probabilities: np.ndarray
    score: float = 1.0

    def __post_init__(self):
        probabilities = np.clip(np.asarray(self.probabilities, dtype=np.float32), 0.0, 1.0)
        if probabilities.ndim != 2:
            raise ValueError(f"Expected (H, W) mask, got shape {probabilities.shape}")
        probabilities.setflags(write=False)
        object.__setattr__(self, "probabilities", probabilities)

    @property
    def shape(self) -> Tuple[int, int]:
        return tuple(self.probabilities.shape)

    @property
    def width(self) -> int:
        return int(self.probabilities.shape[1])

    @property
    def height(self) -> int:
        return int(self.probabilities.shape[0])

    @property
    def coverage(self) -> float:
        """Mean foreground probability over the whole frame."""
        if self.probabilities.size == 0:
            return 0.0
        return float(self.probabilities.mean())

    def matches(self, image: ImageBuffer) -> bool:
        """True if the mask is aligned with the image dimensions."""
        return self.shape == (image.height, image.width)


def merge_masks(masks: Sequence[SegmentationMask]) -> SegmentationMask:
    """
    Union of several person masks (per-pixel maximum).

    Raises:
        ValueError: If no masks are given or their shapes differ
    """
    if not masks:
        raise ValueError("Cannot merge an empty mask list")
    if len(masks) == 1:
        return masks[0]

    shapes = {m.shape for m in masks}
    if len(shapes) != 1:
        raise ValueError(f"Mask shapes differ: {sorted(shapes)}")

    merged = np.maximum.reduce([m.probabilities for m in masks])
    return SegmentationMask(merged, score=max(m.score for m in masks))


class BodySegmenter(ABC):
    """
    Abstract base class for person segmentation models.

    Subclasses implement ``_segment()``; ``segment_people()`` applies the
    timeout, drops masks that are not aligned with the image, and turns
    failures into ``None``.
    """

    def __init__(
        self,
        confidence_threshold: float = 0.35,
        device: str = "auto",
        timeout: Optional[float] = 30.0,
    ):
        self.confidence_threshold = confidence_threshold
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
    async def _segment(self, image: ImageBuffer) -> List[SegmentationMask]:
        """Run the model on an image."""

    async def segment_people(self, image: ImageBuffer) -> Optional[List[SegmentationMask]]:
        """
        Segment the people in an image.

        Args:
            image: Decoded RGBA image

        Returns:
            One mask per detected person (possibly empty), or None when the
            segmenter is unavailable
        """
        try:
            masks = await asyncio.wait_for(self._segment(image), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning(f"{self.__class__.__name__} timed out after {self.timeout}s")
            return None
        except ModelUnavailableError as e:
            logger.warning(f"{self.__class__.__name__} unavailable: {e}")
            return None
        except Exception as e:
            logger.warning(f"{self.__class__.__name__} inference failed: {e}")
            return None

        aligned = [m for m in masks if m.matches(image)]
        if len(aligned) != len(masks):
            logger.warning(f"Dropped {len(masks) - len(aligned)} misaligned mask(s)")
        return aligned

    async def warmup(self) -> bool:
        """Load the model and run a dummy inference; True if usable."""
        dummy = ImageBuffer.from_rgb(np.zeros((64, 64, 3), dtype=np.uint8))
        return await self.segment_people(dummy) is not None

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"confidence={self.confidence_threshold}, "
            f"device={self._device})"
        )
