"""
Pixel Heuristics
================

Model-free statistics over raw RGBA pixels: skin-tone ratio, mean
brightness and aspect ratio. Always available, used as the fallback
human signal when the face model is unavailable and as a coarse image
type descriptor otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import numpy as np

from datelens_core.utils.image_utils import ImageBuffer


class ImageType(str, Enum):
    """Coarse content category of an image."""
    PERSON = "person"
    DOCUMENT = "document"
    OBJECT = "object"
    LANDSCAPE = "landscape"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PixelStatistics:
    """
    Statistics produced by PixelHeuristicClassifier.

    Attributes:
        skin_tone_ratio: Fraction of pixels passing the skin rule [0, 1]
        average_brightness: Mean of per-pixel channel means [0, 255]
        aspect_ratio: width / height (0 for an empty image)
    """
    skin_tone_ratio: float = 0.0
    average_brightness: float = 0.0
    aspect_ratio: float = 0.0

    def categorize(self, skin_tone_threshold: float = 0.05) -> Tuple[ImageType, List[str]]:
        """
        Describe the image content from the statistics alone.

        Returns:
            (image type, detected object labels)
        """
        if self.aspect_ratio == 0.0:
            return ImageType.UNKNOWN, []
        if self.skin_tone_ratio > skin_tone_threshold:
            return ImageType.PERSON, ["person"]
        if self.average_brightness > 200:
            return ImageType.DOCUMENT, ["document", "text"]
        if self.average_brightness < 50:
            return ImageType.OBJECT, ["dark object"]
        if self.aspect_ratio > 1.5:
            return ImageType.LANDSCAPE, ["landscape", "scenery"]
        return ImageType.OBJECT, ["object"]

    def to_dict(self) -> dict:
        return {
            "skin_tone_ratio": self.skin_tone_ratio,
            "average_brightness": self.average_brightness,
            "aspect_ratio": self.aspect_ratio,
        }


class PixelHeuristicClassifier:
    """
    Single-pass statistical classifier over an RGBA buffer.

    A pixel is skin-like when R > 95, G > 40, B > 20, the channel spread
    exceeds 15, R exceeds G by more than 15, and R is the largest channel.
    The alpha channel is ignored.

    Example:
        >>> stats = PixelHeuristicClassifier().classify(buffer)
        >>> stats.skin_tone_ratio
        0.12
    """

    RED_MIN = 95
    GREEN_MIN = 40
    BLUE_MIN = 20
    MIN_SPREAD = 15
    MIN_RED_GREEN_GAP = 15

    def skin_mask(self, rgb: np.ndarray) -> np.ndarray:
        """Boolean (H, W) mask of skin-like pixels."""
        channels = rgb.astype(np.int16)
        r = channels[..., 0]
        g = channels[..., 1]
        b = channels[..., 2]
        spread = channels.max(axis=-1) - channels.min(axis=-1)

        return (
            (r > self.RED_MIN)
            & (g > self.GREEN_MIN)
            & (b > self.BLUE_MIN)
            & (spread > self.MIN_SPREAD)
            & (np.abs(r - g) > self.MIN_RED_GREEN_GAP)
            & (r > g)
            & (r > b)
        )

    def classify(self, image: ImageBuffer) -> PixelStatistics:
        """
        Compute pixel statistics.

        Never fails; a zero-size buffer yields all-zero statistics.
        """
        total = image.pixel_count
        if total == 0:
            return PixelStatistics()

        rgb = image.rgb
        skin_pixels = int(np.count_nonzero(self.skin_mask(rgb)))
        brightness = float(rgb.astype(np.float64).mean(axis=-1).mean())

        return PixelStatistics(
            skin_tone_ratio=skin_pixels / total,
            average_brightness=brightness,
            aspect_ratio=image.width / image.height,
        )
