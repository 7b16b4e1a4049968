"""
Background Removal
==================

Soft cut-out of people using segmentation masks. Best effort: any
precondition failure or processing error yields ``None``.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union
import asyncio
import logging

import numpy as np

from datelens_core.segmentation.base import SegmentationMask, merge_masks
from datelens_core.utils.image_utils import ImageBuffer


logger = logging.getLogger(__name__)

MaskInput = Union[SegmentationMask, Sequence[SegmentationMask], None]


class BackgroundRemover:
    """
    Multiplies each pixel's alpha by the person mask probability.

    Colour channels are left untouched, so partially confident edges fade
    out instead of being cut hard.

    Example:
        >>> remover = BackgroundRemover()
        >>> cutout = remover.remove_background(image, masks)
        >>> cutout is None or cutout.size == image.size
        True
    """

    def remove_background(
        self,
        image: ImageBuffer,
        masks: MaskInput,
    ) -> Optional[ImageBuffer]:
        """
        Produce an alpha-masked copy of the image.

        Args:
            image: Source image
            masks: One mask, or one mask per person (merged by union)

        Returns:
            Buffer with identical dimensions, or None when there is no
            usable mask or processing fails
        """
        if isinstance(masks, SegmentationMask):
            masks = [masks]
        if not masks:
            logger.debug("No person mask, skipping background removal")
            return None

        try:
            mask = merge_masks(list(masks))
            if not mask.matches(image):
                logger.warning(
                    f"Mask shape {mask.shape} does not match image "
                    f"{(image.height, image.width)}"
                )
                return None

            pixels = image.pixels.copy()
            alpha = pixels[:, :, 3].astype(np.float32) * mask.probabilities
            pixels[:, :, 3] = np.clip(np.rint(alpha), 0, 255).astype(np.uint8)
            return ImageBuffer(pixels)
        except Exception as e:
            logger.warning(f"Background removal failed: {e}")
            return None

    async def remove_background_async(
        self,
        image: ImageBuffer,
        masks: MaskInput,
    ) -> Optional[ImageBuffer]:
        """Run remove_background() off the event loop."""
        return await asyncio.to_thread(self.remove_background, image, masks)
