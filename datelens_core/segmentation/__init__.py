"""
Segmentation Module
===================

Person segmentation and mask-based background removal.
"""

from datelens_core.segmentation.base import BodySegmenter, SegmentationMask, merge_masks
from datelens_core.segmentation.yolo_segmenter import YOLOPersonSegmenter
from datelens_core.segmentation.background import BackgroundRemover

__all__ = [
    "BodySegmenter",
    "SegmentationMask",
    "merge_masks",
    "YOLOPersonSegmenter",
    "BackgroundRemover",
]
