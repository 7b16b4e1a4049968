"""
Detection Module
================

Face detection with YOLO and model-free pixel heuristics.
"""

from datelens_core.detection.base import FaceDetector, FaceObservation
from datelens_core.detection.heuristics import (
    ImageType,
    PixelHeuristicClassifier,
    PixelStatistics,
)
from datelens_core.detection.yolo_detector import YOLOFaceDetector, download_weights

__all__ = [
    "FaceDetector",
    "FaceObservation",
    "ImageType",
    "PixelHeuristicClassifier",
    "PixelStatistics",
    "YOLOFaceDetector",
    "download_weights",
]
