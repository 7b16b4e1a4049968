"""
DateLens Core - Profile Search Validation and Enrichment
========================================================

The core behind the DateLens profile search front end:
- Human presence validation (YOLO face detection with pixel-heuristic fallback)
- Person segmentation and background cut-out
- Phone number parsing with area-code region lookup
- Synthetic profile generation for confirmed searches

Results are fabricated for demonstration; no lookup against any real
platform is performed and nothing is stored.

Example:
    >>> from datelens_core import perform_phone_search
    >>> envelope = await perform_phone_search("+1 (212) 555-0100")
    >>> envelope.payload.phone_info.region_label
    'New York, NY'
"""

__version__ = "1.0.0"
__author__ = "DateLens Project"

from datelens_core.config import (
    SystemConfig,
    DetectionConfig,
    SegmentationConfig,
    ValidationConfig,
    SynthesisConfig,
    PhoneConfig,
    UIConfig,
    load_config,
)

from datelens_core.exceptions import DateLensError, ImageDecodeError, ModelUnavailableError
from datelens_core.utils import ImageBuffer, decode_image, reset_models
from datelens_core.detection import (
    FaceDetector,
    FaceObservation,
    PixelHeuristicClassifier,
    PixelStatistics,
    YOLOFaceDetector,
)
from datelens_core.segmentation import (
    BackgroundRemover,
    BodySegmenter,
    SegmentationMask,
    YOLOPersonSegmenter,
)
from datelens_core.validation import HumanValidationGate, HumanValidationResult
from datelens_core.phone import PhoneNumberParser, PhoneParseResult
from datelens_core.synthesis import ProfileCategory, ProfileRecord, ResultSynthesizer
from datelens_core.pipeline import (
    PhonePayload,
    PhotoPayload,
    SearchKind,
    SearchOrchestrator,
    SearchResultEnvelope,
    perform_image_search,
    perform_phone_search,
)

__all__ = [
    # Version
    "__version__",
    # Config
    "SystemConfig",
    "DetectionConfig",
    "SegmentationConfig",
    "ValidationConfig",
    "SynthesisConfig",
    "PhoneConfig",
    "UIConfig",
    "load_config",
    # Errors
    "DateLensError",
    "ImageDecodeError",
    "ModelUnavailableError",
    # Images and models
    "ImageBuffer",
    "decode_image",
    "reset_models",
    # Detection
    "FaceDetector",
    "FaceObservation",
    "PixelHeuristicClassifier",
    "PixelStatistics",
    "YOLOFaceDetector",
    # Segmentation
    "BackgroundRemover",
    "BodySegmenter",
    "SegmentationMask",
    "YOLOPersonSegmenter",
    # Validation
    "HumanValidationGate",
    "HumanValidationResult",
    # Phone
    "PhoneNumberParser",
    "PhoneParseResult",
    # Synthesis
    "ProfileCategory",
    "ProfileRecord",
    "ResultSynthesizer",
    # Pipeline
    "PhonePayload",
    "PhotoPayload",
    "SearchKind",
    "SearchOrchestrator",
    "SearchResultEnvelope",
    "perform_image_search",
    "perform_phone_search",
]
