"""
Human Validation Gate
=====================

Decides whether an image plausibly contains a human being.

Face detection and person segmentation run concurrently. The decision is
made from faces alone: at least one face with probability above the face
threshold. When the face model is unavailable, pixel heuristics take
over and the reported confidence is capped below the model's ceiling.
Body segmentation is advisory and only sets ``body_detected``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
import asyncio
import logging

from datelens_core.config import SystemConfig
from datelens_core.detection.base import FaceDetector, FaceObservation
from datelens_core.detection.heuristics import ImageType, PixelHeuristicClassifier, PixelStatistics
from datelens_core.detection.yolo_detector import YOLOFaceDetector
from datelens_core.segmentation.base import BodySegmenter, SegmentationMask
from datelens_core.segmentation.yolo_segmenter import YOLOPersonSegmenter
from datelens_core.utils.image_utils import ImageBuffer


logger = logging.getLogger(__name__)


class ValidationState(str, Enum):
    """States visited by one validation run."""
    START = "start"
    MODELS_LOADING = "models_loading"
    FACE_DETECTION_DONE = "face_detection_done"
    FACE_DETECTION_FAILED = "face_detection_failed"
    BODY_DETECTION_DONE = "body_detection_done"
    DECIDED = "decided"


@dataclass(frozen=True)
class HumanValidationResult:
    """
    Outcome of the validation gate.

    Attributes:
        is_human: Whether a human is confirmed
        face_count: Number of faces observed (0 in heuristic mode)
        face_confidence: Max face probability, or the capped heuristic confidence
        body_detected: Whether person segmentation found anyone
        message: Human-readable explanation
        used_fallback: True when pixel heuristics made the decision
        skin_tone_ratio: Fraction of skin-like pixels
        image_type: Coarse content category
        detected_objects: Content labels
    """
    is_human: bool
    face_count: int
    face_confidence: float
    body_detected: bool
    message: str
    used_fallback: bool = False
    skin_tone_ratio: float = 0.0
    image_type: ImageType = ImageType.UNKNOWN
    detected_objects: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.face_count < 0:
            raise ValueError(f"face_count must be >= 0, got {self.face_count}")
        if not 0.0 <= self.face_confidence <= 1.0:
            raise ValueError(f"face_confidence out of range: {self.face_confidence}")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "is_human": self.is_human,
            "face_count": self.face_count,
            "face_confidence": self.face_confidence,
            "body_detected": self.body_detected,
            "message": self.message,
            "used_fallback": self.used_fallback,
            "skin_tone_ratio": self.skin_tone_ratio,
            "image_type": self.image_type.value,
            "detected_objects": list(self.detected_objects),
        }


@dataclass
class ValidationReport:
    """
    Everything one validation run produced.

    ``faces`` and ``masks`` are None when the respective model was
    unavailable. ``masks`` feed background removal.
    """
    result: HumanValidationResult
    statistics: PixelStatistics
    faces: Optional[List[FaceObservation]] = None
    masks: Optional[List[SegmentationMask]] = None
    states: List[ValidationState] = field(default_factory=list)


class HumanValidationGate:
    """
    Orchestrates face detection, body segmentation and pixel heuristics.

    Example:
        >>> gate = HumanValidationGate.from_config(config)
        >>> result = await gate.validate(image)
        >>> result.is_human, result.message
        (True, 'Detected 1 face(s) with 93% confidence')
    """

    def __init__(
        self,
        face_detector: Optional[FaceDetector] = None,
        body_segmenter: Optional[BodySegmenter] = None,
        classifier: Optional[PixelHeuristicClassifier] = None,
        face_confidence_threshold: float = 0.7,
        skin_tone_threshold: float = 0.05,
        heuristic_confidence_scale: float = 8.0,
        heuristic_confidence_cap: float = 0.8,
    ):
        """
        Args:
            face_detector: Face model wrapper (None forces heuristic mode)
            body_segmenter: Person segmentation wrapper (None disables it)
            classifier: Pixel heuristic classifier
            face_confidence_threshold: Probability a face must exceed
            skin_tone_threshold: Skin ratio that must be exceeded in heuristic mode
            heuristic_confidence_scale: Skin ratio multiplier for heuristic confidence
            heuristic_confidence_cap: Ceiling on heuristic confidence
        """
        self.face_detector = face_detector
        self.body_segmenter = body_segmenter
        self.classifier = classifier or PixelHeuristicClassifier()
        self.face_confidence_threshold = face_confidence_threshold
        self.skin_tone_threshold = skin_tone_threshold
        self.heuristic_confidence_scale = heuristic_confidence_scale
        self.heuristic_confidence_cap = heuristic_confidence_cap

    @classmethod
    def from_config(cls, config: SystemConfig) -> "HumanValidationGate":
        """Create a gate with YOLO models as configured."""
        timeout = config.validation.inference_timeout

        face_detector = None
        if config.detection.enabled:
            face_detector = YOLOFaceDetector.from_config(
                config.detection, timeout=timeout, models_dir=config.models_dir,
            )

        body_segmenter = None
        if config.segmentation.enabled:
            body_segmenter = YOLOPersonSegmenter.from_config(
                config.segmentation, timeout=timeout, models_dir=config.models_dir,
            )

        return cls(
            face_detector=face_detector,
            body_segmenter=body_segmenter,
            face_confidence_threshold=config.validation.face_confidence_threshold,
            skin_tone_threshold=config.validation.skin_tone_threshold,
            heuristic_confidence_scale=config.validation.heuristic_confidence_scale,
            heuristic_confidence_cap=config.validation.heuristic_confidence_cap,
        )

    async def validate(self, image: ImageBuffer) -> HumanValidationResult:
        """Run the gate and return only the decision."""
        report = await self.evaluate(image)
        return report.result

    async def evaluate(self, image: ImageBuffer) -> ValidationReport:
        """
        Run the gate to completion.

        Args:
            image: Decoded RGBA image

        Returns:
            ValidationReport whose ``states`` ends in DECIDED
        """
        states = [ValidationState.START]

        def enter(state: ValidationState) -> None:
            logger.debug(f"Validation {states[-1].value} -> {state.value}")
            states.append(state)

        enter(ValidationState.MODELS_LOADING)
        faces, masks, statistics = await asyncio.gather(
            self._detect_faces(image),
            self._segment_people(image),
            asyncio.to_thread(self.classifier.classify, image),
        )

        if faces is None:
            enter(ValidationState.FACE_DETECTION_FAILED)
        else:
            enter(ValidationState.FACE_DETECTION_DONE)
        enter(ValidationState.BODY_DETECTION_DONE)

        body_detected = bool(masks)
        if faces is None:
            result = self._decide_heuristic(statistics, body_detected)
        else:
            result = self._decide_faces(faces, statistics, body_detected)
        enter(ValidationState.DECIDED)

        logger.info(
            f"Validation decided is_human={result.is_human} "
            f"faces={result.face_count} confidence={result.face_confidence:.2f} "
            f"fallback={result.used_fallback}"
        )

        return ValidationReport(
            result=result,
            statistics=statistics,
            faces=faces,
            masks=masks,
            states=states,
        )

    async def _detect_faces(self, image: ImageBuffer) -> Optional[List[FaceObservation]]:
        if self.face_detector is None:
            return None
        return await self.face_detector.detect_faces(image)

    async def _segment_people(self, image: ImageBuffer) -> Optional[List[SegmentationMask]]:
        if self.body_segmenter is None:
            return None
        return await self.body_segmenter.segment_people(image)

    def _decide_faces(
        self,
        faces: List[FaceObservation],
        statistics: PixelStatistics,
        body_detected: bool,
    ) -> HumanValidationResult:
        face_count = len(faces)
        confidence = max((f.probability for f in faces), default=0.0)
        percent = round(confidence * 100)
        is_human = face_count > 0 and confidence > self.face_confidence_threshold

        if face_count == 0:
            message = "No face detected in the image"
        elif not is_human:
            message = (
                f"Face detected but confidence too low ({percent}%); "
                f"please upload a clearer photo of a person"
            )
        else:
            message = f"Detected {face_count} face(s) with {percent}% confidence"

        if is_human:
            image_type, objects = ImageType.PERSON, ["person", "face"]
        else:
            # Skin tones alone do not make a person once the face model has spoken
            image_type, objects = statistics.categorize(skin_tone_threshold=1.0)

        return HumanValidationResult(
            is_human=is_human,
            face_count=face_count,
            face_confidence=confidence,
            body_detected=body_detected,
            message=message,
            used_fallback=False,
            skin_tone_ratio=statistics.skin_tone_ratio,
            image_type=image_type,
            detected_objects=tuple(objects),
        )

    def _decide_heuristic(
        self,
        statistics: PixelStatistics,
        body_detected: bool,
    ) -> HumanValidationResult:
        ratio = statistics.skin_tone_ratio
        is_human = ratio > self.skin_tone_threshold
        confidence = min(ratio * self.heuristic_confidence_scale, self.heuristic_confidence_cap)
        percent = round(confidence * 100)

        if is_human:
            message = (
                f"Face model unavailable; skin-tone analysis suggests a person "
                f"({percent}% confidence)"
            )
        else:
            message = "Face model unavailable; skin-tone analysis found no person in the image"

        image_type, objects = statistics.categorize(self.skin_tone_threshold)

        return HumanValidationResult(
            is_human=is_human,
            face_count=0,
            face_confidence=confidence,
            body_detected=body_detected,
            message=message,
            used_fallback=True,
            skin_tone_ratio=ratio,
            image_type=image_type,
            detected_objects=tuple(objects),
        )
