"""
Test Face Detection
===================
"""

import asyncio

import pytest

from datelens_core.detection.base import FaceObservation
from datelens_core.detection.yolo_detector import YOLOFaceDetector
from datelens_core.utils.model_loader import get_shared_model

from conftest import FakeFaceDetector


class SlowFaceDetector(FakeFaceDetector):
    """Detector that never finishes within its timeout."""

    async def _detect(self, image):
        await asyncio.sleep(1.0)
        return []


class BrokenYOLOFaceDetector(YOLOFaceDetector):
    """YOLO detector whose weights cannot be loaded."""

    def _create_model(self):
        raise FileNotFoundError("yolov8n-face.pt")


class TestFaceObservation:
    """Tests for FaceObservation."""

    def test_geometry(self):
        """Test width, height and area."""
        face = FaceObservation(bbox=(10, 20, 50, 80), probability=0.9)

        assert face.width == 40
        assert face.height == 60
        assert face.area == 2400

    def test_probability_range(self):
        """Test that probabilities outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            FaceObservation(bbox=(0, 0, 10, 10), probability=1.2)


class TestFaceDetector:
    """Tests for the FaceDetector contract."""

    def test_returns_filtered_faces(self, black_image):
        """Test that tiny faces are dropped and the rest sorted."""
        detector = FakeFaceDetector(faces=[
            FaceObservation((0, 0, 30, 30), 0.6),
            FaceObservation((0, 0, 5, 5), 0.99),
            FaceObservation((0, 0, 40, 40), 0.9),
        ])

        faces = asyncio.run(detector.detect_faces(black_image))

        assert [f.probability for f in faces] == [0.9, 0.6]

    def test_max_faces(self, black_image):
        """Test the face count limit."""
        detector = FakeFaceDetector(
            faces=[FaceObservation((0, 0, 30, 30), 0.5)] * 5,
            max_faces=2,
        )

        assert len(asyncio.run(detector.detect_faces(black_image))) == 2

    def test_no_faces_is_empty_list(self, black_image):
        """Test that zero faces is distinct from unavailable."""
        assert asyncio.run(FakeFaceDetector().detect_faces(black_image)) == []

    def test_unavailable_returns_none(self, black_image, unavailable_error):
        """Test that a model load failure is reported as None."""
        detector = FakeFaceDetector(error=unavailable_error)

        assert asyncio.run(detector.detect_faces(black_image)) is None

    def test_inference_error_returns_none(self, black_image):
        """Test that an inference error is reported as None."""
        detector = FakeFaceDetector(error=RuntimeError("CUDA out of memory"))

        assert asyncio.run(detector.detect_faces(black_image)) is None

    def test_timeout_returns_none(self, black_image):
        """Test that a slow model is reported as None."""
        detector = SlowFaceDetector(timeout=0.05)

        assert asyncio.run(detector.detect_faces(black_image)) is None


class TestYOLOFaceDetector:
    """Tests for YOLOFaceDetector without real weights."""

    def test_from_config(self):
        """Test construction from DetectionConfig."""
        from datelens_core.config import DetectionConfig

        detector = YOLOFaceDetector.from_config(
            DetectionConfig(confidence_threshold=0.3, device="cpu"),
            timeout=5.0,
            models_dir="weights",
        )

        assert detector.confidence_threshold == 0.3
        assert detector.timeout == 5.0
        assert detector.model_path.endswith("yolov8n-face.pt")
        assert detector.model_key.startswith("face:")

    def test_load_failure_returns_none(self, black_image):
        """Test that missing weights degrade to None."""
        detector = BrokenYOLOFaceDetector(device="cpu")

        assert asyncio.run(detector.detect_faces(black_image)) is None
        assert get_shared_model(detector.model_key, detector._create_model).has_failed

    def test_warmup_reports_failure(self):
        """Test that warmup returns False for a broken model."""
        assert asyncio.run(BrokenYOLOFaceDetector(device="cpu").warmup()) is False
