"""
Shared Test Fixtures
====================
"""

import base64
import io
import random
from typing import List, Optional

import numpy as np
import pytest
from PIL import Image

from datelens_core.config import SystemConfig
from datelens_core.detection.base import FaceDetector, FaceObservation
from datelens_core.exceptions import ModelUnavailableError
from datelens_core.pipeline.search import SearchOrchestrator, set_default_orchestrator
from datelens_core.segmentation.base import BodySegmenter, SegmentationMask
from datelens_core.synthesis.synthesizer import ResultSynthesizer
from datelens_core.utils.image_utils import ImageBuffer
from datelens_core.utils.model_loader import reset_models
from datelens_core.validation.gate import HumanValidationGate


SKIN_RGB = (200, 120, 90)


def solid_image(width: int, height: int, rgb=(0, 0, 0)) -> ImageBuffer:
    """Opaque single-colour image."""
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :] = rgb
    return ImageBuffer.from_rgb(pixels)


def png_bytes(image: ImageBuffer) -> bytes:
    out = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(image.pixels)).save(out, format="PNG")
    return out.getvalue()


def png_data_url(image: ImageBuffer) -> str:
    return "data:image/png;base64," + base64.b64encode(png_bytes(image)).decode("ascii")


class FakeFaceDetector(FaceDetector):
    """Detector returning fixed observations, or raising on demand."""

    def __init__(
        self,
        faces: Optional[List[FaceObservation]] = None,
        error: Optional[Exception] = None,
        **kwargs,
    ):
        kwargs.setdefault("device", "cpu")
        super().__init__(**kwargs)
        self.faces = faces or []
        self.error = error
        self.calls = 0

    async def _detect(self, image):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.faces)


class FakeBodySegmenter(BodySegmenter):
    """Segmenter returning full-frame masks for a fixed number of people."""

    def __init__(self, people: int = 1, value: float = 1.0, error: Optional[Exception] = None):
        super().__init__(device="cpu")
        self.people = people
        self.value = value
        self.error = error

    async def _segment(self, image):
        if self.error is not None:
            raise self.error
        return [
            SegmentationMask(np.full((image.height, image.width), self.value, dtype=np.float32))
            for _ in range(self.people)
        ]


def make_gate(faces=None, face_error=None, people=0, segment_error=None) -> HumanValidationGate:
    return HumanValidationGate(
        face_detector=FakeFaceDetector(faces=faces, error=face_error),
        body_segmenter=FakeBodySegmenter(people=people, error=segment_error),
    )


def make_orchestrator(gate: HumanValidationGate, seed: int = 0, **config_overrides) -> SearchOrchestrator:
    config = SystemConfig(**config_overrides)
    return SearchOrchestrator(
        config=config,
        gate=gate,
        synthesizer=ResultSynthesizer(rng=random.Random(seed)),
    )


@pytest.fixture(autouse=True)
def _isolate_shared_state():
    """Start every test with an empty model registry and no default orchestrator."""
    reset_models()
    set_default_orchestrator(None)
    yield
    reset_models()
    set_default_orchestrator(None)


@pytest.fixture
def black_image() -> ImageBuffer:
    return solid_image(64, 48)


@pytest.fixture
def skin_image() -> ImageBuffer:
    return solid_image(64, 64, SKIN_RGB)


@pytest.fixture
def unavailable_error() -> ModelUnavailableError:
    return ModelUnavailableError("face", "weights missing")
