"""
YOLO Face Detector
==================

Face detection using YOLOv8-Face weights through ultralytics.
The model is a process-wide shared resource, loaded once on first use.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Tuple
import asyncio
import logging

import cv2
import numpy as np

from datelens_core.config import DetectionConfig
from datelens_core.detection.base import FaceDetector, FaceObservation
from datelens_core.utils.image_utils import ImageBuffer
from datelens_core.utils.model_loader import get_shared_model


logger = logging.getLogger(__name__)


def download_weights(url: str, output_path: Path) -> Path:
    """Download model weights with a progress bar."""
    import requests
    from tqdm import tqdm

    output_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Downloading {url}")
    response = requests.get(url, stream=True, timeout=60)
    response.raise_for_status()
    total_size = int(response.headers.get('content-length', 0))

    with open(output_path, 'wb') as f:
        with tqdm(total=total_size, unit='iB', unit_scale=True, desc=output_path.name) as pbar:
            for chunk in response.iter_content(chunk_size=8192):
                f.write(chunk)
                pbar.update(len(chunk))

    logger.info(f"Model saved to {output_path}")
    return output_path


class YOLOFaceDetector(FaceDetector):
    """
    Face detector using a YOLOv8-Face model.

    Example:
        >>> detector = YOLOFaceDetector(model="yolov8n-face")
        >>> faces = await detector.detect_faces(image)
        >>> for face in faces or []:
        ...     print(f"Face at {face.bbox} with probability {face.probability:.2f}")
    """

    # Known face detection models
    KNOWN_MODELS = {
        "yolov8n-face": "https://github.com/akanametov/yolov8-face/releases/download/v0.0.0/yolov8n-face.pt",
        "yolov8s-face": "https://github.com/akanametov/yolov8-face/releases/download/v0.0.0/yolov8s-face.pt",
        "yolov8m-face": "https://github.com/akanametov/yolov8-face/releases/download/v0.0.0/yolov8m-face.pt",
    }

    def __init__(
        self,
        model: str = "yolov8n-face",
        model_path: Optional[str] = None,
        confidence_threshold: float = 0.25,
        nms_threshold: float = 0.4,
        min_face_size: int = 20,
        max_faces: int = 20,
        device: str = "auto",
        input_size: Tuple[int, int] = (640, 640),
        timeout: Optional[float] = 30.0,
        models_dir: str = "./models",
    ):
        """
        Initialize the YOLO face detector.

        Args:
            model: Model name (yolov8n-face, yolov8s-face, yolov8m-face) or path
            model_path: Custom model path (overrides model name)
            confidence_threshold: Minimum candidate confidence
            nms_threshold: NMS threshold
            min_face_size: Minimum face size in pixels
            max_faces: Maximum faces to report
            device: Compute device (auto, cuda, mps, cpu)
            input_size: Model input size
            timeout: Seconds allowed per call
            models_dir: Directory for downloaded weights
        """
        super().__init__(
            confidence_threshold=confidence_threshold,
            nms_threshold=nms_threshold,
            min_face_size=min_face_size,
            max_faces=max_faces,
            device=device,
            timeout=timeout,
        )

        self.model_name = model
        self.models_dir = Path(models_dir)
        self.model_path = model_path or self._resolve_model_path(model)
        self.input_size = input_size

    @classmethod
    def from_config(
        cls,
        config: DetectionConfig,
        timeout: Optional[float] = 30.0,
        models_dir: str = "./models",
    ) -> "YOLOFaceDetector":
        """Create a detector from a DetectionConfig."""
        return cls(
            model=config.model,
            model_path=config.model_path,
            confidence_threshold=config.confidence_threshold,
            nms_threshold=config.nms_threshold,
            min_face_size=config.min_face_size,
            max_faces=config.max_faces,
            device=config.device,
            input_size=config.input_size,
            timeout=timeout,
            models_dir=models_dir,
        )

    @property
    def model_key(self) -> str:
        """Registry key shared by every detector using the same weights."""
        return f"face:{self.model_path}:{self.device}"

    def _resolve_model_path(self, model_name: str) -> str:
        """Resolve model name to path."""
        if os.path.exists(model_name):
            return model_name

        local_path = self.models_dir / f"{model_name}.pt"
        if local_path.exists() or model_name in self.KNOWN_MODELS:
            return str(local_path)

        # Let ultralytics resolve its own model names
        return model_name

    def _create_model(self):
        """Load the YOLO model (blocking; runs on the loader thread)."""
        try:
            from ultralytics import YOLO
        except ImportError:
            raise ImportError(
                "ultralytics package is required for YOLO detection. "
                "Install with: pip install ultralytics"
            )

        if self.model_name in self.KNOWN_MODELS and not os.path.exists(self.model_path):
            download_weights(self.KNOWN_MODELS[self.model_name], Path(self.model_path))

        model = YOLO(self.model_path)
        if self.device in ("cuda", "mps"):
            model.to(self.device)
        return model

    async def _detect(self, image: ImageBuffer) -> List[FaceObservation]:
        model = await get_shared_model(self.model_key, self._create_model).get()
        return await asyncio.to_thread(self._predict, model, image)

    def _predict(self, model, image: ImageBuffer) -> List[FaceObservation]:
        # ultralytics treats numpy input as BGR
        bgr = cv2.cvtColor(np.ascontiguousarray(image.rgb), cv2.COLOR_RGB2BGR)

        results = model.predict(
            source=bgr,
            conf=self.confidence_threshold,
            iou=self.nms_threshold,
            imgsz=self.input_size,
            verbose=False,
            device=self.device,
        )

        detections = []

        for result in results:
            boxes = result.boxes

            if boxes is None or len(boxes) == 0:
                continue

            for i in range(len(boxes)):
                box = boxes.xyxy[i].cpu().numpy()
                x1, y1, x2, y2 = map(int, box)
                conf = float(boxes.conf[i].cpu().numpy())

                detections.append(FaceObservation(
                    bbox=(x1, y1, x2, y2),
                    probability=min(max(conf, 0.0), 1.0),
                ))

        return detections

    def __repr__(self) -> str:
        return (
            f"YOLOFaceDetector(model={self.model_name}, "
            f"confidence={self.confidence_threshold}, "
            f"device={self._device})"
        )
