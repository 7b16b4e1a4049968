"""
YOLO Person Segmenter
=====================

Instance segmentation of people with YOLOv8-seg weights through
ultralytics, restricted to the COCO "person" class.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Tuple
import asyncio
import logging

import cv2
import numpy as np

from datelens_core.config import SegmentationConfig
from datelens_core.segmentation.base import BodySegmenter, SegmentationMask
from datelens_core.utils.image_utils import ImageBuffer
from datelens_core.utils.model_loader import get_shared_model


logger = logging.getLogger(__name__)

PERSON_CLASS_ID = 0


class YOLOPersonSegmenter(BodySegmenter):
    """
    Person segmenter using a YOLOv8 segmentation model.

    Example:
        >>> segmenter = YOLOPersonSegmenter(model="yolov8n-seg")
        >>> masks = await segmenter.segment_people(image)
    """

    def __init__(
        self,
        model: str = "yolov8n-seg",
        model_path: Optional[str] = None,
        confidence_threshold: float = 0.35,
        device: str = "auto",
        input_size: Tuple[int, int] = (640, 640),
        timeout: Optional[float] = 30.0,
        models_dir: str = "./models",
    ):
        super().__init__(
            confidence_threshold=confidence_threshold,
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
        config: SegmentationConfig,
        timeout: Optional[float] = 30.0,
        models_dir: str = "./models",
    ) -> "YOLOPersonSegmenter":
        """Create a segmenter from a SegmentationConfig."""
        return cls(
            model=config.model,
            model_path=config.model_path,
            confidence_threshold=config.confidence_threshold,
            device=config.device,
            input_size=config.input_size,
            timeout=timeout,
            models_dir=models_dir,
        )

    @property
    def model_key(self) -> str:
        return f"segmentation:{self.model_path}:{self.device}"

    def _resolve_model_path(self, model_name: str) -> str:
        if os.path.exists(model_name):
            return model_name

        local_path = self.models_dir / f"{model_name}.pt"
        if local_path.exists():
            return str(local_path)

        # Official ultralytics weights are fetched by name
        return model_name if model_name.endswith(".pt") else f"{model_name}.pt"

    def _create_model(self):
        try:
            from ultralytics import YOLO
        except ImportError:
            raise ImportError(
                "ultralytics package is required for YOLO segmentation. "
                "Install with: pip install ultralytics"
            )

        model = YOLO(self.model_path)
        if self.device in ("cuda", "mps"):
            model.to(self.device)
        return model

    async def _segment(self, image: ImageBuffer) -> List[SegmentationMask]:
        model = await get_shared_model(self.model_key, self._create_model).get()
        return await asyncio.to_thread(self._predict, model, image)

    def _predict(self, model, image: ImageBuffer) -> List[SegmentationMask]:
        bgr = cv2.cvtColor(np.ascontiguousarray(image.rgb), cv2.COLOR_RGB2BGR)

        results = model.predict(
            source=bgr,
            conf=self.confidence_threshold,
            classes=[PERSON_CLASS_ID],
            imgsz=self.input_size,
            retina_masks=True,
            verbose=False,
            device=self.device,
        )

        masks = []
        size = (image.width, image.height)

        for result in results:
            if result.masks is None or result.boxes is None:
                continue

            data = result.masks.data.cpu().numpy()
            scores = result.boxes.conf.cpu().numpy()

            for i in range(len(data)):
                mask = data[i].astype(np.float32)
                if mask.shape != (image.height, image.width):
                    mask = cv2.resize(mask, size, interpolation=cv2.INTER_LINEAR)
                masks.append(SegmentationMask(mask, score=float(scores[i])))

        return masks
