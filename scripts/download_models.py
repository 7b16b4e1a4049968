#!/usr/bin/env python3
"""
Download and warm up the DateLens models.

Fetches the face detection and person segmentation weights into the
models directory and runs one dummy inference on each, so the first
search does not pay the load cost.

Usage:
    python scripts/download_models.py [config.yaml]
"""

import asyncio
import sys

from datelens_core.config import load_config
from datelens_core.detection import YOLOFaceDetector
from datelens_core.segmentation import YOLOPersonSegmenter
from datelens_core.utils import get_device_info, setup_logging


async def warmup_models(config_path=None) -> bool:
    """Load every enabled model once. Returns True if all are usable."""
    config = load_config(config_path)
    setup_logging(config.log_level)

    print(f"Device info: {get_device_info()}")

    # Model download can be slow; no per-call timeout here
    models = []
    if config.detection.enabled:
        models.append(YOLOFaceDetector.from_config(
            config.detection, timeout=None, models_dir=config.models_dir,
        ))
    if config.segmentation.enabled:
        models.append(YOLOPersonSegmenter.from_config(
            config.segmentation, timeout=None, models_dir=config.models_dir,
        ))

    ok = True
    for model in models:
        print(f"Loading {model!r}...")
        if await model.warmup():
            print("  -> ready")
        else:
            print("  -> FAILED (searches will fall back to heuristics)")
            ok = False

    return ok


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else None
    sys.exit(0 if asyncio.run(warmup_models(path)) else 1)
