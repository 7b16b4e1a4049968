"""
Utility Module
==============

Common utilities for the DateLens core.
"""

import logging
from typing import Optional

from datelens_core.utils.image_utils import (
    ImageBuffer,
    decode_image,
    decode_image_bytes,
    encode_image_data_url,
)
from datelens_core.utils.device import (
    get_device,
    get_device_info,
    is_cuda_available,
    is_mps_available,
)
from datelens_core.utils.model_loader import (
    SharedModel,
    get_shared_model,
    reset_models,
)


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the core."""
    if level is None:
        from datelens_core.config import get_default_config
        level = get_default_config().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


__all__ = [
    "ImageBuffer",
    "decode_image",
    "decode_image_bytes",
    "encode_image_data_url",
    "get_device",
    "get_device_info",
    "is_cuda_available",
    "is_mps_available",
    "SharedModel",
    "get_shared_model",
    "reset_models",
    "setup_logging",
]
