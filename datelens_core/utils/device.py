"""
Device Utilities
================

Device detection for PyTorch-backed models.
"""

from __future__ import annotations

from typing import Dict, Any, Optional
import logging

try:
    import torch
    HAS_TORCH = True
except ImportError:
    HAS_TORCH = False


logger = logging.getLogger(__name__)


def is_cuda_available() -> bool:
    """Check if CUDA is available."""
    if not HAS_TORCH:
        return False
    return torch.cuda.is_available()


def is_mps_available() -> bool:
    """Check if MPS (Apple Silicon) is available."""
    if not HAS_TORCH:
        return False
    return hasattr(torch.backends, "mps") and torch.backends.mps.is_available()


def get_device(prefer: Optional[str] = None) -> str:
    """
    Resolve a device request to an available device.

    Priority: prefer > CUDA > MPS > CPU. "auto" and None mean no preference.

    Args:
        prefer: Preferred device (auto, cuda, mps, cpu)

    Returns:
        Device string
    """
    if prefer is not None and prefer.lower() != "auto":
        prefer = prefer.lower()

        if prefer == "cuda" and is_cuda_available():
            return "cuda"
        elif prefer == "mps" and is_mps_available():
            return "mps"
        elif prefer == "cpu":
            return "cpu"
        else:
            logger.warning(f"Preferred device {prefer} not available, auto-selecting")

    if is_cuda_available():
        return "cuda"
    elif is_mps_available():
        return "mps"
    else:
        return "cpu"


def get_device_info() -> Dict[str, Any]:
    """
    Get device information for status displays.

    Returns:
        Dictionary with device info
    """
    info = {
        "pytorch_available": HAS_TORCH,
        "cuda_available": is_cuda_available(),
        "mps_available": is_mps_available(),
        "current_device": get_device(),
    }

    if HAS_TORCH:
        info["pytorch_version"] = torch.__version__
        if is_cuda_available():
            info["gpu_count"] = torch.cuda.device_count()

    return info
