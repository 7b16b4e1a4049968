"""
Image Utilities
===============

Decoding of self-describing image encodings into immutable RGBA buffers,
and encoding of buffers back into PNG data URLs for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union
import base64
import binascii
import io
import logging

import numpy as np
from PIL import Image, UnidentifiedImageError

from datelens_core.exceptions import ImageDecodeError


logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ImageBuffer:
    """
    Immutable width x height RGBA pixel buffer.

    Attributes:
        pixels: Read-only uint8 array of shape (height, width, 4)
    """
    pixels: np.ndarray

    def __post_init__(self):
        pixels = self.pixels
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Expected (H, W, 4) RGBA pixels, got shape {pixels.shape}")
        # Private read-only copy; views of caller memory must not alias
        pixels = np.array(pixels, dtype=np.uint8, copy=True)
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_rgb(cls, rgb: np.ndarray) -> "ImageBuffer":
        """Build a fully opaque buffer from an (H, W, 3) RGB array."""
        h, w = rgb.shape[:2]
        alpha = np.full((h, w, 1), 255, dtype=np.uint8)
        return cls(np.concatenate([rgb.astype(np.uint8), alpha], axis=2))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def rgb(self) -> np.ndarray:
        """RGB channels as a read-only (H, W, 3) view."""
        return self.pixels[:, :, :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[:, :, 3]

    def __repr__(self) -> str:
        return f"ImageBuffer(width={self.width}, height={self.height})"


def decode_image_bytes(data: bytes) -> ImageBuffer:
    """
    Decode encoded image file bytes (PNG, JPEG, WebP, ...) to RGBA.

    Args:
        data: Raw file bytes

    Returns:
        Decoded ImageBuffer

    Raises:
        ImageDecodeError: If the bytes are not a readable image
    """
    if not data:
        raise ImageDecodeError("Empty image data")

    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, EOFError, ValueError) as e:
        raise ImageDecodeError(f"Unreadable image data: {e}") from e

    if img.mode != "RGBA":
        img = img.convert("RGBA")

    return ImageBuffer(np.array(img))


def decode_image(encoded: Union[str, bytes]) -> ImageBuffer:
    """
    Decode a self-describing image encoding.

    Accepts a data URL (``data:image/png;base64,...``), a bare base64
    string, or raw file bytes.

    Args:
        encoded: Encoded image

    Returns:
        Decoded ImageBuffer

    Raises:
        ImageDecodeError: If the encoding or the image itself is malformed
    """
    if isinstance(encoded, (bytes, bytearray)):
        return decode_image_bytes(bytes(encoded))

    if not isinstance(encoded, str) or not encoded.strip():
        raise ImageDecodeError("Image encoding must be a non-empty string")

    text = encoded.strip()
    if text.startswith("data:"):
        header, _, text = text.partition(",")
        if not header.endswith(";base64"):
            raise ImageDecodeError("Only base64 data URLs are supported")

    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Invalid base64 payload: {e}") from e

    return decode_image_bytes(data)


def encode_image_data_url(buffer: ImageBuffer) -> str:
    """
    Encode an ImageBuffer as a PNG data URL (alpha preserved).

    Args:
        buffer: Image to encode

    Returns:
        ``data:image/png;base64,...`` string
    """
    img = Image.fromarray(np.ascontiguousarray(buffer.pixels))
    out = io.BytesIO()
    img.save(out, format="PNG")
    return "data:image/png;base64," + base64.b64encode(out.getvalue()).decode("utf-8")
