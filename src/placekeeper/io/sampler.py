"""Pixel sampling over a captured canvas frame.

The browser exports the canvas as a PNG data URL; decode_data_url() turns it
into an RGB numpy array and FrameSampler answers per-pixel queries against
that array. Reads outside the frame return black, like a 2D canvas context
does for out-of-range getImageData calls.
"""
from __future__ import annotations

import base64
import binascii
from typing import Tuple

import cv2
import numpy as np

from ..core.errors import SampleError

_OUTSIDE: Tuple[int, int, int] = (0, 0, 0)


def decode_data_url(data_url: str) -> np.ndarray:
    """Decode a ``data:image/png;base64,...`` URL into an HxWx3 RGB array."""
    if not isinstance(data_url, str) or "," not in data_url:
        raise SampleError("canvas export is not a data URL")
    header, payload = data_url.split(",", 1)
    if ";base64" not in header:
        raise SampleError(f"unsupported canvas export encoding: {header[:40]}")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SampleError(f"canvas export is not valid base64: {e}") from e

    frame = cv2.imdecode(np.frombuffer(raw, dtype=np.uint8), cv2.IMREAD_UNCHANGED)
    if frame is None:
        raise SampleError("canvas export could not be decoded")
    if frame.ndim == 2:
        return cv2.cvtColor(frame, cv2.COLOR_GRAY2RGB)
    if frame.shape[2] == 4:
        return cv2.cvtColor(frame, cv2.COLOR_BGRA2RGB)
    return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)


class FrameSampler:
    """Callable sampler over an RGB frame in canvas-local coordinates."""

    def __init__(self, frame_rgb: np.ndarray) -> None:
        if frame_rgb.ndim != 3 or frame_rgb.shape[2] < 3:
            raise SampleError(f"expected an HxWx3 frame, got shape {frame_rgb.shape}")
        self.frame = frame_rgb
        self.height, self.width = frame_rgb.shape[:2]

    @classmethod
    def from_data_url(cls, data_url: str) -> "FrameSampler":
        return cls(decode_data_url(data_url))

    def __call__(self, x: int, y: int) -> Tuple[int, int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            return _OUTSIDE
        r, g, b = self.frame[y, x, :3]
        return int(r), int(g), int(b)
