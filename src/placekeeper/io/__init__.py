"""IO subpackage for the live surface.

- sampler: canvas frame decoding and per-pixel sampling
- browser: Playwright session for capture, readouts, navigation and clicks
"""
from .sampler import FrameSampler, decode_data_url

__all__ = ["FrameSampler", "decode_data_url"]
