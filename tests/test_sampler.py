"""Canvas frame decoding and sampling."""

import base64

import cv2
import numpy as np
import pytest

from placekeeper.core.errors import SampleError
from placekeeper.io.sampler import FrameSampler, decode_data_url


def _png_data_url(rgba):
    bgra = cv2.cvtColor(rgba, cv2.COLOR_RGBA2BGRA)
    ok, buf = cv2.imencode(".png", bgra)
    assert ok
    return "data:image/png;base64," + base64.b64encode(buf.tobytes()).decode("ascii")


def test_decode_png_data_url_returns_rgb():
    rgba = np.zeros((2, 3, 4), dtype=np.uint8)
    rgba[0, 1] = (255, 69, 0, 255)
    rgba[1, 2] = (0, 158, 170, 255)
    frame = decode_data_url(_png_data_url(rgba))
    assert frame.shape == (2, 3, 3)
    sampler = FrameSampler(frame)
    assert sampler(1, 0) == (255, 69, 0)
    assert sampler(2, 1) == (0, 158, 170)


def test_out_of_range_reads_are_black():
    sampler = FrameSampler(np.full((4, 4, 3), 200, dtype=np.uint8))
    assert sampler(0, 0) == (200, 200, 200)
    for x, y in [(-1, 0), (0, -1), (4, 0), (0, 4), (1000, 1000)]:
        assert sampler(x, y) == (0, 0, 0)


@pytest.mark.parametrize("bad", ["", "not a data url", "data:image/png,abc", "data:image/png;base64,@@@"])
def test_bad_exports_raise_sample_error(bad):
    with pytest.raises(SampleError):
        decode_data_url(bad)


def test_undecodable_image_raises_sample_error():
    payload = base64.b64encode(b"definitely not a png").decode("ascii")
    with pytest.raises(SampleError):
        decode_data_url("data:image/png;base64," + payload)
