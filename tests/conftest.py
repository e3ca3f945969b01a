from __future__ import annotations

from typing import Callable

import numpy as np
import pytest

from lsc_analyse.decode.format import HEADER_OFFSET, HEADER_STRUCT, PIXEL_DATA_OFFSET


def _stride(width: int, padding_right: int) -> int:
    return (((((width + padding_right) * 5) + 3) >> 2) + 31) & ~31


def pack_raw10(mosaic: np.ndarray, stride: int) -> bytes:
    height, width = mosaic.shape
    groups = (width + 3) // 4
    padded = np.zeros((height, groups * 4), dtype=np.uint16)
    padded[:, :width] = mosaic
    px = padded.reshape(height, groups, 4)

    packed = np.zeros((height, groups, 5), dtype=np.uint8)
    packed[..., :4] = (px >> 2).astype(np.uint8)
    packed[..., 4] = (
        ((px[..., 0] & 3) << 6) | ((px[..., 1] & 3) << 4) | ((px[..., 2] & 3) << 2) | (px[..., 3] & 3)
    ).astype(np.uint8)

    rows = np.zeros((height, stride), dtype=np.uint8)
    rows[:, : groups * 5] = packed.reshape(height, groups * 5)
    return rows.tobytes()


def build_capture(
    mosaic: np.ndarray,
    padding_right: int = 0,
    padding_down: int = 0,
    transform: int = 0,
    image_format: int = 33,
    bayer_order: int = 0,
    bayer_format: int = 3,
    name: bytes = b"test",
) -> bytes:
    height, width = mosaic.shape
    stride = _stride(width, padding_right)

    head = bytearray(PIXEL_DATA_OFFSET)
    head[0:4] = b"BRCM"
    HEADER_STRUCT.pack_into(
        head,
        HEADER_OFFSET,
        name,
        width,
        height,
        padding_right,
        padding_down,
        *([0] * 6),
        transform,
        image_format,
        bayer_order,
        bayer_format,
    )
    return bytes(head) + pack_raw10(mosaic, stride)


@pytest.fixture
def make_capture() -> Callable[..., bytes]:
    return build_capture


@pytest.fixture
def uniform_capture() -> bytes:
    return build_capture(np.full((64, 64), 512, dtype=np.uint16))

