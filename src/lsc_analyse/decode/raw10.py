from __future__ import annotations

import logging

import numpy as np

from .base import TruncatedDataError
from .container import locate_raw_payload
from .format import DEFAULT_BLACK_LEVEL, PIXEL_DATA_OFFSET, RAW10_MAX, STRIDE_ALIGN
from .header import parse_header, validate_header
from .types import ChannelPlanes, DecodedRaw, RawLocation


logger = logging.getLogger(__name__)


def compute_stride(width: int, padding_right: int = 0) -> int:
    """Bytes per scanline, using the same rounding as the capture firmware."""

    return (((((width + padding_right) * 5) + 3) >> 2) + (STRIDE_ALIGN - 1)) & ~(STRIDE_ALIGN - 1)


def unpack_raw10_group(group: bytes) -> tuple[int, int, int, int]:
    """Unpack one 5-byte RAW10 group into four 10-bit samples.

    The first four bytes hold the high 8 bits of each pixel. The fifth byte
    holds the low 2 bits of all four, first pixel in the top bits.
    """

    if len(group) != 5:
        raise ValueError(f"RAW10 group must be 5 bytes, got {len(group)}")
    lsbs = group[4]
    return (
        (group[0] << 2) | ((lsbs >> 6) & 0x3),
        (group[1] << 2) | ((lsbs >> 4) & 0x3),
        (group[2] << 2) | ((lsbs >> 2) & 0x3),
        (group[3] << 2) | (lsbs & 0x3),
    )


def unpack_raw10_rows(rows: np.ndarray, width: int) -> np.ndarray:
    """Vectorised ``unpack_raw10_group`` over a ``(height, stride)`` byte array."""

    height, stride = rows.shape
    groups = (width + 3) // 4
    row_bytes = groups * 5
    if row_bytes > stride:
        rows = np.pad(rows, ((0, 0), (0, row_bytes - stride)))

    packed = rows[:, :row_bytes].reshape(height, groups, 5).astype(np.uint16)
    lsbs = packed[..., 4]
    out = np.empty((height, groups, 4), dtype=np.uint16)
    for i in range(4):
        out[..., i] = (packed[..., i] << 2) | ((lsbs >> (6 - 2 * i)) & 0x3)
    return out.reshape(height, groups * 4)[:, :width]


def black_level_correct(
    raw: int | np.ndarray,
    black_level: int = DEFAULT_BLACK_LEVEL,
    max_value: int = RAW10_MAX,
) -> int | np.ndarray:
    """Subtract the black level and stretch back to ``max_value``.

    Integer arithmetic with truncation. Samples below the black level clamp
    to 0.
    """

    if not 0 <= black_level < max_value:
        raise ValueError(f"black level must be in [0, {max_value}), got {black_level}")

    value = np.maximum(np.asarray(raw, dtype=np.int64) - black_level, 0)
    corrected = value * max_value // (max_value - black_level)
    if corrected.ndim == 0:
        return int(corrected)
    return corrected


def _pixel_rows(buf: bytes | memoryview, start: int, height: int, stride: int, width: int) -> np.ndarray:
    last_row_bytes = min(((width + 3) // 4) * 5, stride)
    needed = (height - 1) * stride + last_row_bytes
    available = max(len(buf) - start, 0)
    if available < needed:
        raise TruncatedDataError(
            f"pixel data truncated: need {needed} bytes from offset {start}, have {available}"
        )

    count = min(height * stride, available)
    data = np.zeros(height * stride, dtype=np.uint8)
    data[:count] = np.frombuffer(buf, dtype=np.uint8, count=count, offset=start)
    return data.reshape(height, stride)


def split_channels(mosaic: np.ndarray) -> ChannelPlanes:
    """De-interleave a full mosaic into its four 2x2 sub-channels."""

    height, width = mosaic.shape
    h2 = (height // 2) * 2
    w2 = (width // 2) * 2
    planes = tuple(
        np.ascontiguousarray(mosaic[row:h2:2, col:w2:2], dtype=np.uint16)
        for row, col in ((0, 0), (0, 1), (1, 0), (1, 1))
    )
    return ChannelPlanes(planes=planes)  # type: ignore[arg-type]


def decode_raw(
    buf: bytes | memoryview,
    black_level: int = DEFAULT_BLACK_LEVEL,
    location: RawLocation | None = None,
) -> DecodedRaw:
    """Decode a Bayer RAW10 capture into four black-level corrected planes."""

    if location is None:
        location = locate_raw_payload(buf)

    header = parse_header(buf, location.offset)
    validate_header(header)

    stride = compute_stride(header.width, header.padding_right)
    logger.info(
        "stride %d, channel size %dx%d",
        stride,
        header.channel_width,
        header.channel_height,
    )

    rows = _pixel_rows(buf, location.offset + PIXEL_DATA_OFFSET, header.height, stride, header.width)
    mosaic = black_level_correct(unpack_raw10_rows(rows, header.width), black_level)
    channels = split_channels(np.asarray(mosaic))

    return DecodedRaw(
        header=header,
        location=location,
        stride=stride,
        black_level=black_level,
        channels=channels,
    )
