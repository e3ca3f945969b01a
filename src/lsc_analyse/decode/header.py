from __future__ import annotations

import logging

from .base import TruncatedDataError, UnsupportedFormatError
from .format import BAYER_FORMAT_RAW10, FORMAT_BAYER, HEADER_OFFSET, HEADER_STRUCT
from .types import BayerOrder, RawHeader


logger = logging.getLogger(__name__)


def _decode_name(raw: bytes) -> str:
    return raw.split(b"\x00", 1)[0].decode("ascii", errors="replace")


def parse_header(buf: bytes | memoryview, offset: int = 0) -> RawHeader:
    """Read the fixed header record stored at ``offset + 0xB0``."""

    start = offset + HEADER_OFFSET
    end = start + HEADER_STRUCT.size
    if end > len(buf):
        raise TruncatedDataError(
            f"raw header needs {HEADER_STRUCT.size} bytes at offset {start}, buffer has {len(buf)} bytes"
        )

    fields = HEADER_STRUCT.unpack_from(buf, start)
    name, width, height, padding_right, padding_down = fields[:5]
    transform, image_format, bayer_order, bayer_format = fields[11:]

    header = RawHeader(
        name=_decode_name(name),
        width=width,
        height=height,
        padding_right=padding_right,
        padding_down=padding_down,
        transform=transform,
        format=image_format,
        bayer_order=bayer_order,
        bayer_format=bayer_format,
    )
    logger.info(
        "header decoding: mode %s, width %d, height %d, padding %d %d",
        header.name,
        header.width,
        header.height,
        header.padding_right,
        header.padding_down,
    )
    logger.info(
        "transform %d, image format %d, bayer order %d, bayer format %d",
        header.transform,
        header.format,
        header.bayer_order,
        header.bayer_format,
    )
    return header


def validate_header(header: RawHeader) -> None:
    if header.format != FORMAT_BAYER or header.bayer_format != BAYER_FORMAT_RAW10:
        raise UnsupportedFormatError(
            f"Raw file is not Bayer raw10 (format {header.format}, bayer format {header.bayer_format})"
        )
    try:
        BayerOrder(header.bayer_order)
    except ValueError as exc:
        raise UnsupportedFormatError(f"unknown bayer order {header.bayer_order}") from exc
    if header.width < 2 or header.height < 2:
        raise UnsupportedFormatError(f"image too small: {header.width}x{header.height}")
