from __future__ import annotations

import logging

from .base import MissingHeaderError
from .format import JPEG_SOI, JPEG_TRAILER_SIZES, MAGIC
from .types import RawLocation


logger = logging.getLogger(__name__)


def _has_magic(buf: bytes | memoryview, offset: int) -> bool:
    return bytes(buf[offset : offset + len(MAGIC)]) == MAGIC


def locate_raw_payload(buf: bytes | memoryview) -> RawLocation:
    """Find the offset of the ``BRCM`` tag in a raw or JPEG+raw capture.

    JPEG captures carry the raw block at a fixed distance from the end of the
    file. Each known distance is tried in turn; when none of them match, the
    whole buffer is treated as bare raw data starting at offset 0.
    """

    size = len(buf)
    if bytes(buf[: len(JPEG_SOI)]) == JPEG_SOI:
        for sensor, trailer_size in JPEG_TRAILER_SIZES:
            offset = size - trailer_size
            if offset < 0:
                logger.debug("file too small for %s raw trailer (%d bytes)", sensor, trailer_size)
                continue
            if _has_magic(buf, offset):
                logger.info("found %s raw payload at offset %d", sensor, offset)
                return RawLocation(offset=offset, container="jpeg+raw")

        logger.warning(
            "JPEG capture has no BRCM block at any known trailer offset (%s); falling back to offset 0",
            ", ".join(str(s) for _, s in JPEG_TRAILER_SIZES),
        )
        location = RawLocation(offset=0, container="jpeg+raw")
    else:
        location = RawLocation(offset=0, container="raw")

    if not _has_magic(buf, location.offset):
        raise MissingHeaderError("Raw file missing BRCM header")
    return location
