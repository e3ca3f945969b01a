"""Layout constants of the Broadcom raw container.

These values belong to a specific camera firmware release. A new sensor mode or
firmware revision may move the raw payload, in which case the trailing sizes
below need extending.
"""

from __future__ import annotations

import struct


MAGIC = b"BRCM"
JPEG_SOI = b"\xff\xd8"

# Size of the raw block appended to a JPEG, counted back from end of file.
JPEG_TRAILER_SIZES: tuple[tuple[str, int], ...] = (
    ("ov5647", 6404096),
    ("imx219", 10270208),
)

HEADER_OFFSET = 0xB0
PIXEL_DATA_OFFSET = 32768

# name, width, height, padding_right, padding_down, 6 reserved words,
# transform, format, bayer_order, bayer_format
HEADER_STRUCT = struct.Struct("<32sHHHH6IHHBB")

FORMAT_BAYER = 33
BAYER_FORMAT_RAW10 = 3

RAW10_MAX = (1 << 10) - 1
DEFAULT_BLACK_LEVEL = 16
STRIDE_ALIGN = 32
