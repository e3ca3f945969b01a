from __future__ import annotations

import numpy as np
import pytest

from lsc_analyse.decode import (
    TruncatedDataError,
    UnsupportedFormatError,
    parse_header,
    validate_header,
)
from lsc_analyse.decode.format import HEADER_STRUCT


def test_parse_header_fields(make_capture) -> None:
    buf = make_capture(
        np.zeros((8, 16), dtype=np.uint16),
        padding_right=8,
        padding_down=2,
        transform=3,
        bayer_order=2,
        name=b"2592x1944",
    )
    header = parse_header(buf)

    assert header.name == "2592x1944"
    assert header.width == 16
    assert header.height == 8
    assert header.padding_right == 8
    assert header.padding_down == 2
    assert header.transform == 3
    assert header.format == 33
    assert header.bayer_order == 2
    assert header.bayer_format == 3
    assert header.channel_width == 8
    assert header.channel_height == 4
    validate_header(header)


def test_header_record_is_tightly_packed() -> None:
    assert HEADER_STRUCT.size == 32 + 4 * 2 + 6 * 4 + 2 * 2 + 2


def test_truncated_header() -> None:
    with pytest.raises(TruncatedDataError):
        parse_header(b"BRCM" + bytes(100))


@pytest.mark.parametrize("image_format,bayer_format", [(33, 2), (32, 3), (0, 0)])
def test_rejects_non_raw10(make_capture, image_format: int, bayer_format: int) -> None:
    buf = make_capture(np.zeros((4, 8), dtype=np.uint16), image_format=image_format, bayer_format=bayer_format)
    with pytest.raises(UnsupportedFormatError):
        validate_header(parse_header(buf))


def test_rejects_unknown_bayer_order(make_capture) -> None:
    buf = make_capture(np.zeros((4, 8), dtype=np.uint16), bayer_order=7)
    with pytest.raises(UnsupportedFormatError):
        validate_header(parse_header(buf))
