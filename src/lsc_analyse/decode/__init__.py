from .base import DecodeError, MissingHeaderError, TruncatedDataError, UnsupportedFormatError
from .container import locate_raw_payload
from .header import parse_header, validate_header
from .raw10 import black_level_correct, compute_stride, decode_raw, unpack_raw10_group, unpack_raw10_rows
from .types import BayerOrder, ChannelPlanes, DecodedRaw, RawHeader, RawLocation

__all__ = [
    "DecodeError",
    "MissingHeaderError",
    "TruncatedDataError",
    "UnsupportedFormatError",
    "locate_raw_payload",
    "parse_header",
    "validate_header",
    "black_level_correct",
    "compute_stride",
    "decode_raw",
    "unpack_raw10_group",
    "unpack_raw10_rows",
    "BayerOrder",
    "ChannelPlanes",
    "DecodedRaw",
    "RawHeader",
    "RawLocation",
]
