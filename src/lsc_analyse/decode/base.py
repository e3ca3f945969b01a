from __future__ import annotations


class DecodeError(RuntimeError):
    pass


class MissingHeaderError(DecodeError):
    pass


class UnsupportedFormatError(DecodeError):
    pass


class TruncatedDataError(DecodeError):
    pass
