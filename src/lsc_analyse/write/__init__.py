from .channel_dump import DEFAULT_CHANNEL_FILENAMES, DumpResult, channel_bytes, write_channel_dumps
from .debug_image import write_channel_debug_tiff
from .table import render_sample_table, render_table_header, write_sample_table, write_table_header

__all__ = [
    "DEFAULT_CHANNEL_FILENAMES",
    "DumpResult",
    "channel_bytes",
    "write_channel_dumps",
    "write_channel_debug_tiff",
    "render_sample_table",
    "render_table_header",
    "write_sample_table",
    "write_table_header",
]
