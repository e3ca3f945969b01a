from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any

from lsc_analyse.config import OutputConfig
from lsc_analyse.decode import DecodedRaw, decode_raw, locate_raw_payload, parse_header, validate_header
from lsc_analyse.decode.format import DEFAULT_BLACK_LEVEL
from lsc_analyse.decode.raw10 import compute_stride
from lsc_analyse.shading import GainGrid, build_gain_grid, grid_size
from lsc_analyse.write import (
    write_channel_debug_tiff,
    write_channel_dumps,
    write_sample_table,
    write_table_header,
)


logger = logging.getLogger(__name__)


class InputError(RuntimeError):
    pass


@dataclass
class ShadingAnalysis:
    source_path: Path | None
    decoded: DecodedRaw
    grid: GainGrid

    def to_json_dict(self) -> dict[str, Any]:
        header = self.decoded.header
        return {
            "source_path": str(self.source_path) if self.source_path else None,
            "container": self.decoded.location.container,
            "raw_offset": self.decoded.location.offset,
            "header": {
                "mode": header.name,
                "width": header.width,
                "height": header.height,
                "padding_right": header.padding_right,
                "padding_down": header.padding_down,
                "transform": header.transform,
                "format": header.format,
                "bayer_order": self.decoded.bayer_order.name,
                "bayer_format": header.bayer_format,
            },
            "stride": self.decoded.stride,
            "black_level": self.decoded.black_level,
            "grid_width": self.grid.grid_width,
            "grid_height": self.grid.grid_height,
            "channels": [
                {
                    "name": ch.name,
                    "physical_index": ch.physical_index,
                    "middle_val": ch.middle_val,
                    "min_gain": min(min(r) for r in ch.rows),
                    "max_gain": max(max(r) for r in ch.rows),
                }
                for ch in self.grid.channels
            ],
        }


@dataclass
class OutputPaths:
    header: Path
    table: Path
    channels: list[Path] = field(default_factory=list)
    debug_tiffs: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def read_capture(path: Path) -> bytes:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise InputError(f"Failed to open {path}: {exc}") from exc
    logger.info("file size is %d", len(data))
    return data


def analyse_buffer(buf: bytes, black_level: int = DEFAULT_BLACK_LEVEL, source_path: Path | None = None) -> ShadingAnalysis:
    decoded = decode_raw(buf, black_level=black_level)
    logger.info("bayer order is %s", decoded.bayer_order.name)
    grid = build_gain_grid(decoded.channels, decoded.bayer_order, ref_transform=decoded.header.transform)
    return ShadingAnalysis(source_path=source_path, decoded=decoded, grid=grid)


def analyse_capture(path: Path, black_level: int = DEFAULT_BLACK_LEVEL) -> ShadingAnalysis:
    return analyse_buffer(read_capture(path), black_level=black_level, source_path=path)


def describe_capture(path: Path) -> dict[str, Any]:
    """Header-only inspection; nothing is unpacked or written."""

    buf = read_capture(path)
    location = locate_raw_payload(buf)
    header = parse_header(buf, location.offset)
    validate_header(header)
    return {
        "source_path": str(path),
        "container": location.container,
        "raw_offset": location.offset,
        "mode": header.name,
        "width": header.width,
        "height": header.height,
        "padding_right": header.padding_right,
        "padding_down": header.padding_down,
        "transform": header.transform,
        "format": header.format,
        "bayer_order": header.bayer_order,
        "bayer_format": header.bayer_format,
        "stride": compute_stride(header.width, header.padding_right),
        "grid_width": grid_size(header.channel_width),
        "grid_height": grid_size(header.channel_height),
    }


def write_outputs(analysis: ShadingAnalysis, cfg: OutputConfig) -> OutputPaths:
    out_dir = cfg.output_dir
    paths = OutputPaths(header=out_dir / cfg.header_filename, table=out_dir / cfg.table_filename)

    dumps = write_channel_dumps(out_dir, analysis.decoded.channels, cfg.channel_filenames)
    paths.channels.extend(dumps.written)
    paths.failed.update(dumps.failed)

    for target, writer in ((paths.header, write_table_header), (paths.table, write_sample_table)):
        try:
            writer(target, analysis.grid)
        except OSError as exc:
            logger.error("failed to write %s: %s", target, exc)
            paths.failed[target] = str(exc)

    if cfg.write_debug_tiff:
        for plane, name in zip(analysis.decoded.channels.planes, cfg.channel_filenames):
            target = out_dir / f"{Path(name).stem}.tiff"
            try:
                write_channel_debug_tiff(target, plane)
            except OSError as exc:
                logger.error("failed to write %s: %s", target, exc)
                paths.failed[target] = str(exc)
                continue
            paths.debug_tiffs.append(target)

    return paths
