from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys

from lsc_analyse.config import AppConfig, load_config
from lsc_analyse.utils.logging_utils import configure_logging


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lsc-analyse")
    sub = parser.add_subparsers(dest="command", required=True)

    analyse = sub.add_parser("analyse", help="Build a lens shading table from a raw capture of a flat field")
    analyse.add_argument("input", help="Input raw or JPEG+raw capture")
    analyse.add_argument("black_level", nargs="?", type=int, default=None, help="Sensor black level (default 16)")
    analyse.add_argument("--config", default=None, help="Optional path to YAML config")
    analyse.add_argument("--out-dir", default=None, help="Output directory override")
    analyse.add_argument("--debug-tiff", action="store_true", help="Also write 16-bit TIFF previews of each channel")
    analyse.add_argument("--json", action="store_true", help="Emit machine-readable JSON summary")

    header = sub.add_parser("header", help="Print the raw header of a capture without writing anything")
    header.add_argument("input", help="Input raw or JPEG+raw capture")
    header.add_argument("--config", default=None, help="Optional path to YAML config (logging settings)")
    header.add_argument("--json", action="store_true", help="Emit machine-readable JSON")

    return parser


def _load_app_config(path: str | None) -> AppConfig:
    if path is None:
        return AppConfig()
    return load_config(path)


def _cmd_analyse(args: argparse.Namespace) -> int:
    from lsc_analyse.analyse import analyse_capture, write_outputs

    config = _load_app_config(args.config)
    configure_logging(config.log_level, config.log_file)

    if args.black_level is not None:
        config.black_level = int(args.black_level)
    if args.out_dir:
        config.output.output_dir = Path(args.out_dir).expanduser().resolve()
    if args.debug_tiff:
        config.output.write_debug_tiff = True

    input_path = Path(args.input).expanduser().resolve()
    analysis = analyse_capture(input_path, black_level=config.black_level)
    outputs = write_outputs(analysis, config.output)

    if args.json:
        payload = analysis.to_json_dict()
        payload["outputs"] = {
            "header": str(outputs.header),
            "table": str(outputs.table),
            "channels": [str(p) for p in outputs.channels],
            "debug_tiffs": [str(p) for p in outputs.debug_tiffs],
            "failed": {str(k): v for k, v in outputs.failed.items()},
        }
        print(json.dumps(payload, indent=2))
        return 0 if outputs.ok else 1

    grid = analysis.grid
    print(f"Input: {input_path}")
    print(f"Bayer order: {grid.bayer_order.name}, black level {analysis.decoded.black_level}")
    print(f"Grid size: {grid.grid_width} x {grid.grid_height}")
    for ch in grid.channels:
        print(f"  {ch.name:<2} ch{ch.physical_index + 1} middle_val={ch.middle_val}")
    print(f"Table: {outputs.header}")
    print(f"Samples: {outputs.table}")
    for p in outputs.channels + outputs.debug_tiffs:
        print(f"  {p}")
    for p, err in outputs.failed.items():
        print(f"  failed {p}: {err}")
    return 0 if outputs.ok else 1


def _cmd_header(args: argparse.Namespace) -> int:
    from lsc_analyse.analyse import describe_capture

    config = _load_app_config(args.config)
    configure_logging(config.log_level, config.log_file)
    info = describe_capture(Path(args.input).expanduser().resolve())

    if args.json:
        print(json.dumps(info, indent=2))
        return 0

    print(f"Input: {info['source_path']} ({info['container']}, BRCM at offset {info['raw_offset']})")
    print(
        f"Mode {info['mode']}, width {info['width']}, height {info['height']}, "
        f"padding {info['padding_right']} {info['padding_down']}"
    )
    print(
        f"Transform {info['transform']}, image format {info['format']}, "
        f"bayer order {info['bayer_order']}, bayer format {info['bayer_format']}"
    )
    print(f"Stride: {info['stride']}")
    print(f"Grid size: {info['grid_width']} x {info['grid_height']}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "analyse":
            return _cmd_analyse(args)
        if args.command == "header":
            return _cmd_header(args)

        parser.error(f"unknown command: {args.command}")
        return 2
    except Exception as exc:
        logger.exception("fatal error")
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
