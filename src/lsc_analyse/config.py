from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lsc_analyse.decode.format import DEFAULT_BLACK_LEVEL, RAW10_MAX
from lsc_analyse.write.channel_dump import DEFAULT_CHANNEL_FILENAMES


@dataclass
class OutputConfig:
    output_dir: Path = Path(".")
    header_filename: str = "ls_table.h"
    table_filename: str = "ls_table.txt"
    channel_filenames: tuple[str, ...] = DEFAULT_CHANNEL_FILENAMES
    write_debug_tiff: bool = False


@dataclass
class AppConfig:
    black_level: int = DEFAULT_BLACK_LEVEL
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "INFO"
    log_file: Path | None = None


def _expand_path(value: str | None, base: Path) -> Path | None:
    if value in (None, ""):
        return None
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _as_black_level(value: Any) -> int:
    level = int(value)
    if not 0 <= level < RAW10_MAX:
        raise ValueError(f"black_level must be in [0, {RAW10_MAX}), got {level}")
    return level


def _as_channel_filenames(value: Any) -> tuple[str, ...]:
    names = tuple(str(v) for v in value)
    if len(names) != 4:
        raise ValueError(f"output.channel_filenames must list 4 names, got {len(names)}")
    return names


def load_config(path: str | Path) -> AppConfig:
    try:
        import yaml  # type: ignore
    except Exception as exc:
        raise RuntimeError("PyYAML is required for config loading. Install with: pip install PyYAML") from exc

    cfg_path = Path(path).expanduser().resolve()
    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"config root must be a mapping: {cfg_path}")

    base = cfg_path.parent
    output_raw = raw.get("output", {}) or {}

    output = OutputConfig(
        output_dir=_expand_path(output_raw.get("output_dir"), base) or base,
        header_filename=str(output_raw.get("header_filename", "ls_table.h")),
        table_filename=str(output_raw.get("table_filename", "ls_table.txt")),
        channel_filenames=_as_channel_filenames(output_raw.get("channel_filenames", DEFAULT_CHANNEL_FILENAMES)),
        write_debug_tiff=bool(output_raw.get("write_debug_tiff", False)),
    )

    return AppConfig(
        black_level=_as_black_level(raw.get("black_level", DEFAULT_BLACK_LEVEL)),
        output=output,
        log_level=str(raw.get("log_level", "INFO")),
        log_file=_expand_path(raw.get("log_file"), base),
    )
