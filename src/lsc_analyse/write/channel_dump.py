from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path

import numpy as np

from lsc_analyse.decode.types import ChannelPlanes


logger = logging.getLogger(__name__)


DEFAULT_CHANNEL_FILENAMES = ("ch1.bin", "ch2.bin", "ch3.bin", "ch4.bin")


@dataclass
class DumpResult:
    written: list[Path] = field(default_factory=list)
    failed: dict[Path, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def channel_bytes(plane: np.ndarray) -> bytes:
    """Row-major little-endian uint16 samples."""

    return np.ascontiguousarray(plane, dtype="<u2").tobytes()


def write_channel_dumps(
    out_dir: Path,
    channels: ChannelPlanes,
    filenames: tuple[str, ...] = DEFAULT_CHANNEL_FILENAMES,
) -> DumpResult:
    """Write each physical plane to its own file.

    A failure on one file is recorded and the remaining files are still written.
    """

    if len(filenames) != len(channels):
        raise ValueError(f"expected {len(channels)} channel filenames, got {len(filenames)}")

    result = DumpResult()
    for plane, name in zip(channels.planes, filenames):
        path = out_dir / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(channel_bytes(plane))
        except OSError as exc:
            logger.error("failed to write channel dump %s: %s", path, exc)
            result.failed[path] = str(exc)
            continue
        logger.info("saved %s data", path.name)
        result.written.append(path)
    return result
