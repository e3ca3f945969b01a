from __future__ import annotations

from pathlib import Path

import numpy as np

from lsc_analyse.decode.format import RAW10_MAX


def write_channel_debug_tiff(path: Path, plane: np.ndarray, max_value: int = RAW10_MAX) -> None:
    """Write a channel plane as a 16-bit greyscale TIFF scaled to full range."""

    try:
        import tifffile  # type: ignore
    except Exception as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("tifffile is required for debug TIFF output. Install with: pip install '.[io]'") from exc

    arr = np.asarray(plane, dtype=np.float32) * (65535.0 / float(max_value))
    arr = np.clip(np.rint(arr), 0.0, 65535.0).astype(np.uint16)
    path.parent.mkdir(parents=True, exist_ok=True)
    tifffile.imwrite(str(path), arr, photometric="minisblack")
