from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterator

import numpy as np

from lsc_analyse.decode.types import BayerOrder, ChannelPlanes


logger = logging.getLogger(__name__)


GRID_PITCH = 32
GRID_START = 16
GAIN_MIN = 32  # x1.0
GAIN_MAX = 255
MIDDLE_PATCH_RADIUS = 4
MIDDLE_SHIFT = 5

LOGICAL_CHANNELS = ("R", "Gr", "Gb", "B")

# Physical plane feeding logical R, Gr, Gb, B for each sensor bayer order.
CHANNEL_ORDERING: dict[BayerOrder, tuple[int, int, int, int]] = {
    BayerOrder.RGGB: (0, 1, 2, 3),
    BayerOrder.GBRG: (2, 3, 0, 1),
    BayerOrder.BGGR: (3, 2, 1, 0),
    BayerOrder.GRBG: (1, 0, 3, 2),
}


@dataclass(frozen=True)
class GainSample:
    grid_x: int
    grid_y: int
    gain: int
    channel: int


@dataclass(frozen=True)
class ChannelGains:
    name: str
    logical_index: int
    physical_index: int
    middle_val: int
    rows: tuple[tuple[int, ...], ...]
    # Pixel coordinates of each row (y) and of each entry within a row (x).
    row_coords: tuple[int, ...]
    col_coords: tuple[int, ...]


@dataclass(frozen=True)
class GainGrid:
    channels: tuple[ChannelGains, ...]
    grid_width: int
    grid_height: int
    ref_transform: int
    bayer_order: BayerOrder

    def to_bytes(self) -> bytes:
        return bytes(gain for ch in self.channels for row in ch.rows for gain in row)

    def samples(self) -> Iterator[GainSample]:
        for ch in self.channels:
            for y, row in zip(ch.row_coords, ch.rows):
                for x, gain in zip(ch.col_coords, row):
                    yield GainSample(grid_x=x, grid_y=y, gain=gain, channel=ch.logical_index)


def grid_size(n: int) -> int:
    return n // GRID_PITCH + (1 if n % GRID_PITCH else 0)


def clip_gain(gain: int) -> int:
    if gain > GAIN_MAX:
        return GAIN_MAX
    if gain < GAIN_MIN:
        return GAIN_MIN
    return gain


def _gain(middle_val: int, pixel_sum: int, samples: int) -> int:
    if pixel_sum <= 0:
        return GAIN_MAX
    return clip_gain((middle_val * samples) // pixel_sum)


def middle_value(plane: np.ndarray) -> int:
    """Mean of the 9x9 patch at the plane centre, in 1/32 units."""

    height, width = plane.shape
    cy, cx = height >> 1, width >> 1
    r = MIDDLE_PATCH_RADIUS
    y0, y1 = max(cy - r, 0), min(cy + r + 1, height)
    x0, x1 = max(cx - r, 0), min(cx + r + 1, width)
    patch = plane[y0:y1, x0:x1].astype(np.int64)
    return (int(patch.sum()) // patch.size) << MIDDLE_SHIFT


def grid_rows(height: int) -> list[int]:
    return list(range(GRID_START, height + GRID_PITCH, GRID_PITCH))


def grid_columns(width: int) -> list[int]:
    """Regular sample columns followed by the column reported for the edge sample."""

    cols = list(range(GRID_START, width, GRID_PITCH))
    edge_x = cols[-1] + GRID_PITCH if cols else GRID_START
    return cols + [edge_x]


def sample_channel(plane: np.ndarray, middle_val: int) -> list[list[int]]:
    """Walk the grid over one plane and return gains row by row.

    Each row holds the 3-pixel averaged samples followed by one edge sample
    taken from the last two pixels of the line.
    """

    height, width = plane.shape
    last_col = width - 1
    rows: list[list[int]] = []
    for y in grid_rows(height):
        line = plane[min(y, height - 1)].astype(np.int64)
        gains = []
        for x in grid_columns(width)[:-1]:
            total = int(line[x - 1]) + int(line[x]) + int(line[min(x + 1, last_col)])
            gains.append(_gain(middle_val, total, 3))
        edge = int(line[max(width - 2, 0)]) + int(line[last_col])
        gains.append(_gain(middle_val, edge, 2))
        rows.append(gains)
    return rows


def build_gain_grid(channels: ChannelPlanes, bayer_order: BayerOrder | int, ref_transform: int = 0) -> GainGrid:
    order = BayerOrder(bayer_order)
    width, height = channels.width, channels.height
    grid_width, grid_height = grid_size(width), grid_size(height)
    logger.info("grid size: %d x %d", grid_width, grid_height)

    out: list[ChannelGains] = []
    for logical, physical in enumerate(CHANNEL_ORDERING[order]):
        plane = channels[physical]
        middle_val = middle_value(plane)
        logger.info("%s (ch %d) middle_val is %d", LOGICAL_CHANNELS[logical], physical, middle_val)
        rows = sample_channel(plane, middle_val)
        out.append(
            ChannelGains(
                name=LOGICAL_CHANNELS[logical],
                logical_index=logical,
                physical_index=physical,
                middle_val=middle_val,
                rows=tuple(tuple(r) for r in rows),
                row_coords=tuple(grid_rows(height)),
                col_coords=tuple(grid_columns(width)),
            )
        )

    return GainGrid(
        channels=tuple(out),
        grid_width=grid_width,
        grid_height=grid_height,
        ref_transform=ref_transform,
        bayer_order=order,
    )
