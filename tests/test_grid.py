from __future__ import annotations

import numpy as np
import pytest

from lsc_analyse.decode import BayerOrder, ChannelPlanes
from lsc_analyse.shading import (
    CHANNEL_ORDERING,
    build_gain_grid,
    clip_gain,
    grid_size,
    middle_value,
    sample_channel,
)


def _planes(*values: int, shape: tuple[int, int] = (32, 32)) -> ChannelPlanes:
    return ChannelPlanes(planes=tuple(np.full(shape, v, dtype=np.uint16) for v in values))  # type: ignore[arg-type]


def test_grid_size_ceiling_law() -> None:
    assert grid_size(1640) == 52
    assert grid_size(1232) == 39
    for n in range(0, 300):
        assert grid_size(n) == n // 32 + (n % 32 != 0)
        assert grid_size(n) == -(-n // 32)


def test_clip_gain_bounds() -> None:
    assert clip_gain(0) == 32
    assert clip_gain(31) == 32
    assert clip_gain(32) == 32
    assert clip_gain(100) == 100
    assert clip_gain(255) == 255
    assert clip_gain(256) == 255
    assert clip_gain(10_000) == 255


def test_middle_value_averages_center_patch() -> None:
    plane = np.full((32, 32), 10, dtype=np.uint16)
    plane[12:21, 12:21] = 100
    assert middle_value(plane) == 100 << 5

    plane[16, 16] = 181  # sum grows by 81, mean by exactly 1
    assert middle_value(plane) == 101 << 5


def test_uniform_plane_is_unity_gain() -> None:
    plane = np.full((50, 70), 377, dtype=np.uint16)
    rows = sample_channel(plane, middle_value(plane))
    assert len(rows) == len(range(16, 50 + 32, 32))
    assert all(len(r) == len(range(16, 70, 32)) + 1 for r in rows)
    assert all(g == 32 for r in rows for g in r)


def test_gain_truncates_not_rounds() -> None:
    plane = np.full((64, 64), 150, dtype=np.uint16)
    plane[28:37, 28:37] = 200
    middle = middle_value(plane)
    assert middle == 6400

    rows = sample_channel(plane, middle)
    # 6400 * 3 // 450 == 42 (42.67 unrounded)
    assert rows == [[42, 42, 42]] * 3


def test_gain_clips_high_and_zero_sum() -> None:
    plane = np.full((32, 32), 1, dtype=np.uint16)
    plane[12:21, 12:21] = 1000
    plane[:, 30:] = 0
    rows = sample_channel(plane, middle_value(plane))
    # bottom row (clamped to line 31) stays clear of the bright centre patch
    assert rows[-1] == [255, 255]


def test_edge_sample_uses_last_two_pixels() -> None:
    plane = np.full((32, 40), 100, dtype=np.uint16)
    plane[:, 38:] = 50
    rows = sample_channel(plane, middle_value(plane))
    # x=16 regular sample, then the 2-pixel edge sample
    assert rows[0] == [32, 64]


def test_last_row_clamps_to_bottom_line() -> None:
    plane = np.full((40, 32), 100, dtype=np.uint16)
    plane[39, :] = 50
    rows = sample_channel(plane, middle_value(plane))
    # rows y=16 and y=48, the latter clamped to line 39
    assert rows == [[32, 32], [64, 64]]


def test_channel_ordering_table() -> None:
    assert CHANNEL_ORDERING[BayerOrder.RGGB] == (0, 1, 2, 3)
    assert CHANNEL_ORDERING[BayerOrder.GBRG] == (2, 3, 0, 1)
    assert CHANNEL_ORDERING[BayerOrder.BGGR] == (3, 2, 1, 0)
    assert CHANNEL_ORDERING[BayerOrder.GRBG] == (1, 0, 3, 2)
    for order in BayerOrder:
        assert sorted(CHANNEL_ORDERING[order]) == [0, 1, 2, 3]


@pytest.mark.parametrize("order", list(BayerOrder))
def test_build_gain_grid_maps_physical_planes(order: BayerOrder) -> None:
    planes = _planes(100, 200, 300, 400)
    grid = build_gain_grid(planes, order, ref_transform=5)

    assert grid.ref_transform == 5
    assert grid.grid_width == 1
    assert grid.grid_height == 1
    assert [ch.name for ch in grid.channels] == ["R", "Gr", "Gb", "B"]
    for logical, ch in enumerate(grid.channels):
        physical = CHANNEL_ORDERING[order][logical]
        assert ch.physical_index == physical
        assert ch.middle_val == (100 * (physical + 1)) << 5


def test_bggr_swaps_red_and_blue() -> None:
    planes = _planes(1, 2, 3, 4)
    rggb = build_gain_grid(planes, BayerOrder.RGGB)
    bggr = build_gain_grid(planes, BayerOrder.BGGR)
    assert rggb.channels[0].physical_index == bggr.channels[3].physical_index
    assert rggb.channels[3].physical_index == bggr.channels[0].physical_index


def test_gain_grid_bytes_and_samples() -> None:
    grid = build_gain_grid(_planes(500, 500, 500, 500), BayerOrder.RGGB)

    data = grid.to_bytes()
    assert len(data) == 4 * 2 * 2
    assert set(data) == {32}

    samples = list(grid.samples())
    assert len(samples) == 16
    assert [(s.grid_x, s.grid_y) for s in samples[:4]] == [(16, 16), (48, 16), (16, 48), (48, 48)]
    assert [s.channel for s in samples[::4]] == [0, 1, 2, 3]
