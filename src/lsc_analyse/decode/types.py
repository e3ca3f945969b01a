from __future__ import annotations

from dataclasses import dataclass
import enum

import numpy as np


class BayerOrder(enum.IntEnum):
    RGGB = 0
    GBRG = 1
    BGGR = 2
    GRBG = 3


@dataclass(frozen=True)
class RawHeader:
    name: str
    width: int
    height: int
    padding_right: int
    padding_down: int
    transform: int
    format: int
    bayer_order: int
    bayer_format: int

    @property
    def channel_width(self) -> int:
        return self.width // 2

    @property
    def channel_height(self) -> int:
        return self.height // 2


@dataclass(frozen=True)
class RawLocation:
    offset: int
    container: str


@dataclass
class ChannelPlanes:
    """The four Bayer sub-channels in physical order.

    Index 0 is even row / even column, 1 even row / odd column, 2 odd row /
    even column and 3 odd row / odd column.
    """

    planes: tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]

    def __post_init__(self) -> None:
        if len(self.planes) != 4:
            raise ValueError(f"expected 4 channel planes, got {len(self.planes)}")
        shapes = {p.shape for p in self.planes}
        if len(shapes) != 1:
            raise ValueError(f"channel planes differ in shape: {sorted(shapes)}")

    def __getitem__(self, index: int) -> np.ndarray:
        return self.planes[index]

    def __len__(self) -> int:
        return len(self.planes)

    @property
    def width(self) -> int:
        return int(self.planes[0].shape[1])

    @property
    def height(self) -> int:
        return int(self.planes[0].shape[0])


@dataclass
class DecodedRaw:
    header: RawHeader
    location: RawLocation
    stride: int
    black_level: int
    channels: ChannelPlanes

    @property
    def bayer_order(self) -> BayerOrder:
        return BayerOrder(self.header.bayer_order)
