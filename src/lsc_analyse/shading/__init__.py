from .grid import (
    CHANNEL_ORDERING,
    LOGICAL_CHANNELS,
    ChannelGains,
    GainGrid,
    GainSample,
    build_gain_grid,
    clip_gain,
    grid_size,
    middle_value,
    sample_channel,
)

__all__ = [
    "CHANNEL_ORDERING",
    "LOGICAL_CHANNELS",
    "ChannelGains",
    "GainGrid",
    "GainSample",
    "build_gain_grid",
    "clip_gain",
    "grid_size",
    "middle_value",
    "sample_channel",
]
