from __future__ import annotations

from numbers import Integral

import numpy as np

from mandelview.errors import ConfigurationError

CHANNEL_COUNTS = (3, 4)


def check_resolution(resolution: int) -> int:
    if not isinstance(resolution, Integral) or isinstance(resolution, bool) or resolution <= 0:
        raise ConfigurationError(f"resolution must be a positive integer, got {resolution!r}")
    return int(resolution)


def pixel_array(buffer, resolution: int, channels: int) -> np.ndarray:
    # Writes land in buffer at (y * resolution + x) * channels.
    resolution = check_resolution(resolution)
    if channels not in CHANNEL_COUNTS:
        raise ConfigurationError(f"channels must be 3 or 4, got {channels!r}")
    flat = np.frombuffer(buffer, dtype=np.uint8)
    expected = resolution * resolution * channels
    if flat.size != expected:
        raise ConfigurationError(
            f"buffer holds {flat.size} bytes, expected {expected} for {resolution}x{resolution}x{channels}"
        )
    if not flat.flags.writeable:
        raise ConfigurationError("buffer is read-only")
    return flat.reshape(resolution, resolution, channels)


def new_buffer(resolution: int, channels: int = 3) -> bytearray:
    resolution = check_resolution(resolution)
    if channels not in CHANNEL_COUNTS:
        raise ConfigurationError(f"channels must be 3 or 4, got {channels!r}")
    return bytearray(resolution * resolution * channels)
