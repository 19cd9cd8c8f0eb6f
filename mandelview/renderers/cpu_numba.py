from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

import numpy as np

from mandelview.colors import palette
from mandelview.escape import BAILOUT
from mandelview.pixels import check_resolution, pixel_array
from mandelview.session import Session
from mandelview.util.logging_setup import get_logger

def probe_numba() -> Dict[str, Any]:
    info: Dict[str, Any] = {"available": False}
    try:
        import numba  # type: ignore
    except Exception as e:
        info["error"] = str(e)
        return info
    info.update({"available": True, "version": getattr(numba, "__version__", None)})
    return info

@lru_cache(maxsize=None)
def _kernel():
    try:
        from numba import njit  # type: ignore
    except Exception as e:
        raise RuntimeError(f"numba renderer not available: {e}") from e

    @njit(cache=False)
    def escape_grid(re_axis, im_axis, max_iter, out):
        for y in range(im_axis.shape[0]):
            ci = im_axis[y]
            for x in range(re_axis.shape[0]):
                cr = re_axis[x]
                c_outside = np.sqrt(cr ** 2 + ci ** 2) >= BAILOUT
                zr = 0.0
                zi = 0.0
                n = 0
                while n < max_iter and np.sqrt(zr ** 2 + zi ** 2) < BAILOUT and not c_outside:
                    n += 1
                    zr, zi = zr * zr - zi * zi + cr, zr * zi + zi * zr + ci
                out[y, x] = n

    return escape_grid

def escape_counts(*, session: Session, resolution: int) -> np.ndarray:
    """Iteration count for every pixel of the window, shape ``(resolution, resolution)``."""
    resolution = check_resolution(resolution)
    bounds = session.bounds
    steps = np.arange(resolution, dtype=np.float64)
    re_axis = bounds.real_min + steps * (bounds.real_max - bounds.real_min) / resolution
    im_axis = bounds.imag_min + steps * (bounds.imag_max - bounds.imag_min) / resolution
    counts = np.zeros((resolution, resolution), dtype=np.int64)
    _kernel()(re_axis, im_axis, session.max_iterations, counts)
    return counts

def fill_buffer_numba(buffer, *, session: Session, resolution: int, channels: int = 3, frame_id: str = "-") -> None:
    logger = get_logger()
    pixels = pixel_array(buffer, resolution, channels)
    max_iter = session.max_iterations
    logger.info("[Frame %s] numba render start res=%s iter=%s mapping=%s",
                frame_id, resolution, max_iter, session.color_mapping.value)
    counts = escape_counts(session=session, resolution=resolution)
    pixels[:, :, :3] = palette(session.color_mapping, max_iter)[counts]
    logger.info("[Frame %s] numba render done", frame_id)
