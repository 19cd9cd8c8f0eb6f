from __future__ import annotations

from mandelview.escape import escape_time
from mandelview.pixels import pixel_array
from mandelview.session import Session
from mandelview.util.logging_setup import get_logger

def fill_buffer_reference(buffer, *, session: Session, resolution: int, channels: int = 3, frame_id: str = "-") -> None:
    """Render ``session`` into ``buffer`` one pixel at a time.

    Only the first three bytes of each pixel are written, so an alpha channel
    keeps whatever the caller put there.
    """
    logger = get_logger()
    pixels = pixel_array(buffer, resolution, channels)
    bounds = session.bounds
    max_iter = session.max_iterations
    mapping = session.color_mapping

    logger.info("[Frame %s] Reference render start res=%s iter=%s mapping=%s",
                frame_id, resolution, max_iter, mapping.value)

    for y in range(resolution):
        for x in range(resolution):
            c = bounds.point_at(x, y, resolution)
            pixels[y, x, :3] = mapping(escape_time(c, max_iter), max_iter)

        if y % 50 == 0:
            logger.debug("[Frame %s] Rendered row %s/%s", frame_id, y, resolution)

    logger.info("[Frame %s] Reference render done", frame_id)
