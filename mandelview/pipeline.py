from __future__ import annotations

import os
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from PIL import Image
from tqdm import tqdm

from mandelview.pixels import new_buffer
from mandelview.renderers.cpu_numba import fill_buffer_numba, probe_numba
from mandelview.renderers.cpu_reference import fill_buffer_reference
from mandelview.session import Session
from mandelview.util.logging_setup import get_logger

RENDERERS = ("auto", "python", "numba")

def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def choose_renderer(renderer: str) -> str:
    if renderer in ("python", "numba"):
        return renderer
    if renderer != "auto":
        raise ValueError("renderer must be one of: auto, python, numba")
    return "numba" if probe_numba().get("available") else "python"

def renderer_info(resolved: str) -> Dict[str, Any]:
    return {"resolved": resolved, "numba": probe_numba()}

def fill_buffer(buffer, *, session: Session, resolution: int, channels: int = 3,
                renderer: str = "auto", frame_id: str = "-") -> str:
    """Render ``session`` into a caller-owned byte buffer and return the renderer used."""
    resolved = choose_renderer(renderer)
    if resolved == "numba":
        fill_buffer_numba(buffer, session=session, resolution=resolution, channels=channels, frame_id=frame_id)
    else:
        fill_buffer_reference(buffer, session=session, resolution=resolution, channels=channels, frame_id=frame_id)
    return resolved

def render_image(*, session: Session, resolution: int, renderer: str = "auto", frame_id: str = "-") -> Image.Image:
    buf = new_buffer(resolution, 3)
    fill_buffer(buf, session=session, resolution=resolution, channels=3, renderer=renderer, frame_id=frame_id)
    return Image.frombytes("RGB", (resolution, resolution), bytes(buf))

def save_image(img: Image.Image, path: str) -> str:
    parent = os.path.dirname(path)
    if parent:
        _ensure_dir(parent)
    img.save(path, format="PNG", optimize=True)
    return path

def _save_frame(img: Image.Image, frames_dir: str, frame_index: int) -> str:
    return save_image(img, os.path.join(frames_dir, f"frame_{frame_index:04d}.png"))

def render_zoom_sequence(
    *,
    session: Session,
    clicks: Sequence[Tuple[float, float]],
    resolution: int,
    frames_dir: str,
    renderer: str = "auto",
    progress: bool = True,
) -> List[str]:
    """Replay ``clicks`` against ``session``, saving the starting frame and one frame per click.

    Each click is a pixel coordinate in the frame rendered just before it.
    """
    logger = get_logger()
    _ensure_dir(frames_dir)
    logger.info("Zoom sequence start clicks=%s res=%s frames_dir=%s", len(clicks), resolution, frames_dir)

    paths: List[str] = []
    steps: Iterable[int] = range(len(clicks) + 1)
    if progress:
        steps = tqdm(steps, desc="frames", unit="frame")
    for i in steps:
        if i > 0:
            x, y = clicks[i - 1]
            session.recenter_at_pixel(x, y, resolution)
        img = render_image(session=session, resolution=resolution, renderer=renderer, frame_id=f"{i:04d}")
        path = _save_frame(img, frames_dir, i)
        paths.append(path)
        logger.info("Saved frame %s -> %s (%s)", i, path, session.describe())

    logger.info("Zoom sequence complete frames_dir=%s", frames_dir)
    return paths
