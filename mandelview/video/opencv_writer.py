from __future__ import annotations

import glob
import os
from typing import List, Sequence

from natsort import natsorted

from mandelview.util.logging_setup import get_logger

FRAME_EXTENSIONS = (".png", ".jpg", ".jpeg")

def collect_frames(input_dir: str) -> List[str]:
    """Image files in ``input_dir`` in natural order, so frame_2 sorts before frame_10."""
    return natsorted(p for p in glob.glob(os.path.join(input_dir, "*")) if p.lower().endswith(FRAME_EXTENSIONS))

def _cv2():
    try:
        import cv2  # type: ignore
    except Exception as e:
        raise RuntimeError(f"OpenCV not installed: {e}") from e
    return cv2

def encode_frames(frames: Sequence[str], *, output_file: str, fps: int) -> int:
    """Write ``frames`` to an MP4 and return how many were written.

    Zoom frames come from one resolution; a frame of another size is an error
    rather than something to rescale.
    """
    if not frames:
        raise ValueError("No frames to encode")
    cv2 = _cv2()
    logger = get_logger()

    images = (cv2.imread(path) for path in frames)
    writer = None
    size = None
    written = 0
    try:
        for path, img in zip(frames, images):
            if img is None:
                raise RuntimeError(f"Failed to read frame: {path}")
            h, w = img.shape[:2]
            if writer is None:
                size = (w, h)
                writer = cv2.VideoWriter(output_file, cv2.VideoWriter_fourcc(*"mp4v"), fps, size)
                if not writer.isOpened():
                    raise RuntimeError(f"Failed to open VideoWriter for {output_file}")
                logger.info("Encoding %s frames into %s (%sx%s @ %sfps)", len(frames), output_file, w, h, fps)
            elif (w, h) != size:
                raise ValueError(f"Frame {path} is {w}x{h}, expected {size[0]}x{size[1]}")
            writer.write(img)
            written += 1
            logger.debug("Encoded frame %s/%s %s", written, len(frames), path)
    finally:
        if writer is not None:
            writer.release()
    logger.info("Video written: %s", output_file)
    return written

def encode_with_opencv(*, input_dir: str, output_file: str, fps: int) -> int:
    frames = collect_frames(input_dir)
    if not frames:
        raise ValueError(f"No frames found in {input_dir}")
    return encode_frames(frames, output_file=output_file, fps=fps)
