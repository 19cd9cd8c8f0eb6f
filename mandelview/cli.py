from __future__ import annotations

import argparse
import subprocess
from typing import Any, Dict, Optional

from mandelview.colors import ColorMapping, random_colors
from mandelview.config import load_config, normalise_config, session_from_config
from mandelview.errors import ConfigurationError
from mandelview.pipeline import (
    RENDERERS,
    choose_renderer,
    render_image,
    render_zoom_sequence,
    renderer_info,
    save_image,
)
from mandelview.session import FIDELITY_LEVELS, Session
from mandelview.util.logging_setup import configure_root_logging, get_logger, parse_level
from mandelview.util.manifest import build_manifest, write_manifest
from mandelview.video.opencv_writer import encode_with_opencv

def _git_commit() -> Optional[str]:
    try:
        r = subprocess.run(["git", "rev-parse", "HEAD"], capture_output=True, text=True, check=True)
        return r.stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return None

def _add_view_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--resolution", type=int, default=None, help="Width and height of the square image in pixels.")
    p.add_argument("--center", type=float, nargs=2, metavar=("RE", "IM"), default=None, help="Centre of the view.")
    p.add_argument("--scale", type=float, default=None, help="View scale; the window spans 4*scale on each axis.")
    p.add_argument("--max-iterations", type=int, default=None, help="Iteration cap.")
    p.add_argument("--fidelity", type=int, default=None, choices=range(len(FIDELITY_LEVELS)),
                   help="Iteration cap preset: " + ", ".join(f"{i}={v}" for i, v in enumerate(FIDELITY_LEVELS)))
    p.add_argument("--color-mapping", type=str, default=None, help="Colour mapping name (see the 'mappings' command).")
    p.add_argument("--seed", type=int, default=None, help="Seed for the random colour mapping.")

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mandelview", description="Escape-time Mandelbrot renderer with click-style zoom.")
    p.add_argument("--config", type=str, default=None, help="Path to config JSON. If omitted, built-in defaults are used.")
    p.add_argument("--renderer", type=str, default="auto", choices=list(RENDERERS), help="Renderer selection.")
    p.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Log level.")
    p.add_argument("--log-file", type=str, default="", help="Rotating log file path. Empty disables file logging.")
    p.add_argument("--manifest", type=str, default="artifacts/run.json", help="Run manifest path. Empty disables it.")
    sub = p.add_subparsers(dest="cmd", required=True)

    r = sub.add_parser("render", help="Render the current view to a PNG image.")
    _add_view_options(r)
    r.add_argument("--output", type=str, default=None, help="Output PNG (defaults to config.output).")

    q = sub.add_parser("query", help="Report the escape time and plane point under a pixel.")
    _add_view_options(q)
    q.add_argument("x", type=float, help="Pixel column.")
    q.add_argument("y", type=float, help="Pixel row.")

    z = sub.add_parser("zoom", help="Replay clicks as a zoom sequence of frames.")
    _add_view_options(z)
    z.add_argument("--click", type=float, nargs=2, action="append", metavar=("X", "Y"), required=True,
                   help="Pixel to recentre on; repeat for deeper zooms.")
    z.add_argument("--frames-dir", type=str, default=None, help="Override frames_dir from config.")

    e = sub.add_parser("encode", help="Encode frames into an MP4 video using OpenCV.")
    e.add_argument("--input-dir", type=str, default=None, help="Frames directory (defaults to config.frames_dir).")
    e.add_argument("--output", type=str, default=None, help="Output MP4 file (defaults to config.output_video).")
    e.add_argument("--fps", type=int, default=None, help="Frames per second (defaults to config.fps).")

    sub.add_parser("mappings", help="List the available colour mappings.")

    return p

def _apply_overrides(cfg: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    overrides = {
        "resolution": getattr(args, "resolution", None),
        "center": getattr(args, "center", None),
        "scale": getattr(args, "scale", None),
        "max_iterations": getattr(args, "max_iterations", None),
        "color_mapping": getattr(args, "color_mapping", None),
        "random_seed": getattr(args, "seed", None),
    }
    fidelity = getattr(args, "fidelity", None)
    if fidelity is not None:
        overrides["max_iterations"] = FIDELITY_LEVELS[fidelity]
    out = dict(cfg)
    out.update({k: v for k, v in overrides.items() if v is not None})
    return out

def _write_manifest(path: str, cfg: Dict[str, Any], session: Session, resolved: str) -> None:
    if not path:
        return
    manifest = build_manifest(config=cfg, view=session.describe(), renderer_info=renderer_info(resolved),
                              git_commit=_git_commit())
    write_manifest(path, manifest)
    get_logger().info("Run manifest written: %s", path)

def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    log_file = args.log_file if args.log_file and args.log_file.strip() else None
    configure_root_logging(level=parse_level(args.log_level), console=True, log_file=log_file)
    logger = get_logger()

    try:
        if args.cmd == "mappings":
            for mapping in ColorMapping:
                print(mapping.value)
            return 0

        cfg = normalise_config(_apply_overrides(load_config(args.config), args))

        if args.cmd == "encode":
            input_dir = args.input_dir or cfg["frames_dir"]
            output = args.output or cfg["output_video"]
            fps = args.fps or cfg["fps"]
            encode_with_opencv(input_dir=input_dir, output_file=output, fps=fps)
            return 0

        if cfg["random_seed"] is not None:
            random_colors.reset(cfg["random_seed"])
        session = session_from_config(cfg)
        resolution = cfg["resolution"]

        if args.cmd == "query":
            print(session.hover_text(args.x, args.y, resolution))
            return 0

        resolved = choose_renderer(args.renderer)

        if args.cmd == "render":
            output = args.output or cfg["output"]
            img = render_image(session=session, resolution=resolution, renderer=resolved)
            save_image(img, output)
            logger.info("Image written: %s (%s)", output, session.describe())
            _write_manifest(args.manifest, cfg, session, resolved)
            return 0

        if args.cmd == "zoom":
            if args.frames_dir:
                cfg["frames_dir"] = args.frames_dir
            clicks = [(x, y) for x, y in args.click]
            render_zoom_sequence(session=session, clicks=clicks, resolution=resolution,
                                 frames_dir=cfg["frames_dir"], renderer=resolved)
            _write_manifest(args.manifest, cfg, session, resolved)
            return 0

        raise RuntimeError("Unknown command.")
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 2
