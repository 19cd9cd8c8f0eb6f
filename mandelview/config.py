import json
from typing import Any, Dict, Optional

from mandelview.colors import ColorMapping
from mandelview.complex_number import Complex
from mandelview.errors import ConfigurationError
from mandelview.session import DEFAULT_MAX_ITERATIONS, DEFAULT_SCALE, Session, ViewState

DEFAULTS: Dict[str, Any] = {
    "resolution": 512,
    "center": [0.0, 0.0],
    "scale": DEFAULT_SCALE,
    "max_iterations": DEFAULT_MAX_ITERATIONS,
    "color_mapping": ColorMapping.DEFAULT.value,
    "output": "mandelbrot.png",
    "frames_dir": "frames",
    "output_video": "mandelbrot_zoom.mp4",
    "fps": 2,
    "random_seed": None,
}

def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    if not config_path:
        return dict(DEFAULTS)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Config {config_path} is not valid JSON: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Config {config_path} could not be read: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigurationError("Config JSON must be an object.")
    out = dict(DEFAULTS)
    out.update(cfg)
    return out

def _positive_int(cfg: Dict[str, Any], key: str) -> int:
    value = cfg[key]
    if isinstance(value, bool):
        raise ConfigurationError(f"{key} must be a positive integer.")
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be a positive integer.") from e
    if number != value or number <= 0:
        raise ConfigurationError(f"{key} must be a positive integer.")
    return number

def normalise_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(DEFAULTS)
    out.update(cfg)

    out["resolution"] = _positive_int(out, "resolution")
    out["max_iterations"] = _positive_int(out, "max_iterations")
    out["fps"] = _positive_int(out, "fps")

    try:
        scale = float(out["scale"])
    except (TypeError, ValueError) as e:
        raise ConfigurationError("scale must be a number.") from e
    if not scale > 0:
        raise ConfigurationError("scale must be > 0.")
    out["scale"] = scale

    center = out["center"]
    if not (isinstance(center, (list, tuple)) and len(center) == 2):
        raise ConfigurationError("center must be [re, im].")
    try:
        out["center"] = [float(center[0]), float(center[1])]
    except (TypeError, ValueError) as e:
        raise ConfigurationError("center must be [re, im].") from e

    out["color_mapping"] = ColorMapping.from_name(str(out["color_mapping"])).value
    out["output"] = str(out["output"])
    out["frames_dir"] = str(out["frames_dir"])
    out["output_video"] = str(out["output_video"])
    seed = out["random_seed"]
    if seed is not None:
        if isinstance(seed, bool):
            raise ConfigurationError("random_seed must be an integer.")
        try:
            out["random_seed"] = int(seed)
        except (TypeError, ValueError, OverflowError) as e:
            raise ConfigurationError("random_seed must be an integer.") from e
    return out

def session_from_config(cfg: Dict[str, Any]) -> Session:
    view = ViewState(
        center=Complex.from_pair(cfg["center"]),
        scale=float(cfg["scale"]),
        max_iterations=int(cfg["max_iterations"]),
    )
    return Session(view=view, color_mapping=ColorMapping.from_name(cfg["color_mapping"]))
