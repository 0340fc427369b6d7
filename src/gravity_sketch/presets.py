"""Initial body configurations: the built-in default plus JSON presets.

Presets are read from the repository data directory:
    data/presets/*.json

JSON schema (minimal):
{
  "name": "binary_with_moon",
  "description": "Optional text",
  "bodies": [
    {"offset": [-100, 0], "velocity": [0, 2], "mass": 20, "color": "#ff5555"},
    ...
  ]
}

Notes:
- `offset` is relative to the viewport centre; `InitialConfiguration.centered`
  turns offsets into absolute positions for a given viewport size.
- Between 2 and 10 bodies. Masses must lie inside the mass slider range.
- `description` is optional (can be null). `color` defaults to a grey tag.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .bodies import Body
from .config import ParameterRange, ParameterRanges
from .vector import Vector2

logger = logging.getLogger(__name__)

MIN_BODIES = 2
MAX_BODIES = 10
_DEFAULT_COLOR = "#aaaaaa"


@dataclass(frozen=True)
class BodySpec:
    offset: Vector2
    velocity: Vector2
    mass: float
    color: str


@dataclass(frozen=True)
class InitialConfiguration:
    name: str
    bodies: Tuple[BodySpec, ...]
    description: str | None = None

    def __len__(self) -> int:
        return len(self.bodies)

    def centered(self, width: float, height: float) -> List[Body]:
        """Fresh `Body` objects placed around the centre of a width x height viewport."""
        center = Vector2(0.5 * float(width), 0.5 * float(height))
        return [Body(position=center + s.offset, velocity=s.velocity, mass=s.mass, color=s.color) for s in self.bodies]


def default_configuration() -> InitialConfiguration:
    """The reset configuration: two equal masses orbiting past a heavier third."""
    return InitialConfiguration(
        name="default",
        bodies=(
            BodySpec(Vector2(-100.0, 0.0), Vector2(0.0, 2.0), 20.0, "#ff5555"),
            BodySpec(Vector2(100.0, 0.0), Vector2(0.0, -2.0), 20.0, "#55ff55"),
            BodySpec(Vector2(0.0, 150.0), Vector2(2.0, 0.0), 30.0, "#5555ff"),
        ),
        description="Two equal masses swinging past a heavier third",
    )


def _repo_root() -> Path:
    # .../src/gravity_sketch/presets.py -> repo root is parents[2]
    return Path(__file__).resolve().parents[2]


def presets_dir() -> Path:
    """Return the path to the on-disk preset JSON directory."""
    return _repo_root() / "data" / "presets"


def list_presets() -> List[str]:
    """List available preset names (derived from JSON filenames)."""
    root = presets_dir()
    if not root.exists():
        return []
    return sorted(p.stem for p in root.glob("*.json") if p.is_file())


def _as_vector(x: Any, *, name: str) -> Vector2:
    if not isinstance(x, (list, tuple)) or len(x) != 2:
        raise ValueError(f"{name} must be a 2-element array")
    try:
        return Vector2(float(x[0]), float(x[1]))
    except (TypeError, ValueError) as e:
        raise ValueError(f"{name} must contain numbers") from e


def _parse_body(d: Any, *, index: int, mass_range: ParameterRange) -> BodySpec:
    if not isinstance(d, dict):
        raise ValueError(f"bodies[{index}] must be an object")

    try:
        mass = float(d.get("mass"))
    except (TypeError, ValueError) as e:
        raise ValueError(f"bodies[{index}].mass must be a number") from e
    if not mass_range.contains(mass):
        raise ValueError(
            f"bodies[{index}].mass={mass} outside [{mass_range.low}, {mass_range.high}]"
        )

    color = d.get("color", _DEFAULT_COLOR)
    if not isinstance(color, str) or not color:
        raise ValueError(f"bodies[{index}].color must be a non-empty string")

    return BodySpec(
        offset=_as_vector(d.get("offset"), name=f"bodies[{index}].offset"),
        velocity=_as_vector(d.get("velocity", [0.0, 0.0]), name=f"bodies[{index}].velocity"),
        mass=mass,
        color=color,
    )


def parse_configuration(
    d: Dict[str, Any], *, fallback_name: str, ranges: ParameterRanges = ParameterRanges()
) -> InitialConfiguration:
    """Validate a decoded preset JSON object."""
    if not isinstance(d, dict):
        raise ValueError("Preset JSON must be an object")

    name = d.get("name", fallback_name)
    if not isinstance(name, str) or not name:
        raise ValueError("'name' must be a non-empty string")

    raw_bodies = d.get("bodies", None)
    if not isinstance(raw_bodies, list):
        raise ValueError("'bodies' must be an array")
    if not (MIN_BODIES <= len(raw_bodies) <= MAX_BODIES):
        raise ValueError(f"Expected {MIN_BODIES}..{MAX_BODIES} bodies, got {len(raw_bodies)}")

    bodies = tuple(_parse_body(b, index=k, mass_range=ranges.mass) for k, b in enumerate(raw_bodies))

    description_raw = d.get("description", None)
    description = None if description_raw is None else str(description_raw)

    return InitialConfiguration(name=name, bodies=bodies, description=description)


def load_preset(name: str) -> InitialConfiguration:
    """Load a preset from `data/presets/{name}.json`.

    The name "default" always resolves to `default_configuration()`.
    """
    if not isinstance(name, str) or not name:
        raise ValueError("name must be a non-empty string")
    if name == "default":
        return default_configuration()

    path = presets_dir() / f"{name}.json"
    if not path.exists():
        available = ", ".join(["default", *list_presets()])
        raise FileNotFoundError(f"Preset '{name}' not found at {path}. Available: {available}")

    with path.open("r", encoding="utf-8") as f:
        d = json.load(f)

    config = parse_configuration(d, fallback_name=path.stem)
    logger.debug("Loaded preset %s (%d bodies) from %s", config.name, len(config), path)
    return config


def load_all_presets() -> List[InitialConfiguration]:
    """Default configuration followed by every JSON preset on disk."""
    configs: List[InitialConfiguration] = [default_configuration()]
    for name in list_presets():
        configs.append(load_preset(name))
    return configs


def find_preset(name: Optional[str]) -> InitialConfiguration:
    """`load_preset`, with `None` meaning the default configuration."""
    return default_configuration() if name is None else load_preset(name)
