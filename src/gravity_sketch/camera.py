"""Auto-framing camera: fit every body inside the viewport.

The camera has no state of its own. Each frame the transform is derived from
the current body positions:

    center = midpoint of the positions' bounding box
    scale  = clamp(fill * min(W / (span_x + padding), H / (span_y + padding)),
                   min_zoom, max_zoom)
    render = (world - center) * scale + (W/2, H/2)

The padding term keeps the denominators positive, so a set of coincident
bodies (zero span) resolves to `max_zoom` through the clamp.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .config import CameraConfig
from .vector import Vector2, as_array


@dataclass(frozen=True)
class CameraTransform:
    """Uniform scale followed by a translation: render = world * scale + translate."""

    translate_x: float
    translate_y: float
    scale: float

    def apply(self, points: np.ndarray) -> np.ndarray:
        """Map world points of shape (n, 2) to render coordinates."""
        pts = np.asarray(points, dtype=float).reshape(-1, 2)
        return pts * self.scale + np.array([self.translate_x, self.translate_y], dtype=float)


def _as_points(positions: Sequence[Vector2] | np.ndarray) -> np.ndarray:
    if isinstance(positions, np.ndarray):
        pts = np.asarray(positions, dtype=float)
    else:
        pts = as_array(positions)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"Expected positions of shape (n, 2), got {pts.shape}")
    return pts


def compute_transform(
    positions: Sequence[Vector2] | np.ndarray,
    viewport_width: float,
    viewport_height: float,
    camera: CameraConfig = CameraConfig(),
) -> CameraTransform:
    """Compute the transform that frames all `positions` in the viewport.

    Args:
        positions: Body positions, as `Vector2`s or an (n, 2) array.
        viewport_width: Viewport width in render units (> 0).
        viewport_height: Viewport height in render units (> 0).
        camera: Padding, fill fraction and zoom bounds.

    Returns:
        CameraTransform for this frame.
    """
    if viewport_width <= 0 or viewport_height <= 0:
        raise ValueError(f"Viewport must be positive, got {viewport_width}x{viewport_height}")

    pts = _as_points(positions)
    if pts.shape[0] == 0:
        raise ValueError("compute_transform needs at least one position")

    lo = np.min(pts, axis=0)
    hi = np.max(pts, axis=0)
    cx, cy = 0.5 * (lo + hi)
    span_x, span_y = hi - lo

    fit = min(
        viewport_width / (float(span_x) + camera.padding),
        viewport_height / (float(span_y) + camera.padding),
    )
    scale = float(np.clip(camera.fill * fit, camera.min_zoom, camera.max_zoom))

    return CameraTransform(
        translate_x=0.5 * viewport_width - float(cx) * scale,
        translate_y=0.5 * viewport_height - float(cy) * scale,
        scale=scale,
    )
