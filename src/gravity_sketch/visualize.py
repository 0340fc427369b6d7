"""Interactive matplotlib viewer for the gravity sketch.

Requirements:
- One figure in viewport pixel coordinates, black background
- Bodies as filled circles (diameter proportional to sqrt(mass))
- Trail dots kept in a TrailBuffer, cleared on reset
- Sliders for G, speed and each body's mass; a "Reset System" button
- Auto-fitting camera recomputed every frame
- Canvas timer drives the loop (no matplotlib.animation.FuncAnimation)
- Headless frame rendering: advance(n) + save_frame(path) on the Agg backend

The viewer samples its sliders into a SimulationParameters value every frame;
the Simulator never sees the widgets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .camera import CameraTransform, compute_transform
from .config import CameraConfig, TrailConfig
from .simulate import BodyState, SimulationParameters, Simulator
from .trail import TrailBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewerConfig:
    width: int = 1100
    height: int = 800
    dpi: float = 100.0
    fps: float = 60.0
    # Body diameter in world units is body_scale * sqrt(mass).
    body_scale: float = 4.0
    # Trail dots keep a constant on-screen size (pixels).
    trail_size: float = 2.0
    # 0x55 / 0xff, the original trail transparency.
    trail_alpha: float = 0x55 / 0xFF


def format_labels(params: SimulationParameters, states: Sequence[BodyState]) -> List[str]:
    """Text readout of the current steering values, one line per control."""
    lines = [f"G: {params.gravitational_constant:.2f}", f"Speed: {params.speed_factor:.2f}"]
    lines.extend(f"Mass {k + 1}: {s.mass:.0f}" for k, s in enumerate(states))
    return lines


class SketchViewer:
    """Timer-driven viewer with slider controls."""

    def __init__(
        self,
        simulator: Simulator,
        *,
        config: ViewerConfig = ViewerConfig(),
        camera: CameraConfig = CameraConfig(),
        trail: TrailConfig = TrailConfig(),
        gravitational_constant: float = 1.0,
        speed_factor: float = 1.0,
    ) -> None:
        self.sim = simulator
        self.config = config
        self.camera = camera
        self.trail = TrailBuffer(trail)
        self.sim.add_reset_listener(self.trail.clear)

        self.width = int(config.width)
        self.height = int(config.height)
        if (self.sim.width, self.sim.height) != (self.width, self.height):
            # Re-centre the bodies on this viewport.
            self.sim.resize(self.width, self.height)
            self.sim.reset()

        ranges = self.sim.ranges
        self._G0 = ranges.gravity.clamp(gravitational_constant)
        self._speed0 = ranges.speed.clamp(speed_factor)

        self.transform: CameraTransform | None = None
        self.params = SimulationParameters(self._G0, self._speed0, None)

        # Matplotlib objects are created in _build_figure
        self._fig = None
        self._ax = None
        self._body_artist = None
        self._trail_artist = None
        self._label_text = None
        self._g_slider = None
        self._speed_slider = None
        self._mass_sliders: list = []
        self._reset_button = None
        self._timer = None
        self._rgba_cache: Dict[str, Tuple[float, float, float, float]] = {}

    # ------------------------- Figure setup -------------------------

    def _figure_fraction(self, x: float, y: float, w: float, h: float) -> List[float]:
        """Convert a top-left pixel rectangle to a matplotlib [left, bottom, width, height]."""
        return [x / self.width, 1.0 - (y + h) / self.height, w / self.width, h / self.height]

    def _build_figure(self) -> None:
        import matplotlib.pyplot as plt
        from matplotlib.widgets import Button, Slider

        fig = plt.figure(figsize=(self.width / self.config.dpi, self.height / self.config.dpi), dpi=self.config.dpi)
        fig.patch.set_facecolor("black")
        ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
        ax.set_facecolor("black")
        ax.set_axis_off()
        self._fig = fig
        self._ax = ax
        self._set_limits()

        self._trail_artist = ax.scatter([], [], s=[], linewidths=0.0, zorder=1)
        self._body_artist = ax.scatter([], [], s=[], linewidths=0.0, zorder=2)
        self._label_text = ax.text(
            240,
            35,
            "",
            va="top",
            ha="left",
            fontsize=10,
            color="white",
            linespacing=2.6,
            zorder=3,
        )

        ranges = self.sim.ranges

        def slider(row: int, label: str, rng, init: float, fmt: str) -> Slider:
            sax = fig.add_axes(self._figure_fraction(60, 20 + row * 40, 160, 16))
            sax.set_facecolor("0.2")
            s = Slider(sax, label, rng.low, rng.high, valinit=init, valstep=rng.step, valfmt=fmt, color="0.7")
            s.label.set_color("white")
            s.valtext.set_visible(False)
            return s

        self._g_slider = slider(0, "G", ranges.gravity, self._G0, "%.2f")
        self._speed_slider = slider(1, "Speed", ranges.speed, self._speed0, "%.2f")
        self._mass_sliders = [
            slider(2 + k, f"M{k + 1}", ranges.mass, s.mass, "%.0f") for k, s in enumerate(self.sim.bodies)
        ]

        bax = fig.add_axes(self._figure_fraction(20, 100 + 40 * len(self._mass_sliders), 120, 26))
        self._reset_button = Button(bax, "Reset System", color="0.3", hovercolor="0.5")
        self._reset_button.label.set_color("white")
        self._reset_button.on_clicked(lambda _event: self.reset())

        fig.canvas.mpl_connect("resize_event", self._on_resize)

        interval_ms = max(1, int(1000.0 / float(self.config.fps)))
        self._timer = fig.canvas.new_timer(interval=interval_ms)
        self._timer.add_callback(self._on_timer)

        self._draw_frame()

    def _ensure_figure(self) -> None:
        if self._fig is None:
            self._build_figure()

    def _set_limits(self) -> None:
        if self._ax is None:
            return
        # Canvas convention: origin top-left, y grows downwards.
        self._ax.set_xlim(0, self.width)
        self._ax.set_ylim(self.height, 0)

    # ------------------------- Updates -------------------------

    def sample_parameters(self) -> SimulationParameters:
        """Read the current slider values."""
        if self._g_slider is None:
            return self.params
        return SimulationParameters(
            gravitational_constant=float(self._g_slider.val),
            speed_factor=float(self._speed_slider.val),
            mass_overrides=[float(s.val) for s in self._mass_sliders],
        )

    def frame(self) -> CameraTransform:
        """One step of the original draw loop, without drawing."""
        self.params = self.sample_parameters()
        states = self.sim.step(self.params)
        self.transform = compute_transform(self.sim.positions(), self.width, self.height, self.camera)
        self.trail.record(states)
        return self.transform

    def _rgba(self, color: str, alpha: float) -> Tuple[float, float, float, float]:
        key = f"{color}/{alpha}"
        if key not in self._rgba_cache:
            import matplotlib.colors as mcolors

            self._rgba_cache[key] = mcolors.to_rgba(color, alpha)
        return self._rgba_cache[key]

    def _px_to_points_sq(self, diameter_px: np.ndarray) -> np.ndarray:
        # scatter sizes are marker areas in points^2
        return (np.asarray(diameter_px, dtype=float) * 72.0 / self.config.dpi) ** 2

    def _draw_frame(self) -> None:
        if self._ax is None:
            return

        if self.transform is None:
            self.transform = compute_transform(self.sim.positions(), self.width, self.height, self.camera)
        tr = self.transform
        states = self.sim.bodies

        xy = tr.apply(self.sim.positions())
        diam = self.config.body_scale * np.sqrt(self.sim.masses()) * tr.scale
        self._body_artist.set_offsets(xy)
        self._body_artist.set_sizes(self._px_to_points_sq(diam))
        self._body_artist.set_facecolors([self._rgba(s.color, 1.0) for s in states])

        trail_xy, trail_colors = self.trail.as_arrays()
        self._trail_artist.set_offsets(tr.apply(trail_xy))
        self._trail_artist.set_sizes(self._px_to_points_sq(np.full(len(trail_colors), self.config.trail_size)))
        self._trail_artist.set_facecolors([self._rgba(c, self.config.trail_alpha) for c in trail_colors])

        self._label_text.set_text("\n".join(format_labels(self.params, states)))

    # ------------------------- Interaction -------------------------

    def _on_timer(self) -> None:
        self.frame()
        self._draw_frame()
        self._fig.canvas.draw_idle()

    def _on_resize(self, event) -> None:
        if event.width <= 0 or event.height <= 0:
            return
        self.width = int(event.width)
        self.height = int(event.height)
        self.sim.resize(self.width, self.height)
        self._set_limits()
        self.transform = None

    # ------------------------- Public API -------------------------

    def reset(self) -> None:
        """Reset the system and push the reset masses back into the sliders."""
        self.sim.reset()
        for s, state in zip(self._mass_sliders, self.sim.bodies):
            s.set_val(state.mass)
        self.transform = None
        self._draw_frame()
        if self._fig is not None:
            self._fig.canvas.draw_idle()

    def advance(self, n: int) -> None:
        """Run `n` frames without displaying anything."""
        self._ensure_figure()
        for _ in range(int(n)):
            self.frame()
        self._draw_frame()

    def show(self) -> None:
        """Start the interactive viewer."""
        self._ensure_figure()
        if self._timer is not None:
            self._timer.start()
        import matplotlib.pyplot as plt

        plt.show()

    def save_frame(self, path: Path | str) -> None:
        """Render the current state and save it as an image."""
        self._ensure_figure()
        self._draw_frame()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._fig.savefig(path, dpi=self.config.dpi, facecolor=self._fig.get_facecolor())
        logger.info("Saved frame %d to %s", self.sim.step_count, path)

    def close(self) -> None:
        if self._timer is not None:
            self._timer.stop()
        if self._fig is not None:
            import matplotlib.pyplot as plt

            plt.close(self._fig)
            self._fig = None
            self._ax = None


def visualize(
    simulator: Simulator | None = None,
    *,
    width: int = 1100,
    height: int = 800,
    fps: float = 60.0,
    gravitational_constant: float = 1.0,
    speed_factor: float = 1.0,
) -> None:
    """Convenience wrapper to launch the interactive viewer."""
    sim = Simulator(width=width, height=height) if simulator is None else simulator
    cfg = ViewerConfig(width=int(width), height=int(height), fps=float(fps))
    SketchViewer(sim, config=cfg, gravitational_constant=gravitational_constant, speed_factor=speed_factor).show()
