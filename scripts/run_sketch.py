"""Run the gravity sketch (thin CLI glue).

Usage:
  python scripts/run_sketch.py --preset default --steps 2000 --G 1.0 --speed 1.0 --save out/run.npz
  python scripts/run_sketch.py --visualizer

Policy:
- No numerics here: no forces/integration/camera math.
- Orchestration only.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Allow running directly from a src-layout repo without installation.
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import numpy as np

from gravity_sketch.dynamics import kinetic_energy, total_momentum
from gravity_sketch.presets import find_preset, list_presets
from gravity_sketch.simulate import SimulationParameters, Simulator
from gravity_sketch.visualize import SketchViewer, ViewerConfig


def _parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run the interactive n-body gravity sketch")
    p.add_argument("--preset", type=str, default=None, help=f"Initial configuration (default, {', '.join(list_presets()) or 'no JSON presets'})")
    p.add_argument("--steps", type=int, default=1000, help="Headless steps to run (default: 1000)")
    p.add_argument("--G", type=float, default=1.0, help="Gravitational constant (default: 1.0)")
    p.add_argument("--speed", type=float, default=1.0, help="Speed factor (default: 1.0)")
    p.add_argument("--mass", type=float, action="append", default=None, help="Mass override, repeat once per body")
    p.add_argument("--width", type=int, default=1100, help="Viewport width in pixels (default: 1100)")
    p.add_argument("--height", type=int, default=800, help="Viewport height in pixels (default: 800)")
    p.add_argument("--save", type=str, default=None, help="Save trajectory to .npz")
    p.add_argument("--snapshot", type=str, default=None, help="Save the final frame as an image")
    p.add_argument("--visualizer", action="store_true", help="Launch interactive viewer instead of a headless run")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def run(
    preset: str | None,
    steps: int,
    G: float,
    speed: float,
    masses: list[float] | None = None,
    width: int = 1100,
    height: int = 800,
    save: str | None = None,
    snapshot: str | None = None,
    visualizer: bool = False,
):
    sim = Simulator(find_preset(preset), width=width, height=height)

    if visualizer:
        viewer = SketchViewer(
            sim,
            config=ViewerConfig(width=width, height=height),
            gravitational_constant=G,
            speed_factor=speed,
        )
        viewer.show()
        return None

    params = SimulationParameters(gravitational_constant=G, speed_factor=speed, mass_overrides=masses)

    positions = np.empty((steps + 1, len(sim), 2), dtype=float)
    momentum = np.empty((steps + 1, 2), dtype=float)
    energy = np.empty(steps + 1, dtype=float)

    positions[0] = sim.positions()
    momentum[0] = total_momentum(sim.live_bodies())
    energy[0] = kinetic_energy(sim.live_bodies())
    for k in range(1, steps + 1):
        sim.step(params)
        positions[k] = sim.positions()
        momentum[k] = total_momentum(sim.live_bodies())
        energy[k] = kinetic_energy(sim.live_bodies())

    print(f"Ran '{sim.configuration.name}' for {steps} steps (G={G}, speed={speed})")
    print(f"Final positions:\n{positions[-1]}")
    print(f"Momentum drift: {momentum[-1] - momentum[0]}")
    print(f"Kinetic energy: {energy[0]:.6g} -> {energy[-1]:.6g}\n")

    if save is not None:
        out = Path(save)
        out.parent.mkdir(parents=True, exist_ok=True)
        np.savez(
            out,
            positions=positions,
            momentum=momentum,
            kinetic_energy=energy,
            masses=sim.masses(),
            colors=np.array([s.color for s in sim.bodies]),
        )
        print(f"Saved: {out}")

    if snapshot is not None:
        import matplotlib

        matplotlib.use("Agg", force=True)
        viewer = SketchViewer(sim, config=ViewerConfig(width=width, height=height), gravitational_constant=G, speed_factor=speed)
        viewer.save_frame(snapshot)
        viewer.close()
        print(f"Saved: {snapshot}")

    return positions


def main(argv=None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    run(
        preset=args.preset,
        steps=args.steps,
        G=args.G,
        speed=args.speed,
        masses=args.mass,
        width=args.width,
        height=args.height,
        save=args.save,
        snapshot=args.snapshot,
        visualizer=args.visualizer,
    )

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
