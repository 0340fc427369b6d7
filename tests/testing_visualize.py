## Headless smoke test for the matplotlib viewer (Agg backend).

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from gravity_sketch.simulate import SimulationParameters, Simulator
from gravity_sketch.visualize import SketchViewer, ViewerConfig, format_labels


@pytest.fixture
def viewer():
    sim = Simulator(width=640, height=480)
    v = SketchViewer(sim, config=ViewerConfig(width=640, height=480, dpi=80))
    yield v
    v.close()


def test_format_labels():
    sim = Simulator()
    lines = format_labels(SimulationParameters(1.0, 2.5), sim.bodies)

    assert lines == ["G: 1.00", "Speed: 2.50", "Mass 1: 20", "Mass 2: 20", "Mass 3: 30"]


def test_advance_steps_and_records_trail(viewer):
    viewer.advance(10)

    assert viewer.sim.step_count == 10
    assert len(viewer.trail) == 30
    assert viewer.transform is not None
    assert np.isfinite(viewer.transform.scale)
    # Sliders start at the body masses.
    assert viewer.sample_parameters().mass_overrides == [20.0, 20.0, 30.0]


def test_reset_clears_trail_and_restores_sliders(viewer):
    viewer.advance(5)
    viewer._mass_sliders[0].set_val(70.0)
    viewer.advance(5)
    assert viewer.sim.bodies[0].mass == 70.0

    viewer.reset()

    assert len(viewer.trail) == 0
    assert viewer.sim.step_count == 0
    assert viewer.sample_parameters().mass_overrides == [20.0, 20.0, 30.0]


def test_save_frame(viewer, tmp_path):
    viewer.advance(3)
    out = tmp_path / "frames" / "frame.png"
    viewer.save_frame(out)

    assert out.exists()
    assert out.stat().st_size > 0


def test_viewer_recentres_simulator_built_for_another_viewport():
    sim = Simulator(width=800, height=600)
    sim.step(SimulationParameters(1.0, 1.0))
    v = SketchViewer(sim, config=ViewerConfig(width=640, height=480, dpi=80))
    try:
        assert (sim.width, sim.height) == (640.0, 480.0)
        assert sim.step_count == 0
        np.testing.assert_array_equal(sim.positions(), [[220.0, 240.0], [420.0, 240.0], [320.0, 390.0]])
    finally:
        v.close()


def test_viewer_keeps_state_when_viewport_matches():
    sim = Simulator(width=640, height=480)
    sim.step(SimulationParameters(1.0, 1.0))
    v = SketchViewer(sim, config=ViewerConfig(width=640, height=480, dpi=80))
    try:
        assert sim.step_count == 1
    finally:
        v.close()
