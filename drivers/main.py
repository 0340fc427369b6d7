import sys
from pathlib import Path

# Go up to the parent directory (..), then down into "scripts"
# This adds "../scripts" to the python search path
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "scripts"))

from run_sketch import run

## THIS SCRIPT OPENS THE INTERACTIVE SKETCH WITH THE PRESET BELOW

preset = None  # None for the default three-body system, or a name from data/presets

##############################################################################################

run(
    preset=preset,
    steps=0,
    G=1.0,
    speed=1.0,
    visualizer=True,
)
