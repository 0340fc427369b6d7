import sys
from pathlib import Path

# Go up to the parent directory (..), then down into "scripts"
# This adds "../scripts" to the python search path
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "scripts"))

from run_sketch import run

## THIS SCRIPT RUNS A PRESET WITHOUT A WINDOW AND SAVES THE TRAJECTORY TO DATA/COMPUTATIONS

preset = "binary_with_moon"
steps = 3000

##############################################################################################

run(
    preset=preset,
    steps=steps,
    G=1.0,
    speed=1.0,
    save=f"data/computations/{preset}.npz",
    snapshot=f"data/computations/{preset}.png",
)
