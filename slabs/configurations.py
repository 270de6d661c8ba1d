# ============================================================
# Grid
# ============================================================
from pathlib import Path
from typing import List


FLOOR_Z = 0                         # ground plane; settled bricks rest at z >= FLOOR_Z + 1

# ============================================================
# Dataset / Results
# ============================================================
ROOT = Path(__file__).resolve().parent          # .../slabs

DATASET_DIR = ROOT / "datasets"                  # one snapshot per *.txt

WD_DIR: List[str] = [
    "unit-step",
    "unit-step-debug",
]

# switch to WD_DIR[1] (with debug = True) and rerun debug_run.py and
# scripts/aggregate_results.py to get a second results dir; then
#   python -m slabs.scripts.compare_summaries unit-step unit-step-debug
RESULTS_DIR_NAME = WD_DIR[0]
RESULTS_ROOT = ROOT / "results" / RESULTS_DIR_NAME
INDEX_FILE_NAME = "run_index.json"
SUMMARY_DIR_NAME = "_summary"

# ============================================================
# Debug / Visualization
# ============================================================
DEBUG_F = [True, False]

PLOT_SETTLED_STACK = DEBUG_F[1]     # open vedo view after each snapshot

debug = DEBUG_F[1]                  # verbose debug prints
