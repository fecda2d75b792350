"""
Configuration constants for gridpath.

Paths, tunable heuristics and viewer defaults live here. Anything worth
changing per machine can be overridden through environment variables.
"""

import os
import sys
from pathlib import Path

# =============================================================================
# Paths
# =============================================================================

PACKAGE_DIR = Path(__file__).resolve().parent

MAP_DIR = PACKAGE_DIR / "maps"
MAP_FILES = {
    "01_open_field": MAP_DIR / "01_open_field.json",
    "02_two_routes": MAP_DIR / "02_two_routes.json",
    "03_weighted_grass": MAP_DIR / "03_weighted_grass.json",
}
DEFAULT_MAP = "01_open_field"

# =============================================================================
# Lattice defaults
# =============================================================================

DEFAULT_ROWS = 15
DEFAULT_COLS = 25

# Weight painted by the viewer's terrain brush (right click)
WEIGHTED_CELL_COST = int(os.environ.get("GRIDPATH_WEIGHTED_COST", "5"))

# =============================================================================
# Diversification
# =============================================================================

MAX_ALTERNATIVES = 3

# Two paths are distinct when their difference exceeds
# max(DIVERSITY_MIN_DIFF, floor(longer_length * DIVERSITY_RATIO))
DIVERSITY_RATIO = float(os.environ.get("GRIDPATH_DIVERSITY_RATIO", "0.2"))
DIVERSITY_MIN_DIFF = int(os.environ.get("GRIDPATH_DIVERSITY_MIN_DIFF", "2"))

# =============================================================================
# Replay / viewer
# =============================================================================

STEPS_PER_SEC = 20
SPEED_PRESETS = {"slow": 5, "medium": 20, "fast": 60}

# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.environ.get("GRIDPATH_LOG_LEVEL", "INFO")


def resolve_mode() -> str:
    """Replay mode: ENV GRIDPATH_MODE or CLI --mode= ; 'auto' (default) or 'step'."""
    mode = os.getenv("GRIDPATH_MODE", "auto").lower()
    for arg in sys.argv:
        if arg.startswith("--mode="):
            mode = arg.split("=", 1)[1].lower()
    return "step" if mode in ("step", "manual", "stepwise") else "auto"
