"""
config.py — Defaults
====================
Module-level defaults.  The Flask app loads DEFAULTS into `app.config`
and then applies `ALGOVIZ_*` environment overrides, e.g.

    ALGOVIZ_DEFAULT_SPEED=fast ALGOVIZ_MAX_ARRAY_SIZE=500 algoviz
"""

# ---------------------------------------------------------------------------
# Speed presets (seconds of pacing per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "instant": 0.0,
    "slow":    1.0,    # teaching mode
    "medium":  0.4,
    "fast":    0.15,   # demo mode
    "turbo":   0.05,
}
DEFAULT_SPEED = "medium"

# ---------------------------------------------------------------------------
# Data-model defaults
# ---------------------------------------------------------------------------
DEFAULT_ARRAY_SIZE   = 30
MAX_ARRAY_SIZE       = 200
DEFAULT_GRID_ROWS    = 20
DEFAULT_GRID_COLS    = 30
MAX_GRID_CELLS       = 10_000
DEFAULT_WALL_PROB    = 0.3
STEP_HISTORY         = 500     # steps kept by the HTTP layer's recorder

LOG_LEVEL = "INFO"
HOST      = "127.0.0.1"
PORT      = 5000

DEFAULTS = {
    "DEFAULT_SPEED":      DEFAULT_SPEED,
    "DEFAULT_ARRAY_SIZE": DEFAULT_ARRAY_SIZE,
    "MAX_ARRAY_SIZE":     MAX_ARRAY_SIZE,
    "DEFAULT_GRID_ROWS":  DEFAULT_GRID_ROWS,
    "DEFAULT_GRID_COLS":  DEFAULT_GRID_COLS,
    "MAX_GRID_CELLS":     MAX_GRID_CELLS,
    "DEFAULT_WALL_PROB":  DEFAULT_WALL_PROB,
    "STEP_HISTORY":       STEP_HISTORY,
    "LOG_LEVEL":          LOG_LEVEL,
    "HOST":               HOST,
    "PORT":               PORT,
}
