"""
Configuration constants for the rover simulator.

All fixed rules of the simulation in one place.
"""

# =============================================================================
# ALPHABETS
# =============================================================================

OBSTACLE = "Obs"
TERRAIN_TYPES = ("Fe", "Se", "W", "Si", "Zn", OBSTACLE)

FACINGS = ("North", "East", "South", "West")  # Clockwise order

COMMAND_SYMBOLS = ("F", "B", "L", "R", "S", "E")

# =============================================================================
# BATTERY (units per command)
# =============================================================================

MOVE_COST = 3
TURN_COST = 2
SAMPLE_COST = 8
EXTEND_PANELS_COST = 1
EXTEND_PANELS_GAIN = 10  # Net effect of E is +9

COMMAND_COSTS = {
    "F": MOVE_COST,
    "B": MOVE_COST,
    "L": TURN_COST,
    "R": TURN_COST,
    "S": SAMPLE_COST,
    "E": EXTEND_PANELS_COST,
}

# Battery change applied by each edge of the path search
BATTERY_DELTAS = {
    "F": -MOVE_COST,
    "B": -MOVE_COST,
    "L": -TURN_COST,
    "R": -TURN_COST,
    "E": EXTEND_PANELS_GAIN - EXTEND_PANELS_COST,
}

# =============================================================================
# OBSTACLE BACKOFF
# =============================================================================

# Tried in order when a move is blocked; index resets after a successful move
BACKOFF_SEQUENCES = (
    ("E", "R", "F"),
    ("E", "L", "F"),
    ("E", "L", "L", "F"),
    ("E", "B", "R", "F"),
    ("E", "B", "B", "L", "F"),
    ("E", "F", "F"),
    ("E", "F", "L", "F", "L", "F"),
)

# =============================================================================
# DEFAULTS (interactive session)
# =============================================================================

DEFAULT_TERRAIN = (
    ("Fe", "Fe", "Se"),
    ("W", "Si", "Obs"),
)
DEFAULT_BATTERY = 50
DEFAULT_POSITION = {"location": {"x": 0, "y": 0}, "facing": "East"}

# =============================================================================
# REQUEST LIMITS (A* cost grows with 4 x grid cells)
# =============================================================================

MAX_GRID_CELLS = 10000
MAX_COMMANDS = 10000

# =============================================================================
# RENDERING (BGR for OpenCV)
# =============================================================================

TERRAIN_COLORS = {
    "Fe": (19, 69, 139),  # Brown
    "Se": (0, 220, 220),  # Yellow
    "W": (220, 120, 0),  # Blue
    "Si": (0, 180, 0),  # Green
    "Zn": (200, 0, 200),  # Magenta
    "Obs": (0, 0, 200),  # Red
}
RENDER_CELL_PX = 48
RENDER_QUALITY = 80

# =============================================================================
# WEB INTERFACE
# =============================================================================

WEB_HOST = "0.0.0.0"
WEB_PORT = 12000
