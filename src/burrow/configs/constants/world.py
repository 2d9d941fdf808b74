# -----------------------------------------------------------------------------
# Simulated World Constants
# -----------------------------------------------------------------------------

WORLD_SHAPE = (64, 32, 64)  # x, y (up), z
WORLD_SEED = 0
ORE_DENSITY = 0.02
GRAVEL_DENSITY = 0.01
WATER_DENSITY = 0.0

# -----------------------------------------------------------------------------
# Agent body
# -----------------------------------------------------------------------------
MAX_ENERGY = 20000.0
MOVE_COST = 15.0
TURN_COST = 2.5
CLEAR_COST = 5.0
RECHARGE_RATE = 2000.0  # energy per idle second at base

TOOL_DURABILITY = 250
SPARE_TOOLS = 8

MARKER_STACK_SIZE = 64
MARKER_STORE = 256

CARGO_SLOTS = 16
CARGO_STACK_SIZE = 64
