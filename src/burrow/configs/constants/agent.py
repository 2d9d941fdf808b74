# -----------------------------------------------------------------------------
# Agent Configuration Constants
# -----------------------------------------------------------------------------

# -----------------------------------------------------------------------------
# Motion
# -----------------------------------------------------------------------------
# Starting guess for the energy cost of one elementary translation.
INITIAL_AVERAGE_MOVE_COST = 15.0
# Weight of the newest sample in the running average (0.5 halves the history).
MOVE_COST_SMOOTHING = 0.5
# Idle time between clearing attempts that removed nothing.
OBSTRUCTION_WAIT_S = 0.5
WARN_EVERY_ATTEMPTS = 25
# Material names reported by classify for other agents.
AGENT_NAMES = ("agent",)

# -----------------------------------------------------------------------------
# Maintenance
# -----------------------------------------------------------------------------
# Energy kept in reserve on top of the estimated return trip.
FIXED_ENERGY_RESERVE = 5000.0
# Overestimate to account for obstacles such as gravel on the way back.
RETURN_SAFETY_FACTOR = 1.25
# Ask before a return trip that costs more than this share of max energy.
RISKY_RETURN_FRACTION = 0.5
FULL_CHARGE_MARGIN = 100.0
RECHARGE_POLL_S = 1.0
RESTOCK_POLL_S = 5.0
TOOL_POLL_S = 10.0
SERVICE_TIMEOUT_S = 600.0

# -----------------------------------------------------------------------------
# Exploration
# -----------------------------------------------------------------------------
# We abort early because the same vein is expected to show up again from an
# adjacent tunnel.
MAX_VEIN_DEPTH = 8
INTERESTING_PATTERN = r".*[oO]re.*"
EXHAUSTIVE = True

# -----------------------------------------------------------------------------
# Tunnels
# -----------------------------------------------------------------------------
WALL_THICKNESS = 2
MAX_EDGE = 8
MARKER_INTERVAL = 11
MARKER_INITIAL_COUNTDOWN = 2
MARKER_STACKS = 1
# Free cargo slots needed for mined material, on top of the marker stacks.
RESERVED_CARGO_SLOTS = 2

# -----------------------------------------------------------------------------
# Hardware
# -----------------------------------------------------------------------------
HARDWARE_NAME_SIM = "sim"
DEFAULT_CONFIG_FILE = "config/burrow.yaml"

# -----------------------------------------------------------------------------
# Exit codes
# -----------------------------------------------------------------------------
EXIT_OK = 0
EXIT_INSUFFICIENT_CARGO = 3
EXIT_RETURN_DECLINED = 4
EXIT_INTERNAL_ERROR = 70
