
from dataclasses import dataclass, field
from typing import List

from burrow.configs.constants import agent

# -----------------------------------------------------------------------------
# Configuration Models
# -----------------------------------------------------------------------------


@dataclass
class MotionConfig:
    """Motion controller tuning."""
    initial_average_move_cost: float = agent.INITIAL_AVERAGE_MOVE_COST
    move_cost_smoothing: float = agent.MOVE_COST_SMOOTHING
    obstruction_wait_s: float = agent.OBSTRUCTION_WAIT_S
    warn_every_attempts: int = agent.WARN_EVERY_ATTEMPTS
    # Materials that are other agents: waited out, never cleared.
    agent_names: List[str] = field(default_factory=lambda: list(agent.AGENT_NAMES))

    def __post_init__(self):
        """Validate motion configuration."""
        if self.initial_average_move_cost < 0:
            raise ValueError(f"initial_average_move_cost must be >= 0, got {self.initial_average_move_cost}")
        if not 0.0 < self.move_cost_smoothing <= 1.0:
            raise ValueError(f"move_cost_smoothing must be in (0, 1], got {self.move_cost_smoothing}")
        if self.obstruction_wait_s <= 0:
            raise ValueError("obstruction_wait_s must be positive")
        if self.warn_every_attempts < 1:
            raise ValueError("warn_every_attempts must be >= 1")
        if not all(self.agent_names):
            raise ValueError("agent_names must not contain empty names")


@dataclass
class MaintenanceConfig:
    """Thresholds for return trips and servicing at base."""
    fixed_reserve: float = agent.FIXED_ENERGY_RESERVE
    safety_factor: float = agent.RETURN_SAFETY_FACTOR
    risky_return_fraction: float = agent.RISKY_RETURN_FRACTION
    full_charge_margin: float = agent.FULL_CHARGE_MARGIN
    recharge_poll_s: float = agent.RECHARGE_POLL_S
    restock_poll_s: float = agent.RESTOCK_POLL_S
    tool_poll_s: float = agent.TOOL_POLL_S
    service_timeout_s: float = agent.SERVICE_TIMEOUT_S

    def __post_init__(self):
        """Validate maintenance configuration."""
        if self.fixed_reserve < 0:
            raise ValueError(f"fixed_reserve must be >= 0, got {self.fixed_reserve}")
        # A factor at or below 1 leaves no margin for obstacles on the way back.
        if self.safety_factor <= 1.0:
            raise ValueError(f"safety_factor must be > 1, got {self.safety_factor}")
        if not 0.0 < self.risky_return_fraction <= 1.0:
            raise ValueError(f"risky_return_fraction must be in (0, 1], got {self.risky_return_fraction}")
        for name in ("recharge_poll_s", "restock_poll_s", "tool_poll_s", "service_timeout_s"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")


@dataclass
class ExplorationConfig:
    """Vein exploration settings."""
    max_vein_depth: int = agent.MAX_VEIN_DEPTH
    interesting_pattern: str = agent.INTERESTING_PATTERN
    exhaustive: bool = agent.EXHAUSTIVE

    def __post_init__(self):
        if self.max_vein_depth < 0:
            raise ValueError(f"max_vein_depth must be >= 0, got {self.max_vein_depth}")
        if not self.interesting_pattern:
            raise ValueError("interesting_pattern must not be empty")


@dataclass
class TunnelConfig:
    """Tunnel and spiral layout."""
    max_edge: int = agent.MAX_EDGE
    marker_interval: int = agent.MARKER_INTERVAL
    marker_initial_countdown: int = agent.MARKER_INITIAL_COUNTDOWN
    marker_stacks: int = agent.MARKER_STACKS
    reserved_cargo_slots: int = agent.RESERVED_CARGO_SLOTS

    def __post_init__(self):
        """Validate tunnel configuration."""
        if self.max_edge < 1:
            raise ValueError(f"max_edge must be >= 1, got {self.max_edge}")
        if self.marker_interval < 1:
            raise ValueError("marker_interval must be >= 1")
        if self.marker_initial_countdown < 0:
            raise ValueError("marker_initial_countdown must be >= 0")
        if self.marker_stacks < 0 or self.reserved_cargo_slots < 0:
            raise ValueError("cargo slot requirements must be >= 0")

    @property
    def required_free_slots(self) -> int:
        return self.reserved_cargo_slots + self.marker_stacks


@dataclass
class AgentConfig:
    """Main configuration class for the excavation agent."""
    motion: MotionConfig = field(default_factory=MotionConfig)
    maintenance: MaintenanceConfig = field(default_factory=MaintenanceConfig)
    exploration: ExplorationConfig = field(default_factory=ExplorationConfig)
    tunnel: TunnelConfig = field(default_factory=TunnelConfig)
