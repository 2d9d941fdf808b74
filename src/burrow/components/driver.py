import logging
import math
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from burrow.components.explorer import InterestPredicate, VeinExplorer
from burrow.components.maintenance.scheduler import Confirm, MaintenanceScheduler
from burrow.components.maintenance.servicing import Servicer
from burrow.components.navigation.context import AgentContext
from burrow.configs.constants import agent
from burrow.configs.constants.models import AgentConfig, TunnelConfig
from burrow.controllers.motion import MotionController
from burrow.exceptions import InsufficientCargoSpaceError
from burrow.interfaces.hardware import Hardware
from burrow.interfaces.types import Side, Turn

logger = logging.getLogger(__name__)


class MarkerPlacer:
    """Step observer placing a marker above the agent at a fixed interval.

    A failed placement (usually: out of markers) is retried on the next step.
    """

    def __init__(
        self,
        hardware: Hardware,
        interval: int = agent.MARKER_INTERVAL,
        initial_countdown: int = agent.MARKER_INITIAL_COUNTDOWN,
    ):
        self.hardware = hardware
        self.interval = interval
        self.initial_countdown = initial_countdown
        self.countdown = initial_countdown
        self.placed = 0

    def reset(self) -> None:
        self.countdown = self.initial_countdown

    def __call__(self) -> None:
        if self.countdown >= 1:
            self.countdown -= 1
            return
        if self.hardware.place_marker(Side.UP):
            self.placed += 1
            self.countdown = self.interval


@dataclass
class SpiralPlan:
    """Layout of a spiral layer: edge ``e`` is ``(wall_thickness + 1) * ceil(e / 2)`` cells long."""
    wall_thickness: int = agent.WALL_THICKNESS
    starting_edge: int = 1
    starting_steps: int = 0
    max_edge: int = agent.MAX_EDGE

    def __post_init__(self):
        if self.wall_thickness < 0:
            raise ValueError(f"wall_thickness must be >= 0, got {self.wall_thickness}")
        if self.starting_edge < 1:
            raise ValueError(f"starting_edge must be >= 1, got {self.starting_edge}")
        if self.starting_steps < 0:
            raise ValueError(f"starting_steps must be >= 0, got {self.starting_steps}")
        if self.max_edge < 1:
            raise ValueError(f"max_edge must be >= 1, got {self.max_edge}")

    def steps_in_edge(self, edge: int) -> int:
        return (self.wall_thickness + 1) * math.ceil(edge / 2)

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Yield ``(edge, steps still to dig)`` for every remaining edge."""
        completed = self.starting_steps
        for edge in range(self.starting_edge, self.max_edge + 1):
            yield edge, max(0, self.steps_in_edge(edge) - completed)
            completed = 0

    def total_steps(self) -> int:
        return sum(steps for _, steps in self.edges())


class TunnelDriver:
    """Digs 1x2 tunnels laid out as a spiral, checking the walls for veins."""

    def __init__(
        self,
        hardware: Hardware,
        context: AgentContext,
        motion: MotionController,
        scheduler: MaintenanceScheduler,
        explorer: VeinExplorer,
        config: Optional[TunnelConfig] = None,
    ):
        self.hardware = hardware
        self.context = context
        self.motion = motion
        self.scheduler = scheduler
        self.explorer = explorer
        self.config = config or TunnelConfig()
        self.marker_placer = MarkerPlacer(
            hardware,
            interval=self.config.marker_interval,
            initial_countdown=self.config.marker_initial_countdown,
        )

    @classmethod
    def from_config(
        cls,
        hardware: Hardware,
        config: Optional[AgentConfig] = None,
        confirm: Optional[Confirm] = None,
        force_continue: bool = False,
        servicer: Optional[Servicer] = None,
        is_interesting: Optional[InterestPredicate] = None,
    ) -> "TunnelDriver":
        """Wire up a complete agent around ``hardware``."""
        config = config or AgentConfig()
        context = AgentContext.from_config(config.motion)
        scheduler = MaintenanceScheduler(
            hardware,
            context,
            config=config.maintenance,
            servicer=servicer,
            confirm=confirm,
            force_continue=force_continue,
        )
        motion = MotionController(hardware, context, config=config.motion, maintenance_hook=scheduler)
        explorer = VeinExplorer(hardware, motion, config=config.exploration, is_interesting=is_interesting)
        return cls(hardware, context, motion, scheduler, explorer, config=config.tunnel)

    def check_cargo_space(self) -> None:
        free_slots = self.hardware.free_cargo_slots()
        required = self.config.required_free_slots
        if free_slots < required:
            logger.error("Sorry, but I need more empty cargo space to work.")
            raise InsufficientCargoSpaceError(free_slots, required)

    def dig_tunnel(self, length: int, exhaustive: Optional[bool] = None) -> bool:
        """Dig a 1x2 tunnel ``length`` cells forward, checking for veins at each cell.

        PRE: facing the bottom front cell of the tunnel. POST: at its end.
        """
        remaining = length
        while remaining > 0 and self.motion.step(Side.FORWARD):
            self.motion.clear(Side.UP)
            self.explorer.explore_around(exhaustive)
            remaining -= 1
        return remaining < 1

    def dig_spiral(self, plan: SpiralPlan) -> None:
        observers = self.context.observers
        for edge, steps in plan.edges():
            logger.info(f"Digging edge {edge}/{plan.max_edge} ({steps} steps)")
            self.marker_placer.reset()
            observers.subscribe(self.marker_placer)
            try:
                self.dig_tunnel(steps, exhaustive=self.explorer.config.exhaustive)
                self.motion.turn(Turn.RIGHT)
            finally:
                observers.clear()

    def run(self, plan: SpiralPlan) -> None:
        self.check_cargo_space()
        logger.info(f"⛏️  Mining a spiral with {plan.wall_thickness} block thick walls")
        # Stock up before leaving base.
        self.scheduler.run_maintenance(force=True)
        self.dig_spiral(plan)
        self.scheduler.return_to_base()
        logger.info("All done!")
