import logging
from typing import Callable, Optional, Union

from burrow.components.navigation.context import AgentContext
from burrow.configs.constants.models import MotionConfig
from burrow.interfaces.hardware import Hardware
from burrow.interfaces.types import Side, Turn

logger = logging.getLogger(__name__)

# Called before every clearing attempt of a non-forced step.
# Parameter: is the cargo hold full.
MaintenanceHook = Callable[[bool], None]


class MotionController:
    """Turns "go that way" into guaranteed physical progress.

    Obstructions are cleared and retried until the step succeeds. Successful
    steps are pushed onto the move ledger, translation costs are folded into
    the energy average, and the step observer is notified.

    Non-forced steps call the maintenance hook before clearing, so a
    maintenance trip can happen in the middle of any step. Forced steps
    (ledger undo and replay) never do.
    """

    def __init__(
        self,
        hardware: Hardware,
        context: AgentContext,
        config: Optional[MotionConfig] = None,
        maintenance_hook: Optional[MaintenanceHook] = None,
    ):
        self.hardware = hardware
        self.context = context
        self.config = config or MotionConfig()
        self._maintenance_hook = maintenance_hook
        self._agent_names = frozenset(self.config.agent_names)

        self.ledger = context.ledger
        self.energy = context.energy
        self.observers = context.observers
        self.ledger.attach(self)

    def set_maintenance_hook(self, hook: Optional[MaintenanceHook]) -> None:
        self._maintenance_hook = hook

    # ------------------------------------------------------------------
    # Public steps
    # ------------------------------------------------------------------

    def step(self, direction: Union[Side, Turn]) -> bool:
        """One elementary translation (Side) or rotation (Turn)."""
        return self.perform(direction, forced=False)

    def move(self, side: Side, forced: bool = False) -> bool:
        if not side.is_translation:
            raise ValueError(f"Cannot move towards {side.name}, turn first")
        self._translate(side, forced=forced)
        self.ledger.push_translation(side)
        self.observers.notify()
        return True

    def turn(self, turn: Turn) -> bool:
        self._rotate(turn)
        self.ledger.push_rotation(turn)
        return True

    def turn_towards(self, side: Side) -> None:
        """Turn to face the specified relative side."""
        if side is Side.LEFT:
            self.turn(Turn.LEFT)
        elif side is Side.RIGHT:
            self.turn(Turn.RIGHT)
        elif side is Side.BACK:
            self.turn(Turn.LEFT)
            self.turn(Turn.LEFT)

    def clear(self, side: Side, forced: bool = False) -> bool:
        """Dig out the cell on ``side`` until it can be moved into."""
        attempts = 0
        while True:
            # Check for maintenance first, to make sure we make the return trip
            # before the batteries run out or mined blocks have nowhere to go.
            if not forced:
                self._run_maintenance_hook()

            if not self.hardware.detect(side).blocks_movement:
                return True

            attempts += 1
            removed = False
            info = self.hardware.classify(side) if self.hardware.can_classify else None
            if info is not None and info.name in self._agent_names:
                logger.debug(f"Another agent is in the way on {side.name}, waiting")
            else:
                removed = self.hardware.clear(side)

            if not removed:
                self.hardware.idle(self.config.obstruction_wait_s)
            if attempts % self.config.warn_every_attempts == 0:
                logger.warning(f"Still obstructed on {side.name} after {attempts} clearing attempts")

    # ------------------------------------------------------------------
    # Ledger actuator
    # ------------------------------------------------------------------

    def perform(self, action: Union[Side, Turn], forced: bool = False) -> bool:
        if isinstance(action, Turn):
            return self.turn(action)
        return self.move(action, forced=forced)

    def reverse(self, action: Union[Side, Turn]) -> None:
        if isinstance(action, Turn):
            self._rotate(action.inverse)
            return
        self._translate(action.opposite, forced=True)
        self.observers.notify()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run_maintenance_hook(self) -> None:
        if self._maintenance_hook is not None:
            self._maintenance_hook(self.hardware.cargo_full())

    def _rotate(self, turn: Turn) -> None:
        while not self.hardware.rotate(turn):
            logger.debug(f"Rotation {turn.value} refused, retrying")
            self.hardware.idle(self.config.obstruction_wait_s)

    def _record_cost(self, energy_before: float) -> None:
        self.energy.fold_move_cost(energy_before - self.hardware.energy_level())

    def _translate(self, side: Side, forced: bool) -> None:
        if side is Side.BACK:
            if not forced:
                self._run_maintenance_hook()
            energy_before = self.hardware.energy_level()
            if not self.hardware.detect(side).blocks_movement and self.hardware.translate(side):
                self._record_cost(energy_before)
                return
            self._force_backward()
            return

        while True:
            self.clear(side, forced=forced)
            energy_before = self.hardware.energy_level()
            if self.hardware.translate(side):
                self._record_cost(energy_before)
                return
            logger.debug(f"Move {side.name} failed after clearing, retrying")

    def _force_backward(self) -> None:
        # Tools only work towards the front: turn around, dig through, turn back.
        # Only the forward move itself is sampled for the energy average.
        self._rotate(Turn.LEFT)
        self._rotate(Turn.LEFT)
        while True:
            self.clear(Side.FORWARD, forced=True)
            energy_before = self.hardware.energy_level()
            if self.hardware.translate(Side.FORWARD):
                self._record_cost(energy_before)
                break
        self._rotate(Turn.LEFT)
        self._rotate(Turn.LEFT)
