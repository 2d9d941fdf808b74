import logging
from typing import Callable, Optional

from burrow.components.maintenance.servicing import DockServicer, Servicer
from burrow.components.navigation.context import AgentContext
from burrow.configs.constants.models import MaintenanceConfig
from burrow.exceptions import InternalInconsistencyError, ReturnTripDeclined
from burrow.interfaces.hardware import Hardware

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]

RISKY_RETURN_PROMPT = (
    "Going back will cost me {share:.0%} of my energy. There's a good chance "
    "I will not return. Do you want to send me to my doom anyway?"
)


def _decline(message: str) -> bool:
    logger.warning(f"No operator to ask, declining: {message}")
    return False


class MaintenanceScheduler:
    """Decides when to go home, and takes the agent there and back.

    Instances are used as the motion controller's maintenance hook:
    ``scheduler(cargo_full)`` runs a maintenance cycle when resources are
    low, and always when the cargo hold is full.
    """

    def __init__(
        self,
        hardware: Hardware,
        context: AgentContext,
        config: Optional[MaintenanceConfig] = None,
        servicer: Optional[Servicer] = None,
        confirm: Optional[Confirm] = None,
        force_continue: bool = False,
    ):
        self.hardware = hardware
        self.context = context
        self.config = config or MaintenanceConfig()
        self.servicer = servicer or DockServicer(self.config)
        self.confirm = confirm or _decline
        self.force_continue = force_continue
        self._in_progress = False
        self.cycles = 0

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    def __call__(self, cargo_full: bool = False) -> None:
        self.run_maintenance(force=cargo_full)

    def cost_to_return(self) -> float:
        """Energy needed to get home, with a fixed reserve and a margin for obstacles."""
        energy = self.context.energy
        return (
            self.config.fixed_reserve
            + energy.average_move_cost * energy.distance_from_base * self.config.safety_factor
        )

    def needs_maintenance(self) -> bool:
        return (
            not self.hardware.tool_usable()
            or self.hardware.energy_level() < self.cost_to_return()
            or self.hardware.consumable_stock() < 1
        )

    def run_maintenance(self, force: bool = False) -> bool:
        """Go back to base, service, and return to the exact same pose.

        Returns True when a maintenance cycle ran.

        Raises:
            ReturnTripDeclined: the operator refused a risky trip back out.
            InternalInconsistencyError: the ledger does not end where it started.
        """
        # A cycle in progress moves with forced steps only; nested checks are no-ops.
        if self._in_progress:
            return False
        if not force and not self.needs_maintenance():
            return False

        ledger = self.context.ledger
        self._in_progress = True
        try:
            with self.context.observers.suspended():
                return_cost = self.cost_to_return()
                mark = ledger.mark()

                logger.info(f"🔧 Setting up for maintenance (distance {ledger.distance_from_base})")
                moves = ledger.drain_all()
                self._check_at_base()

                self.servicer.service(self.hardware)
                # Going back out without a tool or markers only leads straight back here.
                while not self._loadout_ready():
                    logger.warning("Still missing a working tool or markers, waiting at base.")
                    self.servicer.service(self.hardware)

                if moves:
                    self._confirm_return(return_cost)
                    logger.info("Returning to where I left off.")
                    ledger.replay(moves)

                if ledger.mark() != mark:
                    raise InternalInconsistencyError(
                        f"Ledger mark {tuple(ledger.mark())} differs from {tuple(mark)} after maintenance",
                        {"expected": tuple(mark), "actual": tuple(ledger.mark())},
                    )
        finally:
            self._in_progress = False

        self.cycles += 1
        logger.info(f"✅ Maintenance cycle {self.cycles} complete")
        return True

    def return_to_base(self) -> None:
        """Final trip home: drain the whole ledger and service, without replay."""
        self._in_progress = True
        try:
            with self.context.observers.suspended():
                logger.info(f"Returning to base (distance {self.context.ledger.distance_from_base})")
                self.context.ledger.drain_all()
                self._check_at_base()
                self.servicer.service(self.hardware)
        finally:
            self._in_progress = False

    def _loadout_ready(self) -> bool:
        return self.hardware.tool_usable() and self.hardware.consumable_stock() >= 1

    def _check_at_base(self) -> None:
        ledger = self.context.ledger
        if ledger.distance_from_base != 0 or len(ledger) != 0:
            raise InternalInconsistencyError(
                f"Not at base after draining the ledger (distance {ledger.distance_from_base})",
                {"distance": ledger.distance_from_base, "runs": len(ledger)},
            )

    def _confirm_return(self, return_cost: float) -> None:
        max_energy = self.hardware.max_energy()
        if return_cost <= self.config.risky_return_fraction * max_energy:
            return
        if self.force_continue:
            logger.warning(f"Return cost {return_cost:.1f} is risky (max {max_energy:.1f}), continuing anyway")
            return
        share = return_cost / max_energy if max_energy > 0 else 1.0
        if not self.confirm(RISKY_RETURN_PROMPT.format(share=share)):
            logger.error("Operator declined the risky return trip")
            raise ReturnTripDeclined(return_cost, max_energy)
