import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from burrow.components.navigation.energy import EnergyState
from burrow.components.navigation.ledger import MoveLedger
from burrow.configs.constants.models import MotionConfig

logger = logging.getLogger(__name__)

StepObserver = Callable[[], None]


class StepObserverSlot:
    """Single-subscriber hook fired after every successful translation.

    Suspension nests: the observer fires again only once every ``suspend()``
    has been matched by a ``resume()``.
    """

    def __init__(self):
        self._observer: Optional[StepObserver] = None
        self._suspended = 0

    @property
    def observer(self) -> Optional[StepObserver]:
        return self._observer

    @property
    def is_suspended(self) -> bool:
        return self._suspended > 0

    def subscribe(self, observer: StepObserver) -> None:
        if self._observer is not None and self._observer is not observer:
            logger.debug("Replacing step observer %r", self._observer)
        self._observer = observer

    def clear(self) -> None:
        self._observer = None

    def suspend(self) -> None:
        self._suspended += 1

    def resume(self) -> None:
        if self._suspended == 0:
            raise RuntimeError("resume() without matching suspend()")
        self._suspended -= 1

    @contextmanager
    def suspended(self) -> Iterator[None]:
        self.suspend()
        try:
            yield
        finally:
            self.resume()

    def notify(self) -> None:
        if self._observer is not None and not self.is_suspended:
            self._observer()


@dataclass
class AgentContext:
    """Everything the components share about the agent's own state."""

    energy: EnergyState = field(default_factory=EnergyState)
    ledger: MoveLedger = field(init=False)
    observers: StepObserverSlot = field(default_factory=StepObserverSlot)

    def __post_init__(self):
        self.ledger = MoveLedger(energy=self.energy)

    @classmethod
    def from_config(cls, motion: MotionConfig) -> "AgentContext":
        return cls(
            energy=EnergyState(
                average_move_cost=motion.initial_average_move_cost,
                smoothing=motion.move_cost_smoothing,
            )
        )
