from abc import ABC, abstractmethod
import logging
import time
from typing import Optional

from burrow.interfaces.types import BlockKind, MaterialInfo, Side, Turn

logger = logging.getLogger(__name__)


class Hardware(ABC):
    """Host-provided body of the agent.

    The core only talks to the world through this interface. All sides are
    relative to the agent's current facing.
    """

    @property
    def name(self) -> str:
        return self.__class__.__name__

    # Non-destructive probe of the adjacent cell
    @abstractmethod
    def detect(self, side: Side) -> BlockKind:
        pass

    # Optional richer sensing. Returns None for empty cells or when the
    # sensor is missing.
    def classify(self, side: Side) -> Optional[MaterialInfo]:
        return None

    @property
    def can_classify(self) -> bool:
        return False

    # Destructive action, consumes tool durability. True if something was removed.
    @abstractmethod
    def clear(self, side: Side) -> bool:
        pass

    # Elementary motion primitives. False means the move was obstructed.
    @abstractmethod
    def translate(self, side: Side) -> bool:
        pass

    @abstractmethod
    def rotate(self, turn: Turn) -> bool:
        pass

    @abstractmethod
    def energy_level(self) -> float:
        pass

    @abstractmethod
    def max_energy(self) -> float:
        pass

    @abstractmethod
    def tool_usable(self) -> bool:
        pass

    @abstractmethod
    def consumable_stock(self) -> int:
        pass

    @abstractmethod
    def place_marker(self, side: Side) -> bool:
        pass

    # Loadout operations. Only the servicing collaborator uses these.
    @abstractmethod
    def equip_fresh_tool(self) -> bool:
        pass

    @abstractmethod
    def deposit_cargo(self) -> int:
        pass

    @abstractmethod
    def withdraw_consumables(self, count: int) -> int:
        pass

    @abstractmethod
    def consumable_space(self) -> int:
        pass

    @abstractmethod
    def free_cargo_slots(self) -> int:
        pass

    def cargo_full(self) -> bool:
        return self.free_cargo_slots() <= 0

    def idle(self, seconds: float) -> None:
        """Block for ``seconds``. The only way the core waits."""
        time.sleep(seconds)
