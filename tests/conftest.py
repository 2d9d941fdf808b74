from collections import defaultdict
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from burrow.components.driver import TunnelDriver
from burrow.components.environment.grid_world import STONE, GridWorld
from burrow.components.maintenance.servicing import DockServicer
from burrow.components.navigation.context import AgentContext
from burrow.configs.constants.models import AgentConfig, MaintenanceConfig, MotionConfig
from burrow.controllers.motion import MotionController
from burrow.interfaces.hardware import Hardware
from burrow.interfaces.types import BlockKind, MaterialInfo, Side

_KINDS = {
    "air": BlockKind.EMPTY,
    "water": BlockKind.PASSABLE,
    "marker": BlockKind.PASSABLE,
}


class ScriptedHardware(Hardware):
    """Hardware fake driven by per-side stacks of material names.

    ``cells[side]`` lists what ``clear(side)`` will uncover, nearest first.
    The agent's surroundings do not shift when it moves, which keeps call
    sequences easy to assert on. Every primitive call is recorded in ``calls``.
    """

    def __init__(
        self,
        cells: Optional[Dict[Side, List[str]]] = None,
        energy: float = 10000.0,
        max_energy: float = 20000.0,
        move_cost: float = 10.0,
        can_classify: bool = True,
        free_slots: int = 10,
    ):
        self.cells: Dict[Side, List[str]] = defaultdict(list)
        for side, names in (cells or {}).items():
            self.cells[side] = list(names)
        self.energy = energy
        self._max_energy = max_energy
        self.move_cost = move_cost
        self._can_classify = can_classify
        self.free_slots = free_slots
        self.tool = True
        self.markers = 10
        self.calls: List[Tuple[str, object]] = []
        self.on_idle: Optional[Callable[["ScriptedHardware"], None]] = None

    def _top(self, side: Side) -> str:
        stack = self.cells[side]
        return stack[0] if stack else "air"

    def names(self, call: str) -> List[object]:
        return [arg for name, arg in self.calls if name == call]

    def detect(self, side):
        self.calls.append(("detect", side))
        return _KINDS.get(self._top(side), BlockKind.SOLID)

    @property
    def can_classify(self):
        return self._can_classify

    def classify(self, side):
        self.calls.append(("classify", side))
        name = self._top(side)
        if name == "air" or not self._can_classify:
            return None
        return MaterialInfo(name=name, kind=_KINDS.get(name, BlockKind.SOLID))

    def clear(self, side):
        self.calls.append(("clear", side))
        if self._top(side) in ("air", "agent", "water", "marker"):
            return False
        self.cells[side].pop(0)
        return True

    def translate(self, side):
        self.calls.append(("translate", side))
        if _KINDS.get(self._top(side), BlockKind.SOLID) is BlockKind.SOLID:
            return False
        self.energy -= self.move_cost
        return True

    def rotate(self, turn):
        self.calls.append(("rotate", turn))
        return True

    def energy_level(self):
        return self.energy

    def max_energy(self):
        return self._max_energy

    def tool_usable(self):
        return self.tool

    def consumable_stock(self):
        return self.markers

    def place_marker(self, side):
        self.calls.append(("place_marker", side))
        if self.markers < 1:
            return False
        self.markers -= 1
        return True

    def equip_fresh_tool(self):
        self.calls.append(("equip_fresh_tool", None))
        self.tool = True
        return True

    def deposit_cargo(self):
        self.calls.append(("deposit_cargo", None))
        return 0

    def withdraw_consumables(self, count):
        self.calls.append(("withdraw_consumables", count))
        self.markers += count
        return count

    def consumable_space(self):
        return max(0, 64 - self.markers)

    def free_cargo_slots(self):
        return self.free_slots

    def idle(self, seconds):
        self.calls.append(("idle", seconds))
        if self.on_idle is not None:
            self.on_idle(self)


def pose(world: GridWorld):
    """(position, heading) of the agent in a grid world."""
    return world.position, world.heading


def fast_maintenance(**overrides) -> MaintenanceConfig:
    values = dict(recharge_poll_s=1.0, restock_poll_s=1.0, tool_poll_s=1.0, service_timeout_s=30.0)
    values.update(overrides)
    return MaintenanceConfig(**values)


@pytest.fixture
def scripted() -> ScriptedHardware:
    return ScriptedHardware()


@pytest.fixture
def stone_world() -> GridWorld:
    """15x11x15 solid stone with the base in the middle, fully stocked."""
    return GridWorld.filled((15, 11, 15), STONE, base=(7, 5, 7), markers=64, max_energy=1e6)


@pytest.fixture
def context() -> AgentContext:
    return AgentContext.from_config(MotionConfig())


@pytest.fixture
def make_motion() -> Callable[..., MotionController]:
    def _make(hardware: Hardware, hook=None, config: Optional[MotionConfig] = None) -> MotionController:
        ctx = AgentContext.from_config(config or MotionConfig())
        return MotionController(hardware, ctx, config=config, maintenance_hook=hook)

    return _make


@pytest.fixture
def make_driver() -> Callable[..., TunnelDriver]:
    def _make(hardware: Hardware, config: Optional[AgentConfig] = None, **kwargs) -> TunnelDriver:
        config = config or AgentConfig(maintenance=fast_maintenance())
        kwargs.setdefault("servicer", DockServicer(config.maintenance))
        return TunnelDriver.from_config(hardware, config, **kwargs)

    return _make


