"""
Voxel world simulation implementing the Hardware interface.

The world is a numpy array of material ids indexed ``[x, y, z]`` with ``y``
pointing up. The agent itself is not stored in the grid; other agents are,
as the uncleareable ``agent`` material.
"""
import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from burrow.configs.constants import world
from burrow.interfaces.hardware import Hardware
from burrow.interfaces.types import BlockKind, MaterialInfo, Side, Turn

logger = logging.getLogger(__name__)

Position = Tuple[int, int, int]


@dataclass(frozen=True)
class Material:
    id: int
    name: str
    kind: BlockKind
    hardness: float = 1.0
    clearable: bool = True
    falls: bool = False


MATERIALS: Tuple[Material, ...] = (
    Material(0, "air", BlockKind.EMPTY, hardness=0.0, clearable=False),
    Material(1, "stone", BlockKind.SOLID, hardness=1.5),
    Material(2, "dirt", BlockKind.SOLID, hardness=0.5),
    Material(3, "gravel", BlockKind.SOLID, hardness=0.6, falls=True),
    Material(4, "water", BlockKind.PASSABLE, hardness=100.0, clearable=False),
    Material(5, "coal_ore", BlockKind.SOLID, hardness=3.0),
    Material(6, "iron_ore", BlockKind.SOLID, hardness=3.0),
    Material(7, "gold_ore", BlockKind.SOLID, hardness=3.0),
    Material(8, "redstone_ore", BlockKind.SOLID, hardness=3.0),
    Material(9, "agent", BlockKind.SOLID, hardness=2.0, clearable=False),
    Material(10, "marker", BlockKind.PASSABLE, hardness=0.0, clearable=False),
)
MATERIAL_IDS: Dict[str, int] = {material.name: material.id for material in MATERIALS}

AIR = MATERIAL_IDS["air"]
STONE = MATERIAL_IDS["stone"]
DIRT = MATERIAL_IDS["dirt"]
GRAVEL = MATERIAL_IDS["gravel"]
WATER = MATERIAL_IDS["water"]
IRON_ORE = MATERIAL_IDS["iron_ore"]
AGENT = MATERIAL_IDS["agent"]
MARKER = MATERIAL_IDS["marker"]
ORES = tuple(material.id for material in MATERIALS if material.name.endswith("_ore"))

# Horizontal headings; turning right advances the index by one.
HEADINGS: Tuple[Position, ...] = ((0, 0, 1), (1, 0, 0), (0, 0, -1), (-1, 0, 0))


class GridWorld(Hardware):
    """Simulated agent body in a voxel grid.

    Tracks pose, energy, tool wear, markers and cargo. Idling at the base
    recharges the battery, so the maintenance loop runs against it unchanged.
    """

    def __init__(
        self,
        grid: np.ndarray,
        base: Position,
        heading: int = 0,
        max_energy: float = world.MAX_ENERGY,
        energy: Optional[float] = None,
        move_cost: float = world.MOVE_COST,
        turn_cost: float = world.TURN_COST,
        clear_cost: float = world.CLEAR_COST,
        recharge_rate: float = world.RECHARGE_RATE,
        tool_durability: int = world.TOOL_DURABILITY,
        spare_tools: int = world.SPARE_TOOLS,
        markers: int = 0,
        marker_stack_size: int = world.MARKER_STACK_SIZE,
        marker_store: int = world.MARKER_STORE,
        cargo_slots: int = world.CARGO_SLOTS,
        cargo_stack_size: int = world.CARGO_STACK_SIZE,
        can_classify: bool = True,
    ):
        grid = np.asarray(grid, dtype=np.int8)
        if grid.ndim != 3:
            raise ValueError(f"grid must be 3-dimensional, got shape {grid.shape}")
        self.grid = grid
        self.base: Position = tuple(int(v) for v in base)
        self._check_bounds(self.base)
        if self.grid[self.base] != AIR:
            raise ValueError(f"Base cell {self.base} must be air")

        self.position: Position = self.base
        self.heading = heading % len(HEADINGS)

        self._max_energy = float(max_energy)
        self.energy = self._max_energy if energy is None else float(energy)
        self.move_cost = move_cost
        self.turn_cost = turn_cost
        self.clear_cost = clear_cost
        self.recharge_rate = recharge_rate

        self.tool_durability = tool_durability
        self.durability = tool_durability
        self.spare_tools = spare_tools

        self.markers = markers
        self.marker_stack_size = marker_stack_size
        self.marker_store = marker_store

        self.cargo_slots = cargo_slots
        self.cargo_stack_size = cargo_stack_size
        self.cargo: Counter = Counter()
        self.deposited: Counter = Counter()
        self.lost_items = 0

        self._can_classify = can_classify
        self.idle_time = 0.0
        self.stats: Counter = Counter()

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def filled(cls, shape: Sequence[int], material: int = STONE, base: Optional[Position] = None, **kwargs) -> "GridWorld":
        """A world of a single material with an air pocket at the base."""
        grid = np.full(tuple(shape), material, dtype=np.int8)
        if base is None:
            base = tuple(size // 2 for size in shape)
        grid[tuple(base)] = AIR
        return cls(grid, base, **kwargs)

    @classmethod
    def generate(
        cls,
        shape: Sequence[int] = world.WORLD_SHAPE,
        seed: int = world.WORLD_SEED,
        ore_density: float = world.ORE_DENSITY,
        gravel_density: float = world.GRAVEL_DENSITY,
        water_density: float = world.WATER_DENSITY,
        **kwargs,
    ) -> "GridWorld":
        """Random stone world sprinkled with ores, gravel and water."""
        rng = np.random.default_rng(seed)
        grid = np.full(tuple(shape), STONE, dtype=np.int8)
        roll = rng.random(grid.shape)
        grid[roll < ore_density] = rng.choice(ORES, size=int(np.count_nonzero(roll < ore_density)))
        gravel_limit = ore_density + gravel_density
        grid[(roll >= ore_density) & (roll < gravel_limit)] = GRAVEL
        grid[(roll >= gravel_limit) & (roll < gravel_limit + water_density)] = WATER

        base = tuple(size // 2 for size in shape)
        grid[base] = AIR
        logger.info(
            f"🌍 Generated world {tuple(shape)} with seed {seed}: "
            f"{int(np.isin(grid, ORES).sum())} ore cells"
        )
        return cls(grid, base, **kwargs)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def pose(self) -> Tuple[Position, int]:
        return self.position, self.heading

    @property
    def at_base(self) -> bool:
        return self.position == self.base

    def offset(self, side: Side) -> Position:
        if side is Side.UP:
            return (0, 1, 0)
        if side is Side.DOWN:
            return (0, -1, 0)
        turns = {Side.FORWARD: 0, Side.RIGHT: 1, Side.BACK: 2, Side.LEFT: 3}[side]
        return HEADINGS[(self.heading + turns) % len(HEADINGS)]

    def neighbour(self, side: Side) -> Position:
        dx, dy, dz = self.offset(side)
        x, y, z = self.position
        return (x + dx, y + dy, z + dz)

    def _check_bounds(self, cell: Position) -> None:
        if any(v < 0 or v >= size for v, size in zip(cell, self.grid.shape)):
            raise RuntimeError(f"Cell {cell} is outside the world {self.grid.shape}")

    def material_at(self, cell: Position) -> Material:
        self._check_bounds(cell)
        return MATERIALS[int(self.grid[cell])]

    def set_material(self, cell: Position, material: int) -> None:
        self._check_bounds(cell)
        self.grid[cell] = material

    def set_relative(self, side: Side, material: int) -> Position:
        """Place ``material`` next to the agent; returns the absolute cell."""
        cell = self.neighbour(side)
        self.set_material(cell, material)
        return cell

    def count(self, material: int) -> int:
        return int(np.count_nonzero(self.grid == material))

    # ------------------------------------------------------------------
    # Hardware: sensing
    # ------------------------------------------------------------------

    def detect(self, side: Side) -> BlockKind:
        self.stats["detect"] += 1
        return self.material_at(self.neighbour(side)).kind

    @property
    def can_classify(self) -> bool:
        return self._can_classify

    def classify(self, side: Side) -> Optional[MaterialInfo]:
        if not self._can_classify:
            return None
        self.stats["classify"] += 1
        material = self.material_at(self.neighbour(side))
        if material.kind is BlockKind.EMPTY:
            return None
        return MaterialInfo(name=material.name, kind=material.kind, hardness=material.hardness)

    # ------------------------------------------------------------------
    # Hardware: actions
    # ------------------------------------------------------------------

    def _spend(self, cost: float) -> bool:
        if self.energy < cost:
            return False
        self.energy -= cost
        return True

    def clear(self, side: Side) -> bool:
        cell = self.neighbour(side)
        material = self.material_at(cell)
        if material.kind is not BlockKind.SOLID or not material.clearable:
            return False
        if self.durability <= 0 or not self._spend(self.clear_cost):
            return False

        self.stats["clear"] += 1
        self.durability -= 1
        self.grid[cell] = AIR
        self._stow(material.name)
        self._settle(cell)
        return True

    def _settle(self, cell: Position) -> None:
        # Falling material above an emptied cell drops down by one.
        x, y, z = cell
        while y + 1 < self.grid.shape[1] and MATERIALS[int(self.grid[x, y + 1, z])].falls:
            self.grid[x, y, z] = self.grid[x, y + 1, z]
            self.grid[x, y + 1, z] = AIR
            y += 1

    def translate(self, side: Side) -> bool:
        if not side.is_translation:
            raise ValueError(f"Cannot translate towards {side.name}")
        cell = self.neighbour(side)
        if self.material_at(cell).kind.blocks_movement:
            return False
        if not self._spend(self.move_cost):
            return False
        self.stats["translate"] += 1
        self.position = cell
        return True

    def rotate(self, turn: Turn) -> bool:
        if not self._spend(self.turn_cost):
            return False
        self.stats["rotate"] += 1
        step = 1 if turn is Turn.RIGHT else -1
        self.heading = (self.heading + step) % len(HEADINGS)
        return True

    def place_marker(self, side: Side) -> bool:
        if self.markers < 1:
            return False
        cell = self.neighbour(side)
        if self.material_at(cell).kind is not BlockKind.EMPTY:
            return False
        self.grid[cell] = MARKER
        self.markers -= 1
        self.stats["place_marker"] += 1
        return True

    def idle(self, seconds: float) -> None:
        self.idle_time += seconds
        if self.at_base:
            self.energy = min(self._max_energy, self.energy + self.recharge_rate * seconds)

    # ------------------------------------------------------------------
    # Hardware: resources
    # ------------------------------------------------------------------

    def energy_level(self) -> float:
        return self.energy

    def max_energy(self) -> float:
        return self._max_energy

    def tool_usable(self) -> bool:
        return self.durability > 0

    def consumable_stock(self) -> int:
        return self.markers

    def consumable_space(self) -> int:
        return max(0, self.marker_stack_size - self.markers)

    def _used_slots(self) -> int:
        return sum(math.ceil(count / self.cargo_stack_size) for count in self.cargo.values())

    def free_cargo_slots(self) -> int:
        return max(0, self.cargo_slots - self._used_slots())

    def _stow(self, name: str) -> None:
        fits_in_stack = self.cargo[name] % self.cargo_stack_size != 0
        if fits_in_stack or self.free_cargo_slots() > 0:
            self.cargo[name] += 1
        else:
            self.lost_items += 1

    # ------------------------------------------------------------------
    # Hardware: loadout, only available at base
    # ------------------------------------------------------------------

    def equip_fresh_tool(self) -> bool:
        if not self.at_base or self.spare_tools < 1:
            return False
        self.spare_tools -= 1
        self.durability = self.tool_durability
        return True

    def deposit_cargo(self) -> int:
        if not self.at_base:
            return 0
        total = sum(self.cargo.values())
        self.deposited.update(self.cargo)
        self.cargo.clear()
        return total

    def withdraw_consumables(self, count: int) -> int:
        if not self.at_base:
            return 0
        taken = max(0, min(count, self.marker_store, self.consumable_space()))
        self.marker_store -= taken
        self.markers += taken
        return taken
