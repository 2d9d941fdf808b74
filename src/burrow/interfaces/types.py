from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

# Hardware -> core contracts: relative directions and sensing results.
# Notes:
# - Sides are relative to the agent's current facing, never absolute.
# - The integer values of Side fix the probing order used by vein exploration.


class Side(IntEnum):
    """Relative side of the agent."""

    DOWN = 0
    UP = 1
    BACK = 2
    FORWARD = 3
    RIGHT = 4
    LEFT = 5

    @property
    def opposite(self) -> "Side":
        return _OPPOSITE_SIDES[self]

    @property
    def is_vertical(self) -> bool:
        return self in (Side.UP, Side.DOWN)

    @property
    def is_translation(self) -> bool:
        """Sides the agent can move towards without turning first."""
        return self not in (Side.LEFT, Side.RIGHT)


_OPPOSITE_SIDES = {
    Side.DOWN: Side.UP,
    Side.UP: Side.DOWN,
    Side.BACK: Side.FORWARD,
    Side.FORWARD: Side.BACK,
    Side.RIGHT: Side.LEFT,
    Side.LEFT: Side.RIGHT,
}


class Turn(Enum):
    """A 90 degree rotation in place."""

    LEFT = "left"
    RIGHT = "right"

    @property
    def inverse(self) -> "Turn":
        return Turn.RIGHT if self is Turn.LEFT else Turn.LEFT


class BlockKind(Enum):
    """Result of a non-destructive probe."""

    EMPTY = "empty"
    PASSABLE = "passable"  # liquids, replaceable blocks, markers
    SOLID = "solid"

    @property
    def blocks_movement(self) -> bool:
        return self is BlockKind.SOLID


@dataclass(frozen=True)
class MaterialInfo:
    """Richer sensing result for a single adjacent cell.

    - name: material identifier as reported by the sensor (e.g. "iron_ore").
    - kind: movement classification, same values as ``detect``.
    - hardness: optional clearing difficulty, informational only.
    """

    name: str
    kind: BlockKind
    hardness: Optional[float] = None
