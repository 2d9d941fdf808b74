"""
Move ledger: the agent's whole path from base as run-length encoded moves.

The ledger is the only navigation state the agent has. There is no map and no
absolute coordinate: going home means undoing the ledger, going back to work
means replaying what was undone.

Example ledger::

    [Move(side=BACK, count=10), Move(turn=LEFT, count=2)]

means the agent first moved back 10 cells, then turned left twice.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Optional, Protocol, Sequence, Union

from burrow.components.navigation.energy import EnergyState
from burrow.exceptions import InternalInconsistencyError
from burrow.interfaces.types import Side, Turn

logger = logging.getLogger(__name__)

Action = Union[Side, Turn]


@dataclass
class Move:
    """A run of identical elementary actions: a translation or a rotation."""

    side: Optional[Side] = None
    turn: Optional[Turn] = None
    count: int = 1

    def __post_init__(self):
        if (self.side is None) == (self.turn is None):
            raise ValueError("A move is either a translation (side) or a rotation (turn)")
        if self.side is not None and not self.side.is_translation:
            raise ValueError(f"Cannot translate towards {self.side.name}, turn first")
        if self.count < 0:
            raise ValueError(f"Move count must be >= 0, got {self.count}")

    @classmethod
    def of(cls, action: Action, count: int = 1) -> "Move":
        if isinstance(action, Side):
            return cls(side=action, count=count)
        return cls(turn=action, count=count)

    @property
    def action(self) -> Action:
        return self.side if self.side is not None else self.turn

    @property
    def is_translation(self) -> bool:
        return self.side is not None

    def matches(self, action: Action) -> bool:
        return self.action is action

    def copy(self) -> "Move":
        return Move(side=self.side, turn=self.turn, count=self.count)


class Mark(NamedTuple):
    """Snapshot handle: ledger length and the count within the last run."""

    index: int
    count: int


class LedgerActuator(Protocol):
    """Physical side of the ledger, implemented by the motion controller."""

    def perform(self, action: Action, forced: bool = False) -> bool:
        """Execute one elementary action and push it onto the ledger."""
        ...

    def reverse(self, action: Action) -> None:
        """Physically undo one elementary action without touching the ledger."""
        ...


class MoveLedger:
    """Reversible, run-length compressed history of moves from base."""

    def __init__(self, energy: Optional[EnergyState] = None, actuator: Optional[LedgerActuator] = None):
        self.energy = energy if energy is not None else EnergyState()
        self._actuator = actuator
        self._moves: List[Move] = []

    def attach(self, actuator: LedgerActuator) -> None:
        self._actuator = actuator

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[Move]:
        return (move.copy() for move in self._moves)

    @property
    def moves(self) -> List[Move]:
        return list(self)

    @property
    def distance_from_base(self) -> int:
        return self.energy.distance_from_base

    def translation_units(self) -> int:
        """Recount the distance from the runs themselves."""
        return sum(move.count for move in self._moves if move.is_translation)

    # ------------------------------------------------------------------
    # Recording
    # ------------------------------------------------------------------

    def push_translation(self, side: Side) -> None:
        if not side.is_translation:
            raise ValueError(f"Cannot translate towards {side.name}, turn first")
        self._push(side)
        self.energy.distance_from_base += 1

    def push_rotation(self, turn: Turn) -> None:
        self._push(turn)

    def push(self, action: Action) -> None:
        if isinstance(action, Side):
            self.push_translation(action)
        else:
            self.push_rotation(action)

    def _push(self, action: Action) -> None:
        if self._moves and self._moves[-1].matches(action):
            self._moves[-1].count += 1
        else:
            self._moves.append(Move.of(action))

    # ------------------------------------------------------------------
    # Undoing
    # ------------------------------------------------------------------

    def _require_actuator(self) -> LedgerActuator:
        if self._actuator is None:
            raise RuntimeError("MoveLedger has no actuator attached, cannot move physically")
        return self._actuator

    def _drop_unit(self) -> None:
        tip = self._moves[-1]
        tip.count -= 1
        if tip.is_translation:
            self.energy.distance_from_base -= 1
        if tip.count < 1:
            self._moves.pop()

    def _undo_unit(self) -> None:
        self._require_actuator().reverse(self._moves[-1].action)
        self._drop_unit()

    def _drop_run(self) -> None:
        tip = self._moves.pop()
        if tip.is_translation:
            self.energy.distance_from_base -= tip.count

    def pop_last_run(self) -> Optional[Move]:
        """Physically undo the most recent run and remove it.

        Say we moved forwards twice: this goes back twice. Returns a copy of
        the removed run, or None if the ledger is empty.
        """
        if not self._moves:
            return None
        removed = self._moves[-1].copy()
        for _ in range(removed.count):
            self._undo_unit()
        return removed

    def mark(self) -> Mark:
        if self._moves:
            return Mark(len(self._moves), self._moves[-1].count)
        return Mark(0, 0)

    def restore(self, mark: Mark, physically_move: bool = True) -> None:
        """Undo everything pushed after ``mark``.

        With ``physically_move=False`` only the bookkeeping is rolled back.
        That is only valid when the caller already guaranteed the agent
        stands at the marked pose.
        """
        index, count = mark
        if index < 0 or index > len(self._moves) or count < 0:
            raise InternalInconsistencyError(
                f"Invalid mark {tuple(mark)} for ledger of length {len(self._moves)}",
                {"mark": tuple(mark), "length": len(self._moves)},
            )
        if index == 0 and count != 0:
            raise InternalInconsistencyError(f"Invalid mark {tuple(mark)}: empty ledger has no run count")
        if index == len(self._moves) and index > 0 and count > self._moves[-1].count:
            raise InternalInconsistencyError(
                f"Mark {tuple(mark)} is ahead of the ledger tip {tuple(self.mark())}",
                {"mark": tuple(mark), "tip": tuple(self.mark())},
            )

        while len(self._moves) > index:
            if physically_move:
                self.pop_last_run()
            else:
                self._drop_run()

        if not self._moves:
            return
        tip = self._moves[-1]
        if tip.count < count:
            # The run at the mark was popped and replaced after marking.
            raise InternalInconsistencyError(
                f"Run at mark {tuple(mark)} only has {tip.count} units left",
                {"mark": tuple(mark), "tip": tuple(self.mark())},
            )
        while self._moves and len(self._moves) == index and self._moves[-1].count > count:
            if physically_move:
                self._undo_unit()
            else:
                self._drop_unit()

    def drain_all(self) -> List[Move]:
        """Physically unwind the whole ledger, oldest run first in the result."""
        drained: List[Move] = []
        move = self.pop_last_run()
        while move is not None:
            drained.insert(0, move)
            move = self.pop_last_run()
        logger.debug("Drained %d runs from the ledger", len(drained))
        return drained

    def replay(self, moves: Sequence[Move]) -> None:
        """Walk a drained path again with forced actions, re-filling the ledger."""
        actuator = self._require_actuator()
        for move in moves:
            for _ in range(move.count):
                if not actuator.perform(move.action, forced=True):
                    raise InternalInconsistencyError(
                        f"Forced {move.action.name} failed during replay",
                        {"move": move, "tip": tuple(self.mark())},
                    )
        logger.debug("Replayed %d runs, ledger tip now %s", len(moves), tuple(self.mark()))
