"""Custom exceptions for burrow.

Obstructions and low resources are never raised: the motion controller and
the maintenance scheduler absorb them. Only the conditions below escape.
"""

from typing import Any, Optional


class BurrowError(Exception):
    """Base exception for burrow."""

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}


class InternalInconsistencyError(BurrowError):
    """The move ledger no longer describes where the agent is.

    Raised on a mark mismatch after a maintenance round trip, a non-zero
    distance after a full drain, or an invalid mark. Always fatal.
    """

    pass


class InsufficientCargoSpaceError(BurrowError):
    """Startup precondition: not enough free cargo slots to work."""

    def __init__(self, free_slots: int, required_slots: int):
        super().__init__(
            f"Need at least {required_slots} free cargo slots, found {free_slots}",
            {"free_slots": free_slots, "required_slots": required_slots},
        )
        self.free_slots = free_slots
        self.required_slots = required_slots


class ReturnTripDeclined(BurrowError):
    """The operator refused a return trip that would likely strand the agent."""

    def __init__(self, return_cost: float, max_energy: float):
        super().__init__(
            f"Return trip declined (cost {return_cost:.1f} of max {max_energy:.1f})",
            {"return_cost": return_cost, "max_energy": max_energy},
        )
        self.return_cost = return_cost
        self.max_energy = max_energy
