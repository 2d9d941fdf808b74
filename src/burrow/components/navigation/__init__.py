from .context import AgentContext, StepObserverSlot
from .energy import EnergyState
from .ledger import LedgerActuator, Mark, Move, MoveLedger

__all__ = [
    "AgentContext",
    "StepObserverSlot",
    "EnergyState",
    "LedgerActuator",
    "Mark",
    "Move",
    "MoveLedger",
]
