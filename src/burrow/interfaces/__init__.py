from .hardware import Hardware
from .types import BlockKind, MaterialInfo, Side, Turn

__all__ = [
    "Hardware",
    "BlockKind",
    "MaterialInfo",
    "Side",
    "Turn",
]
