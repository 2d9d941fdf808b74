import logging
import re
from typing import Callable, Optional

from burrow.configs.constants.models import ExplorationConfig
from burrow.controllers.motion import MotionController
from burrow.interfaces.hardware import Hardware
from burrow.interfaces.types import MaterialInfo, Side

logger = logging.getLogger(__name__)

InterestPredicate = Callable[[Optional[MaterialInfo]], bool]


def material_pattern_predicate(pattern: str) -> InterestPredicate:
    """Predicate accepting materials whose name matches ``pattern``."""
    compiled = re.compile(pattern)

    def is_interesting(info: Optional[MaterialInfo]) -> bool:
        return info is not None and bool(info.name) and compiled.search(info.name) is not None

    return is_interesting


class VeinExplorer:
    """Follows veins of interesting material by depth-first search.

    Every excursion is bracketed by a ledger mark and a physical restore, so
    the agent always ends where it started, facing the same way.
    """

    def __init__(
        self,
        hardware: Hardware,
        motion: MotionController,
        config: Optional[ExplorationConfig] = None,
        is_interesting: Optional[InterestPredicate] = None,
    ):
        self.hardware = hardware
        self.motion = motion
        self.config = config or ExplorationConfig()
        self.is_interesting = is_interesting or material_pattern_predicate(self.config.interesting_pattern)
        self._warned_no_sensor = False

    @property
    def available(self) -> bool:
        if self.hardware.can_classify:
            return True
        if not self._warned_no_sensor:
            logger.warning("No classification sensor installed, vein exploration disabled")
            self._warned_no_sensor = True
        return False

    def explore(self, max_depth: Optional[int] = None) -> None:
        if max_depth is None:
            max_depth = self.config.max_vein_depth
        if max_depth <= 0:
            return

        ledger = self.motion.ledger
        for side in Side:
            if not self.is_interesting(self.hardware.classify(side)):
                continue
            mark = ledger.mark()
            self.motion.turn_towards(side)
            self.motion.step(side if side.is_vertical else Side.FORWARD)
            self.explore(max_depth - 1)
            ledger.restore(mark)

    def explore_around(self, exhaustive: Optional[bool] = None) -> None:
        """Explore from the current cell and, in exhaustive mode, from the one above."""
        if not self.available:
            return
        if exhaustive is None:
            exhaustive = self.config.exhaustive

        self.explore()
        if exhaustive:
            mark = self.motion.ledger.mark()
            self.motion.step(Side.UP)
            self.explore()
            self.motion.ledger.restore(mark)
