from dataclasses import dataclass

from burrow.configs.constants import agent


@dataclass
class EnergyState:
    """Energy bookkeeping owned by the motion controller.

    - average_move_cost: smoothed energy cost of one elementary translation.
    - distance_from_base: translation units currently recorded in the ledger.
      The ledger adjusts it on every push and removal, so it always equals the
      sum of the translation run counts.
    """

    average_move_cost: float = agent.INITIAL_AVERAGE_MOVE_COST
    smoothing: float = agent.MOVE_COST_SMOOTHING
    distance_from_base: int = 0

    def fold_move_cost(self, cost: float) -> bool:
        """Fold one sampled translation cost into the running average.

        Only positive costs are folded; energy gained while moving (e.g. from
        a generator) says nothing about the cost of moving.
        """
        if cost <= 0:
            return False
        self.average_move_cost += self.smoothing * (cost - self.average_move_cost)
        return True
