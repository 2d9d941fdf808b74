"""Strongly-typed config for the simulated `sim` hardware."""
from dataclasses import dataclass

from burrow.components.environment.grid_world import GridWorld
from burrow.configs.constants import world
from burrow.configs.hardware import HardwareConfig


@HardwareConfig.register_subclass("sim")
@dataclass
class SimWorldConfig(HardwareConfig):
    size_x: int = world.WORLD_SHAPE[0]
    size_y: int = world.WORLD_SHAPE[1]
    size_z: int = world.WORLD_SHAPE[2]
    seed: int = world.WORLD_SEED
    ore_density: float = world.ORE_DENSITY
    gravel_density: float = world.GRAVEL_DENSITY
    water_density: float = world.WATER_DENSITY

    max_energy: float = world.MAX_ENERGY
    move_cost: float = world.MOVE_COST
    turn_cost: float = world.TURN_COST
    clear_cost: float = world.CLEAR_COST
    recharge_rate: float = world.RECHARGE_RATE
    tool_durability: int = world.TOOL_DURABILITY
    spare_tools: int = world.SPARE_TOOLS
    marker_store: int = world.MARKER_STORE
    cargo_slots: int = world.CARGO_SLOTS

    def __post_init__(self):
        if min(self.size_x, self.size_y, self.size_z) < 3:
            raise ValueError("World must be at least 3 cells in every direction")
        densities = (self.ore_density, self.gravel_density, self.water_density)
        if any(d < 0 for d in densities) or sum(densities) > 1.0:
            raise ValueError(f"Material densities must be >= 0 and sum to <= 1, got {densities}")

    def build(self) -> GridWorld:
        return GridWorld.generate(
            shape=(self.size_x, self.size_y, self.size_z),
            seed=self.seed,
            ore_density=self.ore_density,
            gravel_density=self.gravel_density,
            water_density=self.water_density,
            max_energy=self.max_energy,
            move_cost=self.move_cost,
            turn_cost=self.turn_cost,
            clear_cost=self.clear_cost,
            recharge_rate=self.recharge_rate,
            tool_durability=self.tool_durability,
            spare_tools=self.spare_tools,
            marker_store=self.marker_store,
            cargo_slots=self.cargo_slots,
        )
