from .grid_world import MATERIAL_IDS, MATERIALS, GridWorld, Material

__all__ = ["GridWorld", "Material", "MATERIALS", "MATERIAL_IDS"]
