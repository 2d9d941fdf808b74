from .motion import MaintenanceHook, MotionController

__all__ = ["MaintenanceHook", "MotionController"]
