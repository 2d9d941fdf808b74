from .scheduler import MaintenanceScheduler
from .servicing import DockServicer, Servicer

__all__ = ["MaintenanceScheduler", "DockServicer", "Servicer"]
