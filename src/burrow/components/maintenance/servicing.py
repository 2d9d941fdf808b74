from abc import ABC, abstractmethod
import logging
from typing import Optional

from burrow.configs.constants.models import MaintenanceConfig
from burrow.interfaces.hardware import Hardware
from burrow.utils.waiting import wait_until

logger = logging.getLogger(__name__)


class Servicer(ABC):
    """Brings the agent's loadout back to working order while it is at base."""

    @abstractmethod
    def service(self, hardware: Hardware) -> None:
        pass


class DockServicer(Servicer):
    """Services the agent at its docking bay.

    Order matters: recharging comes last so the agent charges a bit while
    the other steps run.
    """

    def __init__(self, config: Optional[MaintenanceConfig] = None):
        self.config = config or MaintenanceConfig()

    def service(self, hardware: Hardware) -> None:
        self.replace_tool(hardware)
        self.restock_markers(hardware)
        self.unload(hardware)
        self.recharge(hardware)

    def replace_tool(self, hardware: Hardware) -> bool:
        if hardware.tool_usable():
            return True
        logger.info("Tool is broken, getting a new one.")
        if hardware.equip_fresh_tool() and hardware.tool_usable():
            return True

        logger.warning("HALP! I need a new tool.")

        def fresh_tool() -> bool:
            return hardware.equip_fresh_tool() and hardware.tool_usable()

        return wait_until(
            fresh_tool,
            hardware,
            self.config.tool_poll_s,
            self.config.service_timeout_s,
            "a fresh tool",
        )

    def restock_markers(self, hardware: Hardware) -> bool:
        logger.info("Getting my fill of markers.")

        def topped_up() -> bool:
            space = hardware.consumable_space()
            if space > 0:
                hardware.withdraw_consumables(space)
                space = hardware.consumable_space()
            return space <= 0

        return wait_until(
            topped_up,
            hardware,
            self.config.restock_poll_s,
            self.config.service_timeout_s,
            "markers",
        )

    def unload(self, hardware: Hardware) -> int:
        deposited = hardware.deposit_cargo()
        logger.info(f"Dropping what I found ({deposited} items).")
        return deposited

    def recharge(self, hardware: Hardware) -> bool:
        logger.info("Waiting until my batteries are full.")
        return wait_until(
            lambda: hardware.max_energy() - hardware.energy_level() <= self.config.full_charge_margin,
            hardware,
            self.config.recharge_poll_s,
            self.config.service_timeout_s,
            "a full charge",
        )
