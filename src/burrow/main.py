#!/usr/bin/env python3
"""
Main entry point for the burrow excavation agent.

This module provides the CLI interface and main execution logic. Uses the
structured configuration system with automatic CLI flag generation via Draccus.
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import draccus

from burrow.components.driver import SpiralPlan, TunnelDriver
from burrow.configs.constants.agent import (
    DEFAULT_CONFIG_FILE,
    EXIT_INSUFFICIENT_CARGO,
    EXIT_INTERNAL_ERROR,
    EXIT_OK,
    EXIT_RETURN_DECLINED,
    HARDWARE_NAME_SIM,
    WALL_THICKNESS,
)
from burrow.configs.constants.models import AgentConfig
from burrow.exceptions import InsufficientCargoSpaceError, InternalInconsistencyError, ReturnTripDeclined
from burrow.interfaces.hardware import Hardware
from burrow.utils.configs import apply_yaml_preserving_cli, load_hardware_config, load_yaml_config
from burrow.utils.logger import parse_level, setup_root_logger
from burrow.utils.prompt import confirm as terminal_confirm

logger = logging.getLogger(__name__)


@dataclass
class MainConfig:
    """Run parameters on top of the structured agent config."""

    agent: AgentConfig = field(default_factory=AgentConfig)

    # Spiral layout
    wall_thickness: int = WALL_THICKNESS
    starting_edge: int = 1
    starting_steps: int = 0

    # Start without the "Shall we begin?" prompt
    skip_confirmation: bool = False
    # Keep going even if max energy may be insufficient to return
    force: bool = False

    # Registered hardware choice, see burrow.configs.hardware
    hardware_name: str = HARDWARE_NAME_SIM

    # Optional config file override
    config_file: str = DEFAULT_CONFIG_FILE

    log_level: str = "INFO"

    # Hardware config (populated at runtime)
    hardware: Any = field(init=False)

    def __post_init__(self):
        """Load the hardware configuration based on hardware_name."""
        if not self.hardware_name:
            raise ValueError("hardware_name must be provided, e.g. --hardware_name=sim")
        self.hardware = load_hardware_config(self.hardware_name)

    def spiral_plan(self) -> SpiralPlan:
        return SpiralPlan(
            wall_thickness=self.wall_thickness,
            starting_edge=self.starting_edge,
            starting_steps=self.starting_steps,
            max_edge=self.agent.tunnel.max_edge,
        )


def run_burrow(
    config: MainConfig,
    hardware: Optional[Hardware] = None,
    confirm: Callable[[str], bool] = terminal_confirm,
) -> int:
    """Run the agent with the given configuration and return the exit code."""
    setup_root_logger(parse_level(config.log_level))

    plan = config.spiral_plan()
    if hardware is None:
        hardware = config.hardware.build()

    logger.info(f"🚀 Will mine in a spiral shape with {plan.wall_thickness} block thick walls")
    logger.info(f"🤖 Hardware: {hardware.name}")
    logger.info(f"📐 Starting at edge {plan.starting_edge}, step {plan.starting_steps} ({plan.total_steps()} steps to go)")
    if not hardware.can_classify:
        logger.warning("Installing a classification sensor is strongly recommended.")

    if not config.skip_confirmation and not confirm("Shall we begin?"):
        logger.info("Maybe another time.")
        return EXIT_OK

    driver = TunnelDriver.from_config(hardware, config.agent, confirm=confirm, force_continue=config.force)
    try:
        driver.run(plan)
    except InsufficientCargoSpaceError as e:
        logger.error(f"❌ {e.message}")
        return EXIT_INSUFFICIENT_CARGO
    except ReturnTripDeclined as e:
        logger.error(f"🛑 {e.message}")
        return EXIT_RETURN_DECLINED
    except InternalInconsistencyError as e:
        logger.error(f"💥 Internal inconsistency, aborting: {e.message} {e.context}")
        return EXIT_INTERNAL_ERROR

    logger.info(f"🏁 Finished after {driver.scheduler.cycles} maintenance cycles")
    return EXIT_OK


@draccus.wrap()
def main(cfg: MainConfig):
    """
    Main entry point for burrow.

    This function is wrapped with Draccus to automatically generate CLI flags for all
    configuration parameters. Configuration precedence (highest to lowest):
    1. CLI flags (via Draccus)
    2. YAML config file overrides
    3. Default values

    Examples:
        # Default spiral in the simulated world
        burrow --skip_confirmation=true

        # Thicker walls, resume on edge 3 after 4 steps
        burrow --wall_thickness=3 --starting_edge=3 --starting_steps=4

        # Keep going even if the way back may cost more than half the battery
        burrow --force=true

        # Override agent parameters
        burrow --agent.exploration.max_vein_depth=4 --agent.tunnel.marker_interval=8
    """

    # Apply YAML configuration overrides
    # Note: CLI flags (from Draccus) already applied, YAML merges underneath
    yaml_overrides = load_yaml_config(cfg.config_file)
    if yaml_overrides:
        logger.info(f"🔧 Applying YAML overrides from {cfg.config_file}")
        apply_yaml_preserving_cli(cfg, yaml_overrides)

    return run_burrow(cfg)


if __name__ == "__main__":
    sys.exit(main())
