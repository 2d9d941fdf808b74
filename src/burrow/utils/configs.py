"""Configuration utilities for the excavation agent.

This module provides:
- Hardware configuration loading from the ``HardwareConfig`` registry
- YAML configuration file processing with CLI precedence
"""
import dataclasses
import importlib
import logging
import os
from types import SimpleNamespace
from typing import Any

import yaml

from burrow.configs.constants.models import AgentConfig
from burrow.configs.hardware import HardwareConfig

logger = logging.getLogger(__name__)
_CONFIGS_PKG = "burrow.configs.hardware"

# Top-level run parameters that may also come from YAML.
RUN_KEYS = ("wall_thickness", "starting_edge", "starting_steps", "skip_confirmation", "force", "log_level")


def load_hardware_config(hardware_name: str) -> HardwareConfig:
    """
    Load the registered hardware configuration for ``hardware_name``.

    Raises:
        ValueError: If no config module exists for the hardware
    """
    logger.info(f"📦 Loading hardware config: {hardware_name}")

    try:
        importlib.import_module(f"{_CONFIGS_PKG}.{hardware_name}_config")
    except ModuleNotFoundError as exc:
        raise ValueError(
            f"Could not find config module for hardware '{hardware_name}'. "
            f"Available configs in {_CONFIGS_PKG}/"
        ) from exc

    cfg_cls = HardwareConfig.get_choice_class(hardware_name)
    hardware_config = cfg_cls()
    logger.info(f"✅ Loaded hardware configuration: {hardware_name}")
    return hardware_config


def load_yaml_config(config_file: str) -> dict:
    """
    Load YAML configuration file with error handling.

    Args:
        config_file: Path to YAML configuration file

    Returns:
        Dictionary of configuration overrides
    """
    if not config_file or not os.path.exists(config_file):
        logger.warning(f"⚠️  Config file not found: {config_file} - using defaults")
        return {}

    try:
        with open(config_file, 'r') as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"❌ Failed to parse YAML config {config_file}: {e}")
        return {}
    except OSError as e:
        logger.error(f"❌ Failed to load config {config_file}: {e}")
        return {}

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        logger.error(f"❌ Config {config_file} must contain a mapping, got {type(config_data).__name__}")
        return {}
    logger.info(f"📄 Loaded config overrides from: {config_file}")
    return config_data


def apply_section_override(target: Any, yaml_obj: dict, defaults: Any, section_name: str):
    """
    Apply YAML overrides to a config section while preserving CLI flag precedence.

    Args:
        target: The target config object to modify
        yaml_obj: The YAML overrides dictionary for this section
        defaults: The default config object for comparison
        section_name: Section name for logging purposes
    """
    overrides = yaml_obj or {}

    for key, yaml_value in overrides.items():
        try:
            current = getattr(target, key)
            default = getattr(defaults, key)
        except AttributeError as e:
            logger.warning(f"⚠️  Unknown config key in YAML: {section_name}.{key} - {e}")
            continue

        # If current value equals default, it wasn't overridden by CLI
        if current == default:
            setattr(target, key, yaml_value)
            logger.debug(f"📝 Applied YAML override: {section_name}.{key} = {yaml_value}")
        else:
            logger.debug(f"🚫 Skipped YAML override (CLI precedence): {section_name}.{key}")

    # Values set through setattr skip __post_init__; validate them now.
    post_init = getattr(target, "__post_init__", None)
    if overrides and post_init is not None:
        post_init()


def _field_defaults(cfg: Any, keys) -> SimpleNamespace:
    defaults = {}
    for f in dataclasses.fields(cfg):
        if f.name not in keys:
            continue
        if f.default is not dataclasses.MISSING:
            defaults[f.name] = f.default
        elif f.default_factory is not dataclasses.MISSING:
            defaults[f.name] = f.default_factory()
    return SimpleNamespace(**defaults)


def apply_yaml_preserving_cli(target_cfg: Any, yaml_overrides: dict):
    """
    Apply YAML overrides while preserving CLI flag precedence.

    Recognised sections: top-level run parameters, ``agent`` (with
    ``motion``, ``maintenance``, ``exploration`` and ``tunnel``) and
    ``hardware`` (fields of the selected hardware config).
    """
    run_overrides = {key: value for key, value in yaml_overrides.items() if key in RUN_KEYS}
    if run_overrides:
        run_defaults = _field_defaults(target_cfg, RUN_KEYS)
        for key, value in run_overrides.items():
            if getattr(target_cfg, key) == getattr(run_defaults, key):
                setattr(target_cfg, key, value)
                logger.debug(f"📝 Applied YAML override: {key} = {value}")
            else:
                logger.debug(f"🚫 Skipped YAML override (CLI precedence): {key}")

    agent_overrides = yaml_overrides.get('agent') or {}
    if agent_overrides:
        defaults = AgentConfig()
        sections = [
            (target_cfg.agent.motion, agent_overrides.get('motion'), defaults.motion, 'agent.motion'),
            (target_cfg.agent.maintenance, agent_overrides.get('maintenance'), defaults.maintenance, 'agent.maintenance'),
            (target_cfg.agent.exploration, agent_overrides.get('exploration'), defaults.exploration, 'agent.exploration'),
            (target_cfg.agent.tunnel, agent_overrides.get('tunnel'), defaults.tunnel, 'agent.tunnel'),
        ]
        for target_section, yaml_section, default_section, section_name in sections:
            if yaml_section:  # Only process if section exists in YAML
                apply_section_override(target_section, yaml_section, default_section, section_name)
    else:
        logger.debug("No 'agent' section found in YAML config")

    hardware_overrides = yaml_overrides.get('hardware') or {}
    if hardware_overrides and getattr(target_cfg, 'hardware', None) is not None:
        hardware_defaults = type(target_cfg.hardware)()
        apply_section_override(target_cfg.hardware, hardware_overrides, hardware_defaults, 'hardware')

    unknown = set(yaml_overrides) - set(RUN_KEYS) - {'agent', 'hardware'}
    for key in sorted(unknown):
        logger.warning(f"⚠️  Unknown top-level config key in YAML: {key}")
