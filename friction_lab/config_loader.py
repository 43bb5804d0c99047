"""Configuration loading and management."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .config_models import LabConfig


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""


DEFAULT_CONFIG_PATH = Path("config/friction_lab.yml")


def load_config(config_path: Optional[Path] = None) -> LabConfig:
    """
    Load and validate the lab configuration.

    Args:
        config_path: Path to the configuration file. Defaults to config/friction_lab.yml

    Returns:
        Validated LabConfig instance

    Raises:
        ConfigurationError: If configuration loading or validation fails
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    # Load configuration from YAML file if it exists
    config_data: dict = {}
    if config_path.exists():
        try:
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse YAML config: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read config file: {e}") from e

    if not isinstance(config_data, dict):
        raise ConfigurationError("Configuration root must be a mapping")

    # Environment variables win over the file
    env_overrides = _load_env_overrides()
    if env_overrides:
        _deep_merge(config_data, env_overrides)

    try:
        return LabConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def _load_env_overrides() -> dict:
    """Load configuration overrides from environment variables."""
    overrides: dict = {}

    env_mappings = {
        "FRICTION_LAB_LOG_LEVEL": ("logging", "level"),
        "FRICTION_LAB_LOG_DIR": ("paths", "log_dir"),
        "FRICTION_LAB_GRAVITY": ("physics", "gravity"),
        "FRICTION_LAB_SCALE_MAX_LOAD": ("physics", "scale_max_load"),
        "FRICTION_LAB_CONVERGENCE_DURATION": ("physics", "convergence_duration"),
        "FRICTION_LAB_RANDOM_SEED": ("random_seed",),
    }

    for env_var, config_path in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            # Navigate nested dictionary structure
            current = overrides
            for key in config_path[:-1]:
                if key not in current:
                    current[key] = {}
                current = current[key]
            current[config_path[-1]] = value

    return overrides


def _deep_merge(base: dict, overrides: dict) -> None:
    """Merge overrides into base in place, descending into nested mappings."""
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def create_example_config(output_path: Path = Path("config/friction_lab.yml.example")) -> None:
    """Create an example configuration file."""
    example_config = {
        "physics": {
            "gravity": 9.81,
            "scale_max_load": 100.0,
            "wet_multiplier": 0.7,
            "weight_noise_half_range": 0.3,
            "friction_noise_half_range": 1.0,
            "convergence_duration": 1.5
        },
        "materials": {
            "wood": {"display_name": "Wood", "coefficient": 0.35, "color": "#eab308"},
            "concrete": {"display_name": "Concrete", "coefficient": 0.6, "color": "#94a3b8"},
            "marble": {"display_name": "Marble", "coefficient": 0.15, "color": "#cffafe"},
            "rubber": {"display_name": "Rubber", "coefficient": 0.85, "color": "#1e293b"}
        },
        "defaults": {
            "mass": 2.0,
            "material_id": "wood",
            "is_wet": False,
            "orientation": "wide"
        },
        "paths": {
            "log_dir": "logs"
        },
        "logging": {
            "level": "INFO"
        }
    }

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        yaml.dump(example_config, f, default_flow_style=False, sort_keys=False)
