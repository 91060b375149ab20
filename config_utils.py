"""
Configuration utilities for the retirement simulator.
Default parameters and JSON config loading into SimulationParams and life events.
"""

import json
import logging
import os
from dataclasses import asdict, fields
from typing import Any, Dict, List, Tuple

from accounts import AccountSet
from life_events import LifeEvent
from simulation import SimulationParams

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = 'simulation_config.json'

_ACCOUNT_FIELDS = ('accounts', 'contributions')


class ConfigError(ValueError):
    """Configuration file or parameter dictionary could not be used"""


def get_default_params() -> Dict[str, Any]:
    """Get default simulation parameters configuration"""
    return {
        # Ages and horizon
        'current_age': 30,
        'retirement_age': 65,
        'years_in_retirement': 30,

        # Market expectations (percent)
        'expected_return': 7.0,
        'return_volatility': 15.0,
        'inflation_rate': 3.0,

        # Spending and savings
        'annual_spending': 60_000,
        'current_savings': 100_000,
        'annual_contribution': 10_000,

        # Advanced mode accounts
        'advanced_mode': False,
        'accounts': None,
        'contributions': None,

        # Social Security
        'ss_annual_benefit': 0.0,
        'ss_start_age': None,

        # Simulation
        'num_simulations': 10_000,
        'random_seed': None,

        'life_events': [],
    }


def dict_to_params(param_dict: Dict[str, Any]) -> SimulationParams:
    """
    Convert dictionary to SimulationParams object.

    Nested account dictionaries become AccountSet records; ``life_events`` is ignored.

    Raises:
        ConfigError: On keys that are not simulation parameters
    """
    valid_keys = {f.name for f in fields(SimulationParams)}
    filtered = {k: v for k, v in param_dict.items() if k != 'life_events'}

    unknown = sorted(set(filtered) - valid_keys)
    if unknown:
        raise ConfigError(f"Unknown simulation parameters: {', '.join(unknown)}")

    for key in _ACCOUNT_FIELDS:
        value = filtered.get(key)
        if isinstance(value, dict):
            try:
                filtered[key] = AccountSet(**value)
            except TypeError as e:
                raise ConfigError(f"Invalid {key} block: {e}") from e

    return SimulationParams(**filtered)


def params_to_dict(params: SimulationParams) -> Dict[str, Any]:
    """Convert SimulationParams to a JSON-serializable dictionary"""
    return asdict(params)


def load_simulation_config(path: str = DEFAULT_CONFIG_FILE) -> Tuple[SimulationParams, List[LifeEvent]]:
    """
    Load simulation parameters and life events from a JSON file.

    Values in the file override the defaults. A missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid JSON or holds unknown parameters
    """
    config = get_default_params()

    if os.path.exists(path):
        logger.debug("Loading simulation config from %s", path)
        try:
            with open(path, 'r') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config in {path} must be a JSON object")
        config.update(loaded)
        logger.info("Loaded %d settings from %s", len(loaded), path)
    else:
        logger.warning("Config file %s not found, using defaults", path)

    life_events = [LifeEvent.from_dict(event) for event in config.get('life_events') or []]
    return dict_to_params(config), life_events
