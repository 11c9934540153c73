"""
Configuration loading.

Responsibility: runtime switches only (JIT on/off, verbosity, buffer sizing).
Values come from defaults, optionally overlaid with a YAML file.

Usage:
    config = load_config('config/default.yaml')
    count_primes_upto(10**6, config=config)

or set NUMBER_THEORY_CONFIG=path/to/file.yaml before import.
"""

import os
from functools import lru_cache
from typing import Optional

import yaml

from .errors import InvalidArgument

CONFIG_ENV_VAR = 'NUMBER_THEORY_CONFIG'

DEFAULT_CONFIG = {
    'jit': True,
    'verbose': False,
    'capacity_factor': 1.2,
}


def load_config(path: Optional[str] = None) -> dict:
    """
    Build a configuration dict.

    Parameters
    ----------
    path : str, optional
        YAML file to overlay on the defaults. If None, the file named by
        the NUMBER_THEORY_CONFIG environment variable is used, if set.

    Returns
    -------
    dict
        Complete configuration with every key of DEFAULT_CONFIG.
    """
    config = dict(DEFAULT_CONFIG)

    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return config

    with open(path) as f:
        overrides = yaml.safe_load(f) or {}

    unknown = sorted(set(overrides) - set(DEFAULT_CONFIG))
    if unknown:
        raise InvalidArgument(f"load_config: unknown keys {unknown} in {path}")

    config.update(overrides)

    if config['capacity_factor'] <= 0:
        raise InvalidArgument(
            f"load_config: capacity_factor must be positive, got {config['capacity_factor']}")

    return config


@lru_cache(maxsize=None)
def get_config() -> dict:
    """Environment-driven configuration, loaded once per process."""
    return load_config()
