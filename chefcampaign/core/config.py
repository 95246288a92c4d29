"""
Configuration management for the chefcampaign package.

Settings are layered:
1. Packaged defaults (chefcampaign/core/default_config.json) - model names,
   sampling parameters, backend options, server and logging settings
2. User configuration (~/.chefcampaign/config.json, or the file named by the
   CHEFCAMPAIGN_CONFIG environment variable) - deep-merged over the defaults
3. Runtime overrides made with set_config_value()

API keys never live in these files; see chefcampaign.core.credentials.
"""

import os
import json
from typing import Dict, Any

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "default_config.json")
USER_CONFIG_PATH = os.path.expanduser("~/.chefcampaign/config.json")

_config_cache = {}


def get_user_config_path() -> str:
    """
    Return the user configuration path, honouring CHEFCAMPAIGN_CONFIG.
    """
    return os.environ.get("CHEFCAMPAIGN_CONFIG", USER_CONFIG_PATH)


def get_config(reload: bool = False) -> Dict[str, Any]:
    """
    Get the configuration dictionary, loading it if necessary.

    Args:
        reload (bool): Force reload the configuration even if cached

    Returns:
        Dict[str, Any]: The configuration dictionary
    """
    global _config_cache

    if not _config_cache or reload:
        _config_cache = load_config()

    return _config_cache


def load_config() -> Dict[str, Any]:
    """
    Load the packaged defaults and deep-merge the user configuration over them.

    Returns:
        Dict[str, Any]: The merged configuration dictionary
    """
    config = {}

    if os.path.exists(DEFAULT_CONFIG_PATH):
        with open(DEFAULT_CONFIG_PATH, 'r') as f:
            config.update(json.load(f))

    user_config_path = get_user_config_path()
    if os.path.exists(user_config_path):
        with open(user_config_path, 'r') as f:
            deep_merge(config, json.load(f))

    return config


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """
    Recursively merge override dictionary into base dictionary.

    Nested dictionaries are merged key by key, so a user file can change
    ``image_generation.recraft.style`` without restating the rest of the
    ``image_generation`` section. Any other value in ``override`` wins.

    Args:
        base (Dict[str, Any]): Base dictionary to be updated in place
        override (Dict[str, Any]): Dictionary with values to override
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value


def save_user_config(config: Dict[str, Any]) -> None:
    """
    Write the given configuration to the user configuration file and reload.

    Args:
        config (Dict[str, Any]): Configuration dictionary to save
    """
    user_config_path = get_user_config_path()
    os.makedirs(os.path.dirname(user_config_path), exist_ok=True)

    with open(user_config_path, 'w') as f:
        json.dump(config, f, indent=2)

    global _config_cache
    _config_cache = load_config()


def get_config_value(key: str, default: Any = None) -> Any:
    """
    Get a configuration value using dot notation for nested keys.

    Examples:
        >>> get_config_value('generated_concept.temperature', 0.7)
        0.9

        >>> get_config_value('nonexistent.key', 'fallback')
        'fallback'

    Args:
        key (str): The configuration key (dot notation allowed)
        default (Any): Value returned when the key is missing or null

    Returns:
        Any: The configuration value or default
    """
    current = get_config()

    for part in key.split('.'):
        if isinstance(current, dict) and part in current:
            current = current[part]
        else:
            return default

    return default if current is None else current


def set_config_value(key: str, value: Any, save: bool = True) -> None:
    """
    Set a configuration value using dot notation for nested keys.

    Intermediate dictionaries are created as needed. With ``save=False`` the
    change only lives for the current process, which is how the CLI applies
    per-invocation overrides.

    Args:
        key (str): The configuration key (dot notation allowed)
        value (Any): The value to set
        save (bool): Whether to persist the configuration to the user file
    """
    config = get_config()

    parts = key.split('.')
    current = config
    for part in parts[:-1]:
        if part not in current or not isinstance(current[part], dict):
            current[part] = {}
        current = current[part]
    current[parts[-1]] = value

    global _config_cache
    _config_cache = config

    if save:
        save_user_config(config)
