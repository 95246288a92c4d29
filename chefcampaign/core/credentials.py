"""
Credential lookup for backend API keys.

Credentials are read from environment variables only. A ``.env`` file in the
working directory is loaded on import for local development.
"""

import os
from typing import Optional

from dotenv import load_dotenv

from chefcampaign.core.error_handler import ConfigurationError
from chefcampaign.core.logging_config import get_logger

# Initialize logger
logger = get_logger(__name__)

# Load environment variables from .env file if it exists
load_dotenv()

# Map API names to environment variable names
ENV_VAR_MAP = {
    "gemini": "GEMINI_API_KEY",
    "recraft": "RECRAFT_API_KEY",
    "text_scan": "TEXT_SCAN_API_KEY",
    "service": "CHEFCAMPAIGN_API_TOKEN",
}


def get_env_var_name(api_name: str) -> str:
    """
    Resolve the environment variable that holds the key for an API.

    Raises:
        ValueError: If the API name is unknown
    """
    env_var = ENV_VAR_MAP.get(api_name.lower())
    if not env_var:
        raise ValueError(f"Unknown API: {api_name}")
    return env_var


def get_api_key(api_name: str) -> str:
    """
    Get the API key for a backend.

    Args:
        api_name (str): API name ('gemini', 'recraft', 'text_scan', 'service')

    Returns:
        str: API key

    Raises:
        ConfigurationError: If the key is not set
    """
    env_var = get_env_var_name(api_name)
    value = os.environ.get(env_var)
    if not value:
        logger.error(f"{env_var} not configured")
        raise ConfigurationError(
            message=f"{env_var} not configured",
            component=api_name,
            missing_keys=[env_var]
        )
    return value


def get_optional_api_key(api_name: str) -> Optional[str]:
    """
    Get an API key that may legitimately be absent (e.g. the OCR service key).

    Args:
        api_name (str): API name

    Returns:
        Optional[str]: The key, or None when unset
    """
    return os.environ.get(get_env_var_name(api_name)) or None
