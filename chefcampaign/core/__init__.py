"""
Core utilities and configuration for the chefcampaign package.
"""

from chefcampaign.core.config import get_config, get_config_value, set_config_value
from chefcampaign.core.credentials import get_api_key
from chefcampaign.core.logging_config import get_logger, configure_logging
from chefcampaign.core.utils import to_data_url, load_image_bytes
from chefcampaign.core.error_handler import APIError, ValidationError, ConfigurationError
