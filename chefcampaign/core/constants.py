"""
Constants for the chefcampaign package.

This module provides constants used throughout the chefcampaign package.
These constants can be easily changed in one place.
"""

# LLM Models
DEFAULT_LLM_MODEL = "gemini-2.0-flash-exp"

# Image Generation Models
IMAGE_MODEL_RECRAFT = "recraft"
IMAGE_MODEL_GEMINI = "gemini"
SUPPORTED_IMAGE_MODELS = [IMAGE_MODEL_RECRAFT, IMAGE_MODEL_GEMINI]
DEFAULT_IMAGE_MODEL = IMAGE_MODEL_RECRAFT

DEFAULT_RECRAFT_MODEL = "nano_banana"
DEFAULT_RECRAFT_STYLE = "realistic_image"
DEFAULT_IMAGEN_MODEL = "imagen-4.0-generate-001"
DEFAULT_IMAGE_EDIT_MODEL = "gemini-2.5-flash-image"
DEFAULT_IMAGE_SIZE = "1024x1024"
DEFAULT_ASPECT_RATIO = "1:1"

# API Endpoints
GEMINI_API_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
RECRAFT_API_ENDPOINT = "https://external.api.recraft.ai/v1"
DEFAULT_TEXT_SCAN_ENDPOINT = "http://localhost:8001/scan"

# Default Values
DEFAULT_TEMPERATURE = 0.9
DEFAULT_MAX_TOKENS = 2048
MIN_CONCEPTS = 5
MAX_CONCEPTS = 7
MIN_HASHTAGS = 5
MAX_HASHTAGS = 8

# Brief
NOT_SPECIFIED = "not specified"
TEXT_POSITIONS = ["top", "center", "bottom"]

# User-facing error messages
IMAGE_FAILURE_MESSAGE = "Failed to generate image"
MISSING_BRIEF_FIELDS_MESSAGE = "Brand name and cuisine type are required"
CAMPAIGN_FAILURE_MESSAGE = "Failed to generate campaign"
EDIT_FAILURE_MESSAGE = "Failed to edit image"
SCAN_FAILURE_MESSAGE = "Failed to scan image text"
NOT_CONFIGURED_MESSAGE = "Service is not configured"
INTERNAL_ERROR_MESSAGE = "Internal server error"
