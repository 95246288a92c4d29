"""
Adapter implementations for image generation services.

Two interchangeable backends render one square image per concept:
- Recraft (``recraft``): returns a hosted image URL
- Google Imagen via the Gemini API (``gemini``): returns base64 bytes, wrapped
  here into a data URL so the result can be shown without another fetch
"""

from typing import Dict, Any, Optional

import requests

from chefcampaign.concept2image.adapters.base import ImageGenerationAdapter
from chefcampaign.core.config import get_config_value
from chefcampaign.core.constants import (
    IMAGE_MODEL_RECRAFT,
    IMAGE_MODEL_GEMINI,
    SUPPORTED_IMAGE_MODELS,
    DEFAULT_RECRAFT_MODEL,
    DEFAULT_RECRAFT_STYLE,
    DEFAULT_IMAGEN_MODEL,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_ASPECT_RATIO,
    GEMINI_API_ENDPOINT,
    RECRAFT_API_ENDPOINT
)
from chefcampaign.core.credentials import get_api_key
from chefcampaign.core.error_handler import APIError, ValidationError, handle_api_request
from chefcampaign.core.logging_config import get_logger, log_api_request
from chefcampaign.core.utils import base64_to_data_url
from chefcampaign.models import Brief

# Initialize logger
logger = get_logger(__name__)


class _KeyedAdapter(ImageGenerationAdapter):
    """
    Shared credential handling: the key is looked up on each request so a
    missing key fails the individual render rather than adapter construction.
    """

    api_name = ""

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key
        self.timeout = get_config_value("http.timeout")

    @property
    def api_key(self) -> str:
        return self._api_key or get_api_key(self.api_name)


class RecraftAdapter(_KeyedAdapter):
    """
    Adapter for the Recraft image generation API.
    """

    name = IMAGE_MODEL_RECRAFT
    api_name = "recraft"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize the adapter.

        Args:
            api_key (str, optional): Recraft API key. Read from RECRAFT_API_KEY when omitted.
            model (str, optional): Recraft model. Defaults to ``image_generation.recraft.model``.
        """
        super().__init__(api_key)
        self.model = model or get_config_value("image_generation.recraft.model", DEFAULT_RECRAFT_MODEL)
        self.style = get_config_value("image_generation.recraft.style", DEFAULT_RECRAFT_STYLE)
        self.size = get_config_value("image_generation.recraft.size", DEFAULT_IMAGE_SIZE)
        self.api_base = RECRAFT_API_ENDPOINT
        self.endpoint = f"{self.api_base}/images/generations"

        logger.info(f"Initialized {self.__class__.__name__} with model {self.model}")

    def build_prompt(self, image_description: str, brief: Brief) -> str:
        return (
            f"Professional food marketing photo: {image_description}. "
            f"{brief.cuisine_type} cuisine style. High quality, appetizing, Instagram-worthy."
        )

    def generate_image(self, image_description: str, brief: Brief) -> str:
        prompt = self.build_prompt(image_description, brief)
        logger.info(f"Generating Recraft image with prompt: {prompt[:50]}...")

        payload = {
            "prompt": prompt,
            "style": self.style,
            "model": self.model,
            "response_format": "url",
            "size": self.size,
            "n": 1
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}"
        }

        log_api_request(logger, "Recraft", self.endpoint, payload)
        result = handle_api_request(
            requests.post,
            self.endpoint,
            payload,
            headers,
            error_message="Recraft API error",
            timeout=self.timeout
        )

        try:
            image_url = result["data"][0]["url"]
        except (KeyError, IndexError, TypeError) as e:
            raise APIError("No image URL in Recraft response", response=result, endpoint=self.endpoint) from e

        if not image_url:
            raise APIError("Empty image URL in Recraft response", response=result, endpoint=self.endpoint)

        logger.info(f"Recraft image ready: {image_url[:60]}...")
        return image_url

    def get_service_info(self) -> Dict[str, Any]:
        return {
            "name": "Recraft",
            "model": self.model,
            "style": self.style,
            "size": self.size,
            "endpoint": self.endpoint,
            "returns": "url"
        }


class GeminiImagenAdapter(_KeyedAdapter):
    """
    Adapter for Google Imagen through the Gemini API ``predict`` endpoint.
    """

    name = IMAGE_MODEL_GEMINI
    api_name = "gemini"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize the adapter.

        Args:
            api_key (str, optional): Gemini API key. Read from GEMINI_API_KEY when omitted.
            model (str, optional): Imagen model. Defaults to ``image_generation.gemini.model``.
        """
        super().__init__(api_key)
        self.model = model or get_config_value("image_generation.gemini.model", DEFAULT_IMAGEN_MODEL)
        self.aspect_ratio = get_config_value("image_generation.gemini.aspect_ratio", DEFAULT_ASPECT_RATIO)
        self.safety_filter_level = get_config_value("image_generation.gemini.safety_filter_level", "block_some")
        self.person_generation = get_config_value("image_generation.gemini.person_generation", "allow_adult")
        self.api_base = GEMINI_API_ENDPOINT
        self.endpoint = f"{self.api_base}/models/{self.model}:predict"

        logger.info(f"Initialized {self.__class__.__name__} with model {self.model}")

    def build_prompt(self, image_description: str, brief: Brief) -> str:
        return (
            f"Professional food photography: {image_description}. "
            f"{brief.cuisine_type} cuisine. High quality, appetizing, well-lit, "
            f"Instagram-worthy composition."
        )

    def generate_image(self, image_description: str, brief: Brief) -> str:
        prompt = self.build_prompt(image_description, brief)
        logger.info(f"Generating Imagen image with prompt: {prompt[:50]}...")

        payload = {
            "instances": [{
                "prompt": prompt
            }],
            "parameters": {
                "sampleCount": 1,
                "aspectRatio": self.aspect_ratio,
                "safetyFilterLevel": self.safety_filter_level,
                "personGeneration": self.person_generation
            }
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key
        }

        log_api_request(logger, "Gemini Imagen", self.endpoint, payload)
        result = handle_api_request(
            requests.post,
            self.endpoint,
            payload,
            headers,
            error_message="Gemini Imagen API error",
            timeout=self.timeout
        )

        try:
            prediction = result["predictions"][0]
            encoded = prediction["bytesBase64Encoded"]
        except (KeyError, IndexError, TypeError) as e:
            # Imagen returns no predictions when the safety filter drops the image
            raise APIError("No image data in Gemini Imagen response", response=result, endpoint=self.endpoint) from e

        try:
            data_url = base64_to_data_url(encoded, prediction.get("mimeType"))
        except ValidationError as e:
            raise APIError("Gemini Imagen returned invalid image data", endpoint=self.endpoint) from e

        logger.info(f"Imagen image ready ({len(encoded)} base64 chars)")
        return data_url

    def get_service_info(self) -> Dict[str, Any]:
        return {
            "name": "Google Imagen via Gemini API",
            "model": self.model,
            "aspect_ratio": self.aspect_ratio,
            "endpoint": self.endpoint,
            "returns": "data_url"
        }


IMAGE_ADAPTERS = {
    IMAGE_MODEL_RECRAFT: RecraftAdapter,
    IMAGE_MODEL_GEMINI: GeminiImagenAdapter,
}


def get_image_adapter(model_name: Optional[str] = None) -> ImageGenerationAdapter:
    """
    Return the image backend registered under ``model_name``.

    Args:
        model_name (str, optional): ``recraft`` or ``gemini``; defaults to
            ``image_generation.default_model``

    Returns:
        ImageGenerationAdapter: A new adapter instance

    Raises:
        ValidationError: If the model name is not supported
    """
    model_name = model_name or get_config_value("image_generation.default_model", IMAGE_MODEL_RECRAFT)
    adapter_class = IMAGE_ADAPTERS.get(str(model_name).lower())
    if adapter_class is None:
        raise ValidationError(
            f"Unsupported image model '{model_name}'. Supported models: {', '.join(SUPPORTED_IMAGE_MODELS)}",
            field="imageModel",
            value=model_name
        )
    return adapter_class()
