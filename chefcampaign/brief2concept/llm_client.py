"""
LLM client for the Gemini text-generation API.

This module provides a client for the ``generateContent`` endpoint used to draft
campaign concepts from a restaurant brief.
"""

from typing import Dict, Any, Optional

import requests

from chefcampaign.core.logging_config import get_logger, log_api_request
from chefcampaign.core.credentials import get_api_key
from chefcampaign.core.config import get_config_value
from chefcampaign.core.error_handler import APIError, handle_api_request, log_api_error
from chefcampaign.core.constants import (
    DEFAULT_LLM_MODEL,
    GEMINI_API_ENDPOINT,
    DEFAULT_TEMPERATURE,
    DEFAULT_MAX_TOKENS
)

# Initialize logger
logger = get_logger(__name__)


class GeminiLLMClient:
    """
    Client for making text-generation calls to the Gemini API.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ):
        """
        Initialize the Gemini LLM client.

        Args:
            api_key (str, optional): Gemini API key. Read from GEMINI_API_KEY when omitted.
            model (str, optional): Model to use. Defaults to ``generated_concept.model``.
            temperature (float, optional): Sampling temperature. Defaults to ``generated_concept.temperature``.
            max_tokens (int, optional): Output token limit. Defaults to ``generated_concept.max_tokens``.

        Raises:
            ConfigurationError: If no API key is available
        """
        # Fail fast if the key is not available
        self.api_key = api_key or get_api_key("gemini")

        self.model = model or get_config_value("generated_concept.model", DEFAULT_LLM_MODEL)
        self.temperature = temperature if temperature is not None else get_config_value(
            "generated_concept.temperature", DEFAULT_TEMPERATURE
        )
        self.max_tokens = max_tokens or get_config_value("generated_concept.max_tokens", DEFAULT_MAX_TOKENS)
        self.timeout = get_config_value("http.timeout")

        self.api_base = GEMINI_API_ENDPOINT
        self.endpoint = f"{self.api_base}/models/{self.model}:generateContent"

        logger.info(f"Initialized {self.__class__.__name__} with model {self.model}")

    def generate_text(self, prompt: str, options: Optional[Dict[str, Any]] = None) -> str:
        """
        Send a prompt to Gemini and return the generated text.

        Args:
            prompt (str): The full instruction text
            options (Dict[str, Any], optional): Overrides for ``temperature`` and ``max_tokens``

        Returns:
            str: Text of the first candidate

        Raises:
            APIError: If the request fails or the response carries no text
        """
        options = options or {}

        payload = {
            "contents": [{
                "parts": [{"text": prompt}]
            }],
            "generationConfig": {
                "temperature": options.get("temperature", self.temperature),
                "maxOutputTokens": options.get("max_tokens", self.max_tokens)
            }
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key
        }

        log_api_request(logger, "Gemini", self.endpoint, payload)

        try:
            result = handle_api_request(
                requests.post,
                self.endpoint,
                payload,
                headers,
                error_message="Gemini API error",
                timeout=self.timeout
            )
        except APIError as e:
            log_api_error(e)
            raise

        text = self.extract_text(result)
        logger.info(f"Received {len(text)} characters from {self.model}")
        logger.debug(f"Content: {text[:100]}...")
        return text

    def extract_text(self, result: Dict[str, Any]) -> str:
        """
        Pull the concatenated text parts of the first candidate out of a response.

        Raises:
            APIError: If the response has no candidate text
        """
        try:
            parts = result["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            error_msg = "No valid content in Gemini response"
            logger.error(error_msg)
            raise APIError(error_msg, response=result, endpoint=self.endpoint) from e

        text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        if not text.strip():
            error_msg = "Gemini response contained no text"
            logger.error(error_msg)
            raise APIError(error_msg, response=result, endpoint=self.endpoint)
        return text
