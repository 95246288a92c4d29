"""
Adapter implementations for AI image editing services.

This module provides the Gemini image-editing adapter used to re-edit a single
generated image from a free-text instruction.
"""

import base64
from typing import Any, Optional

import requests

from chefcampaign.concept2image.adapters.base import ImageEditingAdapter
from chefcampaign.core.config import get_config_value
from chefcampaign.core.constants import DEFAULT_IMAGE_EDIT_MODEL, GEMINI_API_ENDPOINT
from chefcampaign.core.credentials import get_api_key
from chefcampaign.core.error_handler import APIError, ValidationError, handle_api_request
from chefcampaign.core.logging_config import get_logger, log_api_request
from chefcampaign.core.utils import load_image_bytes, base64_to_data_url

# Initialize logger
logger = get_logger(__name__)

EDIT_PROMPT_TEMPLATE = (
    "Edit this food marketing image. {instruction}\n"
    "Keep the overall composition, subject and photographic quality unless the "
    "instruction asks otherwise. Return the edited image."
)


class GeminiImageEditAdapter(ImageEditingAdapter):
    """
    Adapter for image editing with a Gemini image model.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        """
        Initialize the adapter.

        Args:
            api_key (str, optional): Gemini API key. Read from GEMINI_API_KEY when omitted.
            model (str, optional): Model to use. Defaults to ``image_editing.model``.
        """
        self._api_key = api_key
        self.model = model or get_config_value("image_editing.model", DEFAULT_IMAGE_EDIT_MODEL)
        self.timeout = get_config_value("http.timeout")
        self.api_base = GEMINI_API_ENDPOINT
        self.endpoint = f"{self.api_base}/models/{self.model}:generateContent"

        logger.info(f"Initialized {self.__class__.__name__} with model {self.model}")

    @property
    def api_key(self) -> str:
        return self._api_key or get_api_key("gemini")

    def edit_image(self, image_ref: str, instruction: str) -> str:
        if not instruction or not instruction.strip():
            raise ValidationError("An edit instruction is required", field="editPrompt")

        # Resolve the key before downloading anything
        api_key = self.api_key

        mime_type, image_bytes = load_image_bytes(image_ref, timeout=self.timeout)
        logger.info(f"Editing {mime_type} image ({len(image_bytes)} bytes): {instruction[:50]}...")

        payload = {
            "contents": [{
                "parts": [
                    {"text": EDIT_PROMPT_TEMPLATE.format(instruction=instruction.strip())},
                    {
                        "inline_data": {
                            "mime_type": mime_type,
                            "data": base64.b64encode(image_bytes).decode("ascii")
                        }
                    }
                ]
            }],
            "generationConfig": {
                "responseModalities": ["TEXT", "IMAGE"]
            }
        }
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": api_key
        }

        log_api_request(logger, "Gemini image edit", self.endpoint, payload)
        result = handle_api_request(
            requests.post,
            self.endpoint,
            payload,
            headers,
            error_message="Gemini image edit API error",
            timeout=self.timeout
        )

        return self._extract_image(result)

    def _extract_image(self, result: Any) -> str:
        """
        Return the first inline image part of a generateContent response as a data URL.

        Raises:
            APIError: If the response holds no image
        """
        candidates = result.get("candidates") if isinstance(result, dict) else None
        for candidate in candidates if isinstance(candidates, list) else []:
            content = candidate.get("content") if isinstance(candidate, dict) else None
            parts = content.get("parts") if isinstance(content, dict) else None
            for part in parts if isinstance(parts, list) else []:
                if not isinstance(part, dict):
                    continue
                inline = part.get("inlineData") or part.get("inline_data")
                if not isinstance(inline, dict):
                    continue
                mime_type = inline.get("mimeType") or inline.get("mime_type")
                data = inline.get("data")
                if not isinstance(data, str) or not data:
                    continue
                if mime_type and not (isinstance(mime_type, str) and mime_type.startswith("image/")):
                    continue
                try:
                    return base64_to_data_url(data, mime_type)
                except ValidationError as e:
                    raise APIError("Gemini returned invalid image data", endpoint=self.endpoint) from e

        error_msg = "No image in Gemini edit response"
        logger.error(error_msg)
        raise APIError(error_msg, response=result, endpoint=self.endpoint)
