"""
Base adapter interfaces for external image services.

This module defines the base adapter interfaces for image generation and
editing services. Every implementation yields the same kind of result: a
displayable image reference, either an http(s) URL or a base64 data URL.
Callers never need to know which backend produced it.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any

from chefcampaign.models import Brief


class ImageGenerationAdapter(ABC):
    """
    Base adapter interface for image generation services.
    """

    name = "base"

    @abstractmethod
    def build_prompt(self, image_description: str, brief: Brief) -> str:
        """
        Enrich a concept's image description with backend-specific styling.

        Args:
            image_description (str): Image description from the concept
            brief (Brief): Brief the concept came from (used for the cuisine type)

        Returns:
            str: Prompt sent to the backend
        """
        pass

    @abstractmethod
    def generate_image(self, image_description: str, brief: Brief) -> str:
        """
        Render one image for one concept.

        Args:
            image_description (str): Image description from the concept
            brief (Brief): Brief the concept came from

        Returns:
            str: Displayable image reference

        Raises:
            ConfigurationError: If the backend credential is missing
            APIError: If the backend request fails
        """
        pass

    @abstractmethod
    def get_service_info(self) -> Dict[str, Any]:
        """
        Get information about the image generation service.

        Returns:
            Dict[str, Any]: Service information including name, model and endpoint
        """
        pass


class ImageEditingAdapter(ABC):
    """
    Base adapter interface for AI image editing services.
    """

    @abstractmethod
    def edit_image(self, image_ref: str, instruction: str) -> str:
        """
        Apply a free-text edit instruction to an existing image.

        Args:
            image_ref (str): Image reference (http(s) URL or data URL)
            instruction (str): What to change

        Returns:
            str: Reference to the edited image

        Raises:
            ConfigurationError: If the backend credential is missing
            APIError: If the edit request fails
        """
        pass
