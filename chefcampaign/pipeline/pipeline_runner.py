"""
Pipeline runner module.

This module runs a generation request end to end: validate the brief,
generate concepts, then render every concept's image concurrently and collect
the outcomes into one ordered batch. It also hosts the single-image follow-up
operations (AI edit and OCR text scan).
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Any, List, Optional, Callable

from chefcampaign.brief2concept.concept_generator import ConceptGenerator
from chefcampaign.brief2concept.input_validator import InputValidator
from chefcampaign.concept2image.adapters.base import ImageGenerationAdapter, ImageEditingAdapter
from chefcampaign.concept2image.adapters.image_editing import GeminiImageEditAdapter
from chefcampaign.concept2image.adapters.image_generation import get_image_adapter
from chefcampaign.concept2image.adapters.text_scan import TextScanAdapter
from chefcampaign.core.constants import IMAGE_FAILURE_MESSAGE
from chefcampaign.core.error_handler import ValidationError
from chefcampaign.models import Brief, Concept, Variant, TextRegion

logger = logging.getLogger(__name__)


def _render_one(variant: Variant, brief: Brief, adapter: ImageGenerationAdapter) -> Variant:
    """
    Render the image for one variant and settle it.

    Never raises: any failure is logged with its details and recorded on the
    variant as the generic IMAGE_FAILURE_MESSAGE.
    """
    concept = variant.concept
    try:
        image_url = adapter.generate_image(concept.image_description, brief)
        return variant.mark_completed(image_url)
    except Exception as e:
        logger.error(f"Failed to generate image for '{concept.title}' ({concept.id}): {e}")
        return variant.mark_failed(IMAGE_FAILURE_MESSAGE)


def render_variants(
    concepts: List[Concept],
    brief: Brief,
    adapter: ImageGenerationAdapter
) -> List[Variant]:
    """
    Render an image for every concept concurrently and aggregate the results.

    Each concept gets its own worker. A failing or slow render only affects its
    own variant. The call returns once every render has settled, and the
    returned list follows the order of ``concepts`` regardless of which
    render finished first.

    Args:
        concepts: Concepts to render, in display order
        brief: Brief the concepts were generated from
        adapter: Image backend to render with

    Returns:
        List[Variant]: One settled variant per concept, in input order
    """
    if not concepts:
        return []

    variants = [Variant.from_concept(concept) for concept in concepts]
    logger.info(f"Rendering {len(variants)} images with {adapter.name}")
    started = time.monotonic()

    with ThreadPoolExecutor(max_workers=len(variants), thread_name_prefix="render") as executor:
        futures = [executor.submit(_render_one, variant, brief, adapter) for variant in variants]
        # Futures are read in submission order, so completion order cannot reorder the batch
        results = [future.result() for future in futures]

    failed = sum(1 for variant in results if variant.error is not None)
    logger.info(
        f"Rendered {len(results) - failed}/{len(results)} images in "
        f"{time.monotonic() - started:.1f}s ({failed} failed)"
    )
    return results


class CampaignPipeline:
    """
    Runs generation requests and single-image follow-ups.
    """

    def __init__(
        self,
        input_validator: Optional[InputValidator] = None,
        concept_generator: Optional[ConceptGenerator] = None,
        image_adapter_factory: Callable[[Optional[str]], ImageGenerationAdapter] = get_image_adapter,
        image_editor: Optional[ImageEditingAdapter] = None,
        text_scanner: Optional[TextScanAdapter] = None
    ):
        """
        Initialize the CampaignPipeline.

        Args:
            input_validator: Brief validator.
            concept_generator: Concept generator.
            image_adapter_factory: Maps an image model name to a backend adapter.
            image_editor: Backend used for single-image edits. Created on first use.
            text_scanner: OCR service client. Created on first use.
        """
        self.input_validator = input_validator or InputValidator()
        self.concept_generator = concept_generator or ConceptGenerator()
        self.image_adapter_factory = image_adapter_factory
        self._image_editor = image_editor
        self._text_scanner = text_scanner

    @property
    def image_editor(self) -> ImageEditingAdapter:
        if self._image_editor is None:
            self._image_editor = GeminiImageEditAdapter()
        return self._image_editor

    @property
    def text_scanner(self) -> TextScanAdapter:
        if self._text_scanner is None:
            self._text_scanner = TextScanAdapter()
        return self._text_scanner

    def generate_campaign(
        self,
        chef_data: Optional[Dict[str, Any]],
        image_model: Optional[str] = None
    ) -> List[Variant]:
        """
        Produce the batch of variants for a brief.

        Args:
            chef_data: Brief fields in wire form
            image_model: ``recraft`` or ``gemini``; the configured default when omitted

        Returns:
            List[Variant]: One variant per generated concept, in concept order

        Raises:
            ValidationError: If the brief or image model is invalid (before any backend call)
            ConfigurationError: If the text-generation key is missing
            APIError: If concept generation fails
            LLMParsingError: If the concept reply cannot be parsed
        """
        brief = self.input_validator.validate_brief(chef_data)
        adapter = self.image_adapter_factory(image_model)

        concepts = self.concept_generator.generate_concepts(brief)
        return render_variants(concepts, brief, adapter)

    def edit_image(self, image_ref: Optional[str], instruction: Optional[str]) -> str:
        """
        Apply an AI edit to a single image reference.

        Args:
            image_ref: Image reference to edit
            instruction: Free-text edit instruction

        Returns:
            str: Reference to the edited image

        Raises:
            ValidationError: If the image or instruction is missing
            ConfigurationError: If the editing key is missing
            APIError: If the edit request fails
        """
        if not isinstance(image_ref, str) or not image_ref.strip():
            raise ValidationError("Image and edit prompt are required", field="image")
        if not isinstance(instruction, str) or not instruction.strip():
            raise ValidationError("Image and edit prompt are required", field="editPrompt")

        logger.info(f"Editing image: {instruction[:50]}...")
        return self.image_editor.edit_image(image_ref.strip(), instruction.strip())

    def edit_variant(self, variant: Variant, instruction: str) -> Variant:
        """
        Re-edit the image of one completed variant.

        On success a copy of the variant with the new image is returned. On
        failure the exception propagates and ``variant`` is left untouched.
        """
        new_image_url = self.edit_image(variant.image_url, instruction)
        return variant.with_image(new_image_url)

    def scan_text(self, image_ref: Optional[str]) -> List[TextRegion]:
        """
        Detect the text regions in an image with the external OCR service.

        Raises:
            ValidationError: If the image is missing
            APIError: If the scan fails
        """
        if not isinstance(image_ref, str) or not image_ref.strip():
            raise ValidationError("Image is required", field="image")
        return self.text_scanner.scan_text(image_ref.strip())
