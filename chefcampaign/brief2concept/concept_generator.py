"""
Concept generation from restaurant briefs.

This module drives the text-generation step: it prompts the LLM with the brief,
parses the reply into concepts and stamps each one with a batch-unique id.
"""

from typing import List, Optional

from chefcampaign.brief2concept.llm_client import GeminiLLMClient
from chefcampaign.brief2concept.llm_templates import generate_concept_prompt, parse_llm_response
from chefcampaign.core.logging_config import get_logger
from chefcampaign.core.utils import current_timestamp_ms
from chefcampaign.models import Brief, Concept

# Initialize logger
logger = get_logger(__name__)


def make_concept_id(timestamp_ms: int, index: int) -> str:
    """
    Build a concept id from the batch timestamp and the concept's position.

    Ids are unique within a batch and sort by creation time across batches.
    """
    return f"variant-{timestamp_ms}-{index}"


class ConceptGenerator:
    """
    Generates campaign concepts for a brief.
    """

    def __init__(self, llm_client: Optional[GeminiLLMClient] = None):
        """
        Args:
            llm_client: Client used for text generation. Created on first use
                when omitted so that a missing API key surfaces per request.
        """
        self._llm_client = llm_client

    @property
    def llm_client(self) -> GeminiLLMClient:
        if self._llm_client is None:
            self._llm_client = GeminiLLMClient()
        return self._llm_client

    def generate_concepts(self, brief: Brief) -> List[Concept]:
        """
        Generate the ordered concepts for a brief.

        Args:
            brief (Brief): The validated brief

        Returns:
            List[Concept]: Concepts in the order the model returned them

        Raises:
            ConfigurationError: If the Gemini API key is missing
            APIError: If the text-generation request fails
            LLMParsingError: If the reply is not a valid concept array
        """
        logger.info(f"Generating concepts for '{brief.brand_name}'")

        prompt = generate_concept_prompt(brief)
        logger.debug(f"Concept prompt: {prompt}")

        raw_response = self.llm_client.generate_text(prompt)
        parsed = parse_llm_response(raw_response)

        timestamp_ms = current_timestamp_ms()
        concepts = [
            Concept(
                id=make_concept_id(timestamp_ms, index),
                title=item["title"],
                caption=item["caption"],
                hashtags=tuple(item["hashtags"]),
                image_description=item["imageDescription"]
            )
            for index, item in enumerate(parsed)
        ]

        logger.info(f"Generated {len(concepts)} concepts for '{brief.brand_name}'")
        return concepts
