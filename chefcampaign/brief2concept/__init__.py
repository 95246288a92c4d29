"""
Brief to concept processing.

This package validates restaurant briefs and turns them into campaign concepts
with the help of a text-generation model.
"""

from chefcampaign.brief2concept.input_validator import InputValidator
from chefcampaign.brief2concept.llm_client import GeminiLLMClient
from chefcampaign.brief2concept.llm_templates import (
    LLMParsingError,
    generate_concept_prompt,
    parse_llm_response,
    strip_code_fences
)
from chefcampaign.brief2concept.concept_generator import ConceptGenerator
