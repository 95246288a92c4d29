"""
Prompt templates and response parsing for concept generation.

The prompt asks the model for a bare JSON array of concepts. Models still
often wrap the array in a markdown code fence, so the response is unfenced,
parsed, normalised and validated against the ``concepts`` JSON schema before
anything downstream sees it. Any failure here fails the whole request.
"""

import json
import re
from typing import Dict, Any, List, Optional

import jsonschema

from chefcampaign.core.config import get_config_value
from chefcampaign.core.constants import (
    NOT_SPECIFIED,
    MIN_CONCEPTS,
    MAX_CONCEPTS,
    MIN_HASHTAGS,
    MAX_HASHTAGS
)
from chefcampaign.core.logging_config import get_logger
from chefcampaign.models import Brief
from chefcampaign.schemas import load_schema

# Initialize logger
logger = get_logger(__name__)


class LLMParsingError(Exception):
    """Exception raised when parsing an LLM response fails."""
    pass


CONCEPT_GENERATION_PROMPT_TEMPLATE = """You are a social media marketing expert for home restaurants and food delivery platforms.

Generate {min_concepts}-{max_concepts} Instagram campaign concepts for this home restaurant:
- Brand: {brand_name}
- Cuisine: {cuisine_type}
- Star Dish: {star_dish}
- Location: {city}
- Menu Highlights: {menu_highlights}
{style_section}
For each concept, provide:
1. A short, catchy title (3-5 words)
2. An engaging Instagram caption (50-100 words) with a clear call-to-action
3. {min_hashtags}-{max_hashtags} relevant hashtags (mix of popular and niche)
4. A detailed image description for AI image generation (focus on food, ambiance, or lifestyle)

Return ONLY a valid JSON array with this exact structure:
[
  {{
    "title": "string",
    "caption": "string with emojis and CTA",
    "hashtags": ["#tag1", "#tag2"],
    "imageDescription": "detailed prompt for food photography or marketing image"
  }}
]

Make the campaigns feel authentic, appetizing, and action-oriented. Include variety: some food-focused, some lifestyle, some behind-the-scenes."""

# Canonical concept keys, indexed by their lowercased form without separators
FIELD_ALIASES = {
    "title": "title",
    "caption": "caption",
    "hashtags": "hashtags",
    "imagedescription": "imageDescription",
    "imageprompt": "imageDescription",
}

_OPENING_FENCE = re.compile(r'^```[\w+-]*[ \t]*\n?')
_CLOSING_FENCE = re.compile(r'\n?[ \t]*```$')


def generate_concept_prompt(brief: Brief) -> str:
    """
    Build the concept-generation instruction for a brief.

    Missing optional fields are rendered as "not specified". Style
    preferences are only mentioned when the caller gave any.

    Args:
        brief (Brief): The validated brief

    Returns:
        str: The prompt text
    """
    return CONCEPT_GENERATION_PROMPT_TEMPLATE.format(
        brand_name=brief.brand_name,
        cuisine_type=brief.cuisine_type,
        star_dish=brief.star_dish or NOT_SPECIFIED,
        city=brief.city or NOT_SPECIFIED,
        menu_highlights=brief.menu_highlights or NOT_SPECIFIED,
        style_section=_format_style_section(brief),
        min_concepts=get_config_value("generated_concept.min_concepts", MIN_CONCEPTS),
        max_concepts=get_config_value("generated_concept.max_concepts", MAX_CONCEPTS),
        min_hashtags=get_config_value("generated_concept.min_hashtags", MIN_HASHTAGS),
        max_hashtags=get_config_value("generated_concept.max_hashtags", MAX_HASHTAGS)
    )


def _format_style_section(brief: Brief) -> str:
    style = brief.style
    if style.is_empty():
        return ""

    lines = ["", "Visual style preferences for the image descriptions:"]
    if style.atmosphere:
        lines.append(f"- Atmosphere: {style.atmosphere}")
    if style.primary_color:
        lines.append(f"- Primary color: {style.primary_color}")
    if style.text_position:
        lines.append(f"- Leave clean space for text at the {style.text_position} of the image")
    return "\n".join(lines) + "\n"


def strip_code_fences(text: str) -> str:
    """
    Remove a surrounding markdown code fence, with or without a language tag.

    Unfenced text is returned stripped but otherwise unchanged.

    Args:
        text (str): Raw model output

    Returns:
        str: The fenced content
    """
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _OPENING_FENCE.sub("", cleaned, count=1)
        cleaned = _CLOSING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()


def parse_llm_response(
    llm_response: str,
    max_concepts: Optional[int] = None,
    max_hashtags: Optional[int] = None
) -> List[Dict[str, Any]]:
    """
    Parse the LLM response into a list of concept dictionaries.

    Args:
        llm_response (str): Raw model output
        max_concepts (int, optional): Keep at most this many concepts
        max_hashtags (int, optional): Keep at most this many hashtags per concept

    Returns:
        List[Dict[str, Any]]: Concepts with keys title, caption, hashtags, imageDescription

    Raises:
        LLMParsingError: If the response is empty, not JSON, or not a valid concept array
    """
    if not llm_response or not llm_response.strip():
        error_msg = "Empty LLM response received"
        logger.error(error_msg)
        raise LLMParsingError(error_msg)

    max_concepts = max_concepts or get_config_value("generated_concept.max_concepts", MAX_CONCEPTS)
    max_hashtags = max_hashtags or get_config_value("generated_concept.max_hashtags", MAX_HASHTAGS)

    cleaned_response = strip_code_fences(llm_response)
    logger.debug(f"Cleaned response: {cleaned_response[:100]}...")

    try:
        data = json.loads(cleaned_response)
    except json.JSONDecodeError as e:
        error_msg = f"Failed to parse LLM response as JSON: {str(e)}"
        logger.error(error_msg)
        logger.debug(f"Problematic LLM response: {cleaned_response}")
        raise LLMParsingError(error_msg) from e

    if isinstance(data, list):
        data = [_normalize_concept_fields(item) if isinstance(item, dict) else item for item in data]

    try:
        jsonschema.validate(instance=data, schema=load_schema("concepts"))
    except jsonschema.exceptions.ValidationError as e:
        location = "/".join(str(part) for part in e.absolute_path) or "response"
        error_msg = f"LLM response does not match the concept schema at {location}: {e.message}"
        logger.error(error_msg)
        raise LLMParsingError(error_msg) from e

    if len(data) > max_concepts:
        logger.warning(f"LLM returned {len(data)} concepts, keeping the first {max_concepts}")
        data = data[:max_concepts]
    elif len(data) < get_config_value("generated_concept.min_concepts", MIN_CONCEPTS):
        logger.warning(f"LLM returned only {len(data)} concepts")

    min_hashtags = get_config_value("generated_concept.min_hashtags", MIN_HASHTAGS)
    concepts = []
    for concept in data:
        title = concept["title"].strip()
        hashtags = [_format_hashtag(tag) for tag in concept["hashtags"]]
        if len(hashtags) > max_hashtags:
            logger.warning(f"Concept '{title}' has {len(hashtags)} hashtags, keeping the first {max_hashtags}")
            hashtags = hashtags[:max_hashtags]
        elif len(hashtags) < min_hashtags:
            logger.warning(f"Concept '{title}' has only {len(hashtags)} hashtags")
        concepts.append({
            "title": title,
            "caption": concept["caption"].strip(),
            "hashtags": hashtags,
            "imageDescription": concept["imageDescription"].strip(),
        })

    logger.info(f"Parsed {len(concepts)} concepts from LLM response")
    return concepts


def _normalize_concept_fields(concept: Dict[str, Any]) -> Dict[str, Any]:
    """
    Map loosely cased field names onto the canonical concept keys.

    ``image_description``, ``ImageDescription`` and ``image_prompt`` all become
    ``imageDescription``; unknown keys are kept as they are.
    """
    normalized = {}
    for key, value in concept.items():
        canonical = FIELD_ALIASES.get(re.sub(r'[\s_-]', '', key).lower(), key)
        if canonical != key:
            logger.debug(f"Normalized '{key}' to '{canonical}'")
        normalized.setdefault(canonical, value)
    return normalized


def _format_hashtag(tag: str) -> str:
    tag = tag.strip()
    return tag if tag.startswith("#") else f"#{tag}"
