"""
Brief validation.

This module turns the ``chefData`` object a caller submits into an immutable
Brief, rejecting it before any backend call is made when the brand name or
cuisine type is missing or a field has the wrong type.
"""

from typing import Dict, Any, Optional

import jsonschema

from chefcampaign.core.constants import MISSING_BRIEF_FIELDS_MESSAGE
from chefcampaign.core.error_handler import ValidationError, validate_required_fields
from chefcampaign.core.logging_config import get_logger
from chefcampaign.models import Brief, StylePreferences
from chefcampaign.schemas import load_schema

# Initialize logger
logger = get_logger(__name__)

REQUIRED_BRIEF_FIELDS = ["brandName", "cuisineType"]


class InputValidator:
    """
    Validates restaurant briefs.
    """

    def __init__(self):
        self.brief_schema = load_schema("brief")
        logger.debug("Loaded brief schema")

    def validate_brief(self, chef_data: Optional[Dict[str, Any]]) -> Brief:
        """
        Validate a brief payload and build a Brief from it.

        Args:
            chef_data (Dict[str, Any]): Brief fields in wire (camelCase) form

        Returns:
            Brief: The validated brief

        Raises:
            ValidationError: If required fields are missing or the payload is malformed
        """
        if not isinstance(chef_data, dict):
            logger.warning("Rejected brief: payload is not an object")
            raise ValidationError(MISSING_BRIEF_FIELDS_MESSAGE, field="chefData", value=chef_data)

        try:
            validate_required_fields(chef_data, REQUIRED_BRIEF_FIELDS, message=MISSING_BRIEF_FIELDS_MESSAGE)
        except ValidationError:
            logger.warning("Rejected brief: brand name or cuisine type missing")
            raise

        try:
            jsonschema.validate(instance=chef_data, schema=self.brief_schema)
        except jsonschema.exceptions.ValidationError as e:
            field = ".".join(str(part) for part in e.absolute_path) or None
            error_msg = f"Invalid brief: {e.message}"
            logger.warning(error_msg)
            raise ValidationError(error_msg, field=field) from e

        brief = Brief(
            brand_name=chef_data["brandName"].strip(),
            cuisine_type=chef_data["cuisineType"].strip(),
            star_dish=_clean(chef_data.get("starDish")),
            city=_clean(chef_data.get("city")),
            menu_highlights=_clean(chef_data.get("menuHighlights")),
            style=self._extract_style(chef_data)
        )

        logger.info(f"Validated brief for '{brief.brand_name}' ({brief.cuisine_type})")
        return brief

    def _extract_style(self, chef_data: Dict[str, Any]) -> StylePreferences:
        # Style keys may be nested under "style" or sit directly on the brief
        style = chef_data.get("style") or {}
        return StylePreferences(
            text_position=_clean(style.get("textPosition", chef_data.get("textPosition"))) or None,
            primary_color=_clean(style.get("primaryColor", chef_data.get("primaryColor"))) or None,
            atmosphere=_clean(style.get("atmosphere", chef_data.get("atmosphere"))) or None
        )


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""
