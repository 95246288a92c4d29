"""
Tests for brief validation.
"""

import pytest

from chefcampaign.brief2concept.input_validator import InputValidator
from chefcampaign.core.constants import MISSING_BRIEF_FIELDS_MESSAGE
from chefcampaign.core.error_handler import ValidationError
from chefcampaign.models import Brief, StylePreferences


class TestInputValidator:
    """
    Tests for the InputValidator class.
    """

    @pytest.fixture
    def validator(self):
        return InputValidator()

    def test_valid_brief(self, validator, chef_data):
        brief = validator.validate_brief(chef_data)

        assert brief == Brief(
            brand_name="Mama's Kitchen",
            cuisine_type="Italian",
            star_dish="Truffle Pasta",
            city="Amsterdam",
            menu_highlights="Fresh pasta"
        )
        assert brief.style.is_empty()

    def test_minimal_brief_strips_values(self, validator):
        brief = validator.validate_brief({"brandName": "  Spice Route ", "cuisineType": "Indian\n"})

        assert brief.brand_name == "Spice Route"
        assert brief.cuisine_type == "Indian"
        assert brief.star_dish == ""
        assert brief.city == ""

    @pytest.mark.parametrize("chef_data", [
        {"cuisineType": "Italian"},
        {"brandName": "Mama's Kitchen"},
        {"brandName": "", "cuisineType": "Italian"},
        {"brandName": "Mama's Kitchen", "cuisineType": "   "},
        {"brandName": None, "cuisineType": "Italian"},
        {},
        None,
        ["Mama's Kitchen", "Italian"],
    ])
    def test_missing_required_fields(self, validator, chef_data):
        with pytest.raises(ValidationError) as excinfo:
            validator.validate_brief(chef_data)

        assert excinfo.value.message == MISSING_BRIEF_FIELDS_MESSAGE

    def test_wrong_field_type(self, validator):
        with pytest.raises(ValidationError) as excinfo:
            validator.validate_brief({"brandName": "Mama's Kitchen", "cuisineType": "Italian", "city": 42})

        assert excinfo.value.message.startswith("Invalid brief:")
        assert excinfo.value.field == "city"

    def test_invalid_text_position(self, validator):
        with pytest.raises(ValidationError):
            validator.validate_brief({
                "brandName": "Mama's Kitchen",
                "cuisineType": "Italian",
                "style": {"textPosition": "left"}
            })

    def test_nested_style(self, validator, chef_data):
        chef_data["style"] = {"textPosition": "top", "primaryColor": "#aa3300", "atmosphere": "cozy"}

        brief = validator.validate_brief(chef_data)

        assert brief.style == StylePreferences(text_position="top", primary_color="#aa3300", atmosphere="cozy")

    def test_flat_style(self, validator, chef_data):
        chef_data.update({"textPosition": "bottom", "atmosphere": "", "primaryColor": None})

        brief = validator.validate_brief(chef_data)

        assert brief.style == StylePreferences(text_position="bottom")
