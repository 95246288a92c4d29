"""
Tests for concept prompt building and response parsing.
"""

import json

import pytest
from unittest.mock import patch

from chefcampaign.brief2concept.llm_templates import (
    LLMParsingError,
    generate_concept_prompt,
    parse_llm_response,
    strip_code_fences
)
from chefcampaign.models import Brief, StylePreferences


def make_concepts(count, hashtags=None):
    return [
        {
            "title": f"Concept {i}",
            "caption": f"Caption {i}. Order now!",
            "hashtags": hashtags or ["#food", "#homemade", "#italian", "#boston", "#lasagna"],
            "imageDescription": f"Overhead shot of dish {i}"
        }
        for i in range(count)
    ]


class TestConceptPrompt:
    """
    Tests for generate_concept_prompt.
    """

    def test_prompt_contains_brief_fields(self):
        brief = Brief(brand_name="Mama's Kitchen", cuisine_type="Italian", star_dish="Lasagna",
                      city="Boston", menu_highlights="Tiramisu")

        prompt = generate_concept_prompt(brief)

        assert "- Brand: Mama's Kitchen" in prompt
        assert "- Cuisine: Italian" in prompt
        assert "- Star Dish: Lasagna" in prompt
        assert "- Location: Boston" in prompt
        assert "- Menu Highlights: Tiramisu" in prompt
        assert "Generate 5-7 Instagram campaign concepts" in prompt
        assert "5-8 relevant hashtags" in prompt
        assert "Visual style preferences" not in prompt

    def test_missing_optional_fields_are_not_specified(self):
        prompt = generate_concept_prompt(Brief(brand_name="Spice Route", cuisine_type="Indian"))

        assert "- Star Dish: not specified" in prompt
        assert "- Location: not specified" in prompt
        assert "- Menu Highlights: not specified" in prompt

    def test_style_preferences_included(self):
        brief = Brief(
            brand_name="Spice Route",
            cuisine_type="Indian",
            style=StylePreferences(text_position="top", primary_color="saffron", atmosphere="festive")
        )

        prompt = generate_concept_prompt(brief)

        assert "- Atmosphere: festive" in prompt
        assert "- Primary color: saffron" in prompt
        assert "space for text at the top" in prompt


class TestResponseParsing:
    """
    Tests for strip_code_fences and parse_llm_response.
    """

    def test_fence_variants_parse_identically(self):
        body = json.dumps(make_concepts(5), indent=2)
        variants = [
            f"```json\n{body}\n```",
            f"```\n{body}\n```",
            body,
            f"  \n```JSON\n{body}\n```  \n",
        ]

        results = [parse_llm_response(text) for text in variants]

        assert all(result == results[0] for result in results)
        assert len(results[0]) == 5

    def test_strip_code_fences(self):
        assert strip_code_fences("```json\n[1]\n```") == "[1]"
        assert strip_code_fences("```[1]```") == "[1]"
        assert strip_code_fences("  [1]  ") == "[1]"

    def test_field_name_normalisation(self):
        raw = json.dumps([{
            "Title": " Sunday Lasagna ",
            "Caption": "Layers of love.",
            "Hashtags": ["lasagna", "#homemade"],
            "image_description": "Bubbling lasagna on a rustic table"
        }])

        concepts = parse_llm_response(raw)

        assert concepts == [{
            "title": "Sunday Lasagna",
            "caption": "Layers of love.",
            "hashtags": ["#lasagna", "#homemade"],
            "imageDescription": "Bubbling lasagna on a rustic table"
        }]

    def test_truncates_to_maximums(self):
        tags = [f"#tag{i}" for i in range(12)]
        concepts = parse_llm_response(json.dumps(make_concepts(10, hashtags=tags)))

        assert len(concepts) == 7
        assert all(len(concept["hashtags"]) == 8 for concept in concepts)
        assert concepts[0]["title"] == "Concept 0"

    def test_hashtag_count_warnings(self):
        raw = json.dumps(
            make_concepts(1, hashtags=[f"#tag{i}" for i in range(10)])
            + make_concepts(1, hashtags=["#lasagna", "#boston"])
        )

        with patch("chefcampaign.brief2concept.llm_templates.logger") as mock_logger:
            concepts = parse_llm_response(raw)

        warnings = [call.args[0] for call in mock_logger.warning.call_args_list]
        assert any("has 10 hashtags, keeping the first 8" in message for message in warnings)
        assert any("has only 2 hashtags" in message for message in warnings)
        assert [len(concept["hashtags"]) for concept in concepts] == [8, 2]

    def test_accepts_fewer_than_minimum(self):
        concepts = parse_llm_response(json.dumps(make_concepts(2)))

        assert len(concepts) == 2

    @pytest.mark.parametrize("raw", [
        "",
        "   ",
        "Here are your concepts!",
        "```json\n[{\"title\": \"x\",]\n```",
        json.dumps({"title": "not a list"}),
        json.dumps([]),
        json.dumps([{"title": "x", "caption": "y", "hashtags": ["#a"]}]),
        json.dumps([{"title": "x", "caption": "y", "hashtags": [], "imageDescription": "z"}]),
        json.dumps([{"title": "  ", "caption": "y", "hashtags": ["#a"], "imageDescription": "z"}]),
        json.dumps(["just a string"]),
    ])
    def test_invalid_responses_raise(self, raw):
        with pytest.raises(LLMParsingError):
            parse_llm_response(raw)
