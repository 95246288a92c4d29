"""
Tests for concept generation.
"""

import json

import pytest
from unittest.mock import MagicMock, patch

from chefcampaign.brief2concept.concept_generator import ConceptGenerator, make_concept_id
from chefcampaign.brief2concept.llm_templates import LLMParsingError
from chefcampaign.core.error_handler import ConfigurationError
from chefcampaign.models import Brief, Concept


def llm_reply(count):
    concepts = [
        {
            "title": f"Concept {i}",
            "caption": f"Caption {i}",
            "hashtags": ["#a", "#b", "#c", "#d", "#e"],
            "imageDescription": f"Image {i}"
        }
        for i in range(count)
    ]
    return "```json\n" + json.dumps(concepts) + "\n```"


class TestConceptGenerator:
    """
    Tests for the ConceptGenerator class.
    """

    @pytest.fixture
    def brief(self):
        return Brief(brand_name="Mama's Kitchen", cuisine_type="Italian", star_dish="Lasagna")

    def test_make_concept_id(self):
        assert make_concept_id(1700000000000, 3) == "variant-1700000000000-3"

    def test_generate_concepts(self, brief):
        llm_client = MagicMock()
        llm_client.generate_text.return_value = llm_reply(6)
        generator = ConceptGenerator(llm_client=llm_client)

        with patch("chefcampaign.brief2concept.concept_generator.current_timestamp_ms",
                   return_value=1700000000000):
            concepts = generator.generate_concepts(brief)

        assert len(concepts) == 6
        assert all(isinstance(concept, Concept) for concept in concepts)
        assert [c.id for c in concepts] == [f"variant-1700000000000-{i}" for i in range(6)]
        assert concepts[2].title == "Concept 2"
        assert concepts[2].hashtags == ("#a", "#b", "#c", "#d", "#e")
        assert concepts[2].image_description == "Image 2"

        prompt = llm_client.generate_text.call_args.args[0]
        assert "Mama's Kitchen" in prompt

    def test_ids_unique_within_batch(self, brief):
        llm_client = MagicMock()
        llm_client.generate_text.return_value = llm_reply(7)

        concepts = ConceptGenerator(llm_client=llm_client).generate_concepts(brief)

        ids = [concept.id for concept in concepts]
        assert len(set(ids)) == len(ids)

    def test_parse_failure_propagates(self, brief):
        llm_client = MagicMock()
        llm_client.generate_text.return_value = "Sorry, I cannot help with that."

        with pytest.raises(LLMParsingError):
            ConceptGenerator(llm_client=llm_client).generate_concepts(brief)

    def test_missing_key_surfaces_on_first_use(self, brief):
        generator = ConceptGenerator()

        with pytest.raises(ConfigurationError):
            generator.generate_concepts(brief)
