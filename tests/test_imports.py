"""
Test that all modules can be imported.
"""

import importlib

import pytest

MODULES = [
    "chefcampaign",
    "chefcampaign.cli",
    "chefcampaign.models",
    "chefcampaign.core",
    "chefcampaign.core.config",
    "chefcampaign.core.constants",
    "chefcampaign.core.credentials",
    "chefcampaign.core.error_handler",
    "chefcampaign.core.logging_config",
    "chefcampaign.core.utils",
    "chefcampaign.schemas",
    "chefcampaign.brief2concept",
    "chefcampaign.brief2concept.input_validator",
    "chefcampaign.brief2concept.llm_client",
    "chefcampaign.brief2concept.llm_templates",
    "chefcampaign.brief2concept.concept_generator",
    "chefcampaign.concept2image",
    "chefcampaign.concept2image.adapters",
    "chefcampaign.concept2image.adapters.base",
    "chefcampaign.concept2image.adapters.image_generation",
    "chefcampaign.concept2image.adapters.image_editing",
    "chefcampaign.concept2image.adapters.text_scan",
    "chefcampaign.pipeline",
    "chefcampaign.pipeline.pipeline_runner",
    "chefcampaign.api",
    "chefcampaign.api.app",
]


@pytest.mark.parametrize("module_name", MODULES)
def test_import(module_name):
    assert importlib.import_module(module_name) is not None


def test_schemas_packaged():
    from chefcampaign.schemas import load_schema

    assert load_schema("brief")["type"] == "object"
    assert load_schema("concepts")["type"] == "array"
