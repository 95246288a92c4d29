"""
chefcampaign - Marketing campaign generator for home restaurants

Turns a restaurant brief into a batch of social media campaign concepts, each
with a rendered image, and offers single-image editing and text scanning.
"""

__version__ = "0.1.0"

# Import main components for easier access
from chefcampaign.models import Brief, StylePreferences, Concept, Variant, VariantStatus, TextRegion
from chefcampaign.brief2concept.input_validator import InputValidator
from chefcampaign.brief2concept.concept_generator import ConceptGenerator
from chefcampaign.concept2image.adapters.image_generation import get_image_adapter
from chefcampaign.pipeline.pipeline_runner import CampaignPipeline, render_variants
