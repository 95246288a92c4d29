"""
Adapters for external image generation, editing and text-scan services.
"""

from chefcampaign.concept2image.adapters.base import ImageGenerationAdapter, ImageEditingAdapter
from chefcampaign.concept2image.adapters.image_generation import (
    RecraftAdapter,
    GeminiImagenAdapter,
    get_image_adapter
)
from chefcampaign.concept2image.adapters.image_editing import GeminiImageEditAdapter
from chefcampaign.concept2image.adapters.text_scan import TextScanAdapter
