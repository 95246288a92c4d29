"""
Concept to image processing.

Backends that render, edit and scan campaign images.
"""

from chefcampaign.concept2image.adapters import (
    ImageGenerationAdapter,
    ImageEditingAdapter,
    RecraftAdapter,
    GeminiImagenAdapter,
    GeminiImageEditAdapter,
    TextScanAdapter,
    get_image_adapter
)
