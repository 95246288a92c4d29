"""
Data model for briefs, concepts and variants.

A Brief is the restaurant description a request starts from. The concept
generator turns it into Concepts; rendering an image for a Concept yields a
Variant, whose status moves from ``generating`` to exactly one of
``completed`` or ``error``.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple


class VariantStatus(str, Enum):
    GENERATING = "generating"
    COMPLETED = "completed"
    ERROR = "error"


class VariantStateError(Exception):
    """Raised when a Variant is moved out of a terminal status."""
    pass


@dataclass(frozen=True)
class StylePreferences:
    """Optional image-style preferences attached to a Brief."""

    text_position: Optional[str] = None
    primary_color: Optional[str] = None
    atmosphere: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.text_position or self.primary_color or self.atmosphere)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "textPosition": self.text_position,
            "primaryColor": self.primary_color,
            "atmosphere": self.atmosphere,
        }


@dataclass(frozen=True)
class Brief:
    """
    Restaurant brief driving one generation request.

    Only ``brand_name`` and ``cuisine_type`` are required; see
    chefcampaign.brief2concept.input_validator for validation.
    """

    brand_name: str
    cuisine_type: str
    star_dish: str = ""
    city: str = ""
    menu_highlights: str = ""
    style: StylePreferences = field(default_factory=StylePreferences)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "brandName": self.brand_name,
            "cuisineType": self.cuisine_type,
            "starDish": self.star_dish,
            "city": self.city,
            "menuHighlights": self.menu_highlights,
        }
        if not self.style.is_empty():
            data["style"] = self.style.to_dict()
        return data


@dataclass(frozen=True)
class Concept:
    """One generated campaign idea, before its image is rendered."""

    id: str
    title: str
    caption: str
    hashtags: Tuple[str, ...]
    image_description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "caption": self.caption,
            "hashtags": list(self.hashtags),
            "imageDescription": self.image_description,
        }


@dataclass
class Variant:
    """
    A Concept together with the outcome of rendering its image.

    Use ``Variant.from_concept`` to create one in the ``generating`` state and
    ``mark_completed`` / ``mark_failed`` to settle it. Either call is allowed
    once; the two terminal states are mutually exclusive.
    """

    concept: Concept
    status: VariantStatus = VariantStatus.GENERATING
    image_url: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_concept(cls, concept: Concept) -> "Variant":
        return cls(concept=concept)

    @property
    def id(self) -> str:
        return self.concept.id

    @property
    def is_settled(self) -> bool:
        return self.status is not VariantStatus.GENERATING

    def mark_completed(self, image_url: str) -> "Variant":
        if not image_url:
            raise ValueError("A completed variant needs an image reference")
        self._ensure_generating()
        self.status = VariantStatus.COMPLETED
        self.image_url = image_url
        self.error = None
        return self

    def mark_failed(self, error: str) -> "Variant":
        self._ensure_generating()
        self.status = VariantStatus.ERROR
        self.image_url = None
        self.error = error
        return self

    def with_image(self, image_url: str) -> "Variant":
        """
        Return a completed copy of this Variant showing a different image.

        Used after a single-image edit; the original Variant is left as is.
        """
        if self.status is not VariantStatus.COMPLETED:
            raise VariantStateError(f"Variant {self.id} has no image to replace")
        return dataclasses.replace(self, image_url=image_url)

    def _ensure_generating(self) -> None:
        if self.status is not VariantStatus.GENERATING:
            raise VariantStateError(
                f"Variant {self.id} already settled with status '{self.status.value}'"
            )

    def to_dict(self) -> Dict[str, Any]:
        data = self.concept.to_dict()
        data["imageUrl"] = self.image_url
        data["status"] = self.status.value
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class TextRegion:
    """A text region detected by the OCR service: a polygon plus its text."""

    box: List[List[float]]
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"box": self.box, "text": self.text}


def batch_to_dict(variants: List[Variant]) -> Dict[str, Any]:
    """Serialise a Batch into the response body ``{"variants": [...]}``."""
    return {"variants": [variant.to_dict() for variant in variants]}
