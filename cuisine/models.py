"""
Recipe and filter models for the cuisine client.

This module defines the canonical recipe schema used throughout the client.
The remote feed delivers snake_case JSON which is decoded directly into Recipe
through pydantic, wrapped in a RecipeResponse envelope.

# NOTE: Recipe identity is the uuid. Two recipes with the same uuid compare equal
    even if their other fields differ, so lists can be compared by identity the
    same way the state holder compares loaded results.

Expected feed shape:
    {"recipes": [{"cuisine": "...", "name": "...", "photo_url_large": "...",
                  "photo_url_small": "...", "uuid": "...", "source_url": "...",
                  "youtube_url": "..."}]}
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, Field, ConfigDict


class Recipe(BaseModel):
    """
    A single dish record from the remote feed.

    Optional fields are None when the feed omits them or sends null.
    """
    # Core identifiers
    uuid: str = Field(..., description="Unique recipe identifier")
    name: str = Field(..., description="Recipe name")
    cuisine: str = Field(..., description="Cuisine label as sent by the feed (e.g., 'Italian')")

    # Media and links
    photo_url_large: Optional[str] = Field(None, description="URL to the full-size photo")
    photo_url_small: Optional[str] = Field(None, description="URL to the thumbnail photo")
    source_url: Optional[str] = Field(None, description="Link to the original recipe page")
    youtube_url: Optional[str] = Field(None, description="Link to a YouTube video for the recipe")

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "cuisine": "Malaysian",
                "name": "Apam Balik",
                "photo_url_large": "https://example.com/photos/large.jpg",
                "photo_url_small": "https://example.com/photos/small.jpg",
                "uuid": "0c6ca6e7-e32a-4053-b824-1dbf749910d8",
                "source_url": "https://example.com/recipes/apam-balik",
                "youtube_url": "https://www.youtube.com/watch?v=6R8ffRRJcrg",
            }
        }
    )

    @property
    def id(self) -> str:
        """Identifier used by list consumers (same as uuid)."""
        return self.uuid

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)


class RecipeResponse(BaseModel):
    """Envelope returned by the recipes endpoint."""
    recipes: List[Recipe] = Field(..., description="Recipes in feed order")


class FilterOption(str, Enum):
    """
    Cuisine filter selection.

    Values are the display labels. ALL passes every recipe through and OTHER
    collects cuisines that match none of the known labels.
    """
    ALL = "All Cuisines"
    ITALIAN = "Italian"
    MEXICAN = "Mexican"
    ASIAN = "Asian"
    FRENCH = "French"
    AMERICAN = "American"
    INDIAN = "Indian"
    MEDITERRANEAN = "Mediterranean"
    MIDDLE_EASTERN = "Middle Eastern"
    BRITISH = "British"
    JAPANESE = "Japanese"
    THAI = "Thai"
    SPANISH = "Spanish"
    GREEK = "Greek"
    OTHER = "Other"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def known_cuisines(cls) -> List["FilterOption"]:
        """Options that name a concrete cuisine (everything except ALL and OTHER)."""
        return [option for option in cls if option not in (cls.ALL, cls.OTHER)]

    @classmethod
    def for_cuisine(cls, cuisine: str) -> Optional["FilterOption"]:
        """
        Find the known cuisine option whose label matches a recipe's cuisine.

        Args:
            cuisine: Cuisine string from a recipe

        Returns:
            Matching FilterOption, or None if the cuisine is not one of the known labels
        """
        cuisine_norm = (cuisine or "").lower()
        for option in cls.known_cuisines():
            if option.value.lower() == cuisine_norm:
                return option
        return None

    @classmethod
    def from_label(cls, label: str) -> "FilterOption":
        """
        Resolve a filter option from a label or member name, case-insensitively.

        Accepts "Italian", "italian", "Middle Eastern", "middle_eastern",
        "All Cuisines" and "all".

        Raises:
            ValueError: If the label matches no option
        """
        label_norm = (label or "").strip().lower()
        for option in cls:
            if label_norm in (option.value.lower(), option.name.lower()):
                return option
        raise ValueError(f"Unknown cuisine filter: {label!r}")
