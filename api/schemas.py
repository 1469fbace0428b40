"""
Pydantic schemas for FastAPI responses.

The schemas include:
- RecipeOut: Recipe as returned to clients
- RecipeListResponse: Load state, selected filter, filtered recipes and filter options
- FilterOptionsResponse: Filter options for the loaded data
- CacheClearResponse: Result of clearing the image cache
"""

from typing import List, Optional

from pydantic import BaseModel, Field, ConfigDict

from cuisine.models import Recipe


class RecipeOut(BaseModel):
    """Recipe returned by the API (same snake_case field names as the feed)."""
    uuid: str = Field(..., description="Unique recipe identifier")
    name: str = Field(..., description="Recipe name")
    cuisine: str = Field(..., description="Cuisine label")
    photo_url_large: Optional[str] = Field(None, description="URL to the full-size photo")
    photo_url_small: Optional[str] = Field(None, description="URL to the thumbnail photo")
    source_url: Optional[str] = Field(None, description="Link to the original recipe page")
    youtube_url: Optional[str] = Field(None, description="Link to a YouTube video for the recipe")

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeOut":
        return cls.model_validate(recipe)


class RecipeListResponse(BaseModel):
    """Response model for the recipe list endpoints."""
    state: str = Field(..., description="Load state: idle, loading, loaded, empty or error")
    selected_filter: str = Field(..., description="Label of the applied cuisine filter")
    recipes: List[RecipeOut] = Field(default_factory=list, description="Recipes matching the filter")
    total: int = Field(0, ge=0, description="Number of loaded recipes before filtering")
    filter_options: List[str] = Field(default_factory=list, description="Filter labels available for the loaded data")
    error: Optional[str] = Field(None, description="Human-readable error message when state is 'error'")
    refreshed: Optional[bool] = Field(None, description="False if a refresh was ignored because a load was in flight")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "state": "loaded",
                "selected_filter": "Italian",
                "recipes": [
                    {
                        "uuid": "1",
                        "name": "Budino Di Ricotta",
                        "cuisine": "Italian",
                        "photo_url_large": "https://example.com/large.jpg",
                        "photo_url_small": "https://example.com/small.jpg",
                        "source_url": None,
                        "youtube_url": "https://www.youtube.com/watch?v=6dzd6Ra6Z0o",
                    }
                ],
                "total": 63,
                "filter_options": ["All Cuisines", "Italian", "American", "British", "French", "Other"],
                "error": None,
            }
        }
    )


class FilterOptionsResponse(BaseModel):
    """Filter options for the loaded recipes."""
    options: List[str] = Field(..., description="Filter labels, starting with 'All Cuisines'")


class CacheClearResponse(BaseModel):
    """Result of clearing the image cache."""
    cleared: bool = Field(..., description="True once the cache directory was recreated empty")
    cache_dir: str = Field(..., description="Cache directory path")
