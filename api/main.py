"""
FastAPI application for the Cuisine recipe API.

This module defines the REST API endpoints for the recipe client:
- GET /recipes: Recipes filtered by cuisine (loads the feed on first use)
- POST /recipes/refresh: Reload the feed on user request
- GET /recipes/filters: Cuisine filter options for the loaded recipes
- GET /images: Image bytes served through the disk cache
- DELETE /images/cache: Clear the image cache
- GET /health: Health check

Run the API with:
    uvicorn api.main:app --reload

Access API documentation at:
    http://localhost:8000/docs (Swagger UI)
"""

# Import config early to load .env file before any other code accesses environment variables
import api.config  # noqa: F401

import logging
import mimetypes
import time
from typing import Optional
from urllib.parse import urlparse

from fastapi import Depends, FastAPI, HTTPException, Query, Response, status

from api.config import RecipesConfig, get_config_summary
from api.schemas import CacheClearResponse, FilterOptionsResponse, RecipeListResponse, RecipeOut
from cuisine.connectors.base import InvalidURL, NetworkError
from cuisine.connectors.recipes_connector import RecipeConnector
from cuisine.models import FilterOption
from cuisine.state import IDLE, RecipeListViewModel, error_message
from cuisine.utils.cache import ImageCacheService

logger = logging.getLogger(__name__)

# Track app start time for uptime calculation
_APP_START_TIME = time.time()

API_NAME = "Cuisine Recipe API"
API_VERSION = "1.0.0"

app = FastAPI(
    title=API_NAME,
    description="Recipe feed with cuisine filtering and a disk-backed image cache",
    version=API_VERSION,
    openapi_tags=[
        {"name": "recipes", "description": "Load and filter recipes by cuisine."},
        {"name": "images", "description": "Recipe photos served through the local disk cache."},
        {"name": "health", "description": "Health check and monitoring endpoints."},
    ],
)

# Process-wide services, created on first use
_view_model: Optional[RecipeListViewModel] = None
_image_cache: Optional[ImageCacheService] = None


def get_view_model() -> RecipeListViewModel:
    """Get the shared recipe list state holder."""
    global _view_model
    if _view_model is None:
        connector = RecipeConnector(
            base_url=RecipesConfig.get_recipes_url(),
            timeout=RecipesConfig.get_request_timeout(),
        )
        _view_model = RecipeListViewModel(connector)
    return _view_model


def get_image_cache() -> ImageCacheService:
    """Get the shared image cache."""
    global _image_cache
    if _image_cache is None:
        _image_cache = ImageCacheService(
            cache_directory=RecipesConfig.get_image_cache_dir(),
            timeout=RecipesConfig.get_request_timeout(),
        )
    return _image_cache


def parse_filter(cuisine: Optional[str]) -> Optional[FilterOption]:
    """
    Convert the cuisine query parameter into a FilterOption.

    Raises:
        HTTPException 400: If the label matches no filter option
    """
    if cuisine is None:
        return None
    try:
        return FilterOption.from_label(cuisine)
    except ValueError as e:
        valid = ", ".join(option.value for option in FilterOption)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{e}. Valid values: {valid}",
        ) from e


def build_recipe_list_response(view_model: RecipeListViewModel, refreshed: Optional[bool] = None) -> RecipeListResponse:
    state = view_model.state
    return RecipeListResponse(
        state=state.status,
        selected_filter=view_model.selected_filter.value,
        recipes=[RecipeOut.from_recipe(recipe) for recipe in view_model.filtered_recipes],
        total=len(state.recipes),
        filter_options=[option.value for option in view_model.filter_options()],
        error=state.message,
        refreshed=refreshed,
    )


@app.get(
    "/recipes",
    response_model=RecipeListResponse,
    tags=["recipes"],
    summary="List recipes filtered by cuisine",
)
def list_recipes(
    cuisine: Optional[str] = Query(
        None,
        description="Cuisine filter label (e.g., 'Italian', 'Middle Eastern', 'All Cuisines', 'Other'). "
                    "Keeps the current selection if omitted.",
    ),
    view_model: RecipeListViewModel = Depends(get_view_model),
) -> RecipeListResponse:
    """
    Return the recipes matching the selected cuisine filter.

    The feed is fetched on the first request. Later requests reuse the loaded
    recipes until POST /recipes/refresh is called. Fetch failures are reported
    in the `state` and `error` fields, not as HTTP errors.
    """
    selected = parse_filter(cuisine)
    if selected is not None:
        view_model.selected_filter = selected

    if view_model.state.status == IDLE:
        view_model.load_recipes()

    return build_recipe_list_response(view_model)


@app.post(
    "/recipes/refresh",
    response_model=RecipeListResponse,
    tags=["recipes"],
    summary="Reload the recipe feed",
)
def refresh_recipes(view_model: RecipeListViewModel = Depends(get_view_model)) -> RecipeListResponse:
    """
    Reload the recipe feed.

    If another load is already in flight the request is ignored and the
    response carries `refreshed: false`.
    """
    refreshed = view_model.refresh_recipes()
    return build_recipe_list_response(view_model, refreshed=refreshed)


@app.get(
    "/recipes/filters",
    response_model=FilterOptionsResponse,
    tags=["recipes"],
    summary="Cuisine filter options for the loaded recipes",
)
def recipe_filters(view_model: RecipeListViewModel = Depends(get_view_model)) -> FilterOptionsResponse:
    return FilterOptionsResponse(options=[option.value for option in view_model.filter_options()])


def guess_media_type(url: str) -> str:
    media_type, _ = mimetypes.guess_type(urlparse(url).path)
    return media_type or "application/octet-stream"


@app.get(
    "/images",
    tags=["images"],
    summary="Fetch an image through the disk cache",
    responses={200: {"content": {"image/jpeg": {}, "application/octet-stream": {}}}},
)
def get_image(
    url: str = Query(..., min_length=1, description="Absolute http(s) URL of the image"),
    image_cache: ImageCacheService = Depends(get_image_cache),
) -> Response:
    """
    Return image bytes for a URL.

    Cached images are served from disk without a network request.

    Raises:
        HTTPException 400: If the URL is invalid
        HTTPException 502: If the image could not be fetched
    """
    try:
        data = image_cache.load_image(url)
    except InvalidURL as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_message(e)) from e
    except NetworkError as e:
        logger.warning("Image fetch failed for %s: %s", url, e)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=error_message(e)) from e

    return Response(content=data, media_type=guess_media_type(url))


@app.delete(
    "/images/cache",
    response_model=CacheClearResponse,
    tags=["images"],
    summary="Clear the image cache",
)
def clear_image_cache(image_cache: ImageCacheService = Depends(get_image_cache)) -> CacheClearResponse:
    image_cache.clear_cache()
    return CacheClearResponse(
        cleared=image_cache.cache_directory.is_dir(),
        cache_dir=str(image_cache.cache_directory),
    )


@app.get("/health", tags=["health"])
def health():
    """
    Health check endpoint for monitoring and status checks.

    Returns:
        Dictionary with status, API metadata, uptime and effective configuration.
        Always returns 200 OK if the endpoint is reachable.
    """
    uptime_seconds = int(time.time() - _APP_START_TIME)

    return {
        "status": "ok",
        "name": API_NAME,
        "version": API_VERSION,
        "uptime_seconds": uptime_seconds,
        "config": get_config_summary(),
    }
