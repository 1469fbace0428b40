"""
Configuration management for the Cuisine recipe API.

This module centralizes environment variable loading from the .env file at the
project root. It should be imported early in api/main.py so .env is loaded
before any other code accesses environment variables.

In production, .env will usually not exist; load_dotenv() is safe to call and
will no-op, and platform environment variables are used instead.

Environment Variables:
- RECIPES_URL: Optional, recipe feed URL (defaults to the production feed)
- REQUEST_TIMEOUT_SECONDS: Optional, HTTP timeout for feed and image requests (defaults to 10)
- IMAGE_CACHE_DIR: Optional, image cache directory (defaults to ~/.cache/RecipeImageCache)
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from cuisine.connectors.recipes_connector import DEFAULT_TIMEOUT_SECONDS, RECIPES_URL
from cuisine.utils.cache import default_cache_directory


def load_env_file() -> None:
    """
    Load environment variables from .env file at project root.

    Safe to call multiple times. Existing environment variables take precedence.
    """
    # api/config.py -> api/ -> project root
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


load_env_file()


class RecipesConfig:
    """Configuration for the recipe feed and image cache."""

    @staticmethod
    def get_recipes_url() -> str:
        """
        Get the recipe feed URL.

        Returns:
            URL string (default: the production recipes.json feed)
        """
        return os.getenv("RECIPES_URL", RECIPES_URL)

    @staticmethod
    def get_request_timeout() -> float:
        """
        Get the HTTP request timeout in seconds.

        Returns:
            Timeout as float. Falls back to the default if the variable is not a number.
        """
        raw = os.getenv("REQUEST_TIMEOUT_SECONDS")
        if not raw:
            return DEFAULT_TIMEOUT_SECONDS
        try:
            timeout = float(raw)
        except ValueError:
            return DEFAULT_TIMEOUT_SECONDS
        return timeout if timeout > 0 else DEFAULT_TIMEOUT_SECONDS

    @staticmethod
    def get_image_cache_dir() -> Path:
        """
        Get the image cache directory.

        Returns:
            Path from IMAGE_CACHE_DIR, or ~/.cache/RecipeImageCache
        """
        return default_cache_directory()


def get_config_summary() -> dict:
    """
    Get the effective configuration (useful for the health endpoint and debugging).

    Returns:
        Dictionary with recipes_url, request_timeout_seconds and image_cache_dir
    """
    return {
        "recipes_url": RecipesConfig.get_recipes_url(),
        "request_timeout_seconds": RecipesConfig.get_request_timeout(),
        "image_cache_dir": str(RecipesConfig.get_image_cache_dir()),
    }
