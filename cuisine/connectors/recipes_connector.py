"""
Recipe feed connector.

This connector fetches the recipe list from the remote JSON endpoint and decodes
it into Recipe objects.

The connector:
- Sends a single GET request per call (no retry, no backoff)
- Raises ServerError for non-2xx status codes, carrying the status code
- Raises DecodingError when the body is not valid JSON or lacks the expected shape
- Preserves feed order

The endpoint defaults to the production feed but can be overridden via the
RECIPES_URL environment variable or the base_url argument.
"""

import logging
import os
from typing import List, Optional

import requests
from pydantic import ValidationError

from cuisine.models import Recipe, RecipeResponse

from .base import BaseConnector, DecodingError, InvalidResponse, ServerError, is_success_status

logger = logging.getLogger(__name__)

RECIPES_URL = "https://d3jbb8n5wk0qxi.cloudfront.net/recipes.json"
RECIPES_MALFORMED_URL = "https://d3jbb8n5wk0qxi.cloudfront.net/recipes-malformed.json"
RECIPES_EMPTY_URL = "https://d3jbb8n5wk0qxi.cloudfront.net/recipes-empty.json"

DEFAULT_TIMEOUT_SECONDS = 10.0


class RecipeConnector(BaseConnector):
    """
    Connector for the recipe JSON feed.

    Example:
        >>> connector = RecipeConnector()
        >>> recipes = connector.fetch_recipes()
        >>> recipes[0].name
        'Apam Balik'
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """
        Initialize the recipe connector.

        Args:
            base_url: Feed URL (optional, reads from RECIPES_URL env var or defaults to the production feed)
            session: requests.Session to send requests with (optional, a new session is created)
            timeout: Request timeout in seconds (optional, defaults to 10 seconds)
        """
        super().__init__(session=session, timeout=timeout or DEFAULT_TIMEOUT_SECONDS)
        self.base_url = base_url or os.getenv("RECIPES_URL", RECIPES_URL)

    def fetch_recipes(self) -> List[Recipe]:
        """
        Fetch the recipe feed and decode it.

        Returns:
            List of Recipe objects in the order the feed lists them. Empty if the
            feed contains no recipes.

        Raises:
            InvalidURL: If base_url is not an absolute http(s) URL
            InvalidResponse: If no response was received or it carries no status
            ServerError: If the status code is not 2xx
            DecodingError: If the body is not a valid recipe envelope
        """
        logger.info("Fetching recipes from %s", self.base_url)
        response = self._get(self.base_url)

        status_code = getattr(response, "status_code", None)
        if status_code is None:
            raise InvalidResponse(f"Response from {self.base_url} has no status code")
        if not is_success_status(status_code):
            logger.warning("Recipe feed returned status %d", status_code)
            raise ServerError(status_code)

        try:
            recipe_response = RecipeResponse.model_validate_json(response.content)
        except ValidationError as e:
            logger.warning("Could not decode recipe feed from %s: %s", self.base_url, e)
            raise DecodingError(f"Could not decode recipes from {self.base_url}") from e

        logger.info("Recipe feed returned %d recipes", len(recipe_response.recipes))
        return recipe_response.recipes
