"""
Sandbox script for trying the recipe connector and image cache against the live feeds.

This script fetches the normal, malformed and empty recipe feeds, prints a
breakdown by cuisine, and loads one photo twice to show the cache short-circuit.

Prerequisites:
- Network access to the recipe feed
- Required packages: requests, pydantic

Run:
    python -m sandbox.sandbox_recipes
"""

import tempfile
import time

from cuisine.connectors.base import NetworkError
from cuisine.connectors.recipes_connector import (
    RECIPES_EMPTY_URL,
    RECIPES_MALFORMED_URL,
    RECIPES_URL,
    RecipeConnector,
)
from cuisine.filtering import available_filter_options, filter_recipes
from cuisine.models import FilterOption
from cuisine.state import error_message
from cuisine.utils.cache import ImageCacheService


def run():
    """Fetch every feed and exercise the image cache."""
    recipes = []
    for label, url in (("normal", RECIPES_URL), ("malformed", RECIPES_MALFORMED_URL), ("empty", RECIPES_EMPTY_URL)):
        print("=" * 80)
        print(f"Feed: {label} ({url})")
        print("=" * 80)
        try:
            fetched = RecipeConnector(base_url=url).fetch_recipes()
        except NetworkError as e:
            print(f"Error: {error_message(e)}")
            continue

        print(f"Total recipes: {len(fetched)}")
        if label == "normal":
            recipes = fetched

    if not recipes:
        return

    print("\n=== Breakdown by Filter ===")
    for option in available_filter_options(recipes):
        print(f"{option.value:16s}: {len(filter_recipes(recipes, option))}")

    first_italian = next(iter(filter_recipes(recipes, FilterOption.ITALIAN)), None)
    photo_url = (first_italian or recipes[0]).photo_url_small
    if not photo_url:
        return

    print(f"\n=== Image Cache ({photo_url}) ===")
    with tempfile.TemporaryDirectory() as cache_dir:
        cache = ImageCacheService(cache_directory=cache_dir)
        for attempt in ("miss", "hit"):
            started = time.perf_counter()
            data = cache.load_image(photo_url)
            elapsed_ms = (time.perf_counter() - started) * 1000
            print(f"{attempt:4s}: {len(data)} bytes in {elapsed_ms:.1f} ms")


if __name__ == "__main__":
    run()
