"""
Recipe list state management.

This module holds the state behind a recipe list screen: the load state, the
selected cuisine filter and the filtered list derived from both. Whenever the
state or the filter changes, the filtered list is recomputed and subscribers
are notified.

Load states:
- `idle`: nothing requested yet
- `loading`: a fetch is in flight
- `loaded`: recipes are available
- `empty`: the feed returned no recipes
- `error`: the fetch failed; `message` holds a human-readable explanation

# NOTE: Only one load runs at a time. A load requested while another is in
    flight is ignored (load_recipes returns False). The underlying request is
    never cancelled.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from cuisine.connectors.base import (
    BaseConnector,
    DecodingError,
    InvalidData,
    InvalidResponse,
    InvalidURL,
    ServerError,
)
from cuisine.connectors.recipes_connector import RecipeConnector
from cuisine.filtering import available_filter_options, filter_recipes
from cuisine.models import FilterOption, Recipe

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
LOADED = "loaded"
EMPTY = "empty"
ERROR = "error"


@dataclass(frozen=True)
class RecipeListState:
    """Load state of the recipe list. Loaded states compare by recipe uuids."""
    status: str = IDLE
    recipes: Tuple[Recipe, ...] = ()
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "RecipeListState":
        return cls(IDLE)

    @classmethod
    def loading(cls) -> "RecipeListState":
        return cls(LOADING)

    @classmethod
    def loaded(cls, recipes: List[Recipe]) -> "RecipeListState":
        return cls(LOADED, recipes=tuple(recipes))

    @classmethod
    def empty(cls) -> "RecipeListState":
        return cls(EMPTY)

    @classmethod
    def error(cls, message: str) -> "RecipeListState":
        return cls(ERROR, message=message)


def error_message(error: Exception) -> str:
    """
    Turn a fetch error into a message suitable for display.

    Args:
        error: Exception raised by a connector

    Returns:
        Human-readable message
    """
    # ServerError is an InvalidResponse, so it must be checked first
    if isinstance(error, ServerError):
        return f"Server error: {error.status_code}"
    if isinstance(error, InvalidURL):
        return "Invalid URL"
    if isinstance(error, InvalidResponse):
        return "Invalid response from server"
    if isinstance(error, InvalidData):
        return "Invalid data received"
    if isinstance(error, DecodingError):
        return "Could not decode the data. The data might be malformed."
    return str(error)


Subscriber = Callable[["RecipeListViewModel"], None]


class RecipeListViewModel:
    """
    State holder for the recipe list.

    Example:
        >>> view_model = RecipeListViewModel(RecipeConnector())
        >>> view_model.load_recipes()
        True
        >>> view_model.selected_filter = FilterOption.ITALIAN
        >>> [r.cuisine for r in view_model.filtered_recipes][:1]
        ['Italian']
    """

    def __init__(self, connector: Optional[BaseConnector] = None) -> None:
        self.connector = connector or RecipeConnector()
        self._state = RecipeListState.idle()
        self._selected_filter = FilterOption.ALL
        self._filtered_recipes: List[Recipe] = []
        self._all_recipes: List[Recipe] = []
        self._subscribers: List[Subscriber] = []
        self._load_lock = threading.Lock()

    @property
    def state(self) -> RecipeListState:
        return self._state

    @state.setter
    def state(self, value: RecipeListState) -> None:
        self._state = value
        if value.status == LOADED:
            self._all_recipes = list(value.recipes)
        self._recompute()

    @property
    def selected_filter(self) -> FilterOption:
        return self._selected_filter

    @selected_filter.setter
    def selected_filter(self, value: FilterOption) -> None:
        self._selected_filter = value
        self._recompute()

    @property
    def filtered_recipes(self) -> List[Recipe]:
        return list(self._filtered_recipes)

    @property
    def all_recipes(self) -> List[Recipe]:
        """Recipes from the last successful non-empty load."""
        return list(self._all_recipes)

    @property
    def is_loading(self) -> bool:
        return self._load_lock.locked()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback run after every recomputation of the filtered list.

        Returns:
            Function that removes the callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _recompute(self) -> None:
        recipes = list(self._state.recipes) if self._state.status == LOADED else []
        self._filtered_recipes = filter_recipes(recipes, self._selected_filter)
        for callback in list(self._subscribers):
            callback(self)

    def filter_options(self) -> List[FilterOption]:
        """Filter options available for the last loaded recipes."""
        return available_filter_options(self._all_recipes)

    def load_recipes(self) -> bool:
        """
        Fetch recipes and update the state.

        Returns:
            True if a load ran, False if it was ignored because another load is in flight
        """
        if not self._load_lock.acquire(blocking=False):
            logger.debug("Recipe load already in flight, ignoring request")
            return False

        try:
            self.state = RecipeListState.loading()
            try:
                recipes = self.connector.fetch_recipes()
            except Exception as e:
                message = error_message(e)
                logger.warning("Loading recipes failed: %s", message)
                self.state = RecipeListState.error(message)
                return True

            if recipes:
                self.state = RecipeListState.loaded(recipes)
            else:
                self.state = RecipeListState.empty()
            return True
        finally:
            self._load_lock.release()

    def refresh_recipes(self) -> bool:
        """Manual refresh requested by the user."""
        return self.load_recipes()
