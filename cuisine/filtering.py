"""
Cuisine filtering for recipe lists.

Key functions:
- filter_recipes: Derives the display list from raw recipes and the selected filter
- available_filter_options: Lists the filter options that make sense for the loaded data

Both functions are pure: the input list is never mutated and order is preserved.
"""

from typing import Iterable, List

from cuisine.models import FilterOption, Recipe


def _matches(recipe: Recipe, selected: FilterOption) -> bool:
    if selected is FilterOption.OTHER:
        return bool(recipe.cuisine.strip()) and FilterOption.for_cuisine(recipe.cuisine) is None
    return recipe.cuisine.lower() == selected.value.lower()


def filter_recipes(recipes: Iterable[Recipe], selected: FilterOption) -> List[Recipe]:
    """
    Filter recipes by cuisine.

    Matching is a case-insensitive exact comparison of the recipe's cuisine with
    the filter label. ALL returns every recipe. OTHER returns recipes whose
    cuisine matches none of the known labels.

    Args:
        recipes: Recipes in display order
        selected: Selected filter option

    Returns:
        New list with the matching recipes, in input order

    Examples:
        >>> recipes = [Recipe(uuid="1", name="Pizza", cuisine="Italian"),
        ...            Recipe(uuid="2", name="Tacos", cuisine="Mexican")]
        >>> [r.name for r in filter_recipes(recipes, FilterOption.ITALIAN)]
        ['Pizza']
    """
    if selected is FilterOption.ALL:
        return list(recipes)
    return [recipe for recipe in recipes if _matches(recipe, selected)]


def available_filter_options(recipes: Iterable[Recipe]) -> List[FilterOption]:
    """
    List filter options for the cuisines present in the data.

    The list always starts with ALL, followed by the known cuisines found in the
    recipes (in FilterOption declaration order), and ends with OTHER if at least
    one non-empty cuisine is not a known label.

    Args:
        recipes: Loaded recipes

    Returns:
        List of FilterOption values
    """
    present = set()
    has_other = False
    for recipe in recipes:
        option = FilterOption.for_cuisine(recipe.cuisine)
        if option is not None:
            present.add(option)
        elif recipe.cuisine.strip():
            has_other = True

    options = [FilterOption.ALL]
    options.extend(option for option in FilterOption.known_cuisines() if option in present)
    if has_other:
        options.append(FilterOption.OTHER)
    return options
