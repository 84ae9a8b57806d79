"""Nourish - context-aware recipe ranking for pregnancy nutrition."""

__version__ = "0.1.0"

_EXPORTS = {
    "Config": "config",
    "EatingContext": "models",
    "MealPurpose": "models",
    "SwipeAction": "models",
    "Macros": "models",
    "Recipe": "models",
    "SwipeRecord": "models",
    "InvalidRecipeError": "models",
    "ContextConfig": "contexts",
    "ContextInfo": "contexts",
    "EATING_CONTEXT_CONFIG": "contexts",
    "context_for_meal_number": "contexts",
    "context_info": "contexts",
    "parse_context": "contexts",
    "RecipeScorer": "scoring",
    "ScoreBreakdown": "scoring",
    "detect_purposes": "scoring",
    "score_recipe_for_context": "scoring",
    "rank_for_meal": "scoring",
    "RecipeLibrary": "recipe_parser",
    "parse_recipe_record": "recipe_parser",
    "parse_recipe_file": "recipe_parser",
    "load_recipes_json": "recipe_parser",
    "DaySession": "session",
    "SessionComplete": "session",
}


# Lazy imports keep `import nourish` free of the CLI dependencies
def __getattr__(name):
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    from importlib import import_module
    return getattr(import_module(f".{module_name}", __name__), name)


__all__ = list(_EXPORTS)
