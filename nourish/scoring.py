"""Context-aware recipe scoring and ranking."""

import logging
from collections.abc import Container, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from .contexts import EATING_CONTEXT_CONFIG, ContextConfig, context_for_meal_number
from .models import EatingContext, MealPurpose, Recipe

logger = logging.getLogger(__name__)

TITLE_KEYWORD_POINTS = 15
TAG_KEYWORD_POINTS = 10
CALORIE_FIT_POINTS = 10
CALORIE_OVERSHOOT_PENALTY = -15
CALORIE_OVERSHOOT_FACTOR = 1.5
PURPOSE_POINTS = 20

# first_thing: favor nausea relief, push heavy food down
NAUSEA_TITLE_POINTS = 30
HEAVY_FOOD_PENALTY = -25
HEAVY_FAT_GRAMS = 15
HEAVY_CALORIES = 300

# wind_down: favor calcium-rich dairy
DAIRY_TITLE_POINTS = 20


def detect_purposes(recipe: Recipe) -> frozenset[MealPurpose]:
    """Infer what a recipe is good for from its tags and title.

    Matching is case-insensitive substring containment, so "Iron Rich",
    "iron-rich" and "High Iron" all count. Recipes matching nothing are
    treated as energy food, so the result is never empty.
    """
    tags = [t.lower() for t in recipe.pregnancy_tags]
    title = recipe.title.lower()

    def any_tag(*needles: str) -> bool:
        return any(needle in tag for tag in tags for needle in needles)

    purposes = set()
    if any_tag("nausea") or "ginger" in title or "bland" in title:
        purposes.add(MealPurpose.NAUSEA_RELIEF)
    if any_tag("energy", "protein"):
        purposes.add(MealPurpose.ENERGY)
    if any_tag("iron", "folic", "calcium"):
        purposes.add(MealPurpose.NUTRIENT_DENSE)
    if any_tag("hydrat") or "soup" in title or "smoothie" in title:
        purposes.add(MealPurpose.HYDRATING)

    return frozenset(purposes) if purposes else frozenset({MealPurpose.ENERGY})


@dataclass
class ScoreBreakdown:
    """Per-rule contributions to a recipe's score for one context."""
    recipe: Recipe
    context: EatingContext
    title_keywords: int = 0
    tag_keywords: int = 0
    calorie_fit: int = 0
    purpose_alignment: int = 0
    context_adjustment: int = 0
    purposes: frozenset[MealPurpose] = field(default_factory=frozenset)

    @property
    def total(self) -> int:
        return (
            self.title_keywords
            + self.tag_keywords
            + self.calorie_fit
            + self.purpose_alignment
            + self.context_adjustment
        )

    def to_summary(self) -> str:
        """Generate a human-readable explanation of the score."""
        purposes = ", ".join(sorted(p.value for p in self.purposes))
        lines = [
            f"{self.recipe.title} for {self.context.value}: {self.total:+d}",
            f"  Title keywords:     {self.title_keywords:+d}",
            f"  Tag keywords:       {self.tag_keywords:+d}",
            f"  Calorie fit:        {self.calorie_fit:+d}",
            f"  Purpose alignment:  {self.purpose_alignment:+d} ({purposes})",
            f"  Context adjustment: {self.context_adjustment:+d}",
        ]
        return "\n".join(lines)


class RecipeScorer:
    """Score recipes against eating contexts and rank pools for a meal slot.

    Holds no state besides the read-only context table, so one instance can
    be shared freely.
    """

    def __init__(self, contexts: Mapping[EatingContext, ContextConfig] = EATING_CONTEXT_CONFIG):
        self.contexts = contexts

    def explain(self, recipe: Recipe, context: EatingContext) -> ScoreBreakdown:
        """Score a recipe and keep each rule's contribution."""
        config = self.contexts[context]
        title = recipe.title.lower()
        tags = [t.lower() for t in recipe.pregnancy_tags]
        breakdown = ScoreBreakdown(recipe=recipe, context=context)

        # Every matching keyword counts, including one tag matching several
        breakdown.title_keywords = TITLE_KEYWORD_POINTS * sum(
            1 for keyword in config.keywords if keyword.lower() in title
        )
        breakdown.tag_keywords = TAG_KEYWORD_POINTS * sum(
            1 for tag in tags for keyword in config.keywords if keyword.lower() in tag
        )

        calories = recipe.macros.calories or 0
        fat = recipe.macros.fat or 0
        if calories <= config.max_calories:
            breakdown.calorie_fit = CALORIE_FIT_POINTS
        elif calories > config.max_calories * CALORIE_OVERSHOOT_FACTOR:
            breakdown.calorie_fit = CALORIE_OVERSHOOT_PENALTY

        breakdown.purposes = detect_purposes(recipe)
        breakdown.purpose_alignment = PURPOSE_POINTS * len(
            breakdown.purposes & config.priority_purposes
        )

        if context is EatingContext.FIRST_THING:
            if "ginger" in title or "cracker" in title:
                breakdown.context_adjustment += NAUSEA_TITLE_POINTS
            if fat > HEAVY_FAT_GRAMS or calories > HEAVY_CALORIES:
                breakdown.context_adjustment += HEAVY_FOOD_PENALTY
        elif context is EatingContext.WIND_DOWN:
            if any(word in title for word in ("milk", "yogurt", "cheese")):
                breakdown.context_adjustment += DAIRY_TITLE_POINTS

        return breakdown

    def score(self, recipe: Recipe, context: EatingContext) -> int:
        """Fitness of a recipe for a context; higher is better, may be negative."""
        return self.explain(recipe, context).total

    def rank_with_scores(
        self,
        recipes: Iterable[Recipe],
        meal_number: int,
        exclude_ids: Optional[Container[str]] = None,
    ) -> list[tuple[Recipe, int]]:
        """Rank recipes for a meal slot, keeping their scores.

        Recipes whose id is in ``exclude_ids`` are dropped. Equal scores keep
        their input order.
        """
        context = context_for_meal_number(meal_number)
        excluded = exclude_ids if exclude_ids is not None else frozenset()

        scored = [
            (recipe, self.score(recipe, context))
            for recipe in recipes
            if recipe.id not in excluded
        ]
        # list.sort is stable, also with reverse=True
        scored.sort(key=lambda x: x[1], reverse=True)

        logger.debug(
            "Ranked %d recipes for meal %s (%s)", len(scored), meal_number, context.value
        )
        return scored

    def rank(
        self,
        recipes: Iterable[Recipe],
        meal_number: int,
        exclude_ids: Optional[Container[str]] = None,
    ) -> list[Recipe]:
        """Rank recipes for a meal slot, best first."""
        return [recipe for recipe, _ in self.rank_with_scores(recipes, meal_number, exclude_ids)]


_default_scorer = RecipeScorer()


def score_recipe_for_context(recipe: Recipe, context: EatingContext) -> int:
    """Score a recipe against a context using the built-in context table."""
    return _default_scorer.score(recipe, context)


def rank_for_meal(
    recipes: Iterable[Recipe],
    meal_number: int,
    exclude_ids: Optional[Container[str]] = None,
) -> list[Recipe]:
    """Rank a recipe pool for a meal slot, skipping already seen recipes."""
    return _default_scorer.rank(recipes, meal_number, exclude_ids)
