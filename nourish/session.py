"""A day of eating: which slot comes next and which recipes were already seen."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional, Union

from .contexts import ContextInfo, context_info
from .models import Macros, Recipe, SwipeAction, SwipeRecord
from .scoring import RecipeScorer, rank_for_meal

logger = logging.getLogger(__name__)

DEFAULT_MEALS_PER_DAY = 6


class SessionComplete(RuntimeError):
    """Raised when swiping after every meal slot of the day is filled."""


@dataclass
class DaySession:
    """Swipe history for one day.

    Every swiped recipe is excluded from later recommendations. A liked
    recipe fills the current meal slot and moves the day on to the next one.
    """
    meals_per_day: int = DEFAULT_MEALS_PER_DAY
    meal_number: int = 1
    swipes: list[SwipeRecord] = field(default_factory=list)

    def __post_init__(self):
        if self.meals_per_day < 1:
            raise ValueError("meals_per_day must be at least 1")
        if self.meal_number < 1:
            raise ValueError("meal_number must be at least 1")

    @property
    def is_complete(self) -> bool:
        return self.meal_number > self.meals_per_day

    @property
    def excluded_ids(self) -> frozenset[str]:
        return frozenset(s.recipe_id for s in self.swipes)

    @property
    def liked_ids(self) -> list[str]:
        return [s.recipe_id for s in self.swipes if s.action is SwipeAction.LIKED]

    def current_context(self) -> ContextInfo:
        return context_info(self.meal_number)

    def record_swipe(self, recipe_id: str, action: Union[SwipeAction, str]) -> SwipeRecord:
        """Log a swipe and advance to the next slot on a like."""
        if self.is_complete:
            raise SessionComplete(f"All {self.meals_per_day} meals for the day are already chosen")

        action = SwipeAction(action)
        record = SwipeRecord(recipe_id=recipe_id, action=action, meal_number=self.meal_number)
        self.swipes.append(record)
        logger.debug("Meal %d: %s %s", self.meal_number, action.value, recipe_id)

        if action is SwipeAction.LIKED:
            self.meal_number += 1
        return record

    def recommendations(
        self,
        recipes: Iterable[Recipe],
        scorer: Optional[RecipeScorer] = None,
    ) -> list[Recipe]:
        """Rank the unseen recipes for the current slot."""
        if self.is_complete:
            return []
        if scorer is None:
            return rank_for_meal(recipes, self.meal_number, self.excluded_ids)
        return scorer.rank(recipes, self.meal_number, self.excluded_ids)

    def get_total_macros(self, recipes_by_id: Mapping[str, Recipe]) -> Macros:
        """Sum the macros of every liked recipe that is still known."""
        total = Macros()
        for recipe_id in self.liked_ids:
            recipe = recipes_by_id.get(recipe_id)
            if recipe:
                total = total + recipe.macros
        return total
