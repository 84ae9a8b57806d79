"""Eating contexts and the meal-number rule that assigns them.

A pregnant day is split into six smaller meals rather than breakfast, lunch
and dinner. Each meal slot of the day maps to one eating context, and each
context carries the keywords, calorie ceiling and priority purposes used
when scoring recipes for it.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import NamedTuple, Union

from .models import EatingContext, MealPurpose


@dataclass(frozen=True)
class ContextConfig:
    """Static scoring configuration for one eating context."""
    label: str
    description: str
    keywords: tuple[str, ...]
    max_calories: int
    priority_purposes: frozenset[MealPurpose]


class ContextInfo(NamedTuple):
    """What the presentation layer shows for the current slot."""
    context: EatingContext
    label: str
    description: str

    def to_dict(self) -> dict:
        return {
            "context": self.context.value,
            "label": self.label,
            "description": self.description,
        }


EATING_CONTEXT_CONFIG = MappingProxyType({
    EatingContext.FIRST_THING: ContextConfig(
        label="First Thing",
        description="Light & gentle on the stomach",
        keywords=("crackers", "toast", "ginger", "tea", "dry", "bland", "light"),
        max_calories=200,
        priority_purposes=frozenset({MealPurpose.NAUSEA_RELIEF}),
    ),
    EatingContext.MORNING_FUEL: ContextConfig(
        label="Morning Fuel",
        description="Energy to start your day",
        keywords=("oatmeal", "smoothie", "yogurt", "fruit", "granola", "banana", "overnight"),
        max_calories=400,
        priority_purposes=frozenset({MealPurpose.ENERGY, MealPurpose.NUTRIENT_DENSE}),
    ),
    EatingContext.MIDDAY_SUSTAIN: ContextConfig(
        label="Midday Sustain",
        description="Balanced nutrition",
        keywords=("salad", "bowl", "wrap", "sandwich", "quinoa", "lunch", "soup"),
        max_calories=500,
        priority_purposes=frozenset({MealPurpose.NUTRIENT_DENSE, MealPurpose.ENERGY}),
    ),
    EatingContext.QUICK_BITE: ContextConfig(
        label="Quick Bite",
        description="Easy grab-and-go",
        keywords=("bites", "snack", "nuts", "hummus", "energy", "small", "mini", "crackers"),
        max_calories=250,
        priority_purposes=frozenset({MealPurpose.ENERGY}),
    ),
    EatingContext.SUBSTANTIAL: ContextConfig(
        label="Substantial Meal",
        description="Protein-rich nourishment",
        keywords=(
            "chicken", "salmon", "fish", "beef", "steak", "dinner",
            "pasta", "stir-fry", "curry",
        ),
        max_calories=600,
        priority_purposes=frozenset({MealPurpose.NUTRIENT_DENSE}),
    ),
    EatingContext.WIND_DOWN: ContextConfig(
        label="Wind Down",
        description="Calm & calcium-rich",
        keywords=("milk", "warm", "cheese", "cottage", "yogurt", "light", "evening"),
        max_calories=300,
        priority_purposes=frozenset({MealPurpose.HYDRATING}),
    ),
})

# Meal 6 and anything unexpected fall through to wind_down
_CONTEXT_BY_MEAL_NUMBER = {
    1: EatingContext.FIRST_THING,     # waking up, gentle on the stomach
    2: EatingContext.MORNING_FUEL,
    3: EatingContext.MIDDAY_SUSTAIN,
    4: EatingContext.QUICK_BITE,      # afternoon pick-me-up
    5: EatingContext.SUBSTANTIAL,     # main evening meal
}


def context_for_meal_number(meal_number: int) -> EatingContext:
    """Map a meal slot of the day (1-based) to its eating context.

    Never fails: 0, negative and out-of-range numbers all resolve to
    ``EatingContext.WIND_DOWN``.
    """
    return _CONTEXT_BY_MEAL_NUMBER.get(meal_number, EatingContext.WIND_DOWN)


def context_info(meal_number: int) -> ContextInfo:
    """Get the context and its display strings for a meal slot."""
    context = context_for_meal_number(meal_number)
    config = EATING_CONTEXT_CONFIG[context]
    return ContextInfo(
        context=context,
        label=config.label,
        description=config.description,
    )


def parse_context(value: Union[str, EatingContext]) -> EatingContext:
    """Resolve a context from its name, e.g. ``"wind_down"`` or ``"Wind-Down"``."""
    if isinstance(value, EatingContext):
        return value
    normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
    try:
        return EatingContext(normalized)
    except ValueError:
        valid = ", ".join(c.value for c in EatingContext)
        raise ValueError(f"Unknown eating context {value!r} (expected one of: {valid})") from None
