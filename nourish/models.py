"""Data models for Nourish."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class InvalidRecipeError(ValueError):
    """Raised when a stored record cannot be turned into a Recipe."""


class EatingContext(Enum):
    """The six daily eating occasions, in the order they come up."""
    FIRST_THING = "first_thing"
    MORNING_FUEL = "morning_fuel"
    MIDDAY_SUSTAIN = "midday_sustain"
    QUICK_BITE = "quick_bite"
    SUBSTANTIAL = "substantial"
    WIND_DOWN = "wind_down"


class MealPurpose(Enum):
    """Coarse intent of a recipe, inferred from its tags and title."""
    NAUSEA_RELIEF = "nausea_relief"
    ENERGY = "energy"
    NUTRIENT_DENSE = "nutrient_dense"
    HYDRATING = "hydrating"


class SwipeAction(Enum):
    """What the user did with a recipe card."""
    LIKED = "liked"
    PASSED = "passed"


@dataclass
class Macros:
    """Nutritional macro information."""
    calories: float = 0.0
    protein: float = 0.0  # grams
    carbs: float = 0.0    # grams
    fat: float = 0.0      # grams

    def __add__(self, other: "Macros") -> "Macros":
        return Macros(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )

    def __mul__(self, factor: float) -> "Macros":
        return Macros(
            calories=self.calories * factor,
            protein=self.protein * factor,
            carbs=self.carbs * factor,
            fat=self.fat * factor,
        )

    def to_dict(self) -> dict:
        return {
            "calories": round(self.calories, 1),
            "protein": round(self.protein, 1),
            "carbs": round(self.carbs, 1),
            "fat": round(self.fat, 1),
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "Macros":
        """Build macros from a mapping; missing or null values count as zero."""
        data = data or {}
        try:
            macros = cls(
                calories=float(data.get("calories", 0) or 0),
                protein=float(data.get("protein", 0) or 0),
                carbs=float(data.get("carbs", 0) or 0),
                fat=float(data.get("fat", 0) or 0),
            )
        except (TypeError, ValueError) as e:
            raise InvalidRecipeError(f"Invalid macros {data!r}: {e}") from e

        for field_name in ["calories", "protein", "carbs", "fat"]:
            if getattr(macros, field_name) < 0:
                raise InvalidRecipeError(f"{field_name} must be non-negative, got {data!r}")
        return macros


@dataclass
class Recipe:
    """A recipe as stored in the recipe collection."""
    id: str
    title: str
    macros: Macros = field(default_factory=Macros)
    pregnancy_tags: list[str] = field(default_factory=list)

    # Display only, never scored
    image_url: Optional[str] = None
    description: Optional[str] = None
    ingredients: list[str] = field(default_factory=list)

    def to_summary(self) -> str:
        """Generate a brief summary of the recipe."""
        tags = f" [{', '.join(self.pregnancy_tags)}]" if self.pregnancy_tags else ""
        return (
            f"{self.title} - {self.macros.calories:.0f} cal, "
            f"{self.macros.protein:.1f}g protein{tags}"
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "image_url": self.image_url,
            "macros": self.macros.to_dict(),
            "pregnancy_tags": list(self.pregnancy_tags),
            "description": self.description,
            "ingredients": list(self.ingredients),
        }


@dataclass
class SwipeRecord:
    """One logged swipe on a recipe card."""
    recipe_id: str
    action: SwipeAction
    meal_number: int
    timestamp: datetime = field(default_factory=datetime.now)
