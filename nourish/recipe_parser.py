"""Recipe loading from JSON exports and markdown files with YAML frontmatter."""

import json
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Optional

import frontmatter

from .models import InvalidRecipeError, Macros, Recipe

logger = logging.getLogger(__name__)

RECIPE_SUFFIXES = (".json", ".md")


def parse_tags(value) -> list[str]:
    """Normalize a tag field to a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [t.strip() for t in value.split(",") if t.strip()]
    if not isinstance(value, (list, tuple)):
        raise InvalidRecipeError(f"Tags must be a list or a string, got {type(value).__name__}")
    return [str(t).strip() for t in value if str(t).strip()]


def parse_recipe_record(data: dict) -> Recipe:
    """Build a Recipe from a stored record.

    Accepts the table-row shape (``macros_json``, ``pregnancy_tags_array``)
    as well as the app shape (``macros``, ``pregnancy_tags``).
    """
    if not isinstance(data, dict):
        raise InvalidRecipeError(f"Recipe record must be an object, got {type(data).__name__}")

    recipe_id = data.get("id")
    title = data.get("title")
    if title is not None and not isinstance(title, str):
        raise InvalidRecipeError(f"Recipe {recipe_id} title must be a string, got {type(title).__name__}")
    title = (title or "").strip()
    if recipe_id is None or str(recipe_id).strip() == "":
        raise InvalidRecipeError(f"Recipe record has no id: {title or data!r}")
    if not title:
        raise InvalidRecipeError(f"Recipe {recipe_id} has no title")

    macros_data = data.get("macros_json", data.get("macros"))
    if isinstance(macros_data, str):
        try:
            macros_data = json.loads(macros_data)
        except json.JSONDecodeError as e:
            raise InvalidRecipeError(f"Recipe {recipe_id} has malformed macros: {e}") from e
    if macros_data is not None and not isinstance(macros_data, dict):
        raise InvalidRecipeError(f"Recipe {recipe_id} macros must be an object")

    tags = data.get("pregnancy_tags_array", data.get("pregnancy_tags"))

    ingredients = data.get("ingredients") or []
    if not isinstance(ingredients, (list, tuple)):
        raise InvalidRecipeError(f"Recipe {recipe_id} ingredients must be a list")

    return Recipe(
        id=str(recipe_id),
        title=title,
        macros=Macros.from_dict(macros_data),
        pregnancy_tags=parse_tags(tags),
        image_url=data.get("image_url"),
        description=data.get("description"),
        ingredients=[str(i) for i in ingredients],
    )


def load_recipes_json(file_path: Path) -> list[Recipe]:
    """Load recipes from a JSON file, skipping invalid records.

    The file holds either a list of records or an object with a
    ``recipes`` list.
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("recipes", [])
    if not isinstance(data, list):
        raise InvalidRecipeError(f"{file_path}: expected a list of recipes")

    recipes = []
    for index, record in enumerate(data):
        try:
            recipes.append(parse_recipe_record(record))
        except InvalidRecipeError as e:
            logger.warning("Skipping record %d in %s: %s", index, file_path, e)
    return recipes


def parse_recipe_file(file_path: Path) -> Optional[Recipe]:
    """Parse a markdown recipe file into a Recipe object."""
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            post = frontmatter.load(f)
    except Exception as e:
        logger.warning("Error loading %s: %s", file_path, e)
        return None

    metadata = post.metadata
    content = post.content

    # Title from frontmatter, then H1 heading, then filename
    title = metadata.get("title")
    if not title:
        name_match = re.search(r"^#\s+(.+)$", content, re.MULTILINE)
        title = name_match.group(1) if name_match else file_path.stem

    macros_data = metadata.get("macros")
    if not isinstance(macros_data, dict):
        macros_data = {key: metadata.get(key) for key in ("calories", "protein", "carbs", "fat")}

    tags = metadata.get("pregnancy_tags", metadata.get("tags"))

    ingredients = []
    ing_match = re.search(r"## Ingredients\n(.*?)(?=## |$)", content, re.DOTALL)
    if ing_match:
        for line in ing_match.group(1).strip().split("\n"):
            line = line.strip()
            if line.startswith("- "):
                ingredients.append(re.sub(r"^-\s*(\[\s*\]\s*)?", "", line).strip())

    record = {
        "id": metadata.get("id", file_path.stem),
        "title": str(title),
        "macros": macros_data,
        "pregnancy_tags": tags,
        "image_url": metadata.get("image_url"),
        "description": metadata.get("description"),
        "ingredients": ingredients,
    }
    try:
        return parse_recipe_record(record)
    except InvalidRecipeError as e:
        logger.warning("Skipping %s: %s", file_path, e)
        return None


class RecipeLibrary:
    """A collection of recipes loaded from a file or directory."""

    def __init__(self, base_path: Path):
        self.base_path = Path(base_path)
        self.recipes: dict[str, Recipe] = {}
        self._load_recipes()

    def _iter_files(self) -> list[Path]:
        if self.base_path.is_file():
            return [self.base_path]
        return sorted(
            p for p in self.base_path.rglob("*")
            if p.is_file() and p.suffix.lower() in RECIPE_SUFFIXES
        )

    def _load_recipes(self):
        """Load all recipes from the base path."""
        if not self.base_path.exists():
            logger.warning("Recipe path does not exist: %s", self.base_path)
            return

        for path in self._iter_files():
            if path.suffix.lower() == ".json":
                try:
                    loaded = load_recipes_json(path)
                except (OSError, ValueError) as e:
                    # InvalidRecipeError and JSONDecodeError are both ValueErrors
                    logger.warning("Error loading %s: %s", path, e)
                    continue
            else:
                recipe = parse_recipe_file(path)
                loaded = [recipe] if recipe else []

            for recipe in loaded:
                self.add(recipe)

        logger.info("Loaded %d recipes from %s", len(self.recipes), self.base_path)

    def add(self, recipe: Recipe):
        """Add a recipe, replacing any earlier recipe with the same id."""
        if recipe.id in self.recipes:
            logger.warning("Duplicate recipe id %s, keeping %r", recipe.id, recipe.title)
            # Re-insert so the replacement takes the later position
            del self.recipes[recipe.id]
        self.recipes[recipe.id] = recipe

    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        """Get a recipe by id."""
        return self.recipes.get(recipe_id)

    def all_recipes(self) -> list[Recipe]:
        """All recipes in load order."""
        return list(self.recipes.values())

    def search(
        self,
        query: Optional[str] = None,
        tag: Optional[str] = None,
        max_calories: Optional[float] = None,
    ) -> list[Recipe]:
        """Search recipes by title text, tag text and calorie ceiling."""
        results = self.all_recipes()

        if query:
            query_lower = query.lower()
            results = [r for r in results if query_lower in r.title.lower()]

        if tag:
            tag_lower = tag.lower()
            results = [
                r for r in results
                if any(tag_lower in t.lower() for t in r.pregnancy_tags)
            ]

        if max_calories is not None:
            results = [r for r in results if r.macros.calories <= max_calories]

        return results

    def get_stats(self) -> dict:
        """Get statistics about the recipe library."""
        recipes = self.all_recipes()
        if not recipes:
            return {"total": 0, "with_macros": 0, "avg_protein": 0, "avg_calories": 0, "tags": {}}

        proteins = [r.macros.protein for r in recipes if r.macros.protein > 0]
        calories = [r.macros.calories for r in recipes if r.macros.calories > 0]
        tags = Counter(t for r in recipes for t in r.pregnancy_tags)

        return {
            "total": len(recipes),
            "with_macros": len([r for r in recipes if r.macros.calories > 0]),
            "avg_protein": sum(proteins) / len(proteins) if proteins else 0,
            "avg_calories": sum(calories) / len(calories) if calories else 0,
            "tags": dict(tags.most_common()),
        }


SAMPLE_RECIPES = [
    {
        "id": "ginger-lemon-smoothie",
        "title": "Ginger & Lemon Smoothie",
        "macros_json": {"calories": 150, "protein": 2, "carbs": 30, "fat": 1},
        "pregnancy_tags_array": ["Nausea Relief", "Hydration"],
        "description": "Zesty and soothing, made for queasy mornings.",
    },
    {
        "id": "salmon-quinoa-bowl",
        "title": "Salmon Quinoa Bowl",
        "macros_json": {"calories": 450, "protein": 35, "carbs": 40, "fat": 15},
        "pregnancy_tags_array": ["Omega-3", "High Protein"],
        "description": "Flaky salmon over quinoa with crisp greens.",
    },
    {
        "id": "spinach-berry-salad",
        "title": "Spinach & Berry Salad",
        "macros_json": {"calories": 220, "protein": 5, "carbs": 25, "fat": 10},
        "pregnancy_tags_array": ["Folic Acid", "Fiber"],
        "description": "Leafy greens and sweet berries with a light vinaigrette.",
    },
    {
        "id": "ginger-tea-crackers",
        "title": "Ginger Tea with Salted Crackers",
        "macros_json": {"calories": 90, "protein": 2, "carbs": 18, "fat": 1},
        "pregnancy_tags_array": ["Nausea Relief"],
        "description": "A gentle start before getting out of bed.",
    },
    {
        "id": "overnight-oats-banana",
        "title": "Banana Overnight Oatmeal",
        "macros_json": {"calories": 340, "protein": 12, "carbs": 55, "fat": 8},
        "pregnancy_tags_array": ["Energy", "Fiber", "Iron Rich"],
        "description": "Creamy oats soaked overnight with banana and chia.",
    },
    {
        "id": "hummus-veggie-bites",
        "title": "Hummus Veggie Bites",
        "macros_json": {"calories": 180, "protein": 6, "carbs": 20, "fat": 8},
        "pregnancy_tags_array": ["Fiber", "Folic Acid"],
        "description": "Cucumber rounds topped with hummus and paprika.",
    },
    {
        "id": "chicken-lentil-curry",
        "title": "Chicken & Lentil Curry",
        "macros_json": {"calories": 560, "protein": 42, "carbs": 45, "fat": 18},
        "pregnancy_tags_array": ["Iron Rich", "Protein"],
        "description": "Mild, warming curry packed with iron.",
    },
    {
        "id": "warm-turmeric-milk",
        "title": "Warm Turmeric Milk",
        "macros_json": {"calories": 160, "protein": 8, "carbs": 15, "fat": 7},
        "pregnancy_tags_array": ["Calcium", "Bone Health"],
        "description": "A calming mug before bed.",
    },
]


def sample_recipes_file(recipes_path: Path) -> Path:
    """Where the sample recipes go for a configured recipes path."""
    recipes_path = Path(recipes_path)
    if recipes_path.suffix.lower() == ".json":
        return recipes_path
    return recipes_path / "recipes.json"


def create_sample_recipes(recipes_path: Path) -> Path:
    """Create a sample recipe file with a few pregnancy-friendly recipes."""
    recipes_path = sample_recipes_file(recipes_path)
    recipes_path.parent.mkdir(parents=True, exist_ok=True)

    with open(recipes_path, "w", encoding="utf-8") as f:
        json.dump(SAMPLE_RECIPES, f, indent=2)
        f.write("\n")

    logger.info("Created sample recipes at %s", recipes_path)
    return recipes_path
