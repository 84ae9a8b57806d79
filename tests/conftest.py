"""Shared recipe fixtures."""

import json

import pytest

from nourish.models import Macros, Recipe


def make_recipe(recipe_id, title, tags=None, calories=0, protein=0, carbs=0, fat=0):
    return Recipe(
        id=recipe_id,
        title=title,
        macros=Macros(calories=calories, protein=protein, carbs=carbs, fat=fat),
        pregnancy_tags=list(tags or []),
    )


@pytest.fixture
def ginger_tea():
    return make_recipe("ginger-tea", "Ginger Tea", ["Nausea Relief"], calories=50, protein=1, carbs=10)


@pytest.fixture
def salmon_steak():
    return make_recipe("salmon", "Grilled Salmon Steak", ["Omega-3"], calories=650, protein=40, carbs=5, fat=30)


@pytest.fixture
def recipe_pool(ginger_tea, salmon_steak):
    return [
        salmon_steak,
        make_recipe("oats", "Banana Overnight Oatmeal", ["Energy", "Iron Rich"], calories=340, protein=12, carbs=55, fat=8),
        ginger_tea,
        make_recipe("salad", "Spinach & Berry Salad", ["Folic Acid", "Fiber"], calories=220, protein=5, carbs=25, fat=10),
        make_recipe("milk", "Warm Turmeric Milk", ["Calcium"], calories=160, protein=8, carbs=15, fat=7),
        make_recipe("curry", "Chicken & Lentil Curry", ["Iron Rich", "Protein"], calories=560, protein=42, carbs=45, fat=18),
        make_recipe("bites", "Hummus Veggie Bites", ["Fiber"], calories=180, protein=6, carbs=20, fat=8),
    ]


@pytest.fixture
def recipes_file(tmp_path, recipe_pool):
    """The recipe pool written as exported table rows."""
    rows = [
        {
            "id": r.id,
            "title": r.title,
            "macros_json": r.macros.to_dict(),
            "pregnancy_tags_array": r.pregnancy_tags,
        }
        for r in recipe_pool
    ]
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps(rows), encoding="utf-8")
    return path


NOURISH_ENV_VARS = (
    "NOURISH_RECIPES_PATH",
    "NOURISH_MEALS_PER_DAY",
    "NOURISH_LOG_LEVEL",
    "NOURISH_RESULT_LIMIT",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Unset Nourish settings and restore them after the test.

    Setting first registers each variable with monkeypatch, so values a
    loaded .env file adds during the test are removed again.
    """
    for name in NOURISH_ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
