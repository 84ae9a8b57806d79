"""Tests for the day session."""

import pytest

from nourish.models import EatingContext, Macros, SwipeAction
from nourish.scoring import RecipeScorer
from nourish.session import DaySession, SessionComplete


def test_new_session_starts_at_first_thing():
    session = DaySession()

    assert session.meal_number == 1
    assert session.current_context().context is EatingContext.FIRST_THING
    assert session.excluded_ids == frozenset()
    assert not session.is_complete


def test_pass_excludes_without_advancing():
    session = DaySession()
    record = session.record_swipe("salmon", SwipeAction.PASSED)

    assert record.meal_number == 1
    assert session.meal_number == 1
    assert session.excluded_ids == {"salmon"}
    assert session.liked_ids == []


def test_like_fills_slot_and_advances():
    session = DaySession()
    session.record_swipe("salmon", "passed")
    session.record_swipe("ginger-tea", "liked")

    assert session.meal_number == 2
    assert session.current_context().context is EatingContext.MORNING_FUEL
    assert session.excluded_ids == {"salmon", "ginger-tea"}
    assert session.liked_ids == ["ginger-tea"]
    assert [s.action for s in session.swipes] == [SwipeAction.PASSED, SwipeAction.LIKED]


def test_unknown_action_is_rejected():
    with pytest.raises(ValueError):
        DaySession().record_swipe("a", "maybe")


def test_swiping_after_last_meal_raises():
    session = DaySession(meals_per_day=2)
    session.record_swipe("a", SwipeAction.LIKED)
    session.record_swipe("b", SwipeAction.LIKED)

    assert session.is_complete
    with pytest.raises(SessionComplete):
        session.record_swipe("c", SwipeAction.PASSED)


@pytest.mark.parametrize("kwargs", [{"meals_per_day": 0}, {"meal_number": 0}])
def test_invalid_session_settings(kwargs):
    with pytest.raises(ValueError):
        DaySession(**kwargs)


def test_recommendations_skip_seen_recipes(recipe_pool):
    session = DaySession()
    first = session.recommendations(recipe_pool)
    assert first[0].id == "ginger-tea"

    session.record_swipe("ginger-tea", SwipeAction.PASSED)
    second = session.recommendations(recipe_pool)

    assert "ginger-tea" not in [r.id for r in second]
    assert len(second) == len(recipe_pool) - 1


def test_recommendations_follow_the_current_slot(recipe_pool):
    session = DaySession(meal_number=5)
    assert session.recommendations(recipe_pool)[0].id == "curry"
    assert session.recommendations(recipe_pool, scorer=RecipeScorer())[0].id == "curry"


def test_recommendations_empty_when_day_is_done(recipe_pool):
    session = DaySession(meals_per_day=1)
    session.record_swipe("ginger-tea", SwipeAction.LIKED)
    assert session.recommendations(recipe_pool) == []


def test_total_macros_of_liked_recipes(recipe_pool):
    by_id = {r.id: r for r in recipe_pool}
    session = DaySession()
    session.record_swipe("ginger-tea", SwipeAction.LIKED)
    session.record_swipe("salmon", SwipeAction.PASSED)
    session.record_swipe("oats", SwipeAction.LIKED)
    session.record_swipe("deleted-recipe", SwipeAction.LIKED)

    total = session.get_total_macros(by_id)

    assert total == Macros(calories=390, protein=13, carbs=65, fat=8)
