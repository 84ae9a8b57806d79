"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner
from rich.console import Console

from nourish import cli as cli_module
from nourish.cli import cli

pytestmark = pytest.mark.usefixtures("clean_env")


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    # Keep table cells on one line
    monkeypatch.setattr(cli_module, "console", Console(width=200))


@pytest.fixture
def run(tmp_path, recipes_file):
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(
            cli,
            ["--env", str(tmp_path / "missing.env"), "--recipes", str(recipes_file), *args],
            obj={},
        )

    return invoke


def test_contexts_lists_all_six(run):
    result = run("contexts")

    assert result.exit_code == 0, result.output
    for label in ("First Thing", "Morning Fuel", "Midday Sustain", "Quick Bite", "Substantial", "Wind Down"):
        assert label in result.output


def test_rank_json(run):
    result = run("rank", "--meal", "1", "--exclude", "milk", "--all", "--json")

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["context"] == "first_thing"
    assert data["label"] == "First Thing"
    ids = [r["id"] for r in data["recipes"]]
    assert ids == ["ginger-tea", "bites", "salad", "salmon", "oats", "curry"]
    assert data["recipes"][0]["score"] == 90


def test_rank_limit(run):
    result = run("rank", "--meal", "5", "--limit", "2", "--json")

    assert result.exit_code == 0, result.output
    assert len(json.loads(result.output)["recipes"]) == 2


def test_rank_unknown_meal_is_wind_down(run):
    result = run("rank", "--meal", "0", "--json")

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["context"] == "wind_down"


def test_rank_table(run):
    result = run("rank", "--meal", "1")

    assert result.exit_code == 0, result.output
    assert "First Thing" in result.output
    assert "Ginger Tea" in result.output


def test_rank_everything_excluded(run):
    args = []
    for recipe_id in ("salmon", "oats", "ginger-tea", "salad", "milk", "curry", "bites"):
        args += ["-x", recipe_id]
    result = run("rank", *args)

    assert result.exit_code == 0, result.output
    assert "No recipes left" in result.output


def test_score_explains_breakdown(run):
    result = run("score", "ginger-tea", "--context", "first_thing")

    assert result.exit_code == 0, result.output
    assert "+90" in result.output
    assert "Purpose alignment" in result.output


def test_score_by_meal_number(run):
    result = run("score", "milk", "--meal", "6")

    assert result.exit_code == 0, result.output
    assert "wind_down" in result.output


def test_score_unknown_recipe(run):
    result = run("score", "nope", "--meal", "1")

    assert result.exit_code == 1
    assert "Unknown recipe id: nope" in result.output


def test_score_needs_exactly_one_target(run):
    assert run("score", "milk").exit_code == 2
    assert run("score", "milk", "--meal", "1", "--context", "wind_down").exit_code == 2


def test_score_unknown_context(run):
    result = run("score", "milk", "--context", "brunch")

    assert result.exit_code == 2
    assert "brunch" in result.output


def test_recipes_stats(run):
    result = run("recipes")

    assert result.exit_code == 0, result.output
    assert "Total recipes: 7" in result.output


def test_day_plans_every_meal(run):
    result = run("day")

    assert result.exit_code == 0, result.output
    assert "Ran out of recipes" not in result.output
    assert "Ginger Tea" in result.output
    assert "Total:" in result.output


def test_day_runs_out_of_recipes(run):
    result = run("day", "--meals", "8")

    assert result.exit_code == 0, result.output
    assert "Ran out of recipes at meal 8" in result.output
    assert "Total:" in result.output


def test_init_writes_sample_recipes(tmp_path, monkeypatch):
    target = tmp_path / "library"
    monkeypatch.setenv("NOURISH_RECIPES_PATH", str(target))
    runner = CliRunner()

    result = runner.invoke(cli, ["--env", str(tmp_path / "missing.env"), "init"], obj={})

    assert result.exit_code == 0, result.output
    assert (target / "recipes.json").exists()

    again = runner.invoke(cli, ["--env", str(tmp_path / "missing.env"), "init"], obj={})
    assert "already exist" in again.output


@pytest.mark.parametrize("meals", ["0", "-1"])
def test_day_rejects_non_positive_meal_count(run, meals):
    result = run("day", "--meals", meals)

    assert result.exit_code == 2
    assert "--meals" in result.output


def test_day_with_bad_configured_meal_count(run, monkeypatch):
    monkeypatch.setenv("NOURISH_MEALS_PER_DAY", "0")

    result = run("day")

    assert result.exit_code == 1
    assert not isinstance(result.exception, ValueError)
    assert "meals_per_day must be at least 1" in result.output


@pytest.mark.parametrize("limit", ["0", "-2"])
def test_rank_rejects_non_positive_limit(run, limit):
    result = run("rank", "--limit", limit, "--json")

    assert result.exit_code == 2
    assert "--limit" in result.output


def test_rank_with_bad_configured_limit_shows_one(run, monkeypatch):
    monkeypatch.setenv("NOURISH_RESULT_LIMIT", "-3")

    result = run("rank", "--meal", "1", "--json")

    assert result.exit_code == 0, result.output
    # The config warning comes before the JSON document
    data = json.loads(result.output[result.output.index("{"):])
    assert [r["id"] for r in data["recipes"]] == ["ginger-tea"]
