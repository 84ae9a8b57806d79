"""Command-line interface for Nourish."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import Config
from .contexts import EATING_CONTEXT_CONFIG, context_info, parse_context
from .models import SwipeAction
from .recipe_parser import RecipeLibrary, create_sample_recipes, sample_recipes_file
from .scoring import RecipeScorer
from .session import DaySession

console = Console()
err_console = Console(stderr=True)


def configure_logging(level: int):
    """Send library log records through rich on stderr."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def load_app(ctx) -> tuple[Config, RecipeLibrary]:
    """Load configuration and the recipe library."""
    config = ctx.obj["config"]

    errors = config.validate()
    for error in errors:
        err_console.print(f"[yellow]Warning:[/yellow] {error}")

    return config, RecipeLibrary(config.recipes_path)


@click.group()
@click.option("--env", default=None, help="Path to .env file")
@click.option("--recipes", "recipes_path", default=None, help="Recipe file or directory")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, env, recipes_path, verbose):
    """🤰 Nourish - meal suggestions for every moment of a pregnant day."""
    ctx.ensure_object(dict)
    try:
        config = Config.from_env(Path(env) if env else None)
    except ValueError as e:
        raise click.ClickException(str(e))

    if recipes_path:
        config.recipes_path = Path(recipes_path)

    configure_logging(logging.DEBUG if verbose else config.log_level_number)
    ctx.obj["config"] = config


@cli.command()
def contexts():
    """Show the eating contexts of the day."""
    table = Table(title="🕐 Eating Contexts")
    table.add_column("Meal", justify="right")
    table.add_column("Context", style="cyan")
    table.add_column("Description")
    table.add_column("Max cal", justify="right")
    table.add_column("Keywords", style="dim")

    for meal_number, (context, config) in enumerate(EATING_CONTEXT_CONFIG.items(), start=1):
        meal = f"{meal_number}+" if meal_number == len(EATING_CONTEXT_CONFIG) else str(meal_number)
        table.add_row(
            meal,
            f"{config.label} ({context.value})",
            config.description,
            str(config.max_calories),
            ", ".join(config.keywords),
        )

    console.print(table)


@cli.command()
@click.option("--meal", "-m", default=1, type=int, help="Meal number of the day (1-6)")
@click.option("--exclude", "-x", multiple=True, help="Recipe id already shown (repeatable)")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Number of recipes to show")
@click.option("--all", "show_all", is_flag=True, help="Show the whole ranking")
@click.option("--json", "as_json", is_flag=True, help="Print the ranking as JSON")
@click.pass_context
def rank(ctx, meal, exclude, limit, show_all, as_json):
    """Rank recipes for a meal slot."""
    config, recipe_library = load_app(ctx)

    info = context_info(meal)
    ranked = RecipeScorer().rank_with_scores(recipe_library.all_recipes(), meal, set(exclude))
    if not show_all:
        ranked = ranked[:limit if limit is not None else max(config.result_limit, 1)]

    if as_json:
        click.echo(json.dumps({
            **info.to_dict(),
            "meal_number": meal,
            "recipes": [
                {"id": recipe.id, "title": recipe.title, "score": score}
                for recipe, score in ranked
            ],
        }, indent=2))
        return

    console.print(Panel(
        f"[bold]{info.label}[/bold]\n{info.description}",
        title=f"🍽️  Meal {meal}",
    ))

    if not ranked:
        console.print("[yellow]No recipes left for this meal.[/yellow]")
        return

    table = Table(title=f"Best picks ({len(ranked)} shown)")
    table.add_column("#", justify="right")
    table.add_column("Recipe", style="cyan")
    table.add_column("Score", justify="right", style="green")
    table.add_column("Calories", justify="right")
    table.add_column("Tags", style="dim")

    for position, (recipe, score) in enumerate(ranked, start=1):
        table.add_row(
            str(position),
            recipe.title[:40],
            str(score),
            f"{recipe.macros.calories:.0f}",
            ", ".join(recipe.pregnancy_tags),
        )

    console.print(table)


@cli.command()
@click.argument("recipe_id")
@click.option("--meal", "-m", type=int, default=None, help="Meal number of the day")
@click.option("--context", "-c", "context_name", default=None, help="Eating context name")
@click.pass_context
def score(ctx, recipe_id, meal, context_name):
    """Explain how a recipe scores for a meal slot or context."""
    if (meal is None) == (context_name is None):
        raise click.UsageError("Pass exactly one of --meal or --context")

    if context_name is not None:
        try:
            context = parse_context(context_name)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--context")
    else:
        context = context_info(meal).context

    _, recipe_library = load_app(ctx)
    recipe = recipe_library.get_recipe(recipe_id)
    if recipe is None:
        raise click.ClickException(f"Unknown recipe id: {recipe_id}")

    breakdown = RecipeScorer().explain(recipe, context)
    console.print(Panel(breakdown.to_summary(), title="🧮 Score"))


@cli.command()
@click.pass_context
def recipes(ctx):
    """Show recipe library stats."""
    config, recipe_library = load_app(ctx)

    stats = recipe_library.get_stats()

    console.print(Panel(
        f"[bold]Recipe Library Stats[/bold]\n\n"
        f"Total recipes: {stats['total']}\n"
        f"With macro data: {stats['with_macros']}\n"
        f"Avg protein: {stats['avg_protein']:.1f}g\n"
        f"Avg calories: {stats['avg_calories']:.0f}",
        title="📚 Recipes"
    ))

    if stats["tags"]:
        table = Table(title="🏷️ Pregnancy Tags")
        table.add_column("Tag", style="cyan")
        table.add_column("Recipes", justify="right")
        for tag, count in list(stats["tags"].items())[:15]:
            table.add_row(tag, str(count))
        console.print(table)


@cli.command()
@click.option("--meals", type=click.IntRange(min=1), default=None, help="Meals in the day (default from config)")
@click.pass_context
def day(ctx, meals):
    """Plan a full day by taking the best pick for every meal."""
    config, recipe_library = load_app(ctx)

    try:
        session = DaySession(meals_per_day=meals if meals is not None else config.meals_per_day)
    except ValueError as e:
        raise click.ClickException(str(e))
    pool = recipe_library.all_recipes()

    table = Table(title="📅 Today's Meals")
    table.add_column("Meal", justify="right")
    table.add_column("Context", style="cyan")
    table.add_column("Recipe")
    table.add_column("Calories", justify="right")

    while not session.is_complete:
        info = session.current_context()
        ranked = session.recommendations(pool)
        if not ranked:
            console.print(f"[yellow]Ran out of recipes at meal {session.meal_number}.[/yellow]")
            break
        pick = ranked[0]
        table.add_row(str(session.meal_number), info.label, pick.title, f"{pick.macros.calories:.0f}")
        session.record_swipe(pick.id, SwipeAction.LIKED)

    console.print(table)

    total = session.get_total_macros(recipe_library.recipes)
    console.print(
        f"\nTotal: {total.calories:.0f} cal | {total.protein:.1f}g protein | "
        f"{total.carbs:.1f}g carbs | {total.fat:.1f}g fat"
    )


@cli.command()
@click.pass_context
def init(ctx):
    """Create a sample recipe file at the configured recipes path."""
    config = ctx.obj["config"]

    target = sample_recipes_file(config.recipes_path)
    if target.exists():
        console.print(f"[yellow]Recipes already exist at {target}[/yellow]")
        return

    path = create_sample_recipes(target)
    console.print(f"[green]✅ Created sample recipes at {path}[/green]")
    console.print("\nTry these commands:")
    console.print("  nourish contexts        # See the eating contexts of the day")
    console.print("  nourish rank --meal 1   # Best picks for the first meal")
    console.print("  nourish day             # Plan a whole day")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
