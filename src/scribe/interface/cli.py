"""scribe CLI: vocabulary review and writing skill commands."""

import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from scribe.application.config import AppConfig, resolve_config
from scribe.application.score import rank_tier
from scribe.application.srs import format_interval
from scribe.domain.errors import ScribeError
from scribe.domain.models import Rank, Rating, Trend, VocabularyEntry, WritingSkillScore

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="scribe: vocabulary spaced repetition and writing skill ranks.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage scribe configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}

TIER_COLORS = {
    "S": "yellow",
    "A": "yellow",
    "B": "green",
    "C": "cyan",
    "D": "white",
}

TREND_SYMBOLS = {
    Trend.UP: "↑",
    Trend.DOWN: "↓",
    Trend.STABLE: "→",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _resolve_with_overrides(ctx: typer.Context, **overrides) -> AppConfig:
    obj = ctx.obj or {}
    overrides.setdefault("data_dir", obj.get("data_dir"))
    overrides.setdefault("verbose", obj.get("verbose"))
    try:
        config = resolve_config(overrides)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        typer.secho(f"Error: invalid configuration ({problems})", fg="red", err=True)
        raise typer.Exit(1)
    logging.getLogger("scribe").setLevel(_VERBOSITY_LEVELS.get(config.verbose, logging.DEBUG))
    return config


def _run(coro):
    """Run a service coroutine, reporting domain errors instead of tracebacks."""
    try:
        return asyncio.run(coro)
    except ScribeError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1)


def _rank_text(rank: Rank) -> str:
    return typer.style(rank.value, fg=TIER_COLORS[rank_tier(rank)], bold=True)


def _entry_to_dict(entry: VocabularyEntry) -> dict:
    state = entry.review
    return {
        "id": entry.id,
        "term": entry.term,
        "meaning": entry.meaning,
        "ease_factor": state.ease_factor,
        "interval": state.interval,
        "review_count": state.review_count,
        "next_review_at": state.next_review_at.isoformat() if state.next_review_at else None,
    }


def _score_to_dict(score: WritingSkillScore) -> dict:
    return {
        "overall_rank": score.overall_rank.value,
        "grammar_rank": score.grammar_rank.value,
        "vocabulary_rank": score.vocabulary_rank.value,
        "structure_rank": score.structure_rank.value,
        "content_rank": score.content_rank.value,
        "total_writings": score.total_writings,
        "current_streak": score.current_streak,
        "trend": score.trend.value,
        "computed_at": score.computed_at.isoformat(),
    }


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    data_dir: Annotated[
        Path | None, typer.Option(help="Directory holding the JSON stores.")
    ] = None,
):
    """Global settings for scribe."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose or None
    ctx.obj["data_dir"] = data_dir


# ---------------------------------------------------------------------------
# Vocabulary commands
# ---------------------------------------------------------------------------


@app.command()
def due(
    ctx: typer.Context,
    limit: Annotated[int | None, typer.Option(help="Maximum entries to list.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List vocabulary [bold]due[/bold] for review, most urgent first."""
    from scribe.application.factory import get_study_service

    config = _resolve_with_overrides(ctx, due_limit=limit)
    service = get_study_service(config)
    now = _now()

    entries = _run(service.get_due_queue(now, limit=config.due_limit))

    if json_output:
        typer.echo(json.dumps([_entry_to_dict(e) for e in entries], indent=2, ensure_ascii=False))
        return

    if not entries:
        typer.secho("Nothing due. Come back later.", fg="green")
        return

    typer.echo(f"Due now: {len(entries)}")
    for entry in entries:
        state = entry.review
        if state.next_review_at is None:
            when = typer.style("new", fg="cyan")
        else:
            overdue_days = (now - state.next_review_at).days
            when = f"overdue {format_interval(overdue_days, lang=config.lang)}"
        meaning = f"  {entry.meaning}" if entry.meaning else ""
        typer.echo(f"  {entry.term}{meaning}  ({when})")


@app.command()
def review(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Entry id or term.")],
    rating: Annotated[Rating, typer.Argument(help="How well you recalled it.")],
):
    """Record a [bold green]review[/bold green] and reschedule the entry."""
    from scribe.application.factory import get_study_service

    config = _resolve_with_overrides(ctx)
    service = get_study_service(config)

    entry = _run(service.review(key, rating, _now()))

    state = entry.review
    label = format_interval(state.interval, lang=config.lang)
    typer.secho(
        f"Reviewed '{entry.term}' ({rating.value}): next review in {label} "
        f"({state.next_review_at:%Y-%m-%d}), ease {state.ease_factor:.2f}",
        fg="green",
    )


@app.command()
def preview(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Entry id or term.")],
):
    """Show the interval each rating would give, without saving."""
    from scribe.application.factory import get_study_service

    config = _resolve_with_overrides(ctx)
    service = get_study_service(config)

    entry, labels = _run(service.preview(key, _now()))

    typer.echo(f"{entry.term}:")
    for rating, label in labels.items():
        typer.echo(f"  {rating.value:<6} {label}")


# ---------------------------------------------------------------------------
# Writing commands
# ---------------------------------------------------------------------------


@app.command()
def score(
    ctx: typer.Context,
    history: Annotated[
        int | None, typer.Option(help="Number of recent writings to aggregate.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show your current writing skill ranks and trend."""
    from scribe.application.factory import get_study_service

    config = _resolve_with_overrides(ctx, history_limit=history)
    service = get_study_service(config)

    result = _run(service.get_skill_score(_now()))

    if json_output:
        typer.echo(json.dumps(_score_to_dict(result), indent=2))
        return

    typer.echo(
        f"Overall: {_rank_text(result.overall_rank)}  "
        f"{TREND_SYMBOLS[result.trend]} {result.trend.value}"
    )
    typer.echo(f"  Grammar     {_rank_text(result.grammar_rank)}")
    typer.echo(f"  Vocabulary  {_rank_text(result.vocabulary_rank)}")
    typer.echo(f"  Structure   {_rank_text(result.structure_rank)}")
    typer.echo(f"  Content     {_rank_text(result.content_rank)}")
    typer.echo(f"Writings: {result.total_writings}  Streak: {result.current_streak}")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display the configuration after global options, environment and config file."""
    config = _resolve_with_overrides(ctx)
    resolved = config.model_dump(mode="json")
    resolved.update(
        vocabulary_path=str(config.vocabulary_path),
        writings_path=str(config.writings_path),
        stats_path=str(config.stats_path),
    )
    typer.echo(json.dumps(resolved, indent=2, ensure_ascii=False))
