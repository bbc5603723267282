"""Command-line interface for the training planner."""

import json
import logging
import sys
from datetime import date
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .analysis.environmental_factors import EnvironmentalAnalyzer
from .analysis.periodization import DAY_NAMES
from .analysis.plan_adjustment import AdvicePriority, summarize_plan
from .analysis.recommendations import WorkoutPlanner, fallback_todays_workout
from .analysis.thresholds import estimate_thresholds
from .config import config
from .engine import build_context, calculate_load_metrics, generate_todays_workout, generate_weekly_plan
from .models import ExperienceLevel, Goal, UserPreferences, WeatherSnapshot, parse_activities

console = Console()
logger = logging.getLogger(__name__)

STATUS_COLORS = {
    "peak": "red",
    "build": "green",
    "maintain": "blue",
    "recover": "yellow",
}

ADVICE_COLORS = {
    AdvicePriority.HIGH: "red",
    AdvicePriority.MEDIUM: "yellow",
    AdvicePriority.LOW: "green",
}


def _read_records(path: str, key: str) -> list:
    """Read a JSON export: either a list of records or an object holding one."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list) or not all(isinstance(record, dict) for record in data):
        raise ValueError(f"{path}: expected a list of {key} objects")
    return data


def _parse_date(value):
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD") from e


def _load_context(activities_path, goals_path, temperature, precipitation, wind, experience, day):
    activities = parse_activities(_read_records(activities_path, "activities"))
    goals = [Goal.from_dict(g) for g in _read_records(goals_path, "goals")] if goals_path else []
    logger.debug(f"Loaded {len(activities)} activities and {len(goals)} goals")

    weather = None
    if temperature is not None:
        weather = WeatherSnapshot(
            temperature=temperature,
            precipitation=precipitation or 0.0,
            wind_speed=wind or 0.0,
        )
    elif precipitation is not None or wind is not None:
        raise ValueError("--precipitation and --wind require --temperature")

    preferences = UserPreferences(
        experience_level=ExperienceLevel(experience),
        weather=weather,
    )
    return activities, build_context(activities, goals, preferences, today=_parse_date(day))


def _fail(error: Exception):
    console.print(f"[red]❌ Error: {escape(str(error))}[/red]")
    sys.exit(1)


def planning_options(func):
    """Inputs shared by the planning commands."""
    options = [
        click.option("--activities", "activities_path", required=True, type=click.Path(),
                     help="Path to JSON activity export"),
        click.option("--goals", "goals_path", type=click.Path(), help="Path to JSON goals export"),
        click.option("--temperature", type=float, help="Current temperature in °C"),
        click.option("--precipitation", type=float, help="Precipitation in mm (needs --temperature)"),
        click.option("--wind", type=float, help="Wind speed in km/h (needs --temperature)"),
        click.option("--experience", default="intermediate",
                     type=click.Choice([level.value for level in ExperienceLevel]),
                     help="Athlete experience level"),
        click.option("--date", "day", help="Reference date (YYYY-MM-DD), defaults to today"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
def cli():
    """Training load calculator and workout planner."""
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
    try:
        config.validate()
    except ValueError as e:
        console.print(f"[red]❌ Configuration Error: {e}[/red]")
        sys.exit(1)


@cli.command()
@click.option("--activities", "activities_path", required=True, type=click.Path(),
              help="Path to JSON activity export")
def thresholds(activities_path):
    """Estimate heart rate and power thresholds from history."""
    try:
        activities = parse_activities(_read_records(activities_path, "activities"))
    except (ValueError, OSError) as e:
        _fail(e)

    estimated = estimate_thresholds(activities)

    table = Table(title=f"Estimated Thresholds ({len(activities)} activities)", box=box.ROUNDED)
    table.add_column("Threshold", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Max HR", f"{estimated.max_heart_rate:.0f} bpm")
    table.add_row("Resting HR", f"{estimated.resting_heart_rate:.0f} bpm")
    table.add_row("Lactate Threshold", f"{estimated.effective_lactate_threshold:.0f} bpm")
    ftp = estimated.functional_threshold_power
    table.add_row("FTP", f"{ftp:.0f} W" if ftp else "n/a")
    console.print(table)


@cli.command()
@click.option("--activities", "activities_path", required=True, type=click.Path(),
              help="Path to JSON activity export")
def metrics(activities_path):
    """Show current acute/chronic training load."""
    try:
        activities = parse_activities(_read_records(activities_path, "activities"))
    except (ValueError, OSError) as e:
        _fail(e)

    result = calculate_load_metrics(activities)
    color = STATUS_COLORS[result.status.value]

    table = Table(title="Training Load", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Acute (7d)", f"{result.acute:.0f}")
    table.add_row("Chronic (42d)", f"{result.chronic:.0f}")
    table.add_row("Balance", f"{result.balance:.0f}")
    table.add_row("Ramp Rate", f"{result.ramp_rate:.1f}")
    table.add_row("Status", f"[{color}]{result.status.value.upper()}[/{color}]")
    console.print(table)
    console.print(Panel(result.recommendation, title="📈 Recommendation", border_style=color))


@cli.command()
@planning_options
def today(activities_path, goals_path, temperature, precipitation, wind, experience, day):
    """Get the workout recommendation for today."""
    try:
        activities, context = _load_context(
            activities_path, goals_path, temperature, precipitation, wind, experience, day
        )
    except (ValueError, OSError) as e:
        _fail(e)

    if not activities:
        workout = EnvironmentalAnalyzer().adjust_workout(
            fallback_todays_workout(context.today), context.preferences.weather, context.today
        )
    else:
        workout = generate_todays_workout(context)

    if workout is None:
        console.print(Panel("Rest day. Recovery is part of training.", title="🎯 Today's Workout",
                            border_style="yellow"))
        return

    distance = f"{workout.distance:g} km" if workout.distance else "-"
    text = f"""
[bold]{workout.type.value.upper()}[/bold] {workout.sport}

[bold]Duration:[/bold] {workout.duration} min
[bold]Intensity:[/bold] {workout.intensity}/10
[bold]Distance:[/bold] {distance}
[bold]Rationale:[/bold] {workout.reasoning}
"""
    if workout.goal_alignment:
        text += f"[bold]Goal:[/bold] {workout.goal_alignment}\n"
    if workout.weather_consideration:
        text += f"[bold]Weather:[/bold] {workout.weather_consideration}\n"
    console.print(Panel(text.strip(), title="🎯 Today's Workout", border_style="green"))

    for step in workout.instructions:
        console.print(f"  • {step}")

    alternatives = WorkoutPlanner(context).get_alternatives(workout)
    if alternatives:
        console.print("\n[bold]Alternatives:[/bold]")
        for alt in alternatives:
            console.print(f"  • {alt.sport} {alt.type.value}, {alt.duration} min, intensity {alt.intensity}")


@cli.command()
@planning_options
def plan(activities_path, goals_path, temperature, precipitation, wind, experience, day):
    """Generate the workout plan for the next seven days."""
    try:
        _, context = _load_context(
            activities_path, goals_path, temperature, precipitation, wind, experience, day
        )
    except (ValueError, OSError) as e:
        _fail(e)

    weekly = generate_weekly_plan(context)

    table = Table(
        title=f"Weekly Plan ({weekly.periodization_phase.value.upper()} phase)",
        box=box.ROUNDED,
    )
    table.add_column("Day", style="cyan")
    table.add_column("Workout", style="blue")
    table.add_column("Sport")
    table.add_column("Min", justify="right")
    table.add_column("Int", justify="right", style="magenta")
    table.add_column("Km", justify="right")

    for day_index in range(7):
        workout = weekly.workouts[day_index]
        if workout is None:
            table.add_row(DAY_NAMES[day_index], "[dim]Rest[/dim]", "-", "-", "-", "-")
            continue
        table.add_row(
            DAY_NAMES[day_index],
            workout.type.value,
            workout.sport,
            str(workout.duration),
            str(workout.intensity),
            f"{workout.distance:g}" if workout.distance else "-",
        )
    console.print(table)

    summary = summarize_plan(weekly)
    console.print(
        f"[bold]Total:[/bold] {summary.total_time} min, {summary.total_distance:g} km, "
        f"{summary.total_tss:.0f} TSS, {summary.rest_days} rest days"
    )
    for advice in summary.advice:
        color = ADVICE_COLORS[advice.priority]
        console.print(f"[{color}]• {advice.message}[/{color}]")


if __name__ == "__main__":
    cli()
