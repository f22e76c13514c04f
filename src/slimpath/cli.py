"""CLI interface using Typer."""

from __future__ import annotations

import logging
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from slimpath.agent.response import AgentResponse, create_response, error_response
from slimpath.config import get_settings
from slimpath.db import get_db
from slimpath.tracking import lifecycle
from slimpath.tracking.meal_planner import format_meal_distribution_text
from slimpath.tracking.models import (
    NotFoundError,
    TrackingError,
    TrackingRecord,
    UserProfile,
    ValidationError,
)
from slimpath.tracking.queries import TrackingQueries, UserQueries
from slimpath.tracking.serialization import record_to_dict, to_dict, view_to_dict

app = typer.Typer(
    help="Calorie tracking plans with weekly progress analytics",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

# Subcommand groups
user_app = typer.Typer(help="Manage users")
tracking_app = typer.Typer(help="Initialize, update and inspect tracking plans")

app.add_typer(user_app, name="user")
app.add_typer(tracking_app, name="tracking")


# ============================================================================
# Logging and output helpers
# ============================================================================


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler on stderr."""
    level = logging.DEBUG if verbose else getattr(logging, get_settings().logging.level)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def output_json(response: AgentResponse) -> None:
    """Print a response envelope as JSON."""
    print(response.to_json())


def use_json(json_flag: bool) -> bool:
    """True if JSON output was requested or is the configured default."""
    return json_flag or get_settings().defaults.output_format == "json"


def fail(command: str, error: TrackingError, as_json: bool, suggestion: Optional[str] = None) -> NoReturn:
    """Report a tracking error and exit with status 1."""
    suggestions = [suggestion] if suggestion else []
    if as_json:
        output_json(error_response(command, error, suggestions))
    else:
        console.print(f"[red]{error}[/red]")
        for hint in suggestions:
            console.print(hint)
    raise typer.Exit(1)


def ensure_tracking_tables() -> None:
    """Ensure tracking tables exist (idempotent)."""
    db = get_db()
    db.initialize_schema()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Calorie tracking plans with weekly progress analytics."""
    setup_logging(verbose)


# Callbacks for sub-apps to auto-create tables on first use
@user_app.callback()
def user_callback() -> None:
    """Ensure tables exist before any user command."""
    ensure_tracking_tables()


@tracking_app.callback()
def tracking_callback() -> None:
    """Ensure tables exist before any tracking command."""
    ensure_tracking_tables()


def _record_table(record: TrackingRecord, title: str) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Record", str(record.record_id))
    table.add_row("Current weight", f"{record.current_weight:.1f} lbs")
    table.add_row("Initial weight", f"{record.initial_weight:.1f} lbs")
    table.add_row("Goal weight", f"{record.goal_weight:.1f} lbs")
    table.add_row("Duration", f"{record.duration_weeks} weeks")
    table.add_row("Activity", record.activity_level.value)
    table.add_row("Daily calories", f"{record.daily_calories} kcal")

    meals = record.meal_distribution
    table.add_row(
        "Meals",
        f"{meals.morning.calories} / {meals.afternoon.calories} / {meals.night.calories} kcal",
    )
    table.add_row("Progress", f"{record.progress_percentage:.1f}%")
    return table


# ============================================================================
# User commands
# ============================================================================


@user_app.command("create")
def user_create(
    username: str = typer.Option(..., "--username", help="Display name"),
    email: str = typer.Option(..., "--email", help="Email address (unique)"),
    age: Optional[int] = typer.Option(None, "--age", help="Age in years"),
    height: Optional[float] = typer.Option(None, "--height", help="Height in inches (or meters)"),
    activity: Optional[str] = typer.Option(
        None,
        "--activity",
        help="Activity level (sedentary/lightlyActive/moderatelyActive/veryActive/extraActive)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create a user whose profile fills in missing tracking biometrics."""
    as_json = use_json(json_output)

    try:
        profile = UserProfile(
            user_id=None,
            username=username,
            email=email,
            age=age,
            height=height,
            activity_level=activity,
        )
    except ValidationError as e:
        fail("user create", e, as_json)

    db = get_db()
    try:
        with lifecycle.store_errors("user creation"), db.get_connection() as conn:
            if UserQueries.get_user_by_email(conn, email) is not None:
                raise ValidationError(
                    f"A user with email {email} already exists", field="email"
                )
            user_id = UserQueries.create_user(conn, profile)
    except TrackingError as e:
        fail("user create", e, as_json)

    if as_json:
        output_json(create_response(
            "user create",
            data={"user_id": user_id},
            suggestions=[f"slimpath tracking init --user {user_id} --weight 180 --goal 165 --weeks 12"],
            human_summary=f"Created user {username} (ID: {user_id})",
        ))
    else:
        console.print(f"[green]Created user {username} (ID: {user_id})[/green]")


@user_app.command("show")
def user_show(
    user_id: int = typer.Option(..., "--id", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show a user and how many tracking plans they have."""
    as_json = use_json(json_output)

    db = get_db()
    try:
        with lifecycle.store_errors("user lookup"), db.get_connection() as conn:
            profile = UserQueries.get_user(conn, user_id)
            plans = TrackingQueries.count_for_user(conn, user_id) if profile else 0
    except TrackingError as e:
        fail("user show", e, as_json)

    if profile is None:
        fail(
            "user show",
            NotFoundError(f"User not found: {user_id}"),
            as_json,
            "Create one with: slimpath user create --username NAME --email EMAIL",
        )

    if as_json:
        output_json(create_response(
            "user show",
            data={"user": to_dict(profile), "tracking_plans": plans},
            human_summary=f"User {profile.user_id}: {profile.username}, {plans} plan(s)",
        ))
    else:
        console.print(f"[bold]User {profile.username} (ID: {profile.user_id})[/bold]")
        console.print(f"  Email: {profile.email}")
        if profile.age is not None:
            console.print(f"  Age: {profile.age}")
        if profile.height is not None:
            console.print(f"  Height: {profile.height}")
        if profile.activity_level:
            console.print(f"  Activity: {profile.activity_level}")
        console.print(f"  Tracking plans: {plans}")


# ============================================================================
# Tracking commands
# ============================================================================


@tracking_app.command("init")
def tracking_init(
    user_id: int = typer.Option(..., "--user", help="User ID"),
    weight: float = typer.Option(..., "--weight", help="Current weight (lbs, or kg if under 100)"),
    goal: float = typer.Option(..., "--goal", help="Goal weight (lbs, or kg if under 100)"),
    weeks: int = typer.Option(..., "--weeks", help="Plan duration in weeks"),
    age: Optional[int] = typer.Option(None, "--age", help="Age (default: from user profile)"),
    height: Optional[float] = typer.Option(None, "--height", help="Height (default: from user profile)"),
    activity: Optional[str] = typer.Option(None, "--activity", help="Activity level (default: from user profile)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Start a new tracking plan."""
    as_json = use_json(json_output)
    biometrics = {
        "current_weight": weight,
        "goal_weight": goal,
        "duration_weeks": weeks,
        "age": age,
        "height": height,
        "activity_level": activity,
    }

    db = get_db()
    try:
        with db.get_connection() as conn:
            result = lifecycle.initialize(conn, user_id, biometrics)
    except TrackingError as e:
        fail("tracking init", e, as_json)

    record = result.record
    if as_json:
        output_json(create_response(
            "tracking init",
            data={
                "tracking": record_to_dict(record),
                "processing_time_ms": round(result.processing_time_ms, 2),
            },
            suggestions=[f"slimpath tracking update --user {user_id} --weight <lbs>"],
            human_summary=f"Started plan {record.record_id}: {record.daily_calories} kcal/day",
        ))
    else:
        console.print(_record_table(record, "Tracking Plan Created"))


@tracking_app.command("update")
def tracking_update(
    user_id: int = typer.Option(..., "--user", help="User ID"),
    weight: float = typer.Option(..., "--weight", help="New weight (lbs, or kg if under 100)"),
    height: Optional[float] = typer.Option(None, "--height", help="Height (default: from the plan)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Record a new weight on the latest plan."""
    as_json = use_json(json_output)

    db = get_db()
    try:
        with db.get_connection() as conn:
            result = lifecycle.update(conn, user_id, weight, height=height)
    except TrackingError as e:
        fail("tracking update", e, as_json)

    record = result.record
    if as_json:
        output_json(create_response(
            "tracking update",
            data={
                "tracking": record_to_dict(record),
                "processing_time_ms": round(result.processing_time_ms, 2),
            },
            human_summary=(
                f"Weight {record.current_weight:.1f} lbs, "
                f"{record.daily_calories} kcal/day, {record.progress_percentage:.1f}% to goal"
            ),
        ))
    else:
        console.print(_record_table(record, "Tracking Plan Updated"))


@tracking_app.command("show")
def tracking_show(
    user_id: int = typer.Option(..., "--user", help="User ID"),
    meals: bool = typer.Option(False, "--meals", help="Include meal guidance"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the latest plan with analytics for the current week."""
    as_json = use_json(json_output)

    db = get_db()
    try:
        with db.get_connection() as conn:
            view = lifecycle.get(conn, user_id)
    except TrackingError as e:
        fail(
            "tracking show",
            e,
            as_json,
            f"Start a plan with: slimpath tracking init --user {user_id} --weight 180 --goal 165 --weeks 12",
        )

    record = view.record
    if as_json:
        output_json(create_response(
            "tracking show",
            data=view_to_dict(view),
            human_summary=(
                "Plan complete"
                if view.plan_complete
                else f"Week {view.current_week} of {record.duration_weeks}"
            ),
        ))
        return

    status = "complete" if view.plan_complete else f"week {view.current_week} of {record.duration_weeks}"
    console.print(_record_table(record, f"Tracking Plan ({status})"))

    if record.progress_patterns is not None:
        patterns = record.progress_patterns
        console.print(
            f"Trend: {patterns.overall_trend} ({patterns.pattern_type}), "
            f"consistency {patterns.consistency_score}"
        )
    if record.adherence is not None:
        console.print(
            f"Adherence: {record.adherence.overall_adherence}, "
            f"streak {record.adherence.streak.current} (best {record.adherence.streak.longest})"
        )
    if record.recommendations is not None:
        rec = record.recommendations
        if rec.message:
            console.print(f"[dim]{rec.message}[/dim]")
        else:
            console.print(f"Focus: {rec.focus_areas}; best days: {', '.join(rec.best_days)}")

    if meals:
        console.print()
        console.print(format_meal_distribution_text(record.meal_distribution))


@tracking_app.command("history")
def tracking_history(
    user_id: int = typer.Option(..., "--user", help="User ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List every plan for a user, newest first."""
    as_json = use_json(json_output)

    db = get_db()
    try:
        with db.get_connection() as conn:
            records = lifecycle.get_history(conn, user_id)
    except TrackingError as e:
        fail("tracking history", e, as_json)

    if as_json:
        output_json(create_response(
            "tracking history",
            data={"history": [record_to_dict(r) for r in records], "count": len(records)},
            human_summary=f"{len(records)} tracking plan(s)",
        ))
        return

    table = Table(title=f"Tracking History (user {user_id})")
    table.add_column("ID", justify="right")
    table.add_column("Started", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("Goal", justify="right")
    table.add_column("Weeks", justify="right")
    table.add_column("kcal/day", justify="right")
    table.add_column("Progress", justify="right")

    for record in records:
        started = record.created_at.date().isoformat() if record.created_at else "-"
        table.add_row(
            str(record.record_id),
            started,
            f"{record.current_weight:.1f}",
            f"{record.goal_weight:.1f}",
            str(record.duration_weeks),
            str(record.daily_calories),
            f"{record.progress_percentage:.1f}%",
        )

    console.print(table)


if __name__ == "__main__":
    app()
