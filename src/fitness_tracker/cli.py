import json
import sqlite3
from contextlib import closing
from datetime import date
from typing import NoReturn

import typer

from .accounts import authenticate, register_user, update_goal
from .activity_db import add_activity, connect_db, delete_activity, init_db, list_activities, list_activities_for_day
from .calories import ASSUMED_WEIGHT_KG, calculate_calories
from .config import configure_logging, load_settings
from .errors import FitnessTrackerError
from .models import ActivityRecord, ActivityType, metric_labels
from .progress import summarize_day
from .validation import validate_metrics

app = typer.Typer(help="Fitness tracker utilities")


def _parse_activity(value: str) -> ActivityType:
    try:
        return ActivityType.parse(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _fail(exc: FitnessTrackerError) -> NoReturn:
    typer.secho(exc.message, fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _open(ctx: typer.Context) -> closing[sqlite3.Connection]:
    conn = connect_db(ctx.obj["db_path"])
    init_db(conn)
    return closing(conn)


def _record_json(record: ActivityRecord) -> dict:
    return {
        "id": record.id,
        "activity": record.activity_type.label,
        "metrics": dict(zip(record.labels, (record.metric1, record.metric2, record.metric3))),
        "calories_burned": record.calories_burned,
        "recorded_at": record.recorded_at.isoformat(timespec="seconds"),
    }


@app.callback()
def main(
    ctx: typer.Context,
    db: str = typer.Option(None, "--db", help="SQLite DB path (default: $FITNESS_DB_PATH or fitness.db)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at INFO level"),
) -> None:
    settings = load_settings()
    configure_logging("INFO" if verbose else settings.log_level)
    ctx.obj = {"db_path": db or settings.db_path}


@app.command()
def calories(
    activity: str = typer.Argument(..., help="walking, swimming, running, cycling, weight_lifting or yoga"),
    metric1: float = typer.Argument(...),
    metric2: float = typer.Argument(...),
    metric3: float = typer.Argument(...),
    weight_kg: float = typer.Option(ASSUMED_WEIGHT_KG, min=0.0001, help="Assumed body weight in kg"),
) -> None:
    """Estimate calories burned without storing anything."""
    kind = _parse_activity(activity)
    try:
        burned = calculate_calories(kind, metric1, metric2, metric3, weight_kg=weight_kg)
    except FitnessTrackerError as exc:
        _fail(exc)
    typer.echo(
        json.dumps(
            {
                "activity": kind.label,
                "metrics": dict(zip(metric_labels(kind), (metric1, metric2, metric3))),
                "weight_kg": weight_kg,
                "calories": round(burned, 2),
            },
            ensure_ascii=False,
        )
    )


@app.command()
def labels(activity: str = typer.Argument(...)) -> None:
    """Show what metric1, metric2 and metric3 mean for an activity."""
    kind = _parse_activity(activity)
    metric1, metric2, metric3 = metric_labels(kind)
    typer.echo(json.dumps({"metric1": metric1, "metric2": metric2, "metric3": metric3}))


@app.command()
def register(
    ctx: typer.Context,
    username: str = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
    goal: int = typer.Option(300, help="Daily calorie goal"),
) -> None:
    """Create an account."""
    with _open(ctx) as conn:
        try:
            user = register_user(conn, username=username, password=password, confirm_password=password, calorie_goal=goal)
        except FitnessTrackerError as exc:
            _fail(exc)
    typer.echo(f"Registered {user.username} with a daily goal of {user.calorie_goal} kcal")


@app.command()
def log(
    ctx: typer.Context,
    username: str = typer.Argument(...),
    activity: str = typer.Argument(...),
    metric1: float = typer.Argument(...),
    metric2: float = typer.Argument(...),
    metric3: float = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Record an activity."""
    kind = _parse_activity(activity)
    with _open(ctx) as conn:
        try:
            user = authenticate(conn, username, password)
            validate_metrics(kind, metric1, metric2, metric3)
            record = add_activity(
                conn,
                user_id=user.id,
                activity_type=kind,
                metric1=metric1,
                metric2=metric2,
                metric3=metric3,
            )
        except FitnessTrackerError as exc:
            _fail(exc)
    typer.echo(f"Activity recorded! You burned {record.calories_burned:.1f} calories.")


@app.command()
def activities(
    ctx: typer.Context,
    username: str = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """List all activities, newest first."""
    with _open(ctx) as conn:
        try:
            user = authenticate(conn, username, password)
        except FitnessTrackerError as exc:
            _fail(exc)
        records = list_activities(conn, user.id)
    typer.echo(json.dumps([_record_json(r) for r in records], ensure_ascii=False))


@app.command()
def delete(
    ctx: typer.Context,
    username: str = typer.Argument(...),
    activity_id: int = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Delete one of your activities."""
    with _open(ctx) as conn:
        try:
            user = authenticate(conn, username, password)
            delete_activity(conn, activity_id, user_id=user.id)
        except FitnessTrackerError as exc:
            _fail(exc)
    typer.echo("Activity deleted successfully!")


@app.command()
def dashboard(
    ctx: typer.Context,
    username: str = typer.Argument(...),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Show today's calories against the daily goal."""
    today = date.today()
    with _open(ctx) as conn:
        try:
            user = authenticate(conn, username, password)
        except FitnessTrackerError as exc:
            _fail(exc)
        summary = summarize_day(list_activities_for_day(conn, user.id, today), user.calorie_goal, today)
    typer.echo(
        json.dumps(
            {
                "day": today.isoformat(),
                "calorie_goal": summary.calorie_goal,
                "total_calories": round(summary.total_calories, 2),
                "remaining_calories": round(summary.remaining_calories, 2),
                "progress_percentage": round(summary.progress_percentage, 1),
                "goal_achieved": summary.is_goal_achieved,
                "calories_by_activity": {k.label: round(v, 2) for k, v in summary.calories_by_activity.items()},
                "count_by_activity": {k.label: v for k, v in summary.count_by_activity.items()},
            },
            ensure_ascii=False,
        )
    )


@app.command()
def goal(
    ctx: typer.Context,
    username: str = typer.Argument(...),
    calorie_goal: int = typer.Argument(..., help="New daily calorie goal (1-10000)"),
    password: str = typer.Option(..., prompt=True, hide_input=True),
) -> None:
    """Update the daily calorie goal."""
    with _open(ctx) as conn:
        try:
            user = authenticate(conn, username, password)
            update_goal(conn, user.id, calorie_goal)
        except FitnessTrackerError as exc:
            _fail(exc)
    typer.echo("Goal updated successfully!")


if __name__ == "__main__":
    app()
