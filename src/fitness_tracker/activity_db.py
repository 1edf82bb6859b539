from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime, timedelta
from pathlib import Path

from .calories import calculate_calories
from .errors import DuplicateUsernameError, NotFoundError
from .models import ActivityRecord, ActivityType, User

logger = logging.getLogger(__name__)


def connect_db(db_path: str | Path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            username TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            calorie_goal INTEGER NOT NULL DEFAULT 0,
            failed_login_attempts INTEGER NOT NULL DEFAULT 0,
            is_locked INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL
        )
        """
    )
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS activity_records (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            activity_type INTEGER NOT NULL,
            metric1 REAL NOT NULL,
            metric2 REAL NOT NULL,
            metric3 REAL NOT NULL,
            calories_burned REAL NOT NULL,
            recorded_at TEXT NOT NULL,
            FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
        )
        """
    )
    conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_activity_records_user ON activity_records(user_id, recorded_at)"
    )
    conn.commit()


def _row_to_user(row: sqlite3.Row) -> User:
    return User(
        id=row["id"],
        username=row["username"],
        password_hash=row["password_hash"],
        calorie_goal=row["calorie_goal"],
        failed_login_attempts=row["failed_login_attempts"],
        is_locked=bool(row["is_locked"]),
        created_at=datetime.fromisoformat(row["created_at"]),
    )


def _row_to_activity(row: sqlite3.Row) -> ActivityRecord:
    return ActivityRecord(
        id=row["id"],
        user_id=row["user_id"],
        activity_type=ActivityType(row["activity_type"]),
        metric1=row["metric1"],
        metric2=row["metric2"],
        metric3=row["metric3"],
        calories_burned=row["calories_burned"],
        recorded_at=datetime.fromisoformat(row["recorded_at"]),
    )


def create_user(
    conn: sqlite3.Connection,
    *,
    username: str,
    password_hash: str,
    calorie_goal: int,
    created_at: datetime | None = None,
) -> User:
    created = created_at or datetime.now()
    try:
        cur = conn.execute(
            "INSERT INTO users(username, password_hash, calorie_goal, created_at) VALUES (?, ?, ?, ?)",
            (username, password_hash, calorie_goal, created.isoformat()),
        )
    except sqlite3.IntegrityError as exc:
        raise DuplicateUsernameError("Username is already taken.", field="username") from exc
    conn.commit()
    logger.info("Created user %s", username)
    return get_user(conn, int(cur.lastrowid))


def get_user(conn: sqlite3.Connection, user_id: int) -> User:
    row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    if row is None:
        raise NotFoundError(f"user {user_id} not found")
    return _row_to_user(row)


def get_user_by_username(conn: sqlite3.Connection, username: str) -> User | None:
    row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
    if row is None:
        return None
    return _row_to_user(row)


def update_login_state(conn: sqlite3.Connection, user_id: int, *, failed_login_attempts: int, is_locked: bool) -> None:
    conn.execute(
        "UPDATE users SET failed_login_attempts = ?, is_locked = ? WHERE id = ?",
        (failed_login_attempts, int(is_locked), user_id),
    )
    conn.commit()


def set_calorie_goal(conn: sqlite3.Connection, user_id: int, calorie_goal: int) -> None:
    cur = conn.execute("UPDATE users SET calorie_goal = ? WHERE id = ?", (calorie_goal, user_id))
    if cur.rowcount == 0:
        raise NotFoundError(f"user {user_id} not found")
    conn.commit()


def add_activity(
    conn: sqlite3.Connection,
    *,
    user_id: int,
    activity_type: ActivityType,
    metric1: float,
    metric2: float,
    metric3: float,
    recorded_at: datetime | None = None,
) -> ActivityRecord:
    """Store an activity with its calories, computed now and rounded to 2 places."""
    calories = round(calculate_calories(activity_type, metric1, metric2, metric3), 2)
    recorded = recorded_at or datetime.now()
    cur = conn.execute(
        """
        INSERT INTO activity_records(user_id, activity_type, metric1, metric2, metric3, calories_burned, recorded_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        """,
        (user_id, int(activity_type), metric1, metric2, metric3, calories, recorded.isoformat()),
    )
    conn.commit()
    logger.info("User %s logged %s: %.2f kcal", user_id, ActivityType(activity_type).label, calories)
    return get_activity(conn, int(cur.lastrowid), user_id=user_id)


def get_activity(conn: sqlite3.Connection, activity_id: int, *, user_id: int) -> ActivityRecord:
    row = conn.execute(
        "SELECT * FROM activity_records WHERE id = ? AND user_id = ?",
        (activity_id, user_id),
    ).fetchone()
    if row is None:
        raise NotFoundError(f"activity {activity_id} not found")
    return _row_to_activity(row)


def update_activity(
    conn: sqlite3.Connection,
    activity_id: int,
    *,
    user_id: int,
    activity_type: ActivityType,
    metric1: float,
    metric2: float,
    metric3: float,
) -> ActivityRecord:
    """Replace the metrics of an activity and recompute its calories. ``recorded_at`` is kept."""
    get_activity(conn, activity_id, user_id=user_id)
    calories = round(calculate_calories(activity_type, metric1, metric2, metric3), 2)
    conn.execute(
        """
        UPDATE activity_records
        SET activity_type = ?, metric1 = ?, metric2 = ?, metric3 = ?, calories_burned = ?
        WHERE id = ? AND user_id = ?
        """,
        (int(activity_type), metric1, metric2, metric3, calories, activity_id, user_id),
    )
    conn.commit()
    logger.info("User %s updated activity %s: %.2f kcal", user_id, activity_id, calories)
    return get_activity(conn, activity_id, user_id=user_id)


def delete_activity(conn: sqlite3.Connection, activity_id: int, *, user_id: int) -> None:
    cur = conn.execute(
        "DELETE FROM activity_records WHERE id = ? AND user_id = ?",
        (activity_id, user_id),
    )
    if cur.rowcount == 0:
        raise NotFoundError(f"activity {activity_id} not found")
    conn.commit()
    logger.info("User %s deleted activity %s", user_id, activity_id)


def list_activities(conn: sqlite3.Connection, user_id: int) -> list[ActivityRecord]:
    rows = conn.execute(
        "SELECT * FROM activity_records WHERE user_id = ? ORDER BY recorded_at DESC, id DESC",
        (user_id,),
    ).fetchall()
    return [_row_to_activity(row) for row in rows]


def list_activities_for_day(conn: sqlite3.Connection, user_id: int, day: date) -> list[ActivityRecord]:
    start = datetime.combine(day, datetime.min.time())
    end = start + timedelta(days=1)
    rows = conn.execute(
        """
        SELECT * FROM activity_records
        WHERE user_id = ? AND recorded_at >= ? AND recorded_at < ?
        ORDER BY recorded_at DESC, id DESC
        """,
        (user_id, start.isoformat(), end.isoformat()),
    ).fetchall()
    return [_row_to_activity(row) for row in rows]
