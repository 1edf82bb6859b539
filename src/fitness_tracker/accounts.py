from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import sqlite3

from .activity_db import create_user, get_user_by_username, set_calorie_goal, update_login_state
from .errors import AccountLockedError, AuthenticationError, DuplicateUsernameError, ValidationError
from .models import User
from .validation import validate_calorie_goal, validate_password, validate_username

logger = logging.getLogger(__name__)

MAX_LOGIN_ATTEMPTS = 5
PASSWORD_SALT = "FitnessTrackerSalt"


def hash_password(password: str) -> str:
    digest = hashlib.sha256((password + PASSWORD_SALT).encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    return hmac.compare_digest(hash_password(password), password_hash)


def register_user(
    conn: sqlite3.Connection,
    *,
    username: str,
    password: str,
    confirm_password: str,
    calorie_goal: int = 300,
) -> User:
    name = validate_username(username)
    validate_password(password)
    if password != confirm_password:
        raise ValidationError("Passwords do not match", field="confirm_password")
    goal = validate_calorie_goal(calorie_goal)
    if get_user_by_username(conn, name) is not None:
        raise DuplicateUsernameError("Username is already taken.", field="username")
    return create_user(conn, username=name, password_hash=hash_password(password), calorie_goal=goal)


def authenticate(conn: sqlite3.Connection, username: str, password: str) -> User:
    """Log a user in, counting failures and locking the account after ``MAX_LOGIN_ATTEMPTS``."""
    user = get_user_by_username(conn, username.strip())
    if user is None:
        raise AuthenticationError("Invalid username or password.")
    if user.is_locked:
        raise AccountLockedError(
            "Account is locked due to too many failed login attempts. Please contact support.",
            remaining_attempts=0,
        )

    if verify_password(password, user.password_hash):
        if user.failed_login_attempts:
            update_login_state(conn, user.id, failed_login_attempts=0, is_locked=False)
        return user

    attempts = user.failed_login_attempts + 1
    if attempts >= MAX_LOGIN_ATTEMPTS:
        update_login_state(conn, user.id, failed_login_attempts=attempts, is_locked=True)
        logger.warning("Locked account %s after %d failed logins", user.username, attempts)
        raise AccountLockedError("Too many failed login attempts. Account has been locked.", remaining_attempts=0)

    update_login_state(conn, user.id, failed_login_attempts=attempts, is_locked=False)
    remaining = MAX_LOGIN_ATTEMPTS - attempts
    raise AuthenticationError(
        f"Invalid username or password. {remaining} attempts remaining.",
        remaining_attempts=remaining,
    )


def update_goal(conn: sqlite3.Connection, user_id: int, calorie_goal: int) -> int:
    goal = validate_calorie_goal(calorie_goal)
    set_calorie_goal(conn, user_id, goal)
    return goal
