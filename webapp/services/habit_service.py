"""
Habit Service

Sits between the habit routes and the habit store: validates input,
runs toggles through the streak engine and shapes habits for JSON.
"""

from functools import partial

from config import database
from config.models import HABIT_NAME_MAX_LENGTH
from utils.date_utils import is_same_day, to_iso, to_storage, utc_now
from webapp.errors import NotFoundError, ValidationError
from webapp.services.streak_engine import apply_toggle

# Largest id a signed 64-bit INTEGER column can hold
MAX_HABIT_ID = 2 ** 63 - 1


def validate_habit_name(name):
    """
    Trim and validate a habit name.

    Returns:
        str: The trimmed name

    Raises:
        ValidationError: If the name is missing, blank or too long
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError('Habit name is required')
    name = name.strip()
    if len(name) > HABIT_NAME_MAX_LENGTH:
        raise ValidationError(f'Habit name must be at most {HABIT_NAME_MAX_LENGTH} characters')
    return name


def serialize_habit(habit, timezone='UTC', now=None):
    """Convert a stored habit into its API representation."""
    now = now or utc_now()
    return {
        'id': habit['habit_id'],
        'userId': habit['user_id'],
        'name': habit['name'],
        'streak': habit['streak'],
        'lastChecked': to_iso(habit['last_checked']),
        'checkedToday': is_same_day(habit['last_checked'], now, timezone),
        'createdAt': to_iso(habit['created_at']),
        'updatedAt': to_iso(habit['updated_at'])
    }


def list_habits(user_id, timezone='UTC'):
    now = utc_now()
    return [serialize_habit(habit, timezone, now) for habit in database.list_user_habits(user_id)]


def create_habit(user_id, name, timezone='UTC'):
    habit = database.create_habit(user_id, validate_habit_name(name))
    return serialize_habit(habit, timezone)


def _check_habit_id(habit_id):
    if not 0 < habit_id <= MAX_HABIT_ID:
        raise NotFoundError('Habit not found')


def _toggle_transition(streak, last_checked, now, timezone):
    result = apply_toggle(streak, last_checked, now, timezone)
    return result.streak, to_storage(result.last_checked)


def toggle_habit(user_id, habit_id, timezone='UTC', now=None):
    """
    Mark a habit done for today, or undo today's check.

    Raises:
        NotFoundError: If the habit does not exist or belongs to someone else
    """
    _check_habit_id(habit_id)
    now = now or utc_now()
    transition = partial(_toggle_transition, now=now, timezone=timezone)
    habit = database.update_habit_state(habit_id, user_id, transition)
    if habit is None:
        raise NotFoundError('Habit not found')
    return serialize_habit(habit, timezone, now)


def delete_habit(user_id, habit_id):
    _check_habit_id(habit_id)
    if not database.delete_habit(habit_id, user_id):
        raise NotFoundError('Habit not found')
