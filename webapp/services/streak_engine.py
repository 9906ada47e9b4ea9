"""
Streak Engine

Computes the next (streak, last_checked) state of a habit when it is
toggled. A toggle is binary per calendar day: the first toggle of a day
starts or extends the streak, a second toggle on the same day un-checks
the habit and resets the streak to zero.
"""

import logging
from collections import namedtuple

from utils.date_utils import truncate_to_day

logger = logging.getLogger(__name__)

ToggleResult = namedtuple('ToggleResult', ['streak', 'last_checked'])


def apply_toggle(current_streak, current_last_checked, now, timezone='UTC'):
    """
    Apply a toggle action to a habit's streak state.

    Args:
        current_streak (int): Current streak, must be non-negative
        current_last_checked (datetime or None): When the habit was last checked
        now (datetime): Time of the toggle
        timezone (str or tzinfo): Zone whose calendar days are counted

    Returns:
        ToggleResult: New (streak, last_checked) pair to persist
    """
    if current_streak < 0:
        raise ValueError(f"Streak cannot be negative: {current_streak}")

    if current_last_checked is None:
        return ToggleResult(1, now)

    today = truncate_to_day(now, timezone)
    last_day = truncate_to_day(current_last_checked, timezone)
    days_diff = (today - last_day).days

    if days_diff == 0:
        # Second toggle today undoes the check entirely
        return ToggleResult(0, None)
    if days_diff == 1:
        return ToggleResult(current_streak + 1, now)

    if days_diff < 0:
        logger.warning(f"Toggle at {now} is {-days_diff} day(s) before last check {current_last_checked}; resetting streak")
    return ToggleResult(1, now)
