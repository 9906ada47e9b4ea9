"""
Client Session State

Keeps the bearer token and user record between CLI runs. The state is
read once at startup, set on login/register and cleared on logout; it is
never refreshed behind the caller's back.
"""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_SESSION_PATH = Path.home() / ".habit_tracker" / "session.json"


def default_session_path():
    return Path(os.getenv("HABIT_TRACKER_SESSION", DEFAULT_SESSION_PATH))


class SessionState:
    """Token and user persisted in a JSON file."""

    def __init__(self, path=None):
        self.path = Path(path) if path else default_session_path()
        self.token = None
        self.user = None

    @property
    def is_authenticated(self):
        return bool(self.token)

    def load(self):
        """Read the saved session, if any. A corrupt file counts as logged out."""
        self.token = None
        self.user = None
        if not self.path.exists():
            return self

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return self

        if isinstance(data, dict) and data.get("token") and data.get("user"):
            self.token = data["token"]
            self.user = data["user"]
        return self

    def set(self, token, user):
        """Store a new session after login or registration."""
        self.token = token
        self.user = user
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")

    def clear(self):
        """Forget the session (logout)."""
        self.token = None
        self.user = None
        if self.path.exists():
            self.path.unlink()
