#!/usr/bin/env python3
"""
Habit Tracker CLI

Command-line client for the habit tracker API. The login session is kept
in a local file so later commands run as the same user.

Usage:
    habit register
    habit login
    habit add "Read 10 pages"
    habit list
    habit toggle 3
"""

import argparse
import getpass
import sys

from client.api import ApiClientError, HabitApiClient
from client.session import SessionState


class CliError(Exception):
    """Error shown to the user as a one-line message."""


def _prompt(value, label, secret=False):
    if value:
        return value
    return getpass.getpass(f"{label}: ") if secret else input(f"{label}: ")


def _require_login(session):
    if not session.is_authenticated:
        raise CliError("Not logged in. Run 'habit login' or 'habit register' first.")


def format_habit(habit):
    """One line per habit: id, done marker, streak and name."""
    marker = "✓" if habit.get("checkedToday") else " "
    return f"[{marker}] #{habit['id']:<4} 🔥 {habit['streak']:>3} day streak  {habit['name']}"


def cmd_register(args, client, session):
    username = _prompt(args.username, "Username")
    email = _prompt(args.email, "Email")
    password = _prompt(args.password, "Password", secret=True)
    data = client.register(username, email, password)
    session.set(data["token"], data["user"])
    print(f"Welcome, {data['user']['username']}!")


def cmd_login(args, client, session):
    email = _prompt(args.email, "Email")
    password = _prompt(args.password, "Password", secret=True)
    data = client.login(email, password)
    session.set(data["token"], data["user"])
    print(f"Hello, {data['user']['username']}!")


def cmd_logout(args, client, session):
    session.clear()
    print("Logged out.")


def cmd_whoami(args, client, session):
    _require_login(session)
    print(f"{session.user['username']} <{session.user['email']}>")


def cmd_list(args, client, session):
    _require_login(session)
    habits = client.fetch_habits()
    if not habits:
        print("📝 No habits yet! Add your first habit with 'habit add NAME'.")
        return
    for habit in habits:
        print(format_habit(habit))


def cmd_add(args, client, session):
    _require_login(session)
    name = " ".join(args.name).strip()
    if not name:
        raise CliError("Habit name cannot be empty.")
    habit = client.add_habit(name)
    print(f"Added habit #{habit['id']}: {habit['name']}")


def cmd_toggle(args, client, session):
    _require_login(session)
    habit = client.toggle_habit(args.habit_id)
    state = "Done today" if habit["lastChecked"] else "Unchecked"
    print(f"{state}: {habit['name']} (🔥 {habit['streak']} day streak)")


def cmd_delete(args, client, session):
    _require_login(session)
    if not args.yes:
        answer = input(f"Are you sure you want to delete habit #{args.habit_id}? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Cancelled.")
            return
    data = client.delete_habit(args.habit_id)
    print(data["message"])


def build_parser():
    parser = argparse.ArgumentParser(prog="habit", description="Habit Tracker client")
    parser.add_argument("--api-url", help="API root (default: $HABIT_TRACKER_API_URL or http://localhost:5000)")
    parser.add_argument("--session-file", help="Where the login session is stored")
    subparsers = parser.add_subparsers(dest="command", required=True)

    register = subparsers.add_parser("register", help="Create an account")
    register.add_argument("--username")
    register.add_argument("--email")
    register.add_argument("--password")
    register.set_defaults(func=cmd_register)

    login = subparsers.add_parser("login", help="Log in")
    login.add_argument("--email")
    login.add_argument("--password")
    login.set_defaults(func=cmd_login)

    subparsers.add_parser("logout", help="Forget the saved session").set_defaults(func=cmd_logout)
    subparsers.add_parser("whoami", help="Show the logged-in user").set_defaults(func=cmd_whoami)
    subparsers.add_parser("list", help="List your habits").set_defaults(func=cmd_list)

    add = subparsers.add_parser("add", help="Add a habit")
    add.add_argument("name", nargs="+")
    add.set_defaults(func=cmd_add)

    toggle = subparsers.add_parser("toggle", help="Mark a habit done today (again to undo)")
    toggle.add_argument("habit_id", type=int)
    toggle.set_defaults(func=cmd_toggle)

    delete = subparsers.add_parser("delete", help="Delete a habit")
    delete.add_argument("habit_id", type=int)
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")
    delete.set_defaults(func=cmd_delete)

    return parser


def main(argv=None, client=None, session=None):
    args = build_parser().parse_args(argv)

    if session is None:
        session = SessionState(args.session_file).load()
    if client is None:
        client = HabitApiClient(args.api_url)
    client.set_auth_token(session.token)

    try:
        args.func(args, client, session)
    except (ApiClientError, CliError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
