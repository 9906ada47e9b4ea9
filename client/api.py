"""
Habit Tracker API Client

Thin wrapper around the HTTP API using requests.
"""

import os

import requests

DEFAULT_API_URL = "http://localhost:5000"
REQUEST_TIMEOUT = 10


class ApiClientError(Exception):
    """Raised for non-2xx answers and connection failures."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class HabitApiClient:
    """
    Client for the habit tracker API.

    Args:
        base_url (str, optional): API root, defaults to HABIT_TRACKER_API_URL or localhost
        token (str, optional): Bearer token to send with every request
    """

    def __init__(self, base_url=None, token=None, session=None):
        self.base_url = (base_url or os.getenv("HABIT_TRACKER_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.http = session or requests.Session()
        self.set_auth_token(token)

    def set_auth_token(self, token):
        if token:
            self.http.headers["Authorization"] = f"Bearer {token}"
        else:
            self.http.headers.pop("Authorization", None)

    def _request(self, method, path, payload=None):
        try:
            response = self.http.request(method, f"{self.base_url}{path}", json=payload, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as e:
            raise ApiClientError(f"Could not reach {self.base_url}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = data.get("message") if isinstance(data, dict) else None
            raise ApiClientError(message or f"Request failed with status {response.status_code}", response.status_code)
        return data

    def register(self, username, email, password):
        return self._request("POST", "/auth/register", {"username": username, "email": email, "password": password})

    def login(self, email, password):
        return self._request("POST", "/auth/login", {"email": email, "password": password})

    def fetch_habits(self):
        return self._request("GET", "/habits")

    def add_habit(self, name):
        return self._request("POST", "/habits", {"name": name})

    def toggle_habit(self, habit_id):
        return self._request("PUT", f"/habits/{habit_id}")

    def delete_habit(self, habit_id):
        return self._request("DELETE", f"/habits/{habit_id}")
