"""
Tests for the command-line client: session persistence, the HTTP wrapper
and the CLI commands.
"""

from unittest import mock

import pytest
import requests

from client import cli
from client.api import ApiClientError, HabitApiClient
from client.session import SessionState

USER = {'id': 1, 'username': 'alice', 'email': 'alice@example.com'}


def make_response(status_code, payload):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.json.return_value = payload
    return response


@pytest.fixture
def http():
    session = mock.Mock()
    session.headers = {}
    return session


@pytest.fixture
def session_file(tmp_path):
    return tmp_path / 'session.json'


class TestSessionState:
    def test_absent_by_default(self, session_file):
        state = SessionState(session_file).load()
        assert not state.is_authenticated
        assert state.user is None

    def test_survives_reload(self, session_file):
        SessionState(session_file).set('tok', USER)

        state = SessionState(session_file).load()
        assert state.is_authenticated
        assert state.token == 'tok'
        assert state.user == USER

    def test_clear_removes_file(self, session_file):
        state = SessionState(session_file)
        state.set('tok', USER)
        state.clear()

        assert not session_file.exists()
        assert not SessionState(session_file).load().is_authenticated

    def test_corrupt_file_means_logged_out(self, session_file):
        session_file.write_text('{not json')
        assert not SessionState(session_file).load().is_authenticated


class TestHabitApiClient:
    def test_sets_and_clears_bearer_header(self, http):
        api = HabitApiClient('http://api.test/', token='abc', session=http)
        assert http.headers['Authorization'] == 'Bearer abc'

        api.set_auth_token(None)
        assert 'Authorization' not in http.headers

    def test_toggle_sends_put(self, http):
        http.request.return_value = make_response(200, {'id': 3, 'streak': 1})
        api = HabitApiClient('http://api.test/', session=http)

        assert api.toggle_habit(3) == {'id': 3, 'streak': 1}
        http.request.assert_called_once_with('PUT', 'http://api.test/habits/3', json=None, timeout=10)

    def test_error_uses_server_message(self, http):
        http.request.return_value = make_response(401, {'message': 'Invalid email or password'})
        api = HabitApiClient('http://api.test', session=http)

        with pytest.raises(ApiClientError) as excinfo:
            api.login('alice@example.com', 'wrong')

        assert excinfo.value.status_code == 401
        assert excinfo.value.message == 'Invalid email or password'

    def test_connection_error(self, http):
        http.request.side_effect = requests.ConnectionError('refused')
        api = HabitApiClient('http://api.test', session=http)

        with pytest.raises(ApiClientError):
            api.fetch_habits()


class TestCli:
    def run(self, argv, api, state):
        return cli.main(argv, client=api, session=state)

    def test_login_saves_session(self, session_file, capsys):
        api = mock.Mock()
        api.login.return_value = {'token': 'tok', 'user': USER}
        state = SessionState(session_file).load()

        code = self.run(['login', '--email', 'alice@example.com', '--password', 'pw'], api, state)

        assert code == 0
        assert SessionState(session_file).load().token == 'tok'
        assert 'Hello, alice!' in capsys.readouterr().out

    def test_commands_need_login(self, session_file, capsys):
        api = mock.Mock()
        code = self.run(['list'], api, SessionState(session_file).load())

        assert code == 1
        assert 'Not logged in' in capsys.readouterr().err
        api.fetch_habits.assert_not_called()

    def test_list_shows_streaks(self, session_file, capsys):
        api = mock.Mock()
        api.fetch_habits.return_value = [
            {'id': 2, 'name': 'Run', 'streak': 4, 'lastChecked': '2026-10-19T08:00:00Z', 'checkedToday': True},
            {'id': 1, 'name': 'Read', 'streak': 0, 'lastChecked': None, 'checkedToday': False},
        ]
        state = SessionState(session_file)
        state.set('tok', USER)

        assert self.run(['list'], api, state) == 0

        api.set_auth_token.assert_called_once_with('tok')
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].startswith('[✓] #2')
        assert 'Run' in lines[0] and '4 day streak' in lines[0]
        assert lines[1].startswith('[ ] #1')

    def test_add_rejects_blank_name(self, session_file, capsys):
        api = mock.Mock()
        state = SessionState(session_file)
        state.set('tok', USER)

        assert self.run(['add', '   '], api, state) == 1
        api.add_habit.assert_not_called()

    def test_delete_with_yes(self, session_file, capsys):
        api = mock.Mock()
        api.delete_habit.return_value = {'message': 'Habit deleted successfully'}
        state = SessionState(session_file)
        state.set('tok', USER)

        assert self.run(['delete', '5', '--yes'], api, state) == 0
        api.delete_habit.assert_called_once_with(5)

    def test_delete_cancelled(self, session_file, monkeypatch, capsys):
        api = mock.Mock()
        state = SessionState(session_file)
        state.set('tok', USER)
        monkeypatch.setattr('builtins.input', lambda prompt: 'n')

        assert self.run(['delete', '5'], api, state) == 0
        api.delete_habit.assert_not_called()
        assert 'Cancelled.' in capsys.readouterr().out

    def test_api_error_is_reported(self, session_file, capsys):
        api = mock.Mock()
        api.toggle_habit.side_effect = ApiClientError('Habit not found', 404)
        state = SessionState(session_file)
        state.set('tok', USER)

        assert self.run(['toggle', '9'], api, state) == 1
        assert 'Habit not found' in capsys.readouterr().err

    def test_logout_clears_session(self, session_file, capsys):
        state = SessionState(session_file)
        state.set('tok', USER)

        assert self.run(['logout'], mock.Mock(), state) == 0
        assert not session_file.exists()
