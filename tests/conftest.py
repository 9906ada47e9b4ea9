"""
Shared pytest fixtures: an app backed by an in-memory SQLite database.
"""

import pytest

from webapp.app import create_app


def _register_user(client, username='alice', email='alice@example.com', password='secret123'):
    response = client.post('/auth/register', json={
        'username': username,
        'email': email,
        'password': password,
    })
    assert response.status_code == 201, response.get_json()
    return response.get_json()


@pytest.fixture
def app():
    return create_app({
        'database_url': 'sqlite://',
        'secret_key': 'test-secret',
        'habit_timezone': 'UTC',
        'testing': True,
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(client):
    """Register a user through the API and return the response body."""
    def _register(**fields):
        return _register_user(client, **fields)
    return _register


@pytest.fixture
def auth_headers():
    def _auth_headers(token):
        return {'Authorization': f'Bearer {token}'}
    return _auth_headers


@pytest.fixture
def alice(client):
    return _register_user(client)


@pytest.fixture
def bob(client):
    return _register_user(client, username='bob', email='bob@example.com', password='hunter22')
