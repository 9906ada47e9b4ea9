import pytest

from webapp.errors import AuthenticationError
from webapp.services.auth_service import hash_password, issue_token, verify_password, verify_token


def test_password_hash_round_trip():
    hashed = hash_password('correct horse')

    assert hashed != 'correct horse'
    assert verify_password(hashed, 'correct horse')
    assert not verify_password(hashed, 'battery staple')
    assert not verify_password(None, 'correct horse')


def test_token_carries_user(app):
    with app.app_context():
        token = issue_token({'user_id': 7, 'username': 'alice'})
        payload = verify_token(token)

    assert payload == {'user_id': 7, 'username': 'alice'}


def test_expired_token_is_rejected(app):
    with app.app_context():
        token = issue_token({'user_id': 7, 'username': 'alice'})
        with pytest.raises(AuthenticationError) as excinfo:
            verify_token(token, max_age=-1)

    assert excinfo.value.status_code == 401


def test_garbage_token_is_rejected(app):
    with app.app_context():
        with pytest.raises(AuthenticationError):
            verify_token('not-a-token')
