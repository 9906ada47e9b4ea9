"""
Authentication Service

Password hashing, bearer token issuance/verification and the
login_required decorator used by the protected routes.
"""

import logging
from functools import wraps

from flask import current_app, g, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash, generate_password_hash

from webapp.errors import AuthenticationError

logger = logging.getLogger(__name__)

TOKEN_SALT = 'auth-token'


def hash_password(password):
    """Hash a plain-text password for storage."""
    return generate_password_hash(password)


def verify_password(password_hash, password):
    """
    Check a plain-text password against a stored hash.

    Args:
        password_hash (str): Hash from the users table
        password (str): Password supplied by the client

    Returns:
        bool: True if they match
    """
    if not password_hash or password is None:
        return False
    return check_password_hash(password_hash, password)


def _get_serializer():
    return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)


def issue_token(user):
    """
    Issue a signed, timestamped token for a user.

    Args:
        user (dict): User record with 'user_id' and 'username'

    Returns:
        str: Token to send as "Authorization: Bearer <token>"
    """
    return _get_serializer().dumps({'user_id': user['user_id'], 'username': user['username']})


def verify_token(token, max_age=None):
    """
    Verify a token and return its payload.

    Args:
        token (str): Token issued by issue_token
        max_age (int, optional): Lifetime in seconds, defaults to TOKEN_MAX_AGE

    Returns:
        dict: Payload with 'user_id' and 'username'

    Raises:
        AuthenticationError: If the token is tampered with or expired
    """
    if max_age is None:
        max_age = current_app.config['TOKEN_MAX_AGE']

    try:
        payload = _get_serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        logger.info("Rejected expired token")
        raise AuthenticationError('Invalid or expired token')
    except BadSignature:
        logger.warning("Rejected token with bad signature")
        raise AuthenticationError('Invalid or expired token')

    if not isinstance(payload, dict) or 'user_id' not in payload:
        raise AuthenticationError('Invalid or expired token')
    return payload


def get_bearer_token():
    """Extract the bearer token from the Authorization header, or None."""
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


def login_required(view):
    """Reject requests without a valid bearer token; sets g.user_id."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        token = get_bearer_token()
        if token is None:
            raise AuthenticationError('Access token required')

        payload = verify_token(token)
        g.user_id = payload['user_id']
        g.username = payload.get('username')
        return view(*args, **kwargs)

    return wrapped
