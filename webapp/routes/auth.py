"""
Authentication Routes

Handles user registration and login. Both answer with a bearer token and
the public user record.
"""

import logging
import re

from flask import Blueprint, jsonify, request

from config import database
from config.models import EMAIL_MAX_LENGTH, USERNAME_MAX_LENGTH
from webapp.errors import AuthenticationError, ConflictError, ValidationError
from webapp.services.auth_service import hash_password, issue_token, verify_password

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def get_json_body():
    """Return the request JSON object, or raise ValidationError."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def require_fields(data, *fields):
    """
    Fetch required non-empty string fields from a request body.

    Returns:
        list: Field values, in the order requested
    """
    values = []
    for name in fields:
        value = data.get(name)
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f'{name.capitalize()} is required')
        values.append(value)
    return values


def public_user(user):
    return {'id': user['user_id'], 'username': user['username'], 'email': user['email']}


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and log it in."""
    username, email, password = require_fields(get_json_body(), 'username', 'email', 'password')
    username = username.strip()
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f'Username must be at most {USERNAME_MAX_LENGTH} characters')

    if not EMAIL_PATTERN.match(email.strip()):
        raise ValidationError('Email address is not valid')
    if len(email.strip()) > EMAIL_MAX_LENGTH:
        raise ValidationError(f'Email must be at most {EMAIL_MAX_LENGTH} characters')

    try:
        user = database.create_user(username, email, hash_password(password))
    except database.DuplicateUserError:
        raise ConflictError('User already exists')

    return jsonify({
        'message': 'User registered successfully',
        'token': issue_token(user),
        'user': public_user(user)
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange email and password for a token."""
    email, password = require_fields(get_json_body(), 'email', 'password')

    user = database.get_user_by_email(email)
    if not user or not verify_password(user['password_hash'], password):
        logger.info(f"Failed login for {email.strip().lower()}")
        raise AuthenticationError('Invalid email or password')

    return jsonify({
        'message': 'Login successful',
        'token': issue_token(user),
        'user': public_user(user)
    })
