"""Registration, login and bearer-token verification."""

import logging

import jwt

from backend.auth.jwt_handler import JWTHandler
from backend.core import config
from backend.core.errors import AuthenticationError, InvalidInputError
from backend.models.user import User
from backend.repositories.user_repository import UserRepository, duplicate_user_error

logger = logging.getLogger(__name__)

PASSWORD_TOO_SHORT_MESSAGE = f'Password must be at least {config.MIN_PASSWORD_LENGTH} characters long'
INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password'
TOKEN_FAILED_MESSAGE = 'Not authorized, token failed'
TOKEN_EXPIRED_MESSAGE = 'Not authorized, token expired'
TOKEN_USER_NOT_FOUND_MESSAGE = 'Not authorized, user not found'


class AuthService:
    def __init__(self, users: UserRepository, tokens: JWTHandler):
        self.users = users
        self.tokens = tokens

    def register_user(self, email: str, password: str | None, name: str, role: str | None = None) -> dict:
        """Create an account and return its summary with a fresh token.

        The email lookup is only a pre-check; the repository raises the same
        duplicate error when the unique index rejects the insert.
        """
        if not password or len(password) < config.MIN_PASSWORD_LENGTH:
            raise InvalidInputError(PASSWORD_TOO_SHORT_MESSAGE)

        role = role or config.DEFAULT_USER_ROLE
        if role not in config.USER_ROLES:
            raise InvalidInputError(f'Role must be one of: {", ".join(config.USER_ROLES)}')

        existing_user = self.users.find_by_email(email)
        if existing_user is not None:
            raise duplicate_user_error(existing_user, role)

        user = User(email=email, name=name, role=role)
        user.set_password(password)
        user = self.users.create(user)
        logger.info('New user created: id=%s email=%s role=%s', user.id, user.email, user.role)

        return {
            'id': user.id,
            'email': user.email,
            'name': user.name,
            'role': user.role,
            'token': self.tokens.create_access_token(user.id),
        }

    def login_user(self, email: str, password: str) -> dict:
        user = self.users.find_by_email(email)
        if user is None or not user.check_password(password):
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        return {
            'id': user.id,
            'name': user.name,
            'email': user.email,
            'role': user.role,
            'image_url': user.image_url,
            'token': self.tokens.create_access_token(user.id),
        }

    def authenticate_token(self, token: str) -> User:
        try:
            payload = self.tokens.decode_access_token(token)
        except jwt.ExpiredSignatureError as exc:
            raise AuthenticationError(TOKEN_EXPIRED_MESSAGE) from exc
        except jwt.InvalidTokenError as exc:
            raise AuthenticationError(TOKEN_FAILED_MESSAGE) from exc

        user_id = payload.get('id')
        if user_id is None:
            raise AuthenticationError(TOKEN_FAILED_MESSAGE)

        user = self.users.find_by_id(user_id)
        if user is None:
            raise AuthenticationError(TOKEN_USER_NOT_FOUND_MESSAGE)
        return user
