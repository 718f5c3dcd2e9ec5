import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.core.errors import ConflictError
from backend.models.user import User

logger = logging.getLogger(__name__)

DUPLICATE_USER_MESSAGE = 'User already exists'


def role_conflict_message(email: str, existing_role: str) -> str:
    return (
        f'The email "{email}" is already registered with the role "{existing_role}". '
        'Please use a different email or contact support.'
    )


def duplicate_user_error(existing_user: User, requested_role: str) -> ConflictError:
    if existing_user.role != requested_role:
        return ConflictError(role_conflict_message(existing_user.email, existing_user.role))
    return ConflictError(DUPLICATE_USER_MESSAGE)


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...

    def find_by_id(self, user_id: int) -> User | None: ...

    def create(self, user: User) -> User: ...


class SqlAlchemyUserRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def create(self, user: User) -> User:
        email, role = user.email, user.role
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Another registration for the same email committed first.
            self.db.rollback()
            logger.warning('Rejected duplicate user insert for %s', email)
            existing_user = self.find_by_email(email)
            if existing_user is None:
                raise ConflictError(DUPLICATE_USER_MESSAGE) from exc
            raise duplicate_user_error(existing_user, role) from exc
        self.db.refresh(user)
        return user
