import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault('DATABASE_URL', 'sqlite://')

from backend.auth.dependencies import get_jwt_handler  # noqa: E402
from backend.auth.jwt_handler import JWTHandler  # noqa: E402
from backend.database import Base, get_db  # noqa: E402
from backend.main import app  # noqa: E402
from backend.models.submission import Submission  # noqa: E402
from backend.models.user import User  # noqa: E402
from backend.repositories.user_repository import duplicate_user_error  # noqa: E402
from backend.services.auth_service import AuthService  # noqa: E402
from backend.services.submission_service import SubmissionService  # noqa: E402

TEST_SECRET_KEY = 'test-secret-key-0123456789abcdef0123456789'


class FakeUserRepository:
    def __init__(self):
        self.users: dict[int, User] = {}

    def find_by_email(self, email: str) -> User | None:
        return next((user for user in self.users.values() if user.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    def create(self, user: User) -> User:
        existing_user = next((existing for existing in self.users.values() if existing.email == user.email), None)
        if existing_user is not None:
            raise duplicate_user_error(existing_user, user.role)
        user.id = len(self.users) + 1
        self.users[user.id] = user
        return user


class FakeSubmissionRepository:
    def __init__(self):
        self.submissions: dict[int, Submission] = {}

    def create(self, submission: Submission) -> Submission:
        submission.id = len(self.submissions) + 1
        self.submissions[submission.id] = submission
        return submission

    def find_by_id(self, submission_id: int) -> Submission | None:
        return self.submissions.get(submission_id)

    def find_by_student(self, student_id: int, course_id: str | None = None) -> list[Submission]:
        matches = [
            submission
            for submission in self.submissions.values()
            if submission.student_id == student_id and (course_id is None or submission.course_id == course_id)
        ]
        return sorted(matches, key=lambda submission: (submission.submitted_at, submission.id), reverse=True)


@pytest.fixture
def jwt_handler() -> JWTHandler:
    return JWTHandler(secret_key=TEST_SECRET_KEY, algorithm='HS256', expires_days=30)


@pytest.fixture
def user_repository() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def submission_repository() -> FakeSubmissionRepository:
    return FakeSubmissionRepository()


@pytest.fixture
def auth_service(user_repository, jwt_handler) -> AuthService:
    return AuthService(user_repository, jwt_handler)


@pytest.fixture
def submission_service(submission_repository) -> SubmissionService:
    return SubmissionService(submission_repository)


@pytest.fixture
def db_session_factory():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield testing_session_local
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def db_session(db_session_factory):
    db = db_session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(db_session_factory, jwt_handler):
    def override_get_db():
        db = db_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_jwt_handler] = lambda: jwt_handler
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
