from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backend.auth.jwt_handler import JWTHandler, build_jwt_handler
from backend.core.errors import AuthenticationError
from backend.database import get_db
from backend.models.user import User
from backend.repositories.submission_repository import SqlAlchemySubmissionRepository
from backend.repositories.user_repository import SqlAlchemyUserRepository
from backend.services.auth_service import AuthService
from backend.services.submission_service import SubmissionService

security = HTTPBearer(auto_error=False)


def get_jwt_handler() -> JWTHandler:
    return build_jwt_handler()


def get_auth_service(
    db: Session = Depends(get_db),
    tokens: JWTHandler = Depends(get_jwt_handler),
) -> AuthService:
    return AuthService(SqlAlchemyUserRepository(db), tokens)


def get_submission_service(db: Session = Depends(get_db)) -> SubmissionService:
    return SubmissionService(SqlAlchemySubmissionRepository(db))


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")
    return auth_service.authenticate_token(credentials.credentials)
