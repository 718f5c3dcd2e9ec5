from datetime import datetime, timedelta, timezone

import jwt

from backend.core import config


class JWTHandler:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_days: int = config.JWT_EXPIRES_DAYS,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_days = expires_days

    def create_access_token(self, user_id: int, expires_days: int | None = None) -> str:
        expire_days = expires_days if expires_days is not None else self.expires_days
        expire = datetime.now(timezone.utc) + timedelta(days=expire_days)
        payload = {"id": user_id, "exp": expire}
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def decode_access_token(self, token: str) -> dict:
        return jwt.decode(
            token,
            self.secret_key,
            algorithms=[self.algorithm],
            options={"require": ["exp"]},
        )


def build_jwt_handler() -> JWTHandler:
    return JWTHandler(
        secret_key=config.JWT_SECRET_KEY,
        algorithm=config.JWT_ALGORITHM,
        expires_days=config.JWT_EXPIRES_DAYS,
    )
