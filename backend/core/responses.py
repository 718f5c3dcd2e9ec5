from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ApiResponse(BaseModel):
    """Uniform envelope wrapped around every response body."""

    status_code: int
    message: str
    data: Any = None
    success: bool

    @classmethod
    def build(cls, status_code: int, message: str, data: Any = None) -> 'ApiResponse':
        return cls(status_code=status_code, message=message, data=data, success=status_code < 400)


def api_response(status_code: int, message: str, data: Any = None, headers: dict | None = None) -> JSONResponse:
    envelope = ApiResponse.build(status_code, message, jsonable_encoder(data))
    return JSONResponse(status_code=status_code, content=envelope.model_dump(), headers=headers)
