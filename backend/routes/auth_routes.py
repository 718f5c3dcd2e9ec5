from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from backend.auth.dependencies import get_auth_service, get_current_user
from backend.core.responses import api_response
from backend.models.user import User
from backend.services.auth_service import AuthService

router = APIRouter(tags=['auth'])


class RegisterRequest(BaseModel):
    email: str
    password: str | None = None
    name: str
    role: str | None = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: str
    image_url: str | None = None

    class Config:
        from_attributes = True


@router.post('/register', status_code=status.HTTP_201_CREATED)
def register_user(data: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    user_data = auth_service.register_user(
        email=data.email,
        password=data.password,
        name=data.name,
        role=data.role,
    )
    return api_response(status.HTTP_201_CREATED, 'User registered successfully', user_data)


@router.post('/login')
def login_user(data: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    user_data = auth_service.login_user(email=data.email, password=data.password)
    return api_response(status.HTTP_200_OK, 'User logged in successfully', user_data)


@router.get('/me')
def me(current_user: User = Depends(get_current_user)):
    return api_response(
        status.HTTP_200_OK,
        'User fetched successfully',
        UserResponse.model_validate(current_user).model_dump(),
    )
