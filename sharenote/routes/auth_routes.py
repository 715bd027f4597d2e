"""Authentication API routes."""

from fastapi import APIRouter, status

from sharenote.schemas.auth import (
    RegisterRequest,
    RegisterResponse,
    LoginRequest,
    LoginResponse
)
from sharenote.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest):
    """
    Register a new user account.

    Parameters:
        - username: Unique username (must not already exist)
        - password: User password (will be hashed before storage)
        - display_name: Optional name shown on shared content

    Returns:
        - api_key: Generated API Key with 'sn_' prefix
        - user_id: UUID of created user

    Raises:
        - 400: Username already exists
    """
    auth_service = AuthService()
    api_key, user_id = auth_service.register_user(request.username, request.password, request.display_name)

    return RegisterResponse(api_key=api_key, user_id=user_id)


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest):
    """
    Authenticate user and generate new API Key.

    Raises:
        - 401: Invalid credentials
    """
    auth_service = AuthService()
    api_key = auth_service.login_user(request.username, request.password)

    return LoginResponse(api_key=api_key)
