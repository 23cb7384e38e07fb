"""
User endpoints for API v1.

Registration, login and profile lookup.  There is no session or token:
login only confirms the credentials and returns the account details
the app keeps locally.
"""

from fastapi import APIRouter, status

from volunteer_api.app.schemas.user import (
    LoginResult,
    UserCreate,
    UserLogin,
    UserRead,
    UserRegistered,
)
from volunteer_api.app.services.user_service import UserService


router = APIRouter()


@router.post("/register", response_model=UserRegistered, status_code=status.HTTP_201_CREATED)
async def register_user(user: UserCreate) -> UserRegistered:
    """Register a volunteer or an organization.

    Returns 400 if a required field is missing or the email is
    already registered.
    """
    return await UserService.create_user(user)


@router.post("/login", response_model=LoginResult)
async def login_user(credentials: UserLogin) -> LoginResult:
    """Verify email and password hash; 401 on mismatch."""
    return await UserService.authenticate(credentials.email, credentials.password_hash)


@router.get("/{user_id}", response_model=UserRead)
async def get_user(user_id: str) -> UserRead:
    return await UserService.get_user(user_id)
