"""
Account endpoints: registration and login by email and password.

Login answers with the public identity only; the storefront keeps it
client-side to list the user's orders.
"""

from fastapi import APIRouter, status

from storefront_api.app.schemas.user import LoginResponse, RegisterResponse, UserCredentials
from storefront_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(credentials: UserCredentials) -> RegisterResponse:
    """Create an account.  Answers 400 if the email is already registered."""
    user = await UserService.register(credentials)
    return RegisterResponse(user_id=user.id)


@router.post("/login", response_model=LoginResponse)
async def login(credentials: UserCredentials) -> LoginResponse:
    """Check email and password.  Answers 401 with the same message for any mismatch."""
    user = await UserService.login(credentials)
    return LoginResponse(user=user)
