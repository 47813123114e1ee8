"""
Pydantic models for storefront accounts.

Fields of ``UserCredentials`` are optional at the schema level so that
a missing email or password is reported by the service as a 400
validation error with a readable message.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCredentials(BaseModel):
    """Body of ``/auth/register`` and ``/auth/login``."""

    email: Optional[str] = Field(None, examples=["user@example.com"])
    password: Optional[str] = Field(None, examples=["strongpassword"])


class UserRead(BaseModel):
    """Public identity of a user.  The password hash is never returned."""

    id: int
    email: str

    model_config = ConfigDict(from_attributes=True)


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    user_id: int = Field(..., alias="userId")


class LoginResponse(BaseModel):
    success: bool = True
    user: UserRead
