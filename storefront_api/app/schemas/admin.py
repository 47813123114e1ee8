"""Pydantic models for the back office."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class AdminLogin(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    admin_id: Optional[str] = Field(None, alias="adminId", examples=["admin"])
    password: Optional[str] = Field(None, examples=["s3cret"])


class AdminToken(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    token: str
    expires_in: int = Field(..., alias="expiresIn", description="Token lifetime in seconds")


class AuditLogRead(BaseModel):
    id: int
    actor: Optional[str] = None
    action: str
    object_type: str
    object_id: Optional[str] = None
    details: Optional[Any] = None
    timestamp: str
