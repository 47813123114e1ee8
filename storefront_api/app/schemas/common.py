"""Response shapes shared by several routers, and shared field bounds."""

from pydantic import BaseModel, Field

# Range of an SQLite INTEGER; larger values cannot be bound as parameters.
SQLITE_INT_MIN = -(2**63)
SQLITE_INT_MAX = 2**63 - 1


class SuccessResponse(BaseModel):
    success: bool = Field(True, examples=[True])


class HealthResponse(BaseModel):
    status: str = Field(..., examples=["ok"])
    database: str = Field(..., examples=["connected"])
