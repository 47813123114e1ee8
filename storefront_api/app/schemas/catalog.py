"""Pydantic models for catalog items (sellable subscription packs)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import SQLITE_INT_MAX, SQLITE_INT_MIN


class ServiceWrite(BaseModel):
    """Body used to create or replace a catalog item.

    All three fields are required; presence and positivity of ``price``
    are checked by ``CatalogService`` so the client gets one message
    naming every missing field.
    """

    name: Optional[str] = Field(None, examples=["7 Day Pack"])
    price: Optional[int] = Field(
        None, examples=[400], description="Whole currency units", ge=SQLITE_INT_MIN, le=SQLITE_INT_MAX
    )
    duration: Optional[str] = Field(None, examples=["7 Days"])


class ServiceRead(BaseModel):
    id: int
    name: str
    price: int
    duration: str

    model_config = ConfigDict(from_attributes=True)


class ServiceCreated(BaseModel):
    success: bool = True
    id: int
