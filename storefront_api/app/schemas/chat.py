"""Pydantic models for the support chat pass-through."""

from typing import List, Literal

from pydantic import BaseModel, Field


class ChatPart(BaseModel):
    text: str


class ChatTurn(BaseModel):
    """One earlier message of the conversation, tagged with who said it."""

    role: Literal["user", "model"]
    parts: List[ChatPart]


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, examples=["How do I pay?"])
    history: List[ChatTurn] = Field(default_factory=list)


class ChatReply(BaseModel):
    reply: str
