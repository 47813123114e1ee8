"""Support chat widget backend."""

from fastapi import APIRouter

from storefront_api.app.schemas.chat import ChatReply, ChatRequest
from storefront_api.app.services.chat_service import ChatService

router = APIRouter()


@router.post("", response_model=ChatReply)
async def chat(request: ChatRequest) -> ChatReply:
    """Forward the message and history to the hosted model and return its reply.

    Answers 502 when the model is not configured or unreachable.
    """
    reply = await ChatService.reply(request.message, request.history)
    return ChatReply(reply=reply)
