"""
Support chat pass-through to a hosted language model.

The storefront widget sends the visitor's message and the earlier
turns; they are forwarded to the Gemini ``generateContent`` REST
endpoint together with the configured system instruction and the text
of the first candidate is returned.  Nothing is stored.
"""

import logging
from typing import List, Optional

import httpx

from storefront_api.app.core.config import settings
from storefront_api.app.core.exceptions import ExternalServiceError

from ..schemas.chat import ChatTurn

logger = logging.getLogger(__name__)


class ChatService:
    # Replaced in tests with ``httpx.MockTransport``.
    transport: Optional[httpx.AsyncBaseTransport] = None

    @staticmethod
    def build_payload(message: str, history: List[ChatTurn]) -> dict:
        contents = [turn.model_dump() for turn in history]
        contents.append({"role": "user", "parts": [{"text": message}]})
        return {
            "system_instruction": {"parts": [{"text": settings.chat_system_instruction}]},
            "contents": contents,
        }

    @staticmethod
    def extract_text(data: dict) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts).strip()

    @classmethod
    async def reply(cls, message: str, history: List[ChatTurn]) -> str:
        """Return the model's answer to ``message``.

        Raises ``ExternalServiceError`` if no API key is configured, the
        request fails or the model returns no text.
        """
        if not settings.gemini_api_key:
            raise ExternalServiceError("Chat assistant is not configured")
        url = f"{settings.gemini_api_url.rstrip('/')}/models/{settings.gemini_model}:generateContent"
        headers = {
            "x-goog-api-key": settings.gemini_api_key,
            "Content-Type": "application/json",
        }
        payload = cls.build_payload(message, history)
        try:
            async with httpx.AsyncClient(transport=cls.transport, timeout=settings.chat_timeout) as client:
                response = await client.post(url, headers=headers, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Chat model answered %s: %s", exc.response.status_code, exc.response.text[:200])
            raise ExternalServiceError("Chat assistant is unavailable right now") from exc
        except httpx.HTTPError as exc:
            logger.error("Chat model request failed: %s", exc)
            raise ExternalServiceError("Chat assistant is unavailable right now") from exc
        except ValueError as exc:
            logger.error("Chat model returned invalid JSON")
            raise ExternalServiceError("Chat assistant returned an invalid response") from exc

        text = cls.extract_text(data)
        if not text:
            raise ExternalServiceError("Chat assistant returned an empty reply")
        return text
