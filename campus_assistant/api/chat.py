"""
Campus Assistant Chat API

POST /api/chat runs one user turn through the chat pipeline:
sentiment -> intent -> cached campus data (tamper-checked) -> reply,
then awards message points and logs the query.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from campus_assistant.api.dependencies import get_services, get_user_key
from campus_assistant.engines.intent_engine import DEFAULT_SUGGESTIONS
from campus_assistant.engines.language_engine import translate
from campus_assistant.extensions import Services
from campus_assistant.schemas import ChatRequest, ChatResponse
from campus_assistant.utils.logging_utils import get_logger

logger = get_logger()

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    user_key: str = Depends(get_user_key),
    services: Services = Depends(get_services),
):
    try:
        return await services.chat.handle_message(body.message, user_key=user_key, language=body.language)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.exception(f"[Chat] Unhandled error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=translate("error", body.language),
        )


@router.get("/chat/suggestions")
async def suggestions(language: Optional[str] = Query(None, pattern="^(en|si|ta)$")):
    return {
        "welcome": translate("welcome", language),
        "suggestions": list(DEFAULT_SUGGESTIONS),
    }
