# app/routers/chat.py
import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.core.gemini_client import ShoppingAI, get_shopping_ai
from app.database import get_storage
from app.repositories.storage import Storage
from app.schemas.chat import ChatRequest, ChatResponse
from app.services.catalog_service import CatalogService
from app.services.chat_service import FALLBACK_REPLY, ShoppingAssistant

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["Chat"])


def get_assistant(
    storage: Storage = Depends(get_storage),
    ai: ShoppingAI = Depends(get_shopping_ai),
) -> ShoppingAssistant:
    return ShoppingAssistant(CatalogService(storage), ai)


@router.post(
    "",
    response_model=ChatResponse,
    response_model_exclude_none=True,
)
async def chat(
    payload: ChatRequest,
    assistant: ShoppingAssistant = Depends(get_assistant),
):
    """
    Ask the shopping assistant.

    AI failures are absorbed by the assistant; only an unexpected crash
    answers 500, still with a readable reply.
    """
    try:
        return await assistant.process_query(payload.message)
    except Exception:
        logger.exception("Chat pipeline crashed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "Sorry, I'm having trouble processing your request right now. Please try again.",
                "response": FALLBACK_REPLY,
                "intent": {"intent": "general"},
            },
        )
