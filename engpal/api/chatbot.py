"""
Chatbot API endpoint
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends

from engpal.api.deps import get_chatbot_service
from engpal.api.responses import service_unavailable_response
from engpal.exceptions import GenerationError
from engpal.schemas.chatbot import ChatbotRequest, ChatbotResponse
from engpal.services.chatbot_service import ChatbotService, ChatPersona

router = APIRouter(prefix="/chatbot", tags=["chatbot"])
logger = logging.getLogger(__name__)


@router.post("/generate-answer", response_model=ChatbotResponse)
async def generate_answer(
    request: ChatbotRequest,
    username: str = "bạn",
    gender: Optional[str] = None,
    age: Optional[int] = None,
    english_level: Optional[str] = None,
    enable_reasoning: bool = False,
    service: ChatbotService = Depends(get_chatbot_service)
):
    """
    Answer a short English-learning question in Markdown

    Query parameters describe the learner. Empty questions and questions
    over 30 words get a friendly fixed reply.
    """
    persona = ChatPersona(
        username=username,
        gender=gender,
        age=age,
        english_level=english_level,
        enable_reasoning=enable_reasoning,
    )

    try:
        answer = await service.generate_answer(request.question, persona)
    except GenerationError as e:
        logger.error(f"Error generating chatbot answer: {str(e)}")
        return service_unavailable_response()

    return ChatbotResponse(answer=answer)
