"""
Healthcheck and feedback endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from engpal.api.deps import get_gemini_service
from engpal.schemas.chatbot import FeedbackRequest
from engpal.services.gemini_service import GeminiService

router = APIRouter(tags=["healthcheck"])
logger = logging.getLogger(__name__)


@router.get("/healthcheck")
async def healthcheck(gemini: GeminiService = Depends(get_gemini_service)):
    """
    Check that the Gemini credential is usable

    Returns true, or 401 when the key is rejected.
    """
    is_valid = await gemini.validate_credentials()
    if not is_valid:
        raise HTTPException(status_code=401, detail="Invalid Access Key")
    return True


@router.post("/feedback", status_code=204)
async def send_feedback(feedback: FeedbackRequest):
    """Record user feedback in the service log"""
    logger.info(f"{feedback.user_name}'s feedback: {feedback.user_feedback}")
    return Response(status_code=204)
