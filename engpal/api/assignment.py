"""
Quiz (assignment) API endpoints
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from engpal.api.deps import get_assignment_service
from engpal.config import settings
from engpal.exceptions import GenerationError
from engpal.schemas.assignment import GenerateQuizzesRequest, QuizResponse, SuggestedTopics
from engpal.services.assignment_service import (
    AssignmentService,
    assignment_type_table,
    english_level_table,
    suggest_topics as sample_topics,
)

router = APIRouter(prefix="/assignment", tags=["assignment"])
logger = logging.getLogger(__name__)


@router.post(
    "/generate",
    response_model=QuizResponse,
    response_model_exclude_none=True,
    status_code=201
)
async def generate_assignment(
    request: GenerateQuizzesRequest,
    service: AssignmentService = Depends(get_assignment_service)
):
    """
    Generate quiz questions about a topic with Gemini

    - 1-50 questions spread evenly over the selected types
    - Invalid questions are dropped and topped up with one extra call
    - Identical requests within 10 minutes are served from cache
    """
    try:
        return await service.generate_quizzes(request)
    except GenerationError as e:
        logger.error(f"Error generating quizzes: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate quizzes")


@router.get("/suggest-topics", response_model=SuggestedTopics)
async def suggest_topics():
    """A few random topic ideas"""
    return SuggestedTopics(topics=sample_topics(settings.SUGGESTED_TOPIC_COUNT))


@router.get("/get-english-levels")
async def get_english_levels():
    """Level ids and names accepted as english_level"""
    return english_level_table()


@router.get("/get-assignment-types")
async def get_assignment_types():
    """Type ids and names accepted in assignment_types"""
    return assignment_type_table()
