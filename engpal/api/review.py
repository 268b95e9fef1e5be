"""
Writing review API endpoints
"""
import logging

from fastapi import APIRouter, Depends, Response

from engpal.api.deps import get_review_service
from engpal.api.responses import service_unavailable_response
from engpal.exceptions import GenerationError, ResponseParseError
from engpal.models.english_level import LEVEL_DISPLAY_NAMES
from engpal.models.writing_category import WRITING_CATEGORIES
from engpal.schemas.review import GenerateReviewRequest, ReviewResponse
from engpal.services.review_service import ReviewService

router = APIRouter(prefix="/review", tags=["review"])
logger = logging.getLogger(__name__)


@router.post("/generate", response_model=ReviewResponse)
async def generate_review(
    request: GenerateReviewRequest,
    response: Response,
    service: ReviewService = Depends(get_review_service)
):
    """
    Review a piece of English writing with Gemini

    - Content must be 10-1000 words
    - Identical requests within an hour are served from cache
    - Scores grammar, vocabulary, coherence, task response and overall (0-10)
    """
    try:
        review = await service.generate_review(request)
    except ResponseParseError as e:
        logger.error(f"Review answer could not be parsed: {str(e)}")
        return service_unavailable_response()
    except GenerationError as e:
        logger.error(f"Error generating review: {str(e)}")
        return service_unavailable_response()

    response.headers["Cache-Control"] = f"public, max-age={service.settings.REVIEW_CACHE_TTL}"
    return review


@router.get("/levels")
async def get_review_levels():
    """CEFR codes accepted as user_level"""
    return {level.code: name for level, name in LEVEL_DISPLAY_NAMES.items()}


@router.get("/categories")
async def get_writing_categories():
    """Writing categories accepted as category"""
    return WRITING_CATEGORIES


@router.get("/stats")
async def get_review_stats(service: ReviewService = Depends(get_review_service)):
    """Cache size and limits, for monitoring"""
    return service.stats()


@router.delete("/cache")
async def clear_review_cache(service: ReviewService = Depends(get_review_service)):
    """Drop every cached review"""
    service.clear_cache()
    return {
        "status": "success",
        "message": "Review cache cleared successfully"
    }
