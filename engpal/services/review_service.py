"""
Writing review generation
"""
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from engpal.config import Settings
from engpal.models.english_level import EnglishLevel, LEVEL_DISPLAY_NAMES
from engpal.models.writing_category import WRITING_CATEGORIES, resolve_category
from engpal.schemas.review import GenerateReviewRequest, ReviewResponse
from engpal.services.gemini_service import GeminiService
from engpal.services.response_parser import review_from_text
from engpal.services.validation import validate_review_request
from engpal.utils.cache import generate_review_cache_key

logger = logging.getLogger(__name__)

DEFAULT_LEVEL_DESCRIPTION = "intermediate"


def response_language(language: Optional[str]) -> str:
    """Human language the review must be written in"""
    if (language or "").strip().lower() == "vi":
        return "Tiếng Việt"
    return "English"


def build_review_prompt(
    content: str,
    level: Optional[EnglishLevel],
    category: str,
    requirement: str,
    word_count: int,
    language: str
) -> str:
    """
    Create the review instruction for Gemini

    Args:
        content: Student's writing, embedded verbatim
        level: Declared level, None falls back to "intermediate"
        category: Writing category description
        requirement: Task requirement given to the student
        word_count: Words in content
        language: Language every part of the answer must use

    Returns:
        Prompt text
    """
    level_description = level.display_name if level else DEFAULT_LEVEL_DESCRIPTION

    return f"""You are an expert English teacher and IELTS examiner. Analyze the following English writing sample and provide a comprehensive review.

WRITING SAMPLE TO ANALYZE:
"{content}"

CONTEXT INFORMATION:
- Student's declared level: {level_description}
- Writing category: {category}
- Specific requirement: {requirement}
- Word count: {word_count}

ANALYSIS REQUIREMENTS:
1. Estimate the actual English level (A1-C2) based on the writing quality
2. Score each criterion from 0-10:
   - Grammar: Accuracy, complexity, range of structures
   - Vocabulary: Range, accuracy, appropriateness
   - Coherence: Logical flow, linking, organization
   - Task Response: Meeting requirements, completeness
   - Overall: Holistic impression

3. Provide specific feedback covering:
   - 3-5 strength points (what the student does well)
   - 3-5 improvement areas (what needs work)
   - 5-8 detailed suggestions with examples
   - overall_feedback: a general assessment of the whole text (required)

4. If there are significant errors, provide a corrected version

FORMATTING REQUIREMENTS:
Return ONLY valid JSON without markdown formatting or code blocks.
The JSON must contain these fields (all required):
- "estimated_level"
- "scores" (with "grammar", "vocabulary", "coherence", "task_response", "overall", all numbers from 0 to 10)
- "overall_feedback"
- "strength_points" (array of strings)
- "improvement_areas" (array of strings)
- "suggestions" (array of objects, each with "category", "issue", "suggestion", "example", "priority")
- "corrected_version" (if any)

Example of the "suggestions" field:
"suggestions": [
  {{
    "category": "Grammar",
    "issue": "Subject-verb agreement",
    "suggestion": "Check that every verb agrees with its subject.",
    "example": "Incorrect: 'She go to school.' Correct: 'She goes to school.'",
    "priority": "High"
  }}
]

If a field has no information, still return it with a valid value (0 for scores, an empty string for text).

IMPORTANT: Every part of the answer (feedback, suggestions, corrected version) MUST be written entirely in {language}.

Analyze the writing sample now:"""


class ReviewService:
    """Validate, cache and generate writing reviews"""

    def __init__(self, gemini: GeminiService, cache, settings: Settings):
        self.gemini = gemini
        self.cache = cache
        self.settings = settings

    async def generate_review(self, request: GenerateReviewRequest) -> ReviewResponse:
        """
        Produce a review for the submitted writing

        - Validates content length and level
        - Returns a cached review when one is still fresh
        - Otherwise prompts Gemini, parses the answer and caches it

        Raises:
            InvalidRequestError: request failed validation
            GenerationError: Gemini failed or its answer could not be parsed
        """
        start_time = time.perf_counter()

        validated = validate_review_request(request, self.settings)
        category = request.category or ""

        cache_key = generate_review_cache_key(
            validated.content, request.user_level, request.requirement, category
        )
        cached, found = self.cache.get(cache_key)
        if found:
            logger.info(f"Serving cached review for key {cache_key}")
            return ReviewResponse.model_validate(cached)

        prompt = build_review_prompt(
            content=validated.content,
            level=validated.level,
            category=resolve_category(category),
            requirement=request.requirement,
            word_count=validated.word_count,
            language=response_language(request.language),
        )
        raw_text = await self.gemini.generate(prompt, model_name=self.settings.GEMINI_REVIEW_MODEL)
        review = review_from_text(raw_text)

        processing_time_ms = (time.perf_counter() - start_time) * 1000

        response = ReviewResponse(
            content=validated.content,
            user_level=request.user_level,
            requirement=request.requirement,
            word_count=validated.word_count,
            estimated_level=review.estimated_level,
            scores=review.scores,
            overall_feedback=review.overall_feedback,
            strength_points=review.strength_points,
            improvement_areas=review.improvement_areas,
            suggestions=review.suggestions,
            corrected_version=review.corrected_version,
            generated_at=datetime.now(timezone.utc),
            processing_time_ms=processing_time_ms,
        )

        self.cache.put(cache_key, response.model_dump(mode="json"), self.settings.REVIEW_CACHE_TTL)

        logger.info(
            f"Generated review for {response.word_count} words, "
            f"processing time: {processing_time_ms:.2f}ms"
        )
        return response

    def clear_cache(self) -> None:
        self.cache.clear()

    def stats(self) -> Dict[str, Any]:
        """Cache and limit figures for monitoring"""
        return {
            "cache_entries": len(self.cache),
            "min_words": self.settings.REVIEW_MIN_WORDS,
            "max_words": self.settings.REVIEW_MAX_WORDS,
            "cache_duration": f"{self.settings.REVIEW_CACHE_TTL}s",
            "available_levels": len(LEVEL_DISPLAY_NAMES),
            "categories": len(WRITING_CATEGORIES),
        }
