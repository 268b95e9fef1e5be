"""
Parsing of Gemini text answers into structured results

Model output is not guaranteed to follow the requested shape, so each
parse reports which shape matched:

- Structured: the primary shape
- LegacyStructured: an older, looser shape, already upgraded to the primary one
- ParseFailed: neither shape; carries the offending text for diagnostics
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterable, List, TypeVar, Union

from pydantic import ValidationError

from engpal.exceptions import ResponseParseError
from engpal.models.assignment_type import AssignmentType
from engpal.schemas.assignment import GeneratedQuiz
from engpal.schemas.review import LegacyReviewData, ReviewData, ReviewSuggestion
from engpal.utils.text import strip_code_fence, truncate

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ESTIMATED_LEVEL = "B1"


@dataclass(frozen=True)
class Structured(Generic[T]):
    data: T


@dataclass(frozen=True)
class LegacyStructured(Generic[T]):
    data: T


@dataclass(frozen=True)
class ParseFailed:
    raw_text: str
    error: str


ParseResult = Union[Structured, LegacyStructured, ParseFailed]


def default_suggestion() -> ReviewSuggestion:
    """Placeholder used when the model returns no suggestions at all"""
    return ReviewSuggestion(
        category="General",
        issue="Continue practicing",
        suggestion="Keep writing regularly to improve your skills",
        example="Practice different types of writing",
        priority="Medium",
    )


def parse_review_text(raw_text: str) -> ParseResult:
    """
    Parse a review answer

    Tries ReviewData first, then LegacyReviewData (suggestions as plain
    strings). No post-validation happens here, see finalize_review.
    """
    cleaned = strip_code_fence(raw_text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return ParseFailed(raw_text=cleaned, error=f"invalid JSON: {str(e)}")

    try:
        return Structured(ReviewData.model_validate(payload))
    except ValidationError as primary_error:
        try:
            legacy = LegacyReviewData.model_validate(payload)
        except ValidationError:
            return ParseFailed(raw_text=cleaned, error=f"unexpected review shape: {primary_error}")
        logger.info("Review answer matched legacy shape (string suggestions)")
        return LegacyStructured(legacy.upgrade())


def finalize_review(data: ReviewData) -> ReviewData:
    """
    Apply defaults and required-field checks to a parsed review

    - empty estimated_level becomes B1
    - empty overall_feedback is an error
    - empty suggestions become exactly one default suggestion

    Raises:
        ResponseParseError: overall_feedback missing
    """
    if not data.overall_feedback.strip():
        raise ResponseParseError("missing overall feedback in API response")

    updates = {}
    if not data.estimated_level.strip():
        updates["estimated_level"] = DEFAULT_ESTIMATED_LEVEL
    if not data.suggestions:
        updates["suggestions"] = [default_suggestion()]
    return data.model_copy(update=updates) if updates else data


def review_from_text(raw_text: str) -> ReviewData:
    """
    Parse and finalize a review answer in one step

    Raises:
        ResponseParseError: text matched neither shape or lacks feedback
    """
    result = parse_review_text(raw_text)
    if isinstance(result, ParseFailed):
        logger.error(f"Failed to parse review JSON response: {truncate(result.raw_text)}")
        raise ResponseParseError(f"failed to parse review JSON: {result.error}", raw_text=result.raw_text)
    return finalize_review(result.data)


def parse_quiz_text(raw_text: str) -> ParseResult:
    """
    Parse a quiz answer into raw item dictionaries

    Primary shape is {"quizzes": [...]}; a bare JSON array of items is
    accepted as the legacy shape.
    """
    cleaned = strip_code_fence(raw_text)
    try:
        payload = json.loads(cleaned)
    except json.JSONDecodeError as e:
        return ParseFailed(raw_text=cleaned, error=f"invalid JSON: {str(e)}")

    if isinstance(payload, dict) and isinstance(payload.get("quizzes"), list):
        return Structured(payload["quizzes"])
    if isinstance(payload, list):
        logger.info("Quiz answer matched legacy shape (bare array)")
        return LegacyStructured(payload)
    return ParseFailed(raw_text=cleaned, error="expected an object with a 'quizzes' array")


def is_valid_quiz(quiz: GeneratedQuiz) -> bool:
    """Check the per-type contract of a generated question"""
    if not quiz.question:
        return False

    quiz_type = AssignmentType.from_display_name(quiz.type)
    if quiz_type == AssignmentType.MULTIPLE_CHOICE:
        return len(quiz.options) >= 2 and 0 <= quiz.correct_index < len(quiz.options)
    if quiz_type in (AssignmentType.FILL_IN_THE_BLANK, AssignmentType.SHORT_ANSWER):
        return bool(quiz.answer)
    if quiz_type == AssignmentType.ESSAY:
        return True
    return False


def select_quizzes(items: Iterable[Any], requested_types: List[AssignmentType]) -> List[GeneratedQuiz]:
    """
    Keep the items that parse, belong to a requested type and pass is_valid_quiz

    Rejected items are dropped without being reported; the caller makes
    up the shortfall.
    """
    accepted: List[GeneratedQuiz] = []

    for item in items:
        try:
            quiz = GeneratedQuiz.model_validate(item)
        except ValidationError:
            continue

        quiz_type = AssignmentType.from_display_name(quiz.type)
        if quiz_type not in requested_types:
            continue

        quiz = quiz.model_copy(update={
            "type": quiz_type.display_name,
            "question": quiz.question.strip(),
            "answer": quiz.answer.strip(),
            "explanation": quiz.explanation.strip(),
        })
        if not is_valid_quiz(quiz):
            continue
        accepted.append(quiz)

    return accepted


def quizzes_from_text(raw_text: str, requested_types: List[AssignmentType]) -> List[GeneratedQuiz]:
    """
    Parse a quiz answer and keep the valid items

    Raises:
        ResponseParseError: text matched neither shape
    """
    result = parse_quiz_text(raw_text)
    if isinstance(result, ParseFailed):
        logger.error(f"Failed to parse quiz JSON response: {truncate(result.raw_text)}")
        raise ResponseParseError(f"failed to parse JSON: {result.error}", raw_text=result.raw_text)
    return select_quizzes(result.data, requested_types)
