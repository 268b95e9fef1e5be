"""
Request validation for review and quiz generation

Validators raise InvalidRequestError with a Vietnamese, user-facing
message; the API layer turns it into HTTP 400.
"""
from dataclasses import dataclass
from typing import List, Optional, Union

from engpal.config import Settings
from engpal.exceptions import InvalidRequestError
from engpal.models.assignment_type import AssignmentType
from engpal.models.english_level import EnglishLevel
from engpal.schemas.assignment import GenerateQuizzesRequest
from engpal.schemas.review import GenerateReviewRequest
from engpal.utils.text import count_words

INVALID_LEVEL_MESSAGE = "trình độ tiếng Anh không hợp lệ (A1, A2, B1, B2, C1, C2)"


@dataclass(frozen=True)
class ValidatedReview:
    content: str
    word_count: int
    level: Optional[EnglishLevel]  # None when the student declared no level


@dataclass(frozen=True)
class ValidatedQuizRequest:
    topic: str
    level: EnglishLevel
    assignment_types: List[AssignmentType]
    total_questions: int


def validate_review_request(request: GenerateReviewRequest, settings: Settings) -> ValidatedReview:
    """
    Check review content length and declared level

    Raises:
        InvalidRequestError: content empty, too short, too long or level unknown
    """
    content = request.content.strip()
    if not content:
        raise InvalidRequestError("nội dung bài viết không được để trống")

    word_count = count_words(content)
    if word_count < settings.REVIEW_MIN_WORDS:
        raise InvalidRequestError(f"bài viết phải dài tối thiểu {settings.REVIEW_MIN_WORDS} từ")
    if word_count > settings.REVIEW_MAX_WORDS:
        raise InvalidRequestError(f"bài viết không được dài hơn {settings.REVIEW_MAX_WORDS} từ")

    level = None
    if request.user_level.strip():
        level = EnglishLevel.from_code(request.user_level)
        if level is None:
            raise InvalidRequestError(INVALID_LEVEL_MESSAGE)

    return ValidatedReview(content=content, word_count=word_count, level=level)


def resolve_level(value: Union[int, str]) -> Optional[EnglishLevel]:
    """Accept a level id (3, "3"), a CEFR code ("B1") or a display name ("B1 - Intermediate")"""
    if isinstance(value, int):
        return EnglishLevel.from_id(value)
    value = value.strip()
    if value.isdigit():
        return EnglishLevel.from_id(int(value))
    return EnglishLevel.from_code(value) or EnglishLevel.from_display_name(value)


def resolve_assignment_type(value: Union[int, str]) -> Optional[AssignmentType]:
    """Accept a type id (1, "1") or a display name ("Multiple Choice")"""
    if isinstance(value, int):
        return AssignmentType.from_id(value)
    value = value.strip()
    if value.isdigit():
        return AssignmentType.from_id(int(value))
    return AssignmentType.from_display_name(value)


def validate_quiz_request(request: GenerateQuizzesRequest, settings: Settings) -> ValidatedQuizRequest:
    """
    Check topic, question count, type selection and level

    Types may be given as ids or display names. Entries naming the same
    type are collapsed, keeping the first occurrence, so the distribution
    sees each type once.

    Raises:
        InvalidRequestError: on the first rule that fails
    """
    topic = request.topic.strip()
    if not topic:
        raise InvalidRequestError("tên chủ đề không được để trống")
    if count_words(topic) > settings.ASSIGNMENT_TOPIC_MAX_WORDS:
        raise InvalidRequestError(
            f"chủ đề không được chứa nhiều hơn {settings.ASSIGNMENT_TOPIC_MAX_WORDS} từ"
        )

    total = request.total_questions
    if total < settings.MIN_QUESTIONS or total > settings.MAX_QUESTIONS:
        raise InvalidRequestError(
            f"số lượng câu hỏi phải nằm trong khoảng {settings.MIN_QUESTIONS} đến {settings.MAX_QUESTIONS}"
        )

    # Unresolvable entries are kept as given so they fail the type check below
    selected = list(dict.fromkeys(
        resolve_assignment_type(value) or value for value in request.assignment_types
    ))
    if len(selected) > total:
        raise InvalidRequestError("số lượng câu hỏi không được nhỏ hơn số dạng câu hỏi mà bạn chọn")
    if not selected:
        raise InvalidRequestError("phải chọn ít nhất một loại câu hỏi")

    if not all(isinstance(value, AssignmentType) for value in selected):
        raise InvalidRequestError("loại câu hỏi không hợp lệ (1, 2, 3, 4)")
    assignment_types: List[AssignmentType] = selected

    level = resolve_level(request.english_level)
    if level is None:
        raise InvalidRequestError(INVALID_LEVEL_MESSAGE)

    return ValidatedQuizRequest(
        topic=topic,
        level=level,
        assignment_types=assignment_types,
        total_questions=total,
    )
