# tests/test_validation.py
"""Tests for services.validation."""

from __future__ import annotations

import pytest

from engpal.exceptions import InvalidRequestError
from engpal.models.assignment_type import AssignmentType
from engpal.models.english_level import EnglishLevel
from engpal.schemas.assignment import GenerateQuizzesRequest
from engpal.schemas.review import GenerateReviewRequest
from engpal.services.validation import (
    resolve_level,
    validate_quiz_request,
    validate_review_request,
)


def _words(n: int) -> str:
    return " ".join(f"word{i}" for i in range(n))


class TestReviewValidation:

    def test_five_words_rejected_naming_minimum(self, settings):
        request = GenerateReviewRequest(content=_words(5), user_level="B1")
        with pytest.raises(InvalidRequestError) as exc_info:
            validate_review_request(request, settings)
        assert "10" in str(exc_info.value)

    def test_too_long_rejected_naming_maximum(self, settings):
        request = GenerateReviewRequest(content=_words(1001))
        with pytest.raises(InvalidRequestError) as exc_info:
            validate_review_request(request, settings)
        assert "1000" in str(exc_info.value)

    @pytest.mark.parametrize("content", ["", "   \n  "])
    def test_blank_content_rejected(self, settings, content):
        with pytest.raises(InvalidRequestError):
            validate_review_request(GenerateReviewRequest(content=content), settings)

    def test_bounds_inclusive(self, settings):
        assert validate_review_request(GenerateReviewRequest(content=_words(10)), settings).word_count == 10
        assert validate_review_request(GenerateReviewRequest(content=_words(1000)), settings).word_count == 1000

    def test_content_trimmed(self, settings):
        result = validate_review_request(GenerateReviewRequest(content=f"  {_words(12)}  \n"), settings)
        assert result.content == _words(12)

    def test_unknown_level_rejected(self, settings):
        request = GenerateReviewRequest(content=_words(20), user_level="D1")
        with pytest.raises(InvalidRequestError):
            validate_review_request(request, settings)

    def test_level_case_insensitive(self, settings):
        result = validate_review_request(GenerateReviewRequest(content=_words(20), user_level="c1"), settings)
        assert result.level == EnglishLevel.C1

    def test_level_optional(self, settings):
        result = validate_review_request(GenerateReviewRequest(content=_words(20)), settings)
        assert result.level is None


def _quiz_request(**overrides) -> GenerateQuizzesRequest:
    data = {
        "topic": "Climate Change",
        "assignment_types": [1, 2],
        "english_level": 3,
        "total_questions": 10,
    }
    data.update(overrides)
    return GenerateQuizzesRequest(**data)


class TestQuizValidation:

    def test_valid_request_resolved(self, settings):
        result = validate_quiz_request(_quiz_request(), settings)
        assert result.topic == "Climate Change"
        assert result.level == EnglishLevel.B1
        assert result.assignment_types == [AssignmentType.MULTIPLE_CHOICE, AssignmentType.FILL_IN_THE_BLANK]

    @pytest.mark.parametrize("total", [0, 51, -3])
    def test_total_out_of_range(self, settings, total):
        with pytest.raises(InvalidRequestError):
            validate_quiz_request(_quiz_request(total_questions=total), settings)

    @pytest.mark.parametrize("total", [1, 50])
    def test_total_bounds_inclusive(self, settings, total):
        result = validate_quiz_request(_quiz_request(assignment_types=[1], total_questions=total), settings)
        assert result.total_questions == total

    def test_more_types_than_questions(self, settings):
        with pytest.raises(InvalidRequestError):
            validate_quiz_request(_quiz_request(assignment_types=[1, 2, 3], total_questions=2), settings)

    def test_empty_type_selection(self, settings):
        with pytest.raises(InvalidRequestError):
            validate_quiz_request(_quiz_request(assignment_types=[]), settings)

    def test_unknown_type(self, settings):
        with pytest.raises(InvalidRequestError):
            validate_quiz_request(_quiz_request(assignment_types=[1, 9]), settings)

    def test_display_names_accepted(self, settings):
        result = validate_quiz_request(_quiz_request(
            assignment_types=["Multiple Choice", "essay"],
            english_level="B1 - Intermediate",
        ), settings)
        assert result.assignment_types == [AssignmentType.MULTIPLE_CHOICE, AssignmentType.ESSAY]
        assert result.level == EnglishLevel.B1

    def test_id_and_name_for_same_type_collapsed(self, settings):
        result = validate_quiz_request(_quiz_request(assignment_types=[1, "Multiple Choice", "1"]), settings)
        assert result.assignment_types == [AssignmentType.MULTIPLE_CHOICE]

    def test_unknown_type_name(self, settings):
        with pytest.raises(InvalidRequestError, match="loại câu hỏi"):
            validate_quiz_request(_quiz_request(assignment_types=["Multiple Choice", "Matching"]), settings)

    def test_duplicate_types_collapsed(self, settings):
        result = validate_quiz_request(_quiz_request(assignment_types=[3, 1, 3]), settings)
        assert result.assignment_types == [AssignmentType.SHORT_ANSWER, AssignmentType.MULTIPLE_CHOICE]

    def test_blank_topic(self, settings):
        with pytest.raises(InvalidRequestError):
            validate_quiz_request(_quiz_request(topic="   "), settings)

    def test_topic_word_limit(self, settings):
        with pytest.raises(InvalidRequestError):
            validate_quiz_request(_quiz_request(topic=_words(11)), settings)

    def test_unknown_level(self, settings):
        with pytest.raises(InvalidRequestError):
            validate_quiz_request(_quiz_request(english_level=7), settings)


class TestResolveLevel:

    @pytest.mark.parametrize("value,expected", [
        (1, EnglishLevel.A1),
        ("6", EnglishLevel.C2),
        ("b2", EnglishLevel.B2),
        ("B1 - Intermediate", EnglishLevel.B1),
        ("c2 - proficient", EnglishLevel.C2),
        (0, None),
        ("Z9", None),
    ])
    def test_resolve(self, value, expected):
        assert resolve_level(value) == expected
