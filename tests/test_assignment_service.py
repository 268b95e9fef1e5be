# tests/test_assignment_service.py
"""Tests for services.assignment_service: distribution, prompts, backfill and lookups."""

from __future__ import annotations

import json
import random

import pytest

from engpal.exceptions import ResponseParseError, UpstreamError
from engpal.models.assignment_type import AssignmentType
from engpal.models.english_level import EnglishLevel
from engpal.schemas.assignment import GenerateQuizzesRequest
from engpal.services.assignment_service import (
    TOPIC_POOL,
    assignment_type_table,
    build_additional_quiz_prompt,
    build_quiz_prompt,
    distribute_question_types,
    english_level_table,
    suggest_topics,
)
from factories import essay_item, fill_item, mc_item, quiz_json

MC = AssignmentType.MULTIPLE_CHOICE
FILL = AssignmentType.FILL_IN_THE_BLANK
SHORT = AssignmentType.SHORT_ANSWER
ESSAY = AssignmentType.ESSAY


class TestDistribution:

    def test_ten_over_three_types(self):
        distribution = distribute_question_types([MC, FILL, ESSAY], 10)
        assert sum(distribution.values()) == 10
        assert list(distribution.items()) == [(MC, 4), (FILL, 3), (ESSAY, 3)]

    def test_remainder_follows_request_order(self):
        distribution = distribute_question_types([ESSAY, SHORT, MC, FILL], 7)
        assert list(distribution.values()) == [2, 2, 2, 1]
        assert list(distribution) == [ESSAY, SHORT, MC, FILL]

    def test_even_split(self):
        assert distribute_question_types([MC, FILL], 8) == {MC: 4, FILL: 4}

    def test_single_type(self):
        assert distribute_question_types([SHORT], 50) == {SHORT: 50}


class TestPrompts:

    def test_quiz_prompt_contents(self):
        prompt = build_quiz_prompt("Climate Change", EnglishLevel.A2, [MC, FILL, ESSAY], 10)
        assert 'Create 10 high-quality quiz questions about "Climate Change"' in prompt
        assert "A2 - Elementary (basic vocabulary with simple past and present tenses)" in prompt
        assert "- Multiple Choice: 4 questions\n- Fill in the Blank: 3 questions\n- Essay: 3 questions" in prompt
        assert "Return ONLY valid JSON without any markdown formatting" in prompt
        assert "must be written in English" in prompt

    def test_additional_prompt_lists_types_and_format(self):
        prompt = build_additional_quiz_prompt("Travel", EnglishLevel.C1, [SHORT], 3)
        assert "Generate 3 additional unique quiz questions" in prompt
        assert "Only use these question types: Short Answer." in prompt
        assert '"quizzes"' in prompt


def _request(**overrides) -> GenerateQuizzesRequest:
    data = {"topic": "Climate Change", "assignment_types": [1, 2], "english_level": 3, "total_questions": 3}
    data.update(overrides)
    return GenerateQuizzesRequest(**data)


class TestGenerateQuizzes:

    @pytest.mark.asyncio
    async def test_full_answer(self, assignment_service, fake_gemini):
        fake_gemini.queue(quiz_json(mc_item(), fill_item(), mc_item(question="Which is a verb?")))
        response = await assignment_service.generate_quizzes(_request())

        assert response.topic == "Climate Change"
        assert response.level == "B1 - Intermediate"
        assert response.total == 3
        assert response.generated == 3
        assert [q.id for q in response.quizzes] == [1, 2, 3]
        assert response.quizzes[0].options == ["table", "run", "quickly", "blue"]
        assert response.quizzes[0].correct_index == 0
        assert response.quizzes[1].options is None
        assert response.quizzes[1].answer == "goes"
        assert len(fake_gemini.prompts) == 1

    @pytest.mark.asyncio
    async def test_shortfall_backfilled_once_then_truncated(self, assignment_service, fake_gemini):
        fake_gemini.queue(
            quiz_json(mc_item(options=["only"]), fill_item()),
            quiz_json(mc_item(question="Q2"), mc_item(question="Q3"), mc_item(question="Q4")),
        )
        response = await assignment_service.generate_quizzes(_request())

        assert len(fake_gemini.prompts) == 2
        assert "Generate 2 additional" in fake_gemini.prompts[1]
        assert [q.question for q in response.quizzes] == ["She ___ to school every day.", "Q2", "Q3"]
        assert [q.id for q in response.quizzes] == [1, 2, 3]
        assert response.generated == 3

    @pytest.mark.asyncio
    async def test_backfill_failure_keeps_first_batch(self, assignment_service, fake_gemini):
        fake_gemini.queue(quiz_json(fill_item()), UpstreamError("timeout"))
        response = await assignment_service.generate_quizzes(_request())

        assert response.generated == 1
        assert response.total == 3

    @pytest.mark.asyncio
    async def test_backfill_garbage_ignored(self, assignment_service, fake_gemini):
        fake_gemini.queue(quiz_json(fill_item()), "```json\nnot json\n```")
        response = await assignment_service.generate_quizzes(_request())
        assert response.generated == 1

    @pytest.mark.asyncio
    async def test_no_backfill_when_enough(self, assignment_service, fake_gemini):
        items = [fill_item(question=f"Q{i} ___") for i in range(5)]
        fake_gemini.queue(quiz_json(*items))
        response = await assignment_service.generate_quizzes(_request())

        assert len(fake_gemini.prompts) == 1
        assert response.generated == 3

    @pytest.mark.asyncio
    async def test_first_answer_unparseable(self, assignment_service, fake_gemini):
        fake_gemini.queue("Here are your questions: ...")
        with pytest.raises(ResponseParseError):
            await assignment_service.generate_quizzes(_request())

    @pytest.mark.asyncio
    async def test_first_answer_without_quizzes_key(self, assignment_service, fake_gemini):
        fake_gemini.queue(json.dumps({"error": "cannot comply"}))
        with pytest.raises(ResponseParseError):
            await assignment_service.generate_quizzes(_request())
        assert len(fake_gemini.prompts) == 1

    @pytest.mark.asyncio
    async def test_empty_result_not_cached(self, assignment_service, fake_gemini):
        fake_gemini.queue(quiz_json(), json.dumps({"error": "cannot comply"}))
        empty = await assignment_service.generate_quizzes(_request())
        assert empty.generated == 0
        assert len(fake_gemini.prompts) == 2

        fake_gemini.queue(quiz_json(mc_item(), fill_item(), fill_item(question="It ___ raining.", answer="is")))
        retried = await assignment_service.generate_quizzes(_request())
        assert retried.generated == 3
        assert len(fake_gemini.prompts) == 3

    @pytest.mark.asyncio
    async def test_display_name_request_shares_cache_with_ids(self, assignment_service, fake_gemini):
        fake_gemini.queue(quiz_json(mc_item(), fill_item(), mc_item(question="Which is a verb?")))
        by_id = await assignment_service.generate_quizzes(_request())
        by_name = await assignment_service.generate_quizzes(_request(
            assignment_types=["Multiple Choice", "Fill in the Blank"],
            english_level="B1 - Intermediate",
        ))

        assert by_name == by_id
        assert len(fake_gemini.prompts) == 1

    @pytest.mark.asyncio
    async def test_cached_by_request(self, assignment_service, fake_gemini):
        fake_gemini.queue(quiz_json(mc_item(), fill_item(), essay_item()))
        first = await assignment_service.generate_quizzes(_request(assignment_types=[1, 2, 4]))
        second = await assignment_service.generate_quizzes(_request(assignment_types=[1, 2, 4]))

        assert first == second
        assert len(fake_gemini.prompts) == 1

    @pytest.mark.asyncio
    async def test_legacy_bare_array_answer(self, assignment_service, fake_gemini):
        fake_gemini.queue(json.dumps([mc_item(), fill_item(), fill_item(question="It ___ raining.", answer="is")]))
        response = await assignment_service.generate_quizzes(_request())
        assert response.generated == 3


class TestLookups:

    def test_suggest_topics_samples_pool(self):
        topics = suggest_topics(5, random.Random(7))
        assert len(topics) == 5
        assert len(set(topics)) == 5
        assert set(topics) <= set(TOPIC_POOL)

    def test_suggest_topics_capped_by_pool(self):
        assert len(suggest_topics(100)) == len(TOPIC_POOL)

    def test_english_level_table(self):
        table = english_level_table()
        assert table[1] == "A1 - Beginner"
        assert table[6] == "C2 - Proficient"
        assert len(table) == 6

    def test_assignment_type_table(self):
        assert assignment_type_table() == {
            1: "Multiple Choice",
            2: "Fill in the Blank",
            3: "Short Answer",
            4: "Essay",
        }
