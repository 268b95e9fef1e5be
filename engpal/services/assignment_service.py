"""
Quiz (assignment) generation

Gemini is asked for a fixed number of questions spread over the requested
types. Questions that break their type contract are dropped, and a single
follow-up call tops up the shortfall.
"""
import logging
import random
from typing import Dict, List, Optional

from engpal.config import Settings
from engpal.exceptions import GenerationError
from engpal.models.assignment_type import AssignmentType, ASSIGNMENT_TYPE_NAMES
from engpal.models.english_level import EnglishLevel, LEVEL_DISPLAY_NAMES
from engpal.schemas.assignment import GenerateQuizzesRequest, GeneratedQuiz, QuizItem, QuizResponse
from engpal.services.gemini_service import GeminiService
from engpal.services.response_parser import quizzes_from_text
from engpal.services.validation import ValidatedQuizRequest, validate_quiz_request
from engpal.utils.cache import generate_assignment_cache_key

logger = logging.getLogger(__name__)

TOPIC_POOL = [
    "Business Communication", "Environmental Science", "Technology Innovation",
    "Global Economics", "Cultural Diversity", "Health and Wellness",
    "Digital Marketing", "Sustainable Development", "Artificial Intelligence",
    "International Relations", "Climate Change", "Social Media Impact",
]

QUIZ_JSON_FORMAT = """{
  "quizzes": [
    {
      "type": "Multiple Choice",
      "question": "question text here",
      "options": ["A", "B", "C", "D"],
      "correct_index": 0,
      "explanation": "detailed explanation"
    },
    {
      "type": "Fill in the Blank",
      "question": "Complete this sentence: The weather today is _____ than yesterday.",
      "answer": "better",
      "explanation": "explanation here"
    },
    {
      "type": "Short Answer",
      "question": "question text here",
      "answer": "expected answer",
      "explanation": "explanation here"
    },
    {
      "type": "Essay",
      "question": "essay question here",
      "answer": "sample key points or structure",
      "explanation": "grading criteria and expectations"
    }
  ]
}"""


def distribute_question_types(assignment_types: List[AssignmentType], total: int) -> Dict[AssignmentType, int]:
    """
    Split total evenly across the types

    The remainder goes one each to the first types in request order,
    e.g. 10 over 3 types -> 4, 3, 3.
    """
    base_count, remainder = divmod(total, len(assignment_types))
    return {
        assignment_type: base_count + (1 if index < remainder else 0)
        for index, assignment_type in enumerate(assignment_types)
    }


def format_type_distribution(distribution: Dict[AssignmentType, int]) -> str:
    return "\n".join(
        f"- {assignment_type.display_name}: {count} questions"
        for assignment_type, count in distribution.items()
    )


def build_quiz_prompt(topic: str, level: EnglishLevel, assignment_types: List[AssignmentType], total: int) -> str:
    """Create the quiz instruction for Gemini"""
    distribution = distribute_question_types(assignment_types, total)

    return f"""Create {total} high-quality quiz questions about "{topic}" for {level.display_name} English level students.

REQUIREMENTS:
- English Level: {level.display_name} ({level.difficulty})
- Topic: {topic}
- Total Questions: {total}
- Each question must be unique and non-repetitive
- Questions should be similar in style to IELTS/TOEIC exams
- Include detailed explanations for answers
- All questions, answers and explanations must be written in English

QUESTION DISTRIBUTION:
{format_type_distribution(distribution)}

FORMATTING RULES:
- Return ONLY valid JSON without any markdown formatting or code blocks
- Use the exact "type" labels shown below
- Use this exact JSON structure:
{QUIZ_JSON_FORMAT}

QUALITY STANDARDS:
- Multiple Choice: 4 options, only one correct, plausible distractors
- Fill in the Blank: Clear context, single correct answer
- Short Answer: Specific, measurable expected responses
- Essay: Clear prompts with specific requirements
- All questions must test different aspects of the topic
- Vary sentence structures and vocabulary within the appropriate level
- Include practical, real-world applications when possible

Generate exactly {total} questions now:"""


def build_additional_quiz_prompt(topic: str, level: EnglishLevel, assignment_types: List[AssignmentType], needed: int) -> str:
    """Prompt for the follow-up call that replaces rejected questions"""
    type_names = ", ".join(t.display_name for t in assignment_types)

    return f"""Generate {needed} additional unique quiz questions about "{topic}" for {level.display_name} level.
Make sure these questions are completely different from any previous questions about this topic.
Focus on different aspects, use different vocabulary, and vary the question formats.
Only use these question types: {type_names}.

Return ONLY valid JSON without any markdown formatting, using this exact structure:
{QUIZ_JSON_FORMAT}

Ensure high quality, IELTS/TOEIC-style questions written in English."""


def to_quiz_item(quiz: GeneratedQuiz, quiz_id: int) -> QuizItem:
    """Shape a validated question for the API, keeping only fields its type uses"""
    is_multiple_choice = quiz.type == AssignmentType.MULTIPLE_CHOICE.display_name
    return QuizItem(
        id=quiz_id,
        type=quiz.type,
        question=quiz.question,
        answer=quiz.answer or None,
        options=quiz.options if is_multiple_choice else None,
        correct_index=quiz.correct_index if is_multiple_choice else None,
        explanation=quiz.explanation or None,
    )


def suggest_topics(count: int, rng: Optional[random.Random] = None) -> List[str]:
    """Random sample of topics from the fixed pool"""
    rng = rng or random
    return rng.sample(TOPIC_POOL, min(count, len(TOPIC_POOL)))


def english_level_table() -> Dict[int, str]:
    return {level.value: name for level, name in LEVEL_DISPLAY_NAMES.items()}


def assignment_type_table() -> Dict[int, str]:
    return {assignment_type.value: name for assignment_type, name in ASSIGNMENT_TYPE_NAMES.items()}


class AssignmentService:
    """Validate, cache and generate quizzes"""

    def __init__(self, gemini: GeminiService, cache, settings: Settings):
        self.gemini = gemini
        self.cache = cache
        self.settings = settings

    async def generate_quizzes(self, request: GenerateQuizzesRequest) -> QuizResponse:
        """
        Generate a quiz for a topic

        Raises:
            InvalidRequestError: request failed validation
            GenerationError: Gemini failed or its first answer could not be parsed
        """
        validated = validate_quiz_request(request, self.settings)

        cache_key = generate_assignment_cache_key(
            validated.topic,
            [str(t.value) for t in validated.assignment_types],
            validated.level.code,
            validated.total_questions,
        )
        cached, found = self.cache.get(cache_key)
        if found:
            logger.info(f"Returning cached quiz for {cache_key}")
            return QuizResponse.model_validate(cached)

        quizzes = await self._generate(validated)

        response = QuizResponse(
            topic=validated.topic,
            level=validated.level.display_name,
            total=validated.total_questions,
            generated=len(quizzes),
            quizzes=quizzes,
        )

        if quizzes:
            self.cache.put(cache_key, response.model_dump(mode="json"), self.settings.ASSIGNMENT_CACHE_TTL)
        else:
            logger.warning(f"No valid quizzes generated for {cache_key}, not caching")

        logger.info(f"Generated {len(quizzes)} quizzes for topic: {validated.topic}")
        return response

    async def _generate(self, validated: ValidatedQuizRequest) -> List[QuizItem]:
        prompt = build_quiz_prompt(
            validated.topic,
            validated.level,
            validated.assignment_types,
            validated.total_questions,
        )
        raw_text = await self.gemini.generate(prompt)
        quizzes = quizzes_from_text(raw_text, validated.assignment_types)

        needed = validated.total_questions - len(quizzes)
        if needed > 0:
            logger.warning(
                f"Expected {validated.total_questions} valid questions, got {len(quizzes)}; "
                f"requesting {needed} more"
            )
            quizzes.extend(await self._generate_additional(validated, needed))

        quizzes = quizzes[:validated.total_questions]
        return [to_quiz_item(quiz, index) for index, quiz in enumerate(quizzes, start=1)]

    async def _generate_additional(self, validated: ValidatedQuizRequest, needed: int) -> List[GeneratedQuiz]:
        """One follow-up call; a failure here keeps what the first call produced"""
        prompt = build_additional_quiz_prompt(
            validated.topic, validated.level, validated.assignment_types, needed
        )
        try:
            raw_text = await self.gemini.generate(prompt)
            return quizzes_from_text(raw_text, validated.assignment_types)
        except GenerationError as e:
            logger.warning(f"Additional quiz generation failed: {str(e)}")
            return []
