"""
EngPal chatbot: short English-learning questions answered in Markdown
"""
import logging
from dataclasses import dataclass
from typing import Optional

from engpal.config import Settings
from engpal.models.english_level import EnglishLevel
from engpal.services.gemini_service import GeminiService
from engpal.utils.text import count_words

logger = logging.getLogger(__name__)

EMPTY_QUESTION_ANSWER = (
    "## EngPal đây!\n"
    "Bạn chưa nhập câu hỏi nào cả. Hãy hỏi EngPal bất cứ điều gì về tiếng Anh nhé!"
)

TOO_LONG_ANSWER_TEMPLATE = (
    "## Câu hỏi hơi dài rồi!\n"
    "EngPal chỉ trả lời được những câu hỏi tối đa {max_words} từ thôi. "
    "Bạn rút gọn câu hỏi lại giúp EngPal nha."
)


@dataclass(frozen=True)
class ChatPersona:
    """Who is asking; shapes tone and difficulty of the answer"""
    username: str = "bạn"
    gender: Optional[str] = None
    age: Optional[int] = None
    english_level: Optional[str] = None
    enable_reasoning: bool = False


def build_chatbot_prompt(question: str, persona: ChatPersona) -> str:
    """Create the chatbot instruction for Gemini"""
    level = EnglishLevel.from_code(persona.english_level or "")
    learner = [f"- Name: {persona.username}"]
    if persona.gender:
        learner.append(f"- Gender: {persona.gender}")
    if persona.age:
        learner.append(f"- Age: {persona.age}")
    learner.append(f"- English level: {level.display_name if level else 'unknown'}")

    reasoning = ""
    if persona.enable_reasoning:
        reasoning = "- Walk through your reasoning step by step before giving the final answer\n"

    learner_lines = "\n".join(learner)

    return f"""You are EngPal, a friendly and patient English teacher who helps Vietnamese learners.

LEARNER:
{learner_lines}

QUESTION:
"{question}"

ANSWER RULES:
- Answer in Vietnamese, keeping English examples in English
- Match vocabulary and explanations to the learner's level
- Use Markdown: short headings, bullet points and **bold** for key terms
- Give at least one example sentence when it helps
{reasoning}- If the question is not about learning English, politely steer the learner back to English
- Return only the Markdown answer, without wrapping it in a code block"""


class ChatbotService:
    """Answer short questions, with friendly fixed replies for unusable input"""

    def __init__(self, gemini: GeminiService, settings: Settings):
        self.gemini = gemini
        self.settings = settings

    async def generate_answer(self, question: str, persona: ChatPersona) -> str:
        """
        Answer a learner's question in Markdown

        Empty and over-long questions get a fixed reply instead of an error.

        Raises:
            GenerationError: Gemini failed
        """
        question = (question or "").strip()
        if not question:
            return EMPTY_QUESTION_ANSWER

        if count_words(question) > self.settings.CHATBOT_MAX_WORDS:
            return TOO_LONG_ANSWER_TEMPLATE.format(max_words=self.settings.CHATBOT_MAX_WORDS)

        prompt = build_chatbot_prompt(question, persona)
        answer = await self.gemini.generate(prompt)

        logger.info(f"Chatbot answered question from {persona.username} ({len(answer)} chars)")
        return answer.strip()
