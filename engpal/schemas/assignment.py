"""
Pydantic schemas for quiz (assignment) generation
"""
from typing import List, Optional, Union

from pydantic import BaseModel

from engpal.schemas.review import ModelOutput


class GenerateQuizzesRequest(BaseModel):
    """Request schema for quiz generation"""
    topic: str = ""
    assignment_types: List[Union[int, str]] = []  # ids or display names ("Multiple Choice")
    english_level: Union[int, str] = 0  # id 1-6, CEFR code or display name ("B1 - Intermediate")
    total_questions: int = 0


class GeneratedQuiz(ModelOutput):
    """One question as the model returns it"""
    type: str = ""
    question: str = ""
    answer: str = ""
    options: List[str] = []
    correct_index: int = 0
    explanation: str = ""


class QuizItem(BaseModel):
    """Individual quiz question in the API response"""
    id: int
    type: str
    question: str
    answer: Optional[str] = None
    options: Optional[List[str]] = None  # Multiple Choice only
    correct_index: Optional[int] = None  # Multiple Choice only
    explanation: Optional[str] = None


class QuizResponse(BaseModel):
    """Response containing generated quizzes"""
    topic: str
    level: str
    total: int
    generated: int
    quizzes: List[QuizItem]


class SuggestedTopics(BaseModel):
    topics: List[str]
