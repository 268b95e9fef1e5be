"""
Pydantic schemas for writing review requests and responses
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, model_validator


class ModelOutput(BaseModel):
    """Base for shapes parsed out of model text; JSON nulls fall back to field defaults"""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class GenerateReviewRequest(BaseModel):
    """Request schema for review generation"""
    content: str = ""
    user_level: str = ""
    requirement: str = ""
    category: Optional[str] = None  # essay, letter, report ...
    language: Optional[str] = None  # "en" or "vi" for the response language


class ReviewScores(ModelOutput):
    """Criterion scores, each 0-10"""
    grammar: float = 0.0
    vocabulary: float = 0.0
    coherence: float = 0.0
    task_response: float = 0.0
    overall: float = 0.0


class ReviewSuggestion(ModelOutput):
    """One actionable suggestion"""
    category: str = ""  # Grammar, Vocabulary ...
    issue: str = ""
    suggestion: str = ""
    example: str = ""
    priority: str = ""  # High, Medium, Low


class ReviewData(ModelOutput):
    """Review fields expected in the model's JSON answer"""
    estimated_level: str = ""
    scores: ReviewScores = ReviewScores()
    overall_feedback: str = ""
    strength_points: List[str] = []
    improvement_areas: List[str] = []
    suggestions: List[ReviewSuggestion] = []
    corrected_version: Optional[str] = None


class LegacyReviewData(ReviewData):
    """Older answer shape where suggestions are plain strings"""
    suggestions: List[str] = []

    def upgrade(self) -> ReviewData:
        """Convert to ReviewData, wrapping each string in a suggestion record"""
        data = self.model_dump(exclude={"suggestions"})
        data["suggestions"] = [ReviewSuggestion(suggestion=text) for text in self.suggestions]
        return ReviewData(**data)


class ReviewResponse(BaseModel):
    """Response containing a generated review"""
    content: str
    user_level: str
    requirement: str
    word_count: int
    estimated_level: str
    scores: ReviewScores
    overall_feedback: str
    strength_points: List[str]
    improvement_areas: List[str]
    suggestions: List[ReviewSuggestion]
    corrected_version: Optional[str] = None
    generated_at: datetime
    processing_time_ms: float
