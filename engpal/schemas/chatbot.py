"""
Pydantic schemas for the chatbot and feedback endpoints
"""
from pydantic import BaseModel


class ChatbotRequest(BaseModel):
    """Question sent to the chatbot"""
    question: str = ""


class ChatbotResponse(BaseModel):
    """Markdown answer"""
    answer: str


class FeedbackRequest(BaseModel):
    """User feedback about the service"""
    user_name: str = ""
    user_feedback: str = ""
