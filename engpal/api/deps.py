"""
FastAPI dependencies resolving the services built at startup
"""
from fastapi import Request

from engpal.services.assignment_service import AssignmentService
from engpal.services.chatbot_service import ChatbotService
from engpal.services.gemini_service import GeminiService
from engpal.services.review_service import ReviewService


def get_review_service(request: Request) -> ReviewService:
    return request.app.state.review_service


def get_assignment_service(request: Request) -> AssignmentService:
    return request.app.state.assignment_service


def get_chatbot_service(request: Request) -> ChatbotService:
    return request.app.state.chatbot_service


def get_gemini_service(request: Request) -> GeminiService:
    return request.app.state.gemini_service
