# tests/conftest.py
"""Shared fixtures: settings, a scripted Gemini stand-in, services and an HTTP client.

No network access: every Gemini call is answered by FakeGemini.
"""

from __future__ import annotations

import os

# Settings() runs at import time and requires the key
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import pytest
from fastapi.testclient import TestClient

from engpal.api.deps import (
    get_assignment_service,
    get_chatbot_service,
    get_gemini_service,
    get_review_service,
)
from engpal.config import Settings
from engpal.main import app
from engpal.services.assignment_service import AssignmentService
from engpal.services.chatbot_service import ChatbotService
from engpal.services.review_service import ReviewService
from engpal.utils.cache import TTLCache
from factories import FakeGemini


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, GEMINI_API_KEY="test-key")


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def review_service(fake_gemini, settings) -> ReviewService:
    return ReviewService(fake_gemini, TTLCache(settings.REVIEW_CACHE_TTL), settings)


@pytest.fixture
def assignment_service(fake_gemini, settings) -> AssignmentService:
    return AssignmentService(fake_gemini, TTLCache(settings.ASSIGNMENT_CACHE_TTL), settings)


@pytest.fixture
def chatbot_service(fake_gemini, settings) -> ChatbotService:
    return ChatbotService(fake_gemini, settings)


@pytest.fixture
def client(fake_gemini, review_service, assignment_service, chatbot_service):
    app.dependency_overrides[get_review_service] = lambda: review_service
    app.dependency_overrides[get_assignment_service] = lambda: assignment_service
    app.dependency_overrides[get_chatbot_service] = lambda: chatbot_service
    app.dependency_overrides[get_gemini_service] = lambda: fake_gemini
    yield TestClient(app)
    app.dependency_overrides.clear()
