# tests/conftest.py

"""
Pytest fixtures shared by the service and API tests.

The app runs against in-memory SQLite; the URL is set before anything imports
config so the engine is built for the test database.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PERSIST_RESULTS"] = "true"

import pytest
from fastapi.testclient import TestClient

from database import Base, SessionLocal, engine
from main import app
from services.readiness_service import ReadinessService


# =============================================================================
# DATABASE / CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def clean_database():
    """Start from empty tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(clean_database):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(clean_database):
    """Create a TestClient for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# QUESTION / ANSWER FIXTURES
# =============================================================================

@pytest.fixture
def questions():
    return ReadinessService.get_questions()


@pytest.fixture
def answers_at_rank(questions):
    """Build an answer map picking the option at ``rank`` (0 = best) everywhere."""
    def build(rank):
        return {q.id: q.options[rank].value for q in questions}
    return build


@pytest.fixture
def best_answers(answers_at_rank):
    return answers_at_rank(0)


@pytest.fixture
def worst_answers(answers_at_rank):
    return answers_at_rank(-1)
