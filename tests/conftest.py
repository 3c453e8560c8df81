"""Shared fixtures for Tutor Match tests."""

import pytest

from tests.factories import BULAWAYO, HARARE, MUTARE, make_learner, make_tutor
from tutormatch.logging.context import clear_log_context
from tutormatch.persistence import close_database, init_database

ENV_VARS = ("DATABASE_URL", "BACKEND_URL", "BACKEND_API_KEY", "LOG_LEVEL", "ENVIRONMENT")


@pytest.fixture(autouse=True)
def clean_log_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the config layer reads."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def memory_db():
    """Initialise an in-memory SQLite database for one test."""
    init_database("sqlite:///:memory:")
    yield
    close_database()


@pytest.fixture
def learner():
    """Learner in Harare wanting Mathematics and Physics."""
    return make_learner(subjects=("Mathematics", "Physics"), full_name="Tariro Moyo")


@pytest.fixture
def roster():
    """Mixed tutor roster around Zimbabwe."""
    return [
        make_tutor("t-bulawayo", *BULAWAYO, subjects=["Mathematics"], full_name="Sipho Ndlovu"),
        make_tutor("t-harare", *HARARE, subjects=["Physics", "Chemistry"], full_name="Farai Chikwanha"),
        make_tutor("t-mutare", *MUTARE, subjects=["English"], full_name="Chipo Sibanda"),
        make_tutor("t-pending", *HARARE, subjects=["Mathematics"], approved=False),
        make_tutor("t-nowhere", subjects=["Mathematics"]),
    ]
