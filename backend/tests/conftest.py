"""
Shared fixtures: an in-memory SQLite store wired into coachloop.db.session,
and a scripted model provider that records the prompts it receives.
"""
import json
import os
import sys
import tempfile
from pathlib import Path

# Settings are read once; point them at throwaway locations before anything imports them
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LLM_API_KEY", "test-key")
os.environ["LOGS_DIR"] = tempfile.mkdtemp(prefix="coachloop-logs-")

sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import coachloop.models  # noqa: F401  (registers tables on Base)
from coachloop.db import session as db_session
from coachloop.db.session import Base, get_db
from coachloop.services.insights import InsightExtractionGateway
from coachloop.services.llm import LLMProvider
from coachloop.services.session_workflow import SessionWorkflow

DEFAULT_INSIGHTS = {
    "growthThemes": ["Ownership", "Communication"],
    "skillsToDevelop": ["Delegation"],
    "suggestedCoachingQuestions": ["What would you hand off first?"],
    "actionItems": ["Write a delegation plan", "Book a skip-level 1:1"],
}


class FakeProvider(LLMProvider):
    """Returns a canned response (or raises) and keeps every call."""

    name = "fake"

    def __init__(self, response=None, error=None):
        super().__init__("coachloop.tests.fake")
        self.response = json.dumps(DEFAULT_INSIGHTS) if response is None else response
        self.error = error
        self.calls = []

    @property
    def prompts(self):
        return [call["prompt"] for call in self.calls]

    def complete(self, prompt, system_prompt=None, json_mode=False):
        self.calls.append(
            {"prompt": prompt, "system_prompt": system_prompt, "json_mode": json_mode}
        )
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def engine(monkeypatch):
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=eng)
    monkeypatch.setattr(db_session, "_engine", eng)
    monkeypatch.setattr(db_session, "_SessionLocal", factory)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def db(engine):
    with get_db() as session:
        yield session


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def workflow(provider):
    return SessionWorkflow(InsightExtractionGateway(provider), history_limit=3, min_transcript_length=10)
