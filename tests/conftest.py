import copy
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from uplift.database import Base
from uplift.store import JournalStore


BASE_SUMMARY = {
    "date": "2024-03-10",
    "activities": [
        {
            "name": "Grocery run",
            "effort": [{"category": "physical", "color": "yellow"}],
            "duration_minutes": 40,
            "difficulty_noted": True,
            "notes": "Had to sit down halfway",
        },
        {
            "name": "Video call",
            "effort": [
                {"category": "social", "color": "green"},
                {"category": "cognitive", "color": "yellow"},
            ],
            "duration_minutes": 30,
            "difficulty_noted": False,
            "notes": None,
        },
    ],
    "crash": {"occurred": False, "severity": None, "description": None},
    "warning_flags": [
        {
            "type": "pushed_through",
            "severity": "medium",
            "description": "Kept going after feeling tired",
            "related_activities": ["Grocery run"],
        },
        {
            "type": "cumulative_load",
            "severity": "low",
            "description": "Busy afternoon",
            "related_activities": ["Grocery run", "Video call"],
        },
    ],
    "energy_balance": {
        "assessment": "slight_deficit",
        "current_state": "Tired but steady",
        "recovery_needed": True,
    },
    "supportive_message": "You listened to your body today.",
}


@pytest.fixture()
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def store(db_engine):
    session_factory = sessionmaker(
        bind=db_engine, autoflush=False, expire_on_commit=False, future=True
    )
    journal_store = JournalStore(session_factory)
    journal_store.init()
    return journal_store


@pytest.fixture()
def make_summary():
    """Build a well-formed service summary, overriding top-level fields."""
    def _make(**overrides):
        summary = copy.deepcopy(BASE_SUMMARY)
        summary.update(copy.deepcopy(overrides))
        return summary
    return _make


class FakeMessages:
    """Stands in for anthropic's client.messages."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        blocks = []
        if self.text is not None:
            blocks.append(SimpleNamespace(type="text", text=self.text))
        return SimpleNamespace(content=blocks)


class FakeAnthropicClient:
    def __init__(self, text=None, error=None):
        self.messages = FakeMessages(text=text, error=error)


class FakeGenerator:
    """Returns canned summaries in order, recording what it was asked."""

    def __init__(self, *summaries, error=None):
        self.summaries = list(summaries)
        self.error = error
        self.calls = []

    def generate(self, checkin_date, user_text):
        self.calls.append((checkin_date, user_text))
        if self.error is not None:
            raise self.error
        return self.summaries.pop(0)


@pytest.fixture()
def fake_client():
    return FakeAnthropicClient


@pytest.fixture()
def fake_generator():
    return FakeGenerator
