"""
Pytest fixtures
"""
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import build_engine, build_session_factory, init_db
from generator import ReportGenerator
from main import create_app
from store import DemoStore, SqlStore


SAMPLE_REPORT = {
    "urgency": "High",
    "differential_dx": ["Community-acquired pneumonia", "Acute bronchitis"],
    "workup": ["Chest X-ray", "CBC", "CRP"],
    "management": ["Start empirical antibiotics"],
    "dosing_safety": ["Amoxicillin 1 g PO TID; check penicillin allergy"],
    "monitoring_followup": ["Reassess in 48 hours"],
}


def completion(content):
    """Shape of a Groq chat completion carrying ``content``."""
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def sample_report():
    return dict(SAMPLE_REPORT)


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def sql_store(session_factory):
    return SqlStore(session_factory)


@pytest.fixture
def groq_client():
    client = MagicMock()
    client.chat.completions.create.return_value = completion(json.dumps(SAMPLE_REPORT))
    return client


@pytest.fixture
def generator(groq_client):
    return ReportGenerator(groq_client, "test-model")


@pytest.fixture
def client(sql_store, generator):
    app = create_app(settings=Settings(database_url="sqlite://"), store=sql_store, generator=generator)
    return TestClient(app)


@pytest.fixture
def demo_client(generator):
    app = create_app(settings=Settings(), store=DemoStore(), generator=generator)
    return TestClient(app)
