"""
Test Configuration and Fixtures

Shared fixtures for the venture AI test suite. No test talks to a real
generation backend: the client is either absent or a fake.
"""

import os

import pytest

# Set test environment variables before importing the app.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "text")
# An explicitly empty credential keeps a developer's .env key out of tests.
os.environ.setdefault("DEEPSEEK_API_KEY", "")
os.environ.setdefault("OPENAI_API_KEY", "")


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "api: API endpoint tests")


def pytest_collection_modifyitems(config, items):
    """
    Auto-assign tier markers so we can run:
    - pytest -m unit
    - pytest -m api

    Convention:
    - tests/api/** => api
    - everything else => unit
    """
    for item in items:
        path = str(getattr(item, "fspath", ""))
        if item.get_closest_marker("api") or item.get_closest_marker("unit"):
            continue
        if "/tests/api/" in path:
            item.add_marker(pytest.mark.api)
        else:
            item.add_marker(pytest.mark.unit)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the environment, with uploads under tmp_path."""
    from ventureai.config import Settings

    return Settings(
        _env_file=None,
        environment="test",
        deepseek_api_key=None,
        openai_api_key=None,
        uploads_root=str(tmp_path),
    )


@pytest.fixture
def conversation_store():
    from ventureai.conversation import InMemoryConversationStore

    return InMemoryConversationStore()


@pytest.fixture
def document_repository():
    from ventureai.documents import InMemoryDocumentRepository

    return InMemoryDocumentRepository()


@pytest.fixture
def profile():
    from ventureai.llm.schemas import VentureProfile

    return VentureProfile(
        name="GreenCart",
        description="Grocery delivery from local farms",
        problem="Fresh local produce is hard to buy in the city",
        idea="A marketplace connecting farms with city households",
        audience="Urban families",
        answers={"How will you make money?": "A 10% commission per order"},
    )
