"""Shared test fixtures for knowledge search tests."""

import os

# Config is loaded at import time — set required env vars before any
# kb_search modules are imported by the test collector.
os.environ.setdefault("KB_API_ENDPOINT", "https://kb.test/services/apexrest/knowledge")

import pytest  # noqa: E402

from kb_search.models import Article, RawArticleRecord  # noqa: E402
from kb_search.state import SearchState  # noqa: E402


@pytest.fixture
def notifications() -> list:
    """Collects every Notification passed to ``notify``."""
    return []


@pytest.fixture
def navigations() -> list:
    """Collects every NavigationRequest passed to ``navigate``."""
    return []


@pytest.fixture
def state() -> SearchState:
    return SearchState()


@pytest.fixture
def populated_state(state: SearchState) -> SearchState:
    """State holding two rows, as after a resolved search."""
    state.replace_rows(
        [
            Article(id="a1", display_name="Tax Guide", view_count=5),
            Article(id="b2", display_name="Payroll FAQ", view_count=3),
        ],
        loading=False,
    )
    return state


@pytest.fixture
def tax_records() -> list[RawArticleRecord]:
    return [RawArticleRecord(id="a1", primary_title="Tax Guide", view_count=5)]
