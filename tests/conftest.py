"""Shared test fixtures — fake sponsor pages and an app wired to a mocked fetch."""

import os
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Set env vars before any app imports
os.environ.setdefault("GITHUB_TOKEN", "test-token")
os.environ.setdefault("URL", "https://sponsors.test")
os.environ.setdefault("CACHE_TTL", "1h")

from sponsors_api.core.config import Settings  # noqa: E402
from sponsors_api.app import create_app  # noqa: E402
from sponsors_api.models.schemas import Sponsor, SponsorPage  # noqa: E402


def make_sponsors(count: int, start: int = 0) -> list[Sponsor]:
    """Create `count` distinct sponsors, numbered from `start`."""
    return [
        Sponsor(
            name=f"Sponsor {i}",
            login=f"sponsor{i}",
            avatar_url=f"https://avatars.githubusercontent.com/u/{i}?v=4",
        )
        for i in range(start, start + count)
    ]


def make_pages(*sizes: int) -> list[SponsorPage]:
    """Consecutive pages with the given sizes, cursors chained page to page."""
    pages = []
    offset = 0
    for i, size in enumerate(sizes):
        last = i == len(sizes) - 1
        pages.append(SponsorPage(
            sponsors=make_sponsors(size, start=offset),
            has_next_page=not last,
            end_cursor=None if last else f"cursor-{i + 1}",
        ))
        offset += size
    return pages


@pytest.fixture
def settings():
    return Settings(GITHUB_TOKEN="test-token", URL="https://sponsors.test/", CACHE_TTL="1h")


@pytest.fixture
def mock_fetch():
    """Fetch coroutine returning no sponsors unless a test overrides it."""
    return AsyncMock(return_value=[])


@pytest.fixture
def app(settings, mock_fetch):
    return create_app(settings, fetch_sponsors=mock_fetch)


@pytest.fixture
def client(app):
    with TestClient(app, follow_redirects=False) as c:
        yield c


@pytest.fixture
def sponsor_factory():
    return make_sponsors


@pytest.fixture
def page_factory():
    return make_pages
