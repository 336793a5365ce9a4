"""Shared pytest fixtures."""

# Clear settings cache before any imports to prevent stale values with coverage
from nubian.config import get_settings

get_settings.cache_clear()

import pytest
from unittest.mock import AsyncMock, Mock
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from nubian.models.field import Category, Field
from nubian.models.paper import Paper
from nubian.models.user import User
from nubian.services.auth_service import Principal


# Principal fixtures


@pytest.fixture
def user_principal():
    """Authenticated researcher."""
    return Principal(kind="user", id="user_alice", email="alice@example.com", name="Alice")


@pytest.fixture
def other_user_principal():
    """A second researcher who owns nothing in the fixtures."""
    return Principal(kind="user", id="user_bob", email="bob@example.com", name="Bob")


@pytest.fixture
def admin_principal():
    """Authenticated administrator."""
    return Principal(kind="admin", id="admin_root", email="admin@example.com", name="Root")


# Sample data fixtures


@pytest.fixture
def make_paper():
    """Factory for paper-like objects carrying everything a response needs."""

    def _make(
        paper_id=1,
        title="Malaria Transmission in the Sahel",
        status="published",
        user_id="user_alice",
        category_id=3,
        field_id=2,
        keywords=None,
        rejection_reason=None,
        reviewed_by=None,
    ):
        now = datetime(2026, 1, 15, tzinfo=timezone.utc)
        field = Mock(spec=Field, id=field_id)
        field.name = "Life Sciences"
        category = Mock(spec=Category, id=category_id, field_id=field_id, field=field)
        category.name = "Epidemiology"
        user = Mock(spec=User, id=user_id, email=f"{user_id}@example.com")
        user.name = "Alice"

        paper = Mock(spec=Paper)
        paper.id = paper_id
        paper.title = title
        paper.slug = title.lower().replace(" ", "-")
        paper.abstract = "An abstract."
        paper.notes = None
        paper.status = status
        paper.user_id = user_id
        paper.category_id = category_id
        paper.reviewed_by = reviewed_by
        paper.rejection_reason = rejection_reason
        paper.ipfs_cid = "bafy-existing"
        paper.ipfs_url = "https://gateway.test/ipfs/bafy-existing"
        paper.created_at = now
        paper.updated_at = now
        paper.user = user
        paper.category = category
        paper.field = field
        paper.keywords = keywords or []
        return paper

    return _make


# Database mocking fixtures


@pytest.fixture
def mock_async_session():
    """Create a mock AsyncSession for repository and service tests."""
    session = AsyncMock()

    # Mock result object for execute
    mock_result = Mock()
    mock_result.scalar_one_or_none = Mock(return_value=None)
    mock_result.scalar_one = Mock(return_value=0)
    mock_result.scalars = Mock(
        return_value=Mock(all=Mock(return_value=[]), first=Mock(return_value=None))
    )
    mock_result.fetchall = Mock(return_value=[])
    mock_result.rowcount = 0

    session.execute = AsyncMock(return_value=mock_result)
    session.scalar = AsyncMock(return_value=0)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = Mock()
    session.add_all = Mock()
    session.delete = AsyncMock()
    session.expire_all = Mock()

    # Mock begin_nested for savepoint tests
    @asynccontextmanager
    async def begin_nested():
        yield

    session.begin_nested = begin_nested

    return session
