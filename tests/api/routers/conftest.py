"""Shared pytest fixtures for router tests."""

import pytest
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from unittest.mock import AsyncMock, Mock, patch

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture(autouse=True)
def mock_database_engine():
    """Keep the lifespan from touching a real connection pool."""
    mock_engine = Mock()
    mock_engine.dispose = AsyncMock()
    with patch("nubian.main.engine", mock_engine):
        yield mock_engine


@pytest.fixture
def mock_db_session():
    """Create a mock AsyncSession for router tests."""
    session = AsyncMock(spec=AsyncSession)

    mock_result = Mock()
    mock_result.scalar_one_or_none = Mock(return_value=None)
    mock_result.scalar_one = Mock(return_value=1)

    session.execute = AsyncMock(return_value=mock_result)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()

    @asynccontextmanager
    async def begin_nested():
        yield

    session.begin_nested = begin_nested

    return session


@pytest.fixture
def mock_paper_service():
    service = AsyncMock()
    service.list_papers = AsyncMock(return_value=([], 0))
    return service


@pytest.fixture
def mock_keyword_service():
    service = AsyncMock()
    service.search = AsyncMock(return_value=[])
    return service


@pytest.fixture
def mock_donation_service():
    service = AsyncMock()
    service.handle_paystack_webhook = AsyncMock(return_value=True)
    return service


@pytest.fixture
def mock_taxonomy_repo():
    repo = AsyncMock()
    repo.list_fields = AsyncMock(return_value=[])
    repo.get_field = AsyncMock(return_value=None)
    repo.list_categories = AsyncMock(return_value=[])
    repo.list_institutions = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def named():
    """Factory for id/name rows (fields, categories, institutions)."""

    def _make(row_id, name):
        row = Mock(id=row_id)
        row.name = name
        return row

    return _make


def _create_test_client(
    mock_db_session,
    mock_paper_service,
    mock_keyword_service,
    mock_donation_service,
    mock_taxonomy_repo,
    *,
    principal=None,
):
    """Build a TestClient with all infra dependencies overridden.

    When principal is provided, token verification is bypassed and every
    request is made as that principal. When omitted, auth dependencies run
    normally so tests can assert 401 behaviour.
    """
    from nubian.main import app
    from nubian.database import get_db
    from nubian.dependencies import (
        get_current_principal_optional,
        get_current_principal_required,
        get_donation_service_dep,
        get_keyword_service_dep,
        get_paper_service_dep,
        get_taxonomy_repository,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield mock_db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_paper_service_dep] = lambda: mock_paper_service
    app.dependency_overrides[get_keyword_service_dep] = lambda: mock_keyword_service
    app.dependency_overrides[get_donation_service_dep] = lambda: mock_donation_service
    app.dependency_overrides[get_taxonomy_repository] = lambda: mock_taxonomy_repo

    if principal is not None:
        app.dependency_overrides[get_current_principal_optional] = lambda: principal
        app.dependency_overrides[get_current_principal_required] = lambda: principal

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client(
    mock_db_session,
    mock_paper_service,
    mock_keyword_service,
    mock_donation_service,
    mock_taxonomy_repo,
    user_principal,
):
    """TestClient authenticated as a researcher."""
    yield from _create_test_client(
        mock_db_session,
        mock_paper_service,
        mock_keyword_service,
        mock_donation_service,
        mock_taxonomy_repo,
        principal=user_principal,
    )


@pytest.fixture
def admin_client(
    mock_db_session,
    mock_paper_service,
    mock_keyword_service,
    mock_donation_service,
    mock_taxonomy_repo,
    admin_principal,
):
    """TestClient authenticated as an administrator."""
    yield from _create_test_client(
        mock_db_session,
        mock_paper_service,
        mock_keyword_service,
        mock_donation_service,
        mock_taxonomy_repo,
        principal=admin_principal,
    )


@pytest.fixture
def unauthenticated_client(
    mock_db_session,
    mock_paper_service,
    mock_keyword_service,
    mock_donation_service,
    mock_taxonomy_repo,
):
    """TestClient WITHOUT auth override to test 401 responses."""
    yield from _create_test_client(
        mock_db_session,
        mock_paper_service,
        mock_keyword_service,
        mock_donation_service,
        mock_taxonomy_repo,
    )
