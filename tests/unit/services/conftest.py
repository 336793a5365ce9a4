"""Shared pytest fixtures for service tests."""

import pytest
from unittest.mock import AsyncMock, Mock

from nubian.clients.content_store_client import StoredFile


@pytest.fixture
def mock_keyword_repository():
    """Create a mock KeywordRepository."""
    repo = AsyncMock()
    repo.get_existing_ids = AsyncMock(side_effect=lambda ids: set(ids))
    repo.get_or_create = AsyncMock(return_value=(100, True))
    repo.ensure_attached = AsyncMock(return_value=True)
    repo.detach = AsyncMock(return_value=True)
    repo.search = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_paper_repository():
    """Create a mock PaperRepository."""
    repo = AsyncMock()
    repo.list_papers = AsyncMock(return_value=([], 0))
    repo.get_by_id = AsyncMock(return_value=None)
    repo.get_by_id_or_slug = AsyncMock(return_value=None)
    repo.slug_exists = AsyncMock(return_value=False)
    repo.create = AsyncMock(return_value=Mock(id=42))
    repo.update = AsyncMock()
    repo.delete_with_keywords = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_taxonomy_repository():
    """Create a mock TaxonomyRepository."""
    repo = AsyncMock()
    repo.category_exists = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def mock_content_store():
    """Create a mock ContentStoreClient."""
    store = AsyncMock()
    store.upload = AsyncMock(return_value=StoredFile(id="file-1", cid="bafy-new"))
    store.delete_by_cid = AsyncMock(return_value=True)
    store.gateway_url = Mock(side_effect=lambda cid: f"https://gateway.test/ipfs/{cid}")
    return store
