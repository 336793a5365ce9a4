"""Integration tests for PaperRepository with real database."""

import pytest
import pytest_asyncio
from sqlalchemy import func, select

from nubian.models import PaperKeyword
from nubian.repositories.keyword_repository import KeywordRepository
from nubian.repositories.paper_repository import PaperRepository
from nubian.services.auth_service import Principal
from nubian.services.paper_filters import PaperFilters


class TestPaperRepositoryCRUD:
    """Test basic CRUD operations against real database."""

    async def test_create_and_retrieve_paper(self, db_session, make_paper_data):
        repo = PaperRepository(session=db_session)

        paper = await repo.create(make_paper_data())

        assert paper.id is not None
        assert paper.status == "pending"
        assert paper.created_at is not None

        by_id = await repo.get_by_id_or_slug(str(paper.id))
        by_slug = await repo.get_by_id_or_slug(paper.slug)
        assert by_id.id == paper.id
        assert by_slug.id == paper.id
        assert by_slug.category.field.name == "Life Sciences"

    async def test_get_by_id_not_found(self, db_session):
        repo = PaperRepository(session=db_session)

        assert await repo.get_by_id(999999) is None
        assert await repo.get_by_id_or_slug("no-such-paper") is None

    async def test_slug_exists(self, db_session, make_paper_data):
        repo = PaperRepository(session=db_session)
        paper = await repo.create(make_paper_data())

        assert await repo.slug_exists(paper.slug) is True
        assert await repo.slug_exists(paper.slug + "-2") is False

    async def test_update_paper(self, db_session, make_paper_data):
        repo = PaperRepository(session=db_session)
        paper = await repo.create(make_paper_data())

        await repo.update(paper.id, {"title": "Updated Title"})
        updated = await repo.get_by_id(paper.id)

        assert updated.title == "Updated Title"
        assert updated.slug == paper.slug

    async def test_delete_removes_keyword_attachments(self, db_session, make_paper_data):
        repo = PaperRepository(session=db_session)
        keywords = KeywordRepository(session=db_session)
        paper = await repo.create(make_paper_data())
        keyword_id, _ = await keywords.get_or_create("sahel")
        await keywords.ensure_attached(paper.id, keyword_id)

        assert await repo.delete_with_keywords(paper.id) is True

        remaining = await db_session.scalar(
            select(func.count()).select_from(PaperKeyword).where(PaperKeyword.paper_id == paper.id)
        )
        assert remaining == 0
        assert await repo.get_by_id(paper.id) is None
        # keywords outlive the papers they were attached to
        assert await keywords.get_by_name("sahel") is not None


class TestPaperListingVisibility:
    """Listing scope per principal."""

    @pytest_asyncio.fixture(loop_scope="session")
    async def mixed_papers(self, db_session, make_paper_data, created_admin):
        repo = PaperRepository(session=db_session)
        published = await repo.create(
            make_paper_data("Published Study", status="published", reviewed_by=created_admin.id)
        )
        pending = await repo.create(make_paper_data("Pending Study"))
        rejected = await repo.create(
            make_paper_data(
                "Rejected Study",
                status="rejected",
                reviewed_by=created_admin.id,
                rejection_reason="Out of scope",
            )
        )
        return published, pending, rejected

    async def test_anonymous_sees_published_only(self, db_session, mixed_papers):
        repo = PaperRepository(session=db_session)

        papers, total = await repo.list_papers(None, PaperFilters(status="pending"))

        assert total == 1
        assert [p.title for p in papers] == ["Published Study"]

    async def test_owner_sees_own_papers_in_every_status(
        self, db_session, mixed_papers, created_user
    ):
        repo = PaperRepository(session=db_session)
        owner = Principal(kind="user", id=created_user.id)

        _, total = await repo.list_papers(owner, PaperFilters(user_id=created_user.id))
        pending, pending_total = await repo.list_papers(
            owner, PaperFilters(user_id=created_user.id, status="pending")
        )

        assert total == 3
        assert pending_total == 1
        assert pending[0].title == "Pending Study"

    async def test_other_user_sees_published_only(self, db_session, mixed_papers, created_user):
        repo = PaperRepository(session=db_session)
        stranger = Principal(kind="user", id="user_stranger")

        _, total = await repo.list_papers(stranger, PaperFilters(user_id=created_user.id))

        assert total == 1

    async def test_admin_sees_every_status(self, db_session, mixed_papers, created_admin):
        repo = PaperRepository(session=db_session)
        admin = Principal(kind="admin", id=created_admin.id)

        _, total = await repo.list_papers(admin, PaperFilters())
        rejected, rejected_total = await repo.list_papers(admin, PaperFilters(status="rejected"))

        assert total == 3
        assert rejected_total == 1
        assert rejected[0].rejection_reason == "Out of scope"

    async def test_search_matches_category_name(self, db_session, mixed_papers):
        repo = PaperRepository(session=db_session)

        _, total = await repo.list_papers(None, PaperFilters(search="epidemio"))
        _, none_total = await repo.list_papers(None, PaperFilters(search="astrophysics"))

        assert total == 1
        assert none_total == 0

    async def test_pagination_total_ignores_page(self, db_session, mixed_papers, created_admin):
        repo = PaperRepository(session=db_session)
        admin = Principal(kind="admin", id=created_admin.id)

        page, total = await repo.list_papers(admin, PaperFilters(page=2, size=2))

        assert total == 3
        assert len(page) == 1
