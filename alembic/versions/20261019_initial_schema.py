"""Initial schema: taxonomy, accounts, papers, keywords, donations.

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables and enable trigram matching."""

    op.execute("CREATE EXTENSION IF NOT EXISTS pg_trgm")

    op.create_table(
        "institutions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False, unique=True),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("email_verified", sa.Boolean, server_default="false", nullable=False),
        sa.Column("image", sa.Text, nullable=True),
        sa.Column(
            "institution_id",
            sa.Integer,
            sa.ForeignKey("institutions.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("areas_of_interest", sa.Text, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "admins",
        sa.Column("id", sa.Text, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index("ix_admins_email", "admins", ["email"])

    op.create_table(
        "fields",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
    )

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column(
            "field_id",
            sa.Integer,
            sa.ForeignKey("fields.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index("ix_categories_field_id", "categories", ["field_id"])

    op.create_table(
        "keywords",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text, nullable=False, unique=True),
        sa.Column(
            "aliases",
            postgresql.JSONB,
            server_default=sa.text("'[]'::jsonb"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.execute(
        "CREATE INDEX idx_keywords_name_trgm ON keywords USING gin (name gin_trgm_ops)"
    )

    op.create_table(
        "papers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("slug", sa.Text, nullable=False),
        sa.Column("abstract", sa.Text, nullable=False),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        sa.Column("reviewed_by", sa.Text, sa.ForeignKey("admins.id"), nullable=True),
        sa.Column("rejection_reason", sa.Text, nullable=True),
        sa.Column("user_id", sa.Text, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("category_id", sa.Integer, sa.ForeignKey("categories.id"), nullable=False),
        sa.Column("ipfs_cid", sa.Text, nullable=False),
        sa.Column("ipfs_url", sa.Text, nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('pending', 'published', 'rejected')",
            name="ck_papers_status",
        ),
        sa.CheckConstraint(
            "(status = 'rejected') = (rejection_reason IS NOT NULL)",
            name="ck_papers_rejection_reason",
        ),
        sa.CheckConstraint(
            "reviewed_by IS NULL OR status IN ('published', 'rejected')",
            name="ck_papers_reviewed_by",
        ),
        sa.UniqueConstraint("slug", name="uq_papers_slug"),
    )
    op.create_index("ix_papers_slug", "papers", ["slug"])
    op.create_index("ix_papers_status", "papers", ["status"])
    op.create_index("ix_papers_user_id", "papers", ["user_id"])
    op.create_index("ix_papers_category_id", "papers", ["category_id"])
    op.create_index("ix_papers_created_at", "papers", ["created_at"])

    op.create_table(
        "paper_keywords",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "paper_id",
            sa.Integer,
            sa.ForeignKey("papers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "keyword_id",
            sa.Integer,
            sa.ForeignKey("keywords.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint("paper_id", "keyword_id", name="uq_paper_keywords_paper_keyword"),
    )
    op.create_index("ix_paper_keywords_paper_id", "paper_keywords", ["paper_id"])
    op.create_index("ix_paper_keywords_keyword_id", "paper_keywords", ["keyword_id"])

    op.create_table(
        "paystack_donations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("payment_reference", sa.Text, nullable=False, unique=True),
        sa.Column(
            "donor_id",
            sa.Text,
            sa.ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("donor_email", sa.String(255), nullable=False),
        sa.Column("amount", sa.BigInteger, nullable=False),
        sa.Column("currency", sa.String(10), nullable=False),
        sa.Column("paid_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("payload", postgresql.JSONB, nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_paystack_donations_donor_id", "paystack_donations", ["donor_id"])


def downgrade() -> None:
    """Drop all tables."""

    op.drop_table("paystack_donations")
    op.drop_table("paper_keywords")
    op.drop_table("papers")
    op.execute("DROP INDEX IF EXISTS idx_keywords_name_trgm")
    op.drop_table("keywords")
    op.drop_table("categories")
    op.drop_table("fields")
    op.drop_table("admins")
    op.drop_table("users")
    op.drop_table("institutions")
