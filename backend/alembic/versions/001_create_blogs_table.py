"""Create blogs table

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates the `blogs` table and its created_at index.
Rollback: downgrade() drops the table (destructive: all blogs are lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the blogs table. Column docs live in blog_api/models/blog.py."""
    op.create_table(
        "blogs",
        sa.Column(
            "id",
            sa.Uuid(),
            nullable=False,
            comment="Opaque identifier assigned on insert",
        ),
        sa.Column(
            "title",
            sa.Text(),
            nullable=False,
            comment="Blog title (non-empty)",
        ),
        sa.Column(
            "content",
            sa.Text(),
            nullable=False,
            comment="Blog body",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this blog was created (UTC)",
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this blog was last modified (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # List pages are read in insertion order
    op.create_index("idx_blogs_created_at", "blogs", ["created_at"])


def downgrade() -> None:
    op.drop_index("idx_blogs_created_at", table_name="blogs")
    op.drop_table("blogs")
