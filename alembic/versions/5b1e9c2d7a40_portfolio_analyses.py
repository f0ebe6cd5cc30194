"""portfolio_analyses

Revision ID: 5b1e9c2d7a40
Create Date: 2026-10-12
"""

from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b1e9c2d7a40"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "portfolio_analyses",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            primary_key=True,
            server_default=sa.text("gen_random_uuid()"),
        ),
        sa.Column("url", sa.String(1000), nullable=False),
        sa.Column("status", sa.String(20), server_default="pending", nullable=False),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("result", postgresql.JSONB(), nullable=True),
        sa.Column("analysis", sa.Text(), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")
        ),
    )
    op.create_index(
        op.f("ix_portfolio_analyses_url"), "portfolio_analyses", ["url"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_portfolio_analyses_url"), table_name="portfolio_analyses")
    op.drop_table("portfolio_analyses")
