"""create_tours_tables

Revision ID: 3f2a9c1d7b10
Revises: 
Create Date: 2026-10-19 09:12:44.218305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2a9c1d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tours",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=40), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        sa.Column("max_group_size", sa.Integer(), nullable=False),
        sa.Column("difficulty", sa.String(length=20), nullable=False),
        sa.Column("rating_average", sa.Float(), nullable=False),
        sa.Column("ratings_quantity", sa.Integer(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("price_discount", sa.Float(), nullable=True),
        sa.Column("summary", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_cover", sa.String(length=255), nullable=True),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tours_name", "tours", ["name"], unique=True)
    op.create_index("ix_tours_difficulty", "tours", ["difficulty"])
    op.create_index("ix_tours_created_at", "tours", ["created_at"])

    op.create_table(
        "tour_start_dates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("tour_id", sa.String(length=36), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["tour_id"], ["tours.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_tour_start_dates_tour_id", "tour_start_dates", ["tour_id"])
    op.create_index("ix_tour_start_dates_start_date", "tour_start_dates", ["start_date"])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_tour_start_dates_start_date", table_name="tour_start_dates")
    op.drop_index("ix_tour_start_dates_tour_id", table_name="tour_start_dates")
    op.drop_table("tour_start_dates")
    op.drop_index("ix_tours_created_at", table_name="tours")
    op.drop_index("ix_tours_difficulty", table_name="tours")
    op.drop_index("ix_tours_name", table_name="tours")
    op.drop_table("tours")
