"""init schema

Revision ID: 0001_init
Revises:
Create Date: 2026-10-18

"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "items",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("kind", sa.String(length=16), nullable=False),
        sa.Column("title", sa.String(length=512), nullable=False),
        sa.Column("official_rating", sa.String(length=32), nullable=True),
        sa.Column("genres", sa.JSON(), nullable=True),
        sa.Column("studios", sa.JSON(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("keywords", sa.JSON(), nullable=True),
        sa.Column("trailer_ids", sa.JSON(), nullable=True),
        sa.Column("people", sa.JSON(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")
        ),
    )
    op.create_index("ix_items_kind", "items", ["kind"])
    op.create_index("ix_items_title", "items", ["title"])

    op.create_table(
        "user_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=128)),
        sa.Column("item_id", sa.Integer()),
        sa.Column("event_type", sa.String(length=32)),
        sa.Column("ts", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
    )
    op.create_index("ix_user_history_user_id", "user_history", ["user_id"])
    op.create_index("ix_user_history_item_id", "user_history", ["item_id"])


def downgrade():
    op.drop_index("ix_user_history_item_id", table_name="user_history")
    op.drop_index("ix_user_history_user_id", table_name="user_history")
    op.drop_table("user_history")
    op.drop_index("ix_items_title", table_name="items")
    op.drop_index("ix_items_kind", table_name="items")
    op.drop_table("items")
