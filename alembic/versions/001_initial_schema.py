"""Initial schema.

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000
"""

import sqlalchemy as sa

from alembic import op

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Readers
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(10), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )

    # Books
    op.create_table(
        "books",
        sa.Column("book_id", sa.String(10), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("author", sa.String(255), nullable=False),
        sa.Column("dewey_decimal", sa.String(20), nullable=False, index=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )

    # Loans
    op.create_table(
        "loans",
        sa.Column("loan_id", sa.String(10), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(10),
            sa.ForeignKey("users.user_id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "book_id",
            sa.String(10),
            sa.ForeignKey("books.book_id", ondelete="CASCADE", onupdate="CASCADE"),
            nullable=False,
        ),
        sa.Column("borrowed_at", sa.Date, nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
    )
    op.create_index("idx_loans_user_book", "loans", ["user_id", "book_id"])
    op.create_index("idx_loans_book_user", "loans", ["book_id", "user_id"])


def downgrade() -> None:
    op.drop_index("idx_loans_book_user", table_name="loans")
    op.drop_index("idx_loans_user_book", table_name="loans")
    op.drop_table("loans")
    op.drop_table("books")
    op.drop_table("users")
