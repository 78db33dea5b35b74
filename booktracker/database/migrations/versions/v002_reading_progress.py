"""Reading progress columns on books and the reading_sessions table.

Revision: 2
"""

from alembic.operations import Operations
import sqlalchemy as sa

revision: int = 2
description: str = "reading progress and reading sessions"


def upgrade(op: Operations) -> None:
    op.add_column("books", sa.Column("pages_read", sa.Integer, nullable=False, server_default="0"))
    op.add_column("books", sa.Column("total_pages", sa.Integer, nullable=False, server_default="0"))
    op.add_column("books", sa.Column("tags", sa.Text, nullable=False, server_default=""))
    op.add_column("books", sa.Column("goal_end_date", sa.Text, nullable=False, server_default=""))

    op.create_table(
        "reading_sessions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("book_id", sa.Integer, sa.ForeignKey("books.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("start_pages_read", sa.Integer, nullable=False, server_default="0"),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_pages_read", sa.Integer, nullable=True),
    )
    op.create_index("idx_reading_sessions_user_id", "reading_sessions", ["user_id"])
    op.create_index("idx_reading_sessions_book_id", "reading_sessions", ["book_id"])
