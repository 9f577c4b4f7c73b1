"""Create catalog tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates `publishers`, `authors`, `books` and the `book_authors`
       association table.
How:   Natural string primary keys (publisher name, author name, ISBN);
       book_authors rows are removed by the database when either side goes.

Rollback: downgrade() drops all four tables (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "publishers",
        sa.Column(
            "publisher_name",
            sa.String(255),
            nullable=False,
            comment="Publisher name, the natural key",
        ),
        sa.PrimaryKeyConstraint("publisher_name"),
    )

    op.create_table(
        "authors",
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Author name, the natural key",
        ),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("name"),
    )

    op.create_table(
        "books",
        sa.Column(
            "isbn",
            sa.String(255),
            nullable=False,
            comment="ISBN, globally unique book identifier",
        ),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("publisher_name", sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(["publisher_name"], ["publishers.publisher_name"]),
        sa.PrimaryKeyConstraint("isbn"),
    )
    op.create_index("ix_books_publisher_name", "books", ["publisher_name"])

    op.create_table(
        "book_authors",
        sa.Column("book_isbn", sa.String(255), nullable=False),
        sa.Column("author_name", sa.String(255), nullable=False),
        sa.ForeignKeyConstraint(["book_isbn"], ["books.isbn"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_name"], ["authors.name"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("book_isbn", "author_name"),
    )


def downgrade() -> None:
    op.drop_table("book_authors")
    op.drop_index("ix_books_publisher_name", table_name="books")
    op.drop_table("books")
    op.drop_table("authors")
    op.drop_table("publishers")
