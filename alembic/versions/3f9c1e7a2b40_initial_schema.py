"""initial_schema

Revision ID: 3f9c1e7a2b40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1e7a2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False,
                  comment="User's email address (used for login)"),
        sa.Column('hashed_password', sa.String(length=255), nullable=False,
                  comment='Bcrypt hashed password'),
        sa.Column('role', sa.String(length=20), nullable=False,
                  comment='Account role (user, admin)'),
        sa.Column('name', sa.String(length=255), nullable=False,
                  comment='Display name'),
        sa.Column('photo_url', sa.Text(), nullable=True,
                  comment="URL to the user's profile photo"),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                  comment='When the user registered'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_created_at'), 'users', ['created_at'], unique=False)

    # genres
    op.create_table(
        'genres',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False,
                  comment='Name books are tagged with'),
        sa.Column('description', sa.Text(), nullable=True,
                  comment='Free-text description shown in the catalog'),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True),
                  server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_genres_name'), 'genres', ['name'], unique=True)

    # books
    op.create_table(
        'books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False, comment='Book title'),
        sa.Column('author', sa.String(length=255), nullable=True, comment='Author name'),
        sa.Column('description', sa.Text(), nullable=True,
                  comment='Book description or summary'),
        sa.Column('cover_image', sa.Text(), nullable=True,
                  comment='URL of the cover image'),
        sa.Column('total_pages', sa.Integer(), nullable=True,
                  comment='Number of pages in the book'),
        sa.Column('publication_year', sa.Integer(), nullable=True,
                  comment='Year of first publication'),
        sa.Column('rating', sa.Float(), nullable=False, comment='Catalog rating (0-5)'),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True),
                  server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_rating'), 'books', ['rating'], unique=False)

    # book_genres
    op.create_table(
        'book_genres',
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('genre_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['genre_id'], ['genres.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('book_id', 'genre_id'),
        comment='Association table linking books to their genres',
    )

    # reviews
    op.create_table(
        'reviews',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False, comment='Rating from 1-5 stars'),
        sa.Column('comment', sa.Text(), nullable=True, comment='Review text content'),
        sa.Column('name', sa.String(length=255), nullable=False,
                  comment='Reviewer display name'),
        sa.Column('email', sa.String(length=255), nullable=False, comment='Reviewer email'),
        sa.Column('date', sa.String(length=64), nullable=False,
                  comment='Submission timestamp as sent/returned to clients'),
        sa.Column('status', sa.String(length=20), nullable=False,
                  comment='Moderation status (pending, approved)'),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_review_rating_range'),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reviews_book_id'), 'reviews', ['book_id'], unique=False)
    op.create_index(op.f('ix_reviews_status'), 'reviews', ['status'], unique=False)
    op.create_index(
        'ix_reviews_moderation_key',
        'reviews',
        ['book_id', 'email', 'date'],
        unique=False,
    )

    # shelf_entries
    op.create_table(
        'shelf_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('shelf', sa.String(length=32), nullable=False,
                  comment='Shelf name (want-to-read, currently-reading, read)'),
        sa.Column('email', sa.String(length=255), nullable=False, comment='Owner email'),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('shelf', 'email', 'book_id', name='uq_shelf_email_book'),
    )
    op.create_index(op.f('ix_shelf_entries_shelf'), 'shelf_entries', ['shelf'], unique=False)
    op.create_index(op.f('ix_shelf_entries_email'), 'shelf_entries', ['email'], unique=False)
    op.create_index(op.f('ix_shelf_entries_book_id'), 'shelf_entries', ['book_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_shelf_entries_book_id'), table_name='shelf_entries')
    op.drop_index(op.f('ix_shelf_entries_email'), table_name='shelf_entries')
    op.drop_index(op.f('ix_shelf_entries_shelf'), table_name='shelf_entries')
    op.drop_table('shelf_entries')

    op.drop_index('ix_reviews_moderation_key', table_name='reviews')
    op.drop_index(op.f('ix_reviews_status'), table_name='reviews')
    op.drop_index(op.f('ix_reviews_book_id'), table_name='reviews')
    op.drop_table('reviews')

    op.drop_table('book_genres')

    op.drop_index(op.f('ix_books_rating'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')

    op.drop_index(op.f('ix_genres_name'), table_name='genres')
    op.drop_table('genres')

    op.drop_index(op.f('ix_users_created_at'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_table('users')
