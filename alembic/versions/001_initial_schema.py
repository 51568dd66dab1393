"""Initial schema — users, directors, genres, movies, movie_details, movie_genre, movie_user_like.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("role", sa.Integer, nullable=False, server_default="2"),
        *_timestamps(),
    )

    op.create_table(
        "directors",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("dob", sa.Date, nullable=False),
        sa.Column("nationality", sa.String(100), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "genres",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(100), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "movies",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False, unique=True),
        sa.Column("like_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("dislike_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("movie_file_path", sa.String(500), nullable=False),
        sa.Column("director_id", sa.Integer, sa.ForeignKey("directors.id"), nullable=False),
        sa.Column("creator_id", sa.Integer, sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "movie_details",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("detail", sa.Text, nullable=False),
        sa.Column("movie_id", sa.Integer, sa.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, unique=True),
        *_timestamps(),
    )

    op.create_table(
        "movie_genre",
        sa.Column("movie_id", sa.Integer, sa.ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("genre_id", sa.Integer, sa.ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "movie_user_like",
        sa.Column("movie_id", sa.Integer, sa.ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("is_like", sa.Boolean, nullable=False),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("movie_user_like")
    op.drop_table("movie_genre")
    op.drop_table("movie_details")
    op.drop_table("movies")
    op.drop_table("genres")
    op.drop_table("directors")
    op.drop_table("users")
