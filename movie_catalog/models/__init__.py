"""ORM Models — SQLAlchemy declarative models for all catalog entities.

Invariants:
    - All models imported here so Base.metadata is complete before create_all /
      alembic autogenerate and string relationship() targets resolve
"""

from movie_catalog.models.user import User  # noqa: F401
from movie_catalog.models.director import Director  # noqa: F401
from movie_catalog.models.genre import Genre  # noqa: F401
from movie_catalog.models.movie import Movie, MovieDetail, movie_genre  # noqa: F401
from movie_catalog.models.movie_user_like import MovieUserLike  # noqa: F401
