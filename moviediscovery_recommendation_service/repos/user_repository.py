"""Repository for reading user profile data."""

from sqlalchemy.orm import Session

from moviediscovery_recommendation_service.models import User


class UserRepository:
    """
    Repository for reading user profile data.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User | None:
        """Get a user by ID."""
        return self.db.query(User).filter(User.id == user_id).first()

    def get_watched_movie_ids(self, user: User) -> list[int]:
        """
        Get the ids of movies the user marked as watched.

        Args:
            user: User record

        Returns:
            Movie ids in the order they were marked
        """
        return [int(movie_id) for movie_id in (user.watched_movies or [])]

    def get_favorite_genre_ids(self, user: User) -> list[int]:
        """
        Get the genre ids the user declared as favorites.

        Args:
            user: User record

        Returns:
            Genre ids, empty if none were declared
        """
        return [int(genre_id) for genre_id in (user.favorite_genres or [])]
