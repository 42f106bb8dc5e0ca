"""Repository for reading favorite markers."""

from sqlalchemy.orm import Session

from moviediscovery_recommendation_service.models import Favorite


class FavoriteRepository:
    """
    Repository for reading favorite markers.
    """

    def __init__(self, db: Session):
        self.db = db

    # noinspection PyTypeChecker
    def get_favorite_movie_ids(self, user_id: int) -> list[int]:
        """Get ids of the user's favorite movies, most recently added first."""
        result = (
            self.db.query(Favorite.movie_id)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
            .all()
        )
        return [row[0] for row in result]
