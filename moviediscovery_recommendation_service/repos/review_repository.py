"""Repository for reading user reviews (ratings) from the database."""

from typing import List, Sequence, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import desc, and_, func
import logging

from moviediscovery_recommendation_service.models import Review

logger = logging.getLogger(__name__)


class ReviewRepository:
    """
    Repository for reading user reviews (ratings) from the database.
    """

    def __init__(self, db: Session):
        self.db = db

    # noinspection PyTypeChecker
    def get_reviews_by_user(self, user_id: int) -> List[Review]:
        """
        Get all reviews written by a user.

        Reviews are returned in insertion order (ascending review id).

        Args:
            user_id: User ID

        Returns:
            List of Review objects
        """
        return (
            self.db.query(Review)
            .filter(Review.user_id == user_id)
            .order_by(Review.id)
            .all()
        )

    def get_similar_users(
            self,
            movie_ids: Sequence[int],
            min_rating: int,
            exclude_user_id: int,
            limit: int = 5
    ) -> List[Tuple[int, int]]:
        """
        Find users who rated any of the given movies at or above min_rating.

        Users are ranked by how many of the movies they rated highly. Equal
        counts are ordered by ascending user id.

        Args:
            movie_ids: Movies to match against
            min_rating: Minimum rating for a review to count
            exclude_user_id: User to leave out (the requesting user)
            limit: Maximum number of users to return

        Returns:
            List of (user_id, overlap_count) tuples, highest overlap first
        """
        if not movie_ids:
            return []

        overlap = func.count(Review.id).label("overlap")
        results = (
            self.db.query(Review.user_id, overlap)
            .filter(
                and_(
                    Review.movie_id.in_(list(movie_ids)),
                    Review.rating >= min_rating,
                    Review.user_id != exclude_user_id
                )
            )
            .group_by(Review.user_id)
            .order_by(desc(overlap), Review.user_id)
            .limit(limit)
            .all()
        )

        return [(row[0], row[1]) for row in results]

    # noinspection PyTypeChecker
    def get_high_rated_by_users(
            self,
            user_ids: Sequence[int],
            min_rating: int
    ) -> List[Review]:
        """
        Get reviews by any of the given users rated at or above min_rating.

        Args:
            user_ids: Users whose reviews to fetch
            min_rating: Minimum rating

        Returns:
            List of Review objects in insertion order
        """
        if not user_ids:
            return []

        return (
            self.db.query(Review)
            .filter(
                and_(
                    Review.user_id.in_(list(user_ids)),
                    Review.rating >= min_rating
                )
            )
            .order_by(Review.id)
            .all()
        )
