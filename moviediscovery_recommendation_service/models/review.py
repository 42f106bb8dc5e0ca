"""A user's rating and review of a movie."""

from datetime import UTC, datetime

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)

from moviediscovery_recommendation_service.models.base import Base


class Review(Base):
    """A user's rating (1-10) and review text for a movie.

    One review per (user, movie) pair.
    """

    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    movie_id = Column(Integer, nullable=False)
    rating = Column(Integer, nullable=False)
    content = Column(Text, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_review_user_movie"),
        CheckConstraint("rating >= 1 AND rating <= 10", name="ck_review_rating_range"),
        # Neighbor lookups filter on movie and rating
        Index("idx_review_movie_rating", "movie_id", "rating"),
        Index("idx_review_user_rating", "user_id", "rating"),
    )

    def __repr__(self):
        return (
            f"<Review(user_id={self.user_id}, movie_id={self.movie_id}, "
            f"rating={self.rating})>"
        )
