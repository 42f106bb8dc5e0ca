"""User profile data read by the recommendation engine"""
from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, Integer, String

from moviediscovery_recommendation_service.models.base import Base


class User(Base):
    """Application user.

    Only the columns the recommendation engine reads are mapped here;
    credentials and avatars live with the account service.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    username = Column(String(50), unique=True, nullable=False)
    email = Column(String(255), nullable=True)

    # Ordered list of movie ids, no duplicates
    watched_movies = Column(JSON, nullable=True, default=list)
    # Declared favorite genre ids (TMDB genre ids)
    favorite_genres = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"
