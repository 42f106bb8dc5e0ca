"""SQLAlchemy models"""

from moviediscovery_recommendation_service.models.base import Base
from moviediscovery_recommendation_service.models.favorite import Favorite
from moviediscovery_recommendation_service.models.review import Review
from moviediscovery_recommendation_service.models.user import User

__all__ = [
    "Base",
    "Favorite",
    "Review",
    "User",
]
