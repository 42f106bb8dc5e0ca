"""Repository classes"""

from moviediscovery_recommendation_service.repos.favorite_repository import FavoriteRepository
from moviediscovery_recommendation_service.repos.review_repository import ReviewRepository
from moviediscovery_recommendation_service.repos.user_repository import UserRepository

__all__ = [
    "FavoriteRepository",
    "ReviewRepository",
    "UserRepository",
]
