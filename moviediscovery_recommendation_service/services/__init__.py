"""Service classes"""

from .catalog_service import CatalogService
from .recommendation_service import (
    PersonalizedRecommendationService,
    UserHistory,
    UserNotFoundError,
)

__all__ = [
    "CatalogService",
    "PersonalizedRecommendationService",
    "UserHistory",
    "UserNotFoundError",
]
