"""Service for personalized (hybrid) movie recommendations."""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, List, Dict, Optional, Sequence, Set, Tuple
import logging

import requests
from sqlalchemy.orm import Session

from moviediscovery_recommendation_service.config import (
    RecommendationSettings,
    get_recommendation_settings
)
from moviediscovery_recommendation_service.models.database import session_scope
from moviediscovery_recommendation_service.repos import (
    FavoriteRepository,
    ReviewRepository,
    UserRepository
)
from moviediscovery_recommendation_service.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

# Failures of a single catalog lookup; they cost that lookup's contribution only
CATALOG_LOOKUP_ERRORS = (
    requests.RequestException,
    ValueError,
    TypeError,
    KeyError,
    AttributeError,
)


class UserNotFoundError(LookupError):
    """Raised when recommendations are requested for an unknown user."""

    def __init__(self, user_id: int):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


@dataclass
class UserHistory:
    """What the engine knows about a user for a single request."""

    user_id: int
    reviews: List[Tuple[int, int]]  # (movie_id, rating), store order
    watched_movie_ids: List[int]
    favorite_movie_ids: List[int]
    favorite_genre_ids: List[int]

    @property
    def rated_movie_ids(self) -> List[int]:
        return [movie_id for movie_id, _ in self.reviews]


# noinspection PyMethodMayBeStatic
class PersonalizedRecommendationService:
    """
    Hybrid recommendation engine.

    Blends a collaborative signal (movies rated highly by users whose high
    ratings overlap with the requesting user's) with a content signal
    (catalog "similar movies" for the user's top-rated movies, plus a genre
    discovery slice for declared favorite genres). Candidates are concatenated
    collaborative-first, deduplicated keeping the first occurrence and
    truncated; there is no weighting between the two sources.

    Stateless per request: every call reads fresh data and nothing is cached.
    """

    def __init__(
            self,
            catalog: Optional[CatalogService] = None,
            settings: Optional[RecommendationSettings] = None,
            session_factory: Optional[Callable[[], Session]] = None
    ):
        """
        Initialize the recommendation service.

        Args:
            catalog: Catalog client (default: CatalogService from config)
            settings: Tuning constants (default: from config)
            session_factory: Database session factory (default: SessionLocal)
        """
        self.catalog = catalog or CatalogService()
        self.settings = settings or get_recommendation_settings()
        self.session_factory = session_factory

        logger.info("Initialized PersonalizedRecommendationService")
        logger.info(f"Settings - {self.settings}")

    def get_personalized_recommendations(self, user_id: int) -> Dict:
        """
        Get personalized recommendations for a user.

        Args:
            user_id: User ID

        Returns:
            Dict with user_id, results (movie details) and total_results

        Raises:
            UserNotFoundError: If the user does not exist
            SQLAlchemyError: If the user's history cannot be read
        """
        with session_scope(self.session_factory) as db:
            history = self.load_user_history(db, user_id)
            seen = self.build_seen_set(history)
            high_rated = self.get_high_rated_movie_ids(history)

            # Content lookups only hit the catalog, so they run while the
            # collaborative branch queries the database on this thread
            with ThreadPoolExecutor(max_workers=1) as branch_pool:
                content_future = branch_pool.submit(
                    self.generate_content_candidates,
                    high_rated,
                    history.favorite_genre_ids,
                    seen
                )

                review_repo = ReviewRepository(db)
                neighbors = self.find_neighbors(review_repo, user_id, high_rated)
                collaborative = self.generate_collaborative_candidates(
                    review_repo, neighbors, seen
                )

                content = content_future.result()

        candidates = self.merge_candidates(collaborative, content)
        results = self.hydrate_candidates(candidates)

        logger.info(
            f"✓ User {user_id}: {len(collaborative)} collaborative + {len(content)} content "
            f"candidates -> {len(candidates)} merged -> {len(results)} recommendations"
        )

        return {
            'user_id': user_id,
            'results': results,
            'total_results': len(results)
        }

    # ===== INPUTS =====

    def load_user_history(self, db: Session, user_id: int) -> UserHistory:
        """
        Read the user's reviews, watched list, favorites and genre preferences.

        Any failure here is fatal: without it the engine cannot tell which
        movies the user has already seen.
        """
        user_repo = UserRepository(db)
        user = user_repo.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        reviews = ReviewRepository(db).get_reviews_by_user(user_id)

        return UserHistory(
            user_id=user_id,
            reviews=[(review.movie_id, review.rating) for review in reviews],
            watched_movie_ids=user_repo.get_watched_movie_ids(user),
            favorite_movie_ids=FavoriteRepository(db).get_favorite_movie_ids(user_id),
            favorite_genre_ids=user_repo.get_favorite_genre_ids(user)
        )

    def build_seen_set(self, history: UserHistory) -> Set[int]:
        """Movies the user rated, watched or favorited."""
        return (
            set(history.rated_movie_ids)
            | set(history.watched_movie_ids)
            | set(history.favorite_movie_ids)
        )

    def get_high_rated_movie_ids(self, history: UserHistory) -> List[int]:
        """Movies the user rated at or above the threshold, in store order."""
        threshold = self.settings.high_rating_threshold
        return [movie_id for movie_id, rating in history.reviews if rating >= threshold]

    # ===== COLLABORATIVE =====

    def find_neighbors(
            self,
            review_repo: ReviewRepository,
            user_id: int,
            high_rated_movie_ids: Sequence[int]
    ) -> List[Tuple[int, int]]:
        """
        Find the users whose high ratings overlap most with the user's.

        Args:
            review_repo: Review repository
            user_id: Requesting user (excluded from the result)
            high_rated_movie_ids: The user's high-rated movies

        Returns:
            List of (user_id, overlap_count), highest overlap first, ties by
            ascending user id
        """
        if not high_rated_movie_ids:
            return []

        return review_repo.get_similar_users(
            movie_ids=high_rated_movie_ids,
            min_rating=self.settings.high_rating_threshold,
            exclude_user_id=user_id,
            limit=self.settings.neighbor_limit
        )

    def generate_collaborative_candidates(
            self,
            review_repo: ReviewRepository,
            neighbors: Sequence[Tuple[int, int]],
            seen: Set[int]
    ) -> List[int]:
        """
        Movies the neighbors rated highly that the user has not seen.

        Duplicates across neighbors are kept; merging removes them.
        """
        if not neighbors:
            return []

        neighbor_ids = [neighbor_id for neighbor_id, _ in neighbors]
        reviews = review_repo.get_high_rated_by_users(
            neighbor_ids,
            min_rating=self.settings.high_rating_threshold
        )

        return [review.movie_id for review in reviews if review.movie_id not in seen]

    # ===== CONTENT =====

    def generate_content_candidates(
            self,
            high_rated_movie_ids: Sequence[int],
            favorite_genre_ids: Sequence[int],
            seen: Set[int]
    ) -> List[int]:
        """
        Candidates from catalog similarity and genre discovery.

        Similar movies are looked up for the first few high-rated movies in
        store order. Genre discovery runs only when the user declared favorite
        genres. Each lookup is best effort: a failure contributes nothing.

        Args:
            high_rated_movie_ids: The user's high-rated movies, store order
            favorite_genre_ids: Declared favorite genres
            seen: Movies to exclude

        Returns:
            Similar-movie candidates in seed order, then genre candidates
        """
        seeds = list(high_rated_movie_ids)[:self.settings.similarity_seed_limit]
        genre_ids = list(favorite_genre_ids)

        if not seeds and not genre_ids:
            return []

        workers = min(self.settings.max_workers, len(seeds) + 1)
        with ThreadPoolExecutor(max_workers=max(workers, 1)) as executor:
            genre_future = (
                executor.submit(self._safe_genre_lookup, genre_ids) if genre_ids else None
            )
            similar_batches = list(executor.map(self._safe_similar_lookup, seeds))
            genre_movie_ids = genre_future.result() if genre_future else []

        candidates: List[int] = []
        for batch in similar_batches:
            unseen = [movie_id for movie_id in batch if movie_id not in seen]
            candidates.extend(unseen[:self.settings.similar_per_item_limit])

        unseen_genre = [movie_id for movie_id in genre_movie_ids if movie_id not in seen]
        candidates.extend(unseen_genre[:self.settings.genre_discovery_limit])

        return candidates

    def _safe_similar_lookup(self, movie_id: int) -> List[int]:
        """Similar movie ids, or an empty list if the catalog call fails."""
        try:
            return self.catalog.get_similar_movie_ids(movie_id)
        except CATALOG_LOOKUP_ERRORS as e:
            logger.warning(f"Similar-movie lookup failed for movie {movie_id}: {e}")
            return []

    def _safe_genre_lookup(self, genre_ids: Sequence[int]) -> List[int]:
        """Top-rated movie ids in the genres, or an empty list if the catalog call fails."""
        try:
            movies = self.catalog.discover_movies_by_genres(
                genre_ids,
                sort_by='vote_average.desc',
                min_vote_count=self.settings.min_vote_count
            )
        except CATALOG_LOOKUP_ERRORS as e:
            logger.warning(f"Genre discovery failed for genres {list(genre_ids)}: {e}")
            return []

        return [movie['id'] for movie in movies]

    # ===== MERGE & HYDRATE =====

    def merge_candidates(
            self,
            collaborative: Sequence[int],
            content: Sequence[int]
    ) -> List[int]:
        """
        Concatenate, deduplicate (first occurrence wins) and truncate.

        Args:
            collaborative: Collaborative candidates
            content: Content candidates

        Returns:
            At most max_results unique movie ids
        """
        merged = list(dict.fromkeys([*collaborative, *content]))
        return merged[:self.settings.max_results]

    def hydrate_candidates(self, movie_ids: Sequence[int]) -> List[Dict]:
        """
        Resolve candidate ids to catalog details, keeping candidate order.

        Ids the catalog cannot resolve are dropped.
        """
        if not movie_ids:
            return []

        workers = min(self.settings.max_workers, len(movie_ids))
        with ThreadPoolExecutor(max_workers=max(workers, 1)) as executor:
            details = list(executor.map(self._safe_detail_lookup, movie_ids))

        results = [movie for movie in details if movie is not None]

        dropped = len(movie_ids) - len(results)
        if dropped:
            logger.warning(f"Dropped {dropped}/{len(movie_ids)} candidates that could not be hydrated")

        return results

    def _safe_detail_lookup(self, movie_id: int) -> Optional[Dict]:
        """Movie details, or None if the movie is missing or the call fails."""
        try:
            return self.catalog.get_movie_details(movie_id)
        except CATALOG_LOOKUP_ERRORS as e:
            logger.warning(f"Detail lookup failed for movie {movie_id}: {e}")
            return None

    def get_settings(self) -> Dict:
        """Active tuning constants."""
        return self.settings.to_dict()
