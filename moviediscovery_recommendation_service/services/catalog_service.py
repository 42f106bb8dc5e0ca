"""Client for the external movie catalog (TMDB) API"""
from typing import Any, List, Dict, Optional, Sequence
import logging
import threading
import requests

from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from moviediscovery_recommendation_service.config import get_catalog_api_url, get_catalog_api_key

logger = logging.getLogger(__name__)


class CatalogService:
    """Client for the external movie catalog (TMDB) API.

    Methods raise requests exceptions on failure; callers decide whether a
    failure is fatal. Responses with an unexpected shape are treated as empty.

    Each thread gets its own requests.Session, since one client is shared by
    concurrent invocations and by the recommendation worker pools.
    """

    def __init__(
            self,
            base_url: Optional[str] = None,
            api_key: Optional[str] = None,
            timeout: int = 10
    ):
        self.base_url = (base_url or get_catalog_api_url()).rstrip('/')
        self.api_key = api_key or get_catalog_api_key()
        self.timeout = timeout
        self._local = threading.local()

        if not self.api_key:
            logger.warning("TMDB_API_KEY is not configured; catalog requests will fail")

    @property
    def session(self) -> requests.Session:
        """Session for the calling thread, created on first use."""
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._build_session()
            self._local.session = session
        return session

    def _build_session(self) -> requests.Session:
        # Configure session with retries
        session = requests.Session()
        session.params = {'api_key': self.api_key}
        retry_strategy = Retry(
            total=3,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        # noinspection HttpUrlsUsage
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    def _get(self, path: str, params: Optional[Dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def _get_results(self, path: str, params: Optional[Dict] = None) -> List[Dict]:
        """Movie objects from a paged list response, skipping malformed entries."""
        data = self._get(path, params=params)

        results = data.get('results') if isinstance(data, dict) else None
        if not isinstance(results, list):
            logger.warning(f"Unexpected catalog response for {path}: no results list")
            return []

        return [
            movie for movie in results
            if isinstance(movie, dict) and isinstance(movie.get('id'), int)
        ]

    # ===== MOVIE ENDPOINTS =====

    def get_similar_movie_ids(self, movie_id: int) -> List[int]:
        """Fetch ids of movies the catalog considers similar to movie_id"""
        return [movie['id'] for movie in self._get_results(f"/movie/{movie_id}/similar")]

    def discover_movies_by_genres(
            self,
            genre_ids: Sequence[int],
            sort_by: str = 'vote_average.desc',
            min_vote_count: int = 100,
            page: int = 1
    ) -> List[Dict]:
        """
        Discover movies in the given genres.

        Args:
            genre_ids: Genre ids, matched with AND semantics by the catalog
            sort_by: Catalog sort order
            min_vote_count: Minimum vote count, filters out thinly rated movies
            page: Result page

        Returns:
            List of dicts with id, title, vote_average and vote_count
        """
        params = {
            'with_genres': ','.join(str(genre_id) for genre_id in genre_ids),
            'sort_by': sort_by,
            'vote_count.gte': min_vote_count,
            'page': page
        }

        return [
            {
                'id': movie['id'],
                'title': movie.get('title'),
                'vote_average': movie.get('vote_average'),
                'vote_count': movie.get('vote_count'),
            }
            for movie in self._get_results('/discover/movie', params=params)
        ]

    def get_movie_details(self, movie_id: int) -> Optional[Dict]:
        """
        Fetch full display metadata for a movie.

        Args:
            movie_id: Movie ID

        Returns:
            Movie details, or None if the catalog has no such movie or
            answers with something other than a movie object
        """
        try:
            data = self._get(f"/movie/{movie_id}")
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                logger.info(f"Movie {movie_id} not found in catalog")
                return None
            raise

        if not isinstance(data, dict) or data.get('id') is None:
            logger.warning(f"Unexpected catalog response for movie {movie_id}")
            return None

        return data
