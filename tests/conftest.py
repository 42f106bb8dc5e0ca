"""Shared test fixtures and configuration for pytest."""
import pytest
from datetime import UTC, datetime, timedelta
from unittest.mock import Mock
from typing import Dict, List
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from moviediscovery_recommendation_service.config import RecommendationSettings
from moviediscovery_recommendation_service.models.base import Base
from moviediscovery_recommendation_service.models.favorite import Favorite
from moviediscovery_recommendation_service.models.review import Review
from moviediscovery_recommendation_service.models.user import User
from moviediscovery_recommendation_service.services.catalog_service import CatalogService


# ===== Database Fixtures =====

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine):
    """Create a database session for testing."""
    SessionLocal = sessionmaker(bind=test_db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def session_factory(test_db_session):
    """Session factory handing out the test session."""
    return lambda: test_db_session


@pytest.fixture
def add_user(test_db_session):
    """
    Factory fixture that stores a user with reviews, favorites and watched movies.

    reviews is a list of (movie_id, rating) tuples, inserted in order.
    """
    def _add_user(
            user_id: int,
            reviews=(),
            favorites=(),
            watched=None,
            favorite_genres=None
    ) -> User:
        user = User(
            id=user_id,
            username=f'user{user_id}',
            email=f'user{user_id}@example.com',
            watched_movies=list(watched or []),
            favorite_genres=favorite_genres
        )
        test_db_session.add(user)
        test_db_session.flush()

        for movie_id, rating in reviews:
            test_db_session.add(Review(
                user_id=user_id,
                movie_id=movie_id,
                rating=rating,
                content=f'Review of movie {movie_id}'
            ))
            test_db_session.flush()

        base_time = datetime(2024, 1, 1, tzinfo=UTC)
        for i, movie_id in enumerate(favorites):
            test_db_session.add(Favorite(
                user_id=user_id,
                movie_id=movie_id,
                created_at=base_time + timedelta(minutes=i)
            ))

        test_db_session.commit()
        return user

    return _add_user


# ===== Sample Data Fixtures =====

@pytest.fixture
def default_settings() -> RecommendationSettings:
    """Default recommendation settings."""
    return RecommendationSettings()


@pytest.fixture
def sample_movie_details() -> Dict:
    """Sample catalog movie details."""
    return {
        'id': 603,
        'title': 'The Matrix',
        'overview': 'A hacker learns the true nature of his reality.',
        'release_date': '1999-03-30',
        'poster_path': '/f89U3ADr1oiB1s9GkdPOEpXUk5H.jpg',
        'vote_average': 8.2,
        'vote_count': 24000,
        'genres': [{'id': 28, 'name': 'Action'}, {'id': 878, 'name': 'Science Fiction'}]
    }


@pytest.fixture
def sample_discover_results() -> List[Dict]:
    """Sample raw discover/movie results."""
    return [
        {'id': 238, 'title': 'The Godfather', 'vote_average': 8.7, 'vote_count': 19000, 'overview': '...'},
        {'id': 278, 'title': 'The Shawshank Redemption', 'vote_average': 8.7, 'vote_count': 25000},
        {'id': 240, 'title': 'The Godfather Part II', 'vote_average': 8.6, 'vote_count': 11000},
    ]


# ===== Mock Fixtures =====

@pytest.fixture
def mock_catalog():
    """
    Mock CatalogService.

    By default nothing is similar, genre discovery is empty and every
    movie hydrates to a minimal details dict.
    """
    mock = Mock(spec=CatalogService)
    mock.get_similar_movie_ids.return_value = []
    mock.discover_movies_by_genres.return_value = []
    mock.get_movie_details.side_effect = lambda movie_id: {
        'id': movie_id,
        'title': f'Movie {movie_id}'
    }
    return mock


# ===== Configuration Fixtures =====

@pytest.fixture
def mock_config(monkeypatch):
    """Mock configuration values."""
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///:memory:')
    monkeypatch.setenv('TMDB_BASE_URL', 'http://test-catalog/3')
    monkeypatch.setenv('TMDB_API_KEY', 'test-key')


# ===== Azure Functions Fixtures =====

@pytest.fixture
def mock_http_request():
    """Mock Azure Functions HttpRequest."""
    mock_req = Mock()
    mock_req.route_params = {}
    mock_req.params = {}
    mock_req.get_json.return_value = {}
    return mock_req


# ===== Repository Fixtures =====

@pytest.fixture
def review_repository(test_db_session):
    """Create ReviewRepository with test database session."""
    from moviediscovery_recommendation_service.repos import ReviewRepository
    return ReviewRepository(test_db_session)


@pytest.fixture
def user_repository(test_db_session):
    """Create UserRepository with test database session."""
    from moviediscovery_recommendation_service.repos import UserRepository
    return UserRepository(test_db_session)


@pytest.fixture
def favorite_repository(test_db_session):
    """Create FavoriteRepository with test database session."""
    from moviediscovery_recommendation_service.repos import FavoriteRepository
    return FavoriteRepository(test_db_session)


# ===== Script Fixtures =====

@pytest.fixture
def mock_sys_argv(monkeypatch):
    """Mock sys.argv for script testing."""
    def _mock_argv(args):
        monkeypatch.setattr('sys.argv', args)
    return _mock_argv
