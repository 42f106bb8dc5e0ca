"""
Run the personalized recommendation engine for a single user.

Usage:
    python scripts/get_recommendations.py --user-id 42
    python scripts/get_recommendations.py --user-id 42 --max-results 10
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import logging
import argparse
from dataclasses import replace

from moviediscovery_recommendation_service.config import get_recommendation_settings
from moviediscovery_recommendation_service.services import (
    PersonalizedRecommendationService,
    UserNotFoundError
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def print_recommendations(response: dict):
    """
    Log recommendation titles.

    Args:
        response: Engine response with results and total_results
    """
    logger.info(f"\nRecommendations for user {response['user_id']} ({response['total_results']}):")

    if not response['results']:
        logger.info("  No recommendations available")
        return

    for i, movie in enumerate(response['results'], 1):
        logger.info(
            f"  {i}. {movie.get('title')} "
            f"(id: {movie.get('id')}, rating: {movie.get('vote_average')})"
        )


def main():
    """Main execution function."""
    parser = argparse.ArgumentParser(
        description='Get personalized movie recommendations for a user'
    )
    parser.add_argument(
        '--user-id',
        type=int,
        required=True,
        help='User to recommend for'
    )
    parser.add_argument(
        '--max-results',
        type=int,
        default=None,
        help='Override the maximum number of recommendations'
    )

    args = parser.parse_args()
    if args.max_results is not None and args.max_results < 1:
        parser.error("--max-results must be at least 1")

    settings = get_recommendation_settings()
    if args.max_results is not None:
        settings = replace(settings, max_results=args.max_results)

    try:
        service = PersonalizedRecommendationService(settings=settings)
        response = service.get_personalized_recommendations(args.user_id)
        print_recommendations(response)

    except UserNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)

    except Exception as e:
        logger.error(f"Error getting recommendations: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
