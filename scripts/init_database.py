"""
Create the tables the recommendation service reads.

Usage:
    python scripts/init_database.py
"""

import sys
from pathlib import Path

# Add parent directory to path
project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

import logging

from sqlalchemy.engine import Engine

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def create_tables(engine: Engine) -> list:
    """
    Create all model tables that do not exist yet.

    Args:
        engine: SQLAlchemy engine

    Returns:
        Sorted list of table names known to the models
    """
    from moviediscovery_recommendation_service.models import Base

    Base.metadata.create_all(engine)
    table_names = sorted(Base.metadata.tables.keys())
    logger.info(f"✓ Tables ready: {', '.join(table_names)}")
    return table_names


def main():
    """Main execution function."""
    try:
        from moviediscovery_recommendation_service.models.database import engine

        logger.info("="*70)
        logger.info("INITIALIZE DATABASE")
        logger.info("="*70)
        create_tables(engine)

    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
