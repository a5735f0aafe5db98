"""
Database initialization/migration script.

Run this script to create all required tables in the database.
"""
import logging

from noteful_database.db import engine
from noteful_database.models import Base

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def init_db():
    """Initializes the database by creating all tables if they do not exist."""
    Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    logger.info("Database tables created successfully.")
