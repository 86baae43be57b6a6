#!/usr/bin/env python3
"""
Database table creation script.
Creates the tables used by the TicketDesk capacity planning API.
"""

import logging
import sys

from ticketdesk_api.config import settings
from ticketdesk_api.database import db

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    """Main function to create database tables."""
    logger.info(f"Creating tables for environment: {settings.environment}")

    try:
        db.create_tables()
    except Exception as e:
        logger.error(f"❌ Table creation failed: {e}")
        sys.exit(1)

    logger.info("✅ Tables created successfully!")


if __name__ == "__main__":
    main()
