import logging
from collections.abc import Generator

from sqlalchemy import text
from sqlmodel import Session, SQLModel, create_engine

from ticketdesk_api.config import settings

logger = logging.getLogger(__name__)

# Database pool configuration constants
POOL_SIZE_DEFAULT = 5
MAX_OVERFLOW_DEFAULT = 10
POOL_TIMEOUT_DEFAULT = 30
POOL_RECYCLE_DEFAULT = 3600


class Database:
    """Database connection manager"""

    def __init__(self, database_url: str | None = None):
        self._database_url = database_url
        self._engine = None

    @property
    def database_url(self) -> str:
        return self._database_url or settings.database_url

    def get_engine(self):
        """Get SQLModel engine for database operations"""
        if self._engine is None:
            database_url = self.database_url

            if database_url.startswith("sqlite"):
                # SQLite connections are shared across FastAPI worker threads
                self._engine = create_engine(
                    database_url,
                    echo=settings.debug,
                    connect_args={"check_same_thread": False},
                )
            else:
                self._engine = create_engine(
                    database_url,
                    echo=settings.debug,
                    pool_pre_ping=True,
                    pool_recycle=POOL_RECYCLE_DEFAULT,
                    pool_size=POOL_SIZE_DEFAULT,
                    max_overflow=MAX_OVERFLOW_DEFAULT,
                    pool_timeout=POOL_TIMEOUT_DEFAULT,
                    connect_args={"application_name": "TicketDesk-API"},
                )

            logger.info("✅ SQLModel engine initialized")
        return self._engine

    def create_tables(self) -> None:
        """Create all tables known to SQLModel metadata"""
        # Import models so their tables are registered
        from ticketdesk_api import models  # noqa: F401

        SQLModel.metadata.create_all(self.get_engine())
        logger.info("✅ Database tables ensured")

    def get_session(self) -> Generator[Session, None, None]:
        """Get database session"""
        engine = self.get_engine()
        with Session(engine) as session:
            yield session

    async def health_check(self) -> bool:
        """Check database connection health"""
        try:
            with Session(self.get_engine()) as session:
                session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"❌ Database health check failed: {e}")
            return False


# Global database instance
db = Database()


# Dependency for FastAPI
def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency to get database session"""
    yield from db.get_session()
