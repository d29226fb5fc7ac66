import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shortlinks.core.config import Settings
from shortlinks.db.models import Base

logger = logging.getLogger(__name__)


def _engine_options(settings: Settings) -> dict:
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        options = {
            "connect_args": {"check_same_thread": False, "timeout": settings.DB_POOL_TIMEOUT},
        }
        # In-memory databases live inside one connection, so every session must share it
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "pool_recycle": settings.DB_POOL_RECYCLE,
    }


class Database:
    """Owns the engine and its connection pool. Built on startup, disposed on shutdown."""

    def __init__(self, settings: Settings):
        self.engine = create_engine(settings.DATABASE_URL, future=True, **_engine_options(settings))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, future=True)

    def create_all(self):
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database models initialized/checked.")

    def verify_connection(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connection verified")
            return True
        except Exception as e:
            logger.error(f"Database connection failed: {e}")
            return False

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """
    FastAPI dependency: yield a session from the app's Database and ensure it's closed.
    Usage: db: Session = Depends(database.get_db)
    """
    db = request.app.state.database.SessionLocal()
    try:
        yield db
    finally:
        db.close()
