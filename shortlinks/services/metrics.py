import logging

from fastapi import BackgroundTasks

from shortlinks.db import repository
from shortlinks.db.database import Database

logger = logging.getLogger(__name__)


def record_click(database: Database, short_code: str):
    """Increment the click counter in its own session. Failures are logged, never raised."""
    db = database.SessionLocal()
    try:
        updated = repository.increment_click(db, short_code)
        if updated:
            logger.info("metrics.record_click: DB counters updated for %s", short_code)
    except Exception:
        logger.exception("metrics.record_click: failed to update DB for %s", short_code)
    finally:
        db.close()


def schedule_click(background_tasks: BackgroundTasks, database: Database, short_code: str):
    background_tasks.add_task(record_click, database, short_code)
