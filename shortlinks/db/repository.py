from typing import List, Optional
from sqlalchemy import text
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
import logging

from shortlinks.core.errors import DuplicateCode
from shortlinks.db.models import Link, utcnow

logger = logging.getLogger(__name__)


def create_link(db: Session, short_code: str, long_url: str) -> Link:
    db_link = Link(short_code=short_code, long_url=long_url, click_count=0)
    try:
        db.add(db_link)
        db.commit()
        db.refresh(db_link)
        return db_link
    except IntegrityError as e:
        db.rollback()
        logger.warning("IntegrityError creating Link short_code=%s: %s", short_code, str(e.orig))
        raise DuplicateCode(f"Short code '{short_code}' already exists")


def get_link_by_code(db: Session, short_code: str) -> Optional[Link]:
    return db.query(Link).filter(Link.short_code == short_code).first()


def code_exists(db: Session, short_code: str) -> bool:
    return db.query(Link.id).filter(Link.short_code == short_code).first() is not None


def list_links(db: Session, degrade_to_empty: bool = True) -> List[Link]:
    """All links, newest first. With ``degrade_to_empty`` a store failure yields ``[]``."""
    try:
        return db.query(Link).order_by(Link.created_at.desc(), Link.id.desc()).all()
    except SQLAlchemyError:
        db.rollback()
        if not degrade_to_empty:
            raise
        logger.exception("Listing links failed, returning an empty list")
        return []


def increment_click(db: Session, short_code: str) -> int:
    updated = db.query(Link).filter(Link.short_code == short_code).update({
        Link.click_count: Link.click_count + 1,
        Link.last_clicked: utcnow()
    }, synchronize_session=False)
    db.commit()
    return updated


def delete_link(db: Session, short_code: str) -> bool:
    deleted = db.query(Link).filter(Link.short_code == short_code).delete(synchronize_session=False)
    db.commit()
    return deleted > 0


def health_check(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return False
