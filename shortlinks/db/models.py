from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    # Naive UTC, so values compare equal before and after a SQLite round trip
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Link(Base):
    __tablename__ = "links"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Either caller-supplied (6-8 chars) or generated (6 chars)
    short_code = Column(String(8), unique=True, index=True, nullable=False)
    long_url = Column(String(2048), nullable=False)

    click_count = Column(Integer, nullable=False, default=0)
    last_clicked = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
