from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shortlinks.core.errors import ConflictError, DuplicateCode, InternalError, NotFoundError
from shortlinks.db import repository
from shortlinks.db.models import Link
from shortlinks.services.allocator import CodeAllocator
from shortlinks.utils.validation import validate_link_creation

logger = logging.getLogger(__name__)


class LinkService:

    def __init__(self, allocator: CodeAllocator, max_retries: int = 5, degrade_list_to_empty: bool = True):
        self.allocator = allocator
        self.max_retries = max_retries
        self.degrade_list_to_empty = degrade_list_to_empty

    def create_link(self, db: Session, url: Optional[str], custom_code: Optional[str] = None) -> Link:
        long_url = validate_link_creation(url, custom_code)

        if custom_code:
            code = self.allocator.allocate(db, custom_code)
            try:
                return repository.create_link(db, code, long_url)
            except DuplicateCode:
                # Lost a race against a concurrent request for the same code
                raise ConflictError("Custom code already exists")

        for attempt in range(self.max_retries):
            code = self.allocator.allocate(db)
            try:
                return repository.create_link(db, code, long_url)
            except DuplicateCode:
                logger.info(f"Short code collision on attempt {attempt + 1}/{self.max_retries}")

        logger.error(f"Failed to generate unique short code after {self.max_retries} attempts")
        raise ConflictError("Could not allocate a unique short code, please retry")

    def get_link(self, db: Session, short_code: str) -> Link:
        db_link = repository.get_link_by_code(db, short_code)
        if db_link is None:
            raise NotFoundError("Link not found")
        return db_link

    def list_links(self, db: Session) -> List[Link]:
        try:
            return repository.list_links(db, degrade_to_empty=self.degrade_list_to_empty)
        except SQLAlchemyError:
            logger.exception("Listing links failed")
            raise InternalError("Failed to list links")

    def delete_link(self, db: Session, short_code: str) -> None:
        if not repository.delete_link(db, short_code):
            logger.info(f"Delete 404: Short code not found: {short_code}")
            raise NotFoundError("Link not found")
