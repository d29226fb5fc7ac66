from typing import Optional
import logging
import secrets

from sqlalchemy.orm import Session

from shortlinks.core.errors import AlreadyExists, InvalidFormat
from shortlinks.db import repository
from shortlinks.utils.encoding import (
    RESERVED_CODES,
    SHORT_CODE_LENGTH,
    generate_short_code,
    is_valid_short_code,
)

logger = logging.getLogger(__name__)


class CodeAllocator:
    """Produces the short code for a new link.

    A custom code is checked for format (before touching the store) and then for
    uniqueness. A generated code is a uniform Base62 draw with no store pre-check;
    the unique constraint on insert is the only arbiter for those.
    """

    def __init__(self, rng=None, length: int = SHORT_CODE_LENGTH):
        self.rng = rng or secrets.SystemRandom()
        self.length = length

    def generate(self) -> str:
        code = generate_short_code(self.length, self.rng)
        while code in RESERVED_CODES:
            code = generate_short_code(self.length, self.rng)
        return code

    def allocate(self, db: Session, custom_code: Optional[str] = None) -> str:
        if not custom_code:
            return self.generate()

        if not is_valid_short_code(custom_code) or custom_code in RESERVED_CODES:
            raise InvalidFormat("Custom code must be 6-8 alphanumeric characters")
        if repository.code_exists(db, custom_code):
            logger.warning(f"Custom code collision: '{custom_code}'")
            raise AlreadyExists("Custom code already exists")
        return custom_code
