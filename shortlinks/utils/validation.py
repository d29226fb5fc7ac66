from typing import Optional

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shortlinks.core.errors import InvalidFormat, ValidationError
from shortlinks.utils.encoding import is_valid_short_code

MAX_URL_LENGTH = 2048

_http_url = TypeAdapter(HttpUrl)


def is_valid_url(url: str) -> bool:
    """Absolute http/https URL with a host."""
    try:
        _http_url.validate_python(url)
    except PydanticValidationError:
        return False
    return True


def validate_link_creation(url: Optional[str], custom_code: Optional[str]) -> str:
    """Check a creation request, raising on the first violated rule.

    Returns the trimmed URL, which is what gets stored.
    """
    url = (url or "").strip()
    if not url:
        raise ValidationError("URL is required")
    if len(url) > MAX_URL_LENGTH:
        raise ValidationError(f"URL must be at most {MAX_URL_LENGTH} characters")
    if not is_valid_url(url):
        raise ValidationError("Invalid URL format. Must start with http:// or https://")
    if custom_code and not is_valid_short_code(custom_code):
        raise InvalidFormat("Custom code must be 6-8 alphanumeric characters")
    return url
