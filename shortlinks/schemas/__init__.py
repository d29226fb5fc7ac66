# re-export common schemas for simpler imports
from .link import LinkCreateRequest, LinkResponse, DeleteResult
from .response import ApiResponse

__all__ = [
    "LinkCreateRequest",
    "LinkResponse",
    "DeleteResult",
    "ApiResponse",
]
