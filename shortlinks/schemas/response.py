from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope shared by every JSON endpoint: ``{success, data?, error?}``."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None


def fail(message: str) -> dict:
    return {"success": False, "error": message}
