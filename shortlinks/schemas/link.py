from pydantic import BaseModel, Field, field_serializer
from datetime import datetime, timezone
from typing import Optional


# Request DTOs
class LinkCreateRequest(BaseModel):
    # Checked by utils.validation so failures map to 400 with a specific message
    url: Optional[str] = None
    # custom_code is the Python field, 'customCode' is the JSON key
    custom_code: Optional[str] = Field(None, alias="customCode")

    model_config = {"populate_by_name": True}


# Response DTOs
class LinkResponse(BaseModel):
    id: int
    short_code: str
    long_url: str
    click_count: int
    last_clicked: Optional[datetime] = None
    created_at: datetime
    short_url: str

    model_config = {"from_attributes": True}

    @field_serializer("created_at", "last_clicked")
    def serialize_utc(self, value: Optional[datetime]) -> Optional[str]:
        # Stored as naive UTC; emit an explicit offset
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()


class DeleteResult(BaseModel):
    message: str
