"""
Pydantic schemas for queue and room endpoints.

Entrant responses never include the phone number or its fingerprint.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# Request schemas

class JoinQueueRequest(BaseModel):
    """A student asking for a place in line."""
    phone_number: str = Field(..., min_length=1, max_length=32)
    topic: Optional[str] = Field(None, max_length=200)
    consent_to_notify: bool = False


class LookupRequest(BaseModel):
    """Find your own place in line by phone number."""
    phone_number: str = Field(..., min_length=1, max_length=32)


class RoomCreate(BaseModel):
    """Schema for creating a room."""
    name: str = Field(..., min_length=1, max_length=100)
    code: Optional[str] = Field(None, max_length=16)  # Omit to generate one


# Response schemas

class EntrantResponse(BaseModel):
    """Public view of a student in line."""
    id: str
    display_name: str
    topic: Optional[str] = None
    notify_consent: bool
    joined_at: datetime

    class Config:
        from_attributes = True


class QueueEntryResponse(BaseModel):
    entrant: EntrantResponse
    position: int

    class Config:
        from_attributes = True


class JoinQueueResponse(BaseModel):
    entrant: EntrantResponse
    position: int
    queue_length: int

    class Config:
        from_attributes = True


class ServeResponse(BaseModel):
    message: str
    entrant: EntrantResponse


class RoomResponse(BaseModel):
    code: str
    name: str
    created_by: str
    created_at: datetime
    queue_length: int


class RoomDetailResponse(RoomResponse):
    queue: list[QueueEntryResponse]


class NotificationTestRequest(BaseModel):
    phone_number: str = Field(..., min_length=1, max_length=32)
    message: str = Field(..., min_length=1, max_length=1600)
