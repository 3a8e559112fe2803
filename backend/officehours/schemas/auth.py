"""
Pydantic schemas for authentication endpoints.
"""

from pydantic import BaseModel, Field


# Request schemas

class StaffLogin(BaseModel):
    """Schema for staff login."""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


# Response schemas

class StaffResponse(BaseModel):
    """Schema for the authenticated staff member."""
    username: str


class TokenResponse(BaseModel):
    """Schema for authentication token response."""
    access_token: str
    token_type: str = "bearer"
    username: str


class MessageResponse(BaseModel):
    """Schema for simple message responses."""
    message: str
