"""
Pydantic schemas for TA roster endpoints.
"""

from pydantic import BaseModel, Field


class TACreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class TAResponse(BaseModel):
    id: str
    name: str
    is_active: bool

    class Config:
        from_attributes = True
