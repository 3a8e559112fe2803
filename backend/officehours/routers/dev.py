"""
Development-only endpoints. Only mounted when APP_ENV=development.
"""

from fastapi import APIRouter, Depends

from officehours.schemas.auth import MessageResponse
from officehours.state import OfficeHours, get_office

router = APIRouter()


@router.post("/clear", response_model=MessageResponse)
async def clear_all(office: OfficeHours = Depends(get_office)):
    """Drop every TA and every student in line."""
    office.clear_all()
    return MessageResponse(message="All data cleared")
