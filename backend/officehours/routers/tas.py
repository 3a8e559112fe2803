"""
TA roster endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from officehours.auth.dependencies import StaffPrincipal, get_current_staff
from officehours.errors import NotFoundError
from officehours.schemas.auth import MessageResponse
from officehours.schemas.tas import TACreate, TAResponse
from officehours.state import OfficeHours, get_office

router = APIRouter()


@router.post("", response_model=TAResponse)
async def add_ta(
    data: TACreate,
    office: OfficeHours = Depends(get_office),
    _staff: StaffPrincipal = Depends(get_current_staff),
):
    try:
        ta = office.roster.add(data.name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return TAResponse.model_validate(ta)


@router.delete("/{ta_id}", response_model=MessageResponse)
async def remove_ta(
    ta_id: str,
    office: OfficeHours = Depends(get_office),
    _staff: StaffPrincipal = Depends(get_current_staff),
):
    if not office.roster.remove(ta_id):
        raise NotFoundError("TA not found")
    return MessageResponse(message="TA removed successfully")


@router.get("", response_model=list[TAResponse])
async def list_tas(office: OfficeHours = Depends(get_office)):
    """TAs currently on duty."""
    return [TAResponse.model_validate(ta) for ta in office.roster.list_active()]
