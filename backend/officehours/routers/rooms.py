"""
Room API endpoints.

Creating a room requires a staff token; looking one up does not, so students
can join with just the code.
"""

from fastapi import APIRouter, Depends, status

from officehours.auth.dependencies import StaffPrincipal, get_current_staff
from officehours.models import Room
from officehours.routers.queue import entry_response
from officehours.schemas.queue import RoomCreate, RoomDetailResponse, RoomResponse
from officehours.state import OfficeHours, get_office

router = APIRouter()


def room_response(room: Room) -> RoomResponse:
    return RoomResponse(
        code=room.code,
        name=room.name,
        created_by=room.created_by,
        created_at=room.created_at,
        queue_length=len(room.queue),
    )


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    data: RoomCreate,
    office: OfficeHours = Depends(get_office),
    staff: StaffPrincipal = Depends(get_current_staff),
):
    """
    Create a room and return its shareable code.

    If `code` is given and a room with that code already exists, the existing
    room is returned unchanged.
    """
    room = office.rooms.create_room(data.name.strip(), staff.username, requested_code=data.code)
    return room_response(room)


@router.get("", response_model=list[RoomResponse])
async def list_rooms(office: OfficeHours = Depends(get_office)):
    return [room_response(room) for room in office.rooms.list_rooms()]


@router.get("/{code}", response_model=RoomDetailResponse)
async def get_room(code: str, office: OfficeHours = Depends(get_office)):
    """Room details with the current line."""
    room = office.rooms.require_room(code)
    queue = room.queue.snapshot()
    return RoomDetailResponse(
        code=room.code,
        name=room.name,
        created_by=room.created_by,
        created_at=room.created_at,
        queue_length=len(queue),
        queue=[entry_response(entry) for entry in queue],
    )
