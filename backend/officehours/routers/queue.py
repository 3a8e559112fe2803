"""
Queue API endpoints.

The same set of endpoints is mounted twice:
- `/api/rooms/{code}/queue` for a specific room
- `/api/queue` for the default room
"""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from officehours.errors import NotFoundError
from officehours.models import QueueEntry, Room
from officehours.schemas.auth import MessageResponse
from officehours.schemas.queue import (
    EntrantResponse,
    JoinQueueRequest,
    JoinQueueResponse,
    LookupRequest,
    QueueEntryResponse,
    ServeResponse,
)
from officehours.state import OfficeHours, get_office


def entry_response(entry: QueueEntry) -> QueueEntryResponse:
    return QueueEntryResponse(
        entrant=EntrantResponse.model_validate(entry.entrant),
        position=entry.position,
    )


# =============================================================================
# Room resolution
# =============================================================================

def room_from_path(code: str, office: OfficeHours = Depends(get_office)) -> Room:
    return office.rooms.require_room(code)


def default_room(office: OfficeHours = Depends(get_office)) -> Room:
    return office.rooms.require_room(office.default_room_code)


# =============================================================================
# Endpoints
# =============================================================================

def build_queue_router(resolve_room: Callable[..., Room]) -> APIRouter:
    router = APIRouter()

    @router.post("", response_model=JoinQueueResponse)
    async def join_queue(
        data: JoinQueueRequest,
        room: Room = Depends(resolve_room),
    ):
        """
        Add a student to the end of the line.

        Returns 409 if this phone number already has a place in the line.
        """
        try:
            admission = room.queue.admit(
                data.phone_number,
                topic=data.topic,
                notify_consent=data.consent_to_notify,
            )
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))

        return JoinQueueResponse(
            entrant=EntrantResponse.model_validate(admission.entrant),
            position=admission.position,
            queue_length=admission.queue_length,
        )

    @router.get("", response_model=list[QueueEntryResponse])
    async def get_queue(room: Room = Depends(resolve_room)):
        """Everyone in line, front first."""
        return [entry_response(entry) for entry in room.queue.snapshot()]

    @router.get("/next", response_model=Optional[QueueEntryResponse])
    async def get_next(room: Room = Depends(resolve_room)):
        """The student at the front of the line, or null."""
        entry = room.queue.peek_front()
        return entry_response(entry) if entry else None

    @router.post("/serve", response_model=ServeResponse)
    async def serve_next(room: Room = Depends(resolve_room)):
        """
        Serve the student at the front of the line.

        The next student is notified in the background if they opted in.
        """
        served = room.queue.pop_front()
        if served is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No students in queue")

        return ServeResponse(
            message="Student served successfully",
            entrant=EntrantResponse.model_validate(served.entrant),
        )

    @router.post("/lookup", response_model=QueueEntryResponse)
    async def lookup(
        data: LookupRequest,
        room: Room = Depends(resolve_room),
    ):
        """Find a student's current place in line by phone number."""
        try:
            entry = room.queue.find_by_contact(data.phone_number)
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
        if entry is None:
            raise NotFoundError("Student not found in queue")
        return entry_response(entry)

    @router.delete("/{entrant_id}", response_model=MessageResponse)
    async def drop_student(
        entrant_id: str,
        room: Room = Depends(resolve_room),
    ):
        """Remove a student from anywhere in the line."""
        removed = room.queue.remove(entrant_id)
        if removed is None:
            raise NotFoundError("Student not found in queue")
        return MessageResponse(message="Student dropped from queue")

    return router


router = build_queue_router(room_from_path)
default_router = build_queue_router(default_room)
