"""
Process-wide service container.

Wires the room directory, roster and notification dispatcher together from
settings. One instance lives on `app.state.office` for the lifetime of the
application; tests build their own.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from officehours.config import Settings
from officehours.services.delivery import DeliveryChannel, build_delivery_channel
from officehours.services.fingerprint import IdentityHasher
from officehours.services.notifications import NotificationDispatcher
from officehours.services.room_directory import RoomDirectory
from officehours.services.roster import TARegistry


@dataclass
class OfficeHours:
    settings: Settings
    rooms: RoomDirectory
    roster: TARegistry
    dispatcher: NotificationDispatcher

    @property
    def default_room_code(self) -> str:
        return self.settings.default_room_code.strip().upper()

    def clear_all(self) -> None:
        """Empty the roster and every room's line. Rooms themselves are kept."""
        self.roster.clear()
        for room in self.rooms.list_rooms():
            room.queue.clear()


def build_office_hours(
    settings: Settings,
    channel: Optional[DeliveryChannel] = None,
) -> OfficeHours:
    """Create the services and the reserved default room."""
    dispatcher = NotificationDispatcher(
        channel or build_delivery_channel(settings),
        notify_on_serve=settings.notify_on_serve,
        notify_on_remove=settings.notify_on_remove,
    )
    rooms = RoomDirectory(
        IdentityHasher(settings.fingerprint_key),
        code_alphabet=settings.room_code_alphabet,
        code_length=settings.room_code_length,
        listeners=[dispatcher],
    )
    rooms.ensure_default_room(settings.default_room_code, settings.default_room_name)
    return OfficeHours(
        settings=settings,
        rooms=rooms,
        roster=TARegistry(),
        dispatcher=dispatcher,
    )


def get_office(request: Request) -> OfficeHours:
    """Dependency that provides the service container."""
    return request.app.state.office
