"""Room model - a code-addressed office-hours queue."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from officehours.services.queue_engine import QueueEngine


@dataclass(eq=False)
class Room:
    """
    Room entity.

    A room exclusively owns its queue; entrants are never shared between
    rooms. Rooms live for the lifetime of the process.
    """

    code: str
    name: str
    created_by: str
    created_at: datetime
    queue: QueueEngine = field(repr=False)

    def __repr__(self) -> str:
        return f"<Room {self.code} ({self.name})>"
