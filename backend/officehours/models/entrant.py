"""Entrant model - a student holding one place in a room's line."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional


@dataclass(frozen=True)
class Entrant:
    """
    A waiting student.

    Every field is fixed at admission. Serving or dropping a student removes
    the entrant from the queue; nothing on the record changes.
    """

    id: str
    display_name: str
    fingerprint: str = field(repr=False)
    raw_contact: str = field(repr=False)  # Only used to deliver notifications
    topic: Optional[str]
    notify_consent: bool
    joined_at: datetime

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class QueueEntry:
    """An entrant paired with its position at the time of the read."""

    entrant: Entrant
    position: int  # 1-based, derived from queue order


@dataclass(frozen=True)
class Admission:
    """Result of a successful admit."""

    entrant: Entrant
    position: int
    queue_length: int


@dataclass(frozen=True)
class FrontAdvanced:
    """
    Published when the entry at position 1 leaves the line.

    `front` is whoever occupies position 1 afterwards, or None when the
    line is now empty.
    """

    reason: Literal["serve", "remove"]
    departed: QueueEntry
    front: Optional[QueueEntry]
    room_code: Optional[str] = None
