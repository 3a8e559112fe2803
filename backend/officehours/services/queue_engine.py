"""
Queue engine - the ordered line of students for one room.

The engine stores entrants in arrival order and derives positions on every
read, so positions are always 1..N with no gaps. All operations on one engine
are serialized by its lock; engines of different rooms share nothing.

When the student at position 1 leaves (served or removed), a FrontAdvanced
event is published to the registered listeners after the lock is released.
"""

import logging
import threading
import uuid
from typing import Callable, Optional

from officehours.errors import DuplicateError
from officehours.models import Admission, Entrant, FrontAdvanced, QueueEntry
from officehours.services.display_names import generate_display_name
from officehours.utils.timezone import utc_now

logger = logging.getLogger(__name__)

FrontListener = Callable[[FrontAdvanced], None]


class QueueEngine:
    """FIFO line of entrants for a single room."""

    def __init__(
        self,
        hasher: Callable[[str], str],
        *,
        room_code: Optional[str] = None,
        name_generator: Callable[[], str] = generate_display_name,
    ) -> None:
        self._hasher = hasher
        self._name_generator = name_generator
        self.room_code = room_code

        self._lock = threading.Lock()
        self._entrants: list[Entrant] = []  # arrival order
        self._admitted_total = 0

        self._listeners: list[FrontListener] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._entrants)

    @property
    def admitted_total(self) -> int:
        """Number of successful admissions since the engine was created."""
        with self._lock:
            return self._admitted_total

    def add_listener(self, listener: FrontListener) -> None:
        self._listeners.append(listener)

    # -------------------- mutations --------------------

    def admit(
        self,
        raw_contact: str,
        topic: Optional[str] = None,
        notify_consent: bool = False,
    ) -> Admission:
        """
        Append a new entrant to the tail of the line.

        Raises:
            DuplicateError: the contact already holds a place in this line
            ValueError: the contact is empty
        """
        fp = self._hasher(raw_contact)

        with self._lock:
            for index, present in enumerate(self._entrants):
                if present.fingerprint == fp:
                    raise DuplicateError(QueueEntry(present, index + 1))

            entrant = Entrant(
                id=str(uuid.uuid4()),
                display_name=self._name_generator(),
                fingerprint=fp,
                raw_contact=raw_contact,
                topic=topic,
                notify_consent=notify_consent,
                joined_at=utc_now(),
            )
            self._entrants.append(entrant)
            self._admitted_total += 1
            length = len(self._entrants)

        logger.info(f"Room {self.room_code}: admitted {entrant.display_name} at position {length}")
        return Admission(entrant=entrant, position=length, queue_length=length)

    def pop_front(self) -> Optional[QueueEntry]:
        """Serve the student at position 1. Returns None if the line is empty."""
        with self._lock:
            if not self._entrants:
                return None
            served = QueueEntry(self._entrants.pop(0), 1)
            event = FrontAdvanced(
                reason="serve",
                departed=served,
                front=self._front_locked(),
                room_code=self.room_code,
            )

        logger.info(f"Room {self.room_code}: served {served.entrant.display_name}")
        self._publish(event)
        return served

    def remove(self, entrant_id: str) -> Optional[QueueEntry]:
        """
        Drop an entrant wherever it sits in the line.

        Returns the removed entry with the position it held, or None if the
        id is not in the line.
        """
        event = None
        with self._lock:
            index = self._index_locked(entrant_id)
            if index is None:
                return None
            removed = QueueEntry(self._entrants.pop(index), index + 1)
            if index == 0:
                event = FrontAdvanced(
                    reason="remove",
                    departed=removed,
                    front=self._front_locked(),
                    room_code=self.room_code,
                )

        logger.info(
            f"Room {self.room_code}: removed {removed.entrant.display_name} "
            f"from position {removed.position}"
        )
        if event is not None:
            self._publish(event)
        return removed

    def clear(self) -> int:
        """Empty the line without notifying anyone. Returns how many were dropped."""
        with self._lock:
            dropped = len(self._entrants)
            self._entrants.clear()
        if dropped:
            logger.info(f"Room {self.room_code}: cleared {dropped} entrant(s)")
        return dropped

    # -------------------- reads --------------------

    def peek_front(self) -> Optional[QueueEntry]:
        with self._lock:
            return self._front_locked()

    def snapshot(self) -> list[QueueEntry]:
        """Every entrant in line order with freshly computed positions."""
        with self._lock:
            return [
                QueueEntry(entrant, position)
                for position, entrant in enumerate(self._entrants, start=1)
            ]

    def get(self, entrant_id: str) -> Optional[QueueEntry]:
        with self._lock:
            index = self._index_locked(entrant_id)
            if index is None:
                return None
            return QueueEntry(self._entrants[index], index + 1)

    def find_by_contact(self, raw_contact: str) -> Optional[QueueEntry]:
        """Find the entry holding this phone number, if any."""
        fp = self._hasher(raw_contact)
        with self._lock:
            for index, entrant in enumerate(self._entrants):
                if entrant.fingerprint == fp:
                    return QueueEntry(entrant, index + 1)
        return None

    # -------------------- internal --------------------

    def _front_locked(self) -> Optional[QueueEntry]:
        if not self._entrants:
            return None
        return QueueEntry(self._entrants[0], 1)

    def _index_locked(self, entrant_id: str) -> Optional[int]:
        for index, entrant in enumerate(self._entrants):
            if entrant.id == entrant_id:
                return index
        return None

    def _publish(self, event: FrontAdvanced) -> None:
        # The mutation has already committed; listeners cannot undo it.
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Room {self.room_code}: front-advanced listener failed")
