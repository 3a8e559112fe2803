"""
Room directory - maps shareable room codes to rooms.

Codes are upper-cased on creation and lookup, so "abc234" and "ABC234"
address the same room. Generated codes use an alphabet without characters
that are easily confused when read aloud or handwritten.
"""

import logging
import secrets
import threading
from typing import Callable, Optional

from officehours.errors import NotFoundError
from officehours.models import Room
from officehours.services.queue_engine import FrontListener, QueueEngine
from officehours.utils.timezone import utc_now

logger = logging.getLogger(__name__)

DEFAULT_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
DEFAULT_CODE_LENGTH = 6


def normalize_code(code: str) -> str:
    return code.strip().upper()


def generate_room_code(
    length: int = DEFAULT_CODE_LENGTH,
    alphabet: str = DEFAULT_CODE_ALPHABET,
) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


class RoomDirectory:
    """Owning registry of rooms, keyed by normalized code."""

    def __init__(
        self,
        hasher: Callable[[str], str],
        *,
        code_alphabet: str = DEFAULT_CODE_ALPHABET,
        code_length: int = DEFAULT_CODE_LENGTH,
        listeners: Optional[list[FrontListener]] = None,
    ) -> None:
        if code_length < 1:
            raise ValueError("code_length must be >= 1")
        if len(set(code_alphabet)) < 2:
            raise ValueError("code_alphabet needs at least two distinct characters")

        self._hasher = hasher
        self._code_alphabet = code_alphabet.upper()
        self._code_length = code_length
        self._listeners = list(listeners or [])

        # Guards the code map only; each room's queue has its own lock.
        self._lock = threading.Lock()
        self._rooms: dict[str, Room] = {}

    def create_room(
        self,
        name: str,
        created_by: str,
        requested_code: Optional[str] = None,
    ) -> Room:
        """
        Create a room, or return the existing one for a requested code.

        Without `requested_code` a fresh code is generated, retrying until it
        is unused. With `requested_code`, an existing room with that code is
        returned unchanged (get-or-create).
        """
        code = normalize_code(requested_code) if requested_code else ""

        with self._lock:
            if code:
                existing = self._rooms.get(code)
                if existing is not None:
                    return existing
            else:
                code = self._generate_code()
                while code in self._rooms:
                    code = self._generate_code()

            room = Room(
                code=code,
                name=name,
                created_by=created_by,
                created_at=utc_now(),
                queue=self._new_queue(code),
            )
            self._rooms[code] = room

        logger.info(f"Created room {room.code} ({room.name}) for {room.created_by}")
        return room

    def ensure_default_room(self, code: str, name: str) -> Room:
        """Get-or-create the well-known room used without any setup."""
        return self.create_room(name, "system", requested_code=code)

    def get_room(self, code: str) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(normalize_code(code))

    def require_room(self, code: str) -> Room:
        """Like get_room, but raises NotFoundError for unknown codes."""
        room = self.get_room(code)
        if room is None:
            raise NotFoundError(f"Room {normalize_code(code)} not found")
        return room

    def list_rooms(self) -> list[Room]:
        with self._lock:
            return list(self._rooms.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def _generate_code(self) -> str:
        return generate_room_code(self._code_length, self._code_alphabet)

    def _new_queue(self, code: str) -> QueueEngine:
        queue = QueueEngine(self._hasher, room_code=code)
        for listener in self._listeners:
            queue.add_listener(listener)
        return queue
