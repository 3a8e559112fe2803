"""Roster of TAs currently holding office hours."""

import logging
import threading
import uuid

from officehours.models import TA

logger = logging.getLogger(__name__)


class TARegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tas: list[TA] = []

    def add(self, name: str) -> TA:
        """Add a TA. Names are trimmed; duplicates are allowed."""
        name = name.strip()
        if not name:
            raise ValueError("name must not be empty")

        ta = TA(id=str(uuid.uuid4()), name=name)
        with self._lock:
            self._tas.append(ta)
        logger.info(f"TA {ta.name} joined ({ta.id})")
        return ta

    def remove(self, ta_id: str) -> bool:
        """Remove a TA by id. Returns False if no such TA."""
        with self._lock:
            for index, ta in enumerate(self._tas):
                if ta.id == ta_id:
                    del self._tas[index]
                    break
            else:
                return False
        logger.info(f"TA {ta.name} left ({ta.id})")
        return True

    def clear(self) -> None:
        with self._lock:
            self._tas.clear()

    def list_active(self) -> list[TA]:
        with self._lock:
            return [ta for ta in self._tas if ta.is_active]
