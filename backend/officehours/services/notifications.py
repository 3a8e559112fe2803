"""
Notification dispatcher.

Listens for FrontAdvanced events from queue engines and decides whether the
student now at the front of the line gets a "you're next" message. Sends are
scheduled on the application's event loop and never awaited by the mutation
that triggered them: a slow or failing provider cannot delay or fail a serve
or a removal.

Two triggers, switched independently:
- serve: the front student was served
- remove: the front student was dropped from the line
"""

import asyncio
import concurrent.futures
import logging
import threading
from typing import Optional

from officehours.errors import DeliveryFailure
from officehours.models import FrontAdvanced, QueueEntry
from officehours.services.delivery import DeliveryChannel, mask_contact

logger = logging.getLogger(__name__)

NEXT_IN_LINE_MESSAGE = "🎓 You're next in line! {display_name}, please be ready."


class NotificationDispatcher:
    def __init__(
        self,
        channel: DeliveryChannel,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
        notify_on_serve: bool = True,
        notify_on_remove: bool = True,
    ) -> None:
        self.channel = channel
        self.notify_on_serve = notify_on_serve
        self.notify_on_remove = notify_on_remove

        self._loop = loop
        self._pending: set[concurrent.futures.Future] = set()
        self._pending_lock = threading.Lock()

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Attach the event loop that runs sends. Called at startup."""
        self._loop = loop

    # Used as a QueueEngine listener.
    def __call__(self, event: FrontAdvanced) -> None:
        self.on_front_advanced(event)

    def on_front_advanced(self, event: FrontAdvanced) -> None:
        if event.reason == "serve" and not self.notify_on_serve:
            return
        if event.reason == "remove" and not self.notify_on_remove:
            return
        if event.front is None:
            return
        self.notify_next(event.front, room_code=event.room_code)

    def notify_next(self, entry: QueueEntry, *, room_code: Optional[str] = None) -> bool:
        """
        Schedule a "you're next" message for an entry.

        Returns True if a send was scheduled, False if it was skipped.
        """
        entrant = entry.entrant
        if not entrant.notify_consent:
            logger.debug(f"Room {room_code}: {entrant.display_name} did not consent to notifications")
            return False
        if not entrant.raw_contact:
            logger.warning(f"Room {room_code}: no phone number stored for {entrant.display_name}")
            return False
        if not self.channel.enabled:
            logger.debug(f"Room {room_code}: delivery disabled, not notifying {entrant.display_name}")
            return False

        body = NEXT_IN_LINE_MESSAGE.format(display_name=entrant.display_name)
        return self.dispatch(entrant.raw_contact, body, label=entrant.display_name)

    def dispatch(self, destination: str, body: str, *, label: str = "") -> bool:
        """Schedule a send without waiting for it."""
        if self._loop is None or self._loop.is_closed():
            logger.error(f"No event loop bound, dropping notification to {mask_contact(destination)}")
            return False

        future = asyncio.run_coroutine_threadsafe(
            self._deliver(destination, body, label or mask_contact(destination)),
            self._loop,
        )
        with self._pending_lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)
        return True

    async def drain(self) -> None:
        """Wait for all scheduled sends to finish. Used at shutdown."""
        with self._pending_lock:
            pending = list(self._pending)
        if pending:
            await asyncio.gather(
                *(asyncio.wrap_future(f) for f in pending),
                return_exceptions=True,
            )

    @property
    def pending_count(self) -> int:
        with self._pending_lock:
            return len(self._pending)

    async def _deliver(self, destination: str, body: str, label: str) -> bool:
        try:
            await self.channel.send(destination, body)
        except DeliveryFailure as e:
            logger.warning(f"Failed to send WhatsApp notification to {label}: {e}")
            return False
        except Exception:
            # Nobody awaits this task; log instead of losing the traceback.
            logger.exception(f"Error sending WhatsApp notification to {label}")
            return False
        logger.info(f"WhatsApp notification sent to {label}")
        return True

    def _forget(self, future: concurrent.futures.Future) -> None:
        with self._pending_lock:
            self._pending.discard(future)
