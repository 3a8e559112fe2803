"""
Error taxonomy shared by the queue core and the HTTP layer.

Queue lookups that find nothing return None; these exceptions cover the
outcomes a caller has to tell apart from success.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from officehours.models import QueueEntry


class OfficeHoursError(Exception):
    """Base class for all application errors."""


class DuplicateError(OfficeHoursError):
    """The contact already holds a place in this room's line."""

    def __init__(self, existing: Optional["QueueEntry"] = None):
        super().__init__("Student already in queue")
        self.existing = existing


class NotFoundError(OfficeHoursError):
    """A room code, entrant or TA id does not exist."""


class DeliveryFailure(OfficeHoursError):
    """A notification could not be delivered by the provider."""


class ConfigurationAbsent(OfficeHoursError):
    """The delivery provider has no credentials configured."""
