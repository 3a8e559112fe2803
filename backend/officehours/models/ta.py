"""TA model - staff currently holding office hours."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TA:
    id: str
    name: str
    is_active: bool = True  # Removal deletes the TA, there is no inactive state
