# Domain models
from officehours.models.entrant import Admission, Entrant, FrontAdvanced, QueueEntry
from officehours.models.room import Room
from officehours.models.ta import TA

__all__ = [
    "Admission",
    "Entrant",
    "FrontAdvanced",
    "QueueEntry",
    "Room",
    "TA",
]
