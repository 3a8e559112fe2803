"""Anonymous display names shown in the public queue instead of phone numbers."""

import random
from typing import Optional

ADJECTIVES = ["Blue", "Red", "Green", "Purple", "Orange", "Yellow", "Pink", "Cyan"]
ANIMALS = ["Llama", "Tiger", "Dolphin", "Eagle", "Fox", "Bear", "Wolf", "Lion"]


def generate_display_name(rng: Optional[random.Random] = None) -> str:
    """
    Pick an "<Adjective> <Animal>" pseudonym.

    Names are not unique. Pass `rng` for deterministic output in tests.
    """
    r = rng or random
    return f"{r.choice(ADJECTIVES)} {r.choice(ANIMALS)}"
