"""
Phone number fingerprinting for duplicate detection.

A fingerprint is an HMAC-SHA256 of the normalized number under a server-side
key. It is deterministic (same number, same key, same fingerprint), so two
admissions of one student can be matched without comparing raw numbers.
"""

import hashlib
import hmac
import re

# Characters people type between digits: "+1 (555) 123-0000"
_SEPARATORS = re.compile(r"[\s\-.()]")
_CHANNEL_PREFIX = "whatsapp:"


def normalize_contact(raw_contact: str) -> str:
    """
    Reduce a phone number to the form used for fingerprinting.

    Strips whitespace, visual separators and a `whatsapp:` prefix.

    Raises:
        ValueError: if nothing is left after normalization
    """
    value = raw_contact.strip()
    if value.lower().startswith(_CHANNEL_PREFIX):
        value = value[len(_CHANNEL_PREFIX):]
    value = _SEPARATORS.sub("", value)
    if not value:
        raise ValueError("contact must not be empty")
    return value


def fingerprint(raw_contact: str, key: str) -> str:
    """Return the hex HMAC-SHA256 fingerprint of a contact."""
    digest = hmac.new(
        key.encode("utf-8"),
        normalize_contact(raw_contact).encode("utf-8"),
        hashlib.sha256,
    )
    return digest.hexdigest()


class IdentityHasher:
    """Callable fingerprinting bound to one key."""

    def __init__(self, key: str):
        if not key:
            raise ValueError("fingerprint key must not be empty")
        self._key = key

    def __call__(self, raw_contact: str) -> str:
        return fingerprint(raw_contact, self._key)
