"""
JWT token utilities for staff authentication.
"""

from datetime import timedelta
from typing import Optional

from jose import JWTError, jwt

from officehours.config import Settings
from officehours.utils.timezone import utc_now


def create_access_token(
    username: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a JWT access token for a staff member.

    Args:
        username: The staff username (token subject)
        settings: Settings holding the signing key and algorithm
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    to_encode = {
        "sub": username,
        "exp": utc_now() + expires_delta,
        "type": "access",
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str, settings: Settings) -> Optional[str]:
    """
    Decode and validate a JWT access token.

    Returns:
        The username if the token is valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    username = payload.get("sub")
    if not username or payload.get("type") != "access":
        return None
    return username
