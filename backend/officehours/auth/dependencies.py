"""
Authentication dependencies for FastAPI.

Only room creation, TA management and the delivery test endpoint need a
staff token. Joining and working the queue is open.
"""

import secrets
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from officehours.auth.jwt import decode_access_token
from officehours.config import Settings
from officehours.state import OfficeHours, get_office

# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class StaffPrincipal:
    username: str


def verify_staff_credentials(username: str, password: str, settings: Settings) -> bool:
    """Check a login against the configured staff account."""
    if not settings.staff_password:
        return False
    username_ok = secrets.compare_digest(username.encode(), settings.staff_username.encode())
    password_ok = secrets.compare_digest(password.encode(), settings.staff_password.encode())
    return username_ok and password_ok


async def get_current_staff(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    office: OfficeHours = Depends(get_office),
) -> StaffPrincipal:
    """
    Get the authenticated staff member.

    Raises 401 if not authenticated or token is invalid.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if credentials is None:
        raise credentials_exception

    username = decode_access_token(credentials.credentials, office.settings)
    if username is None:
        raise credentials_exception

    return StaffPrincipal(username=username)
