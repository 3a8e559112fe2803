"""
Authentication API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from officehours.auth.dependencies import (
    StaffPrincipal,
    get_current_staff,
    verify_staff_credentials,
)
from officehours.auth.jwt import create_access_token
from officehours.schemas.auth import StaffLogin, StaffResponse, TokenResponse
from officehours.state import OfficeHours, get_office

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    data: StaffLogin,
    office: OfficeHours = Depends(get_office),
):
    """
    Login with the staff username and password.

    Returns an access token on successful login.
    """
    if not verify_staff_credentials(data.username, data.password, office.settings):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    return TokenResponse(
        access_token=create_access_token(data.username, office.settings),
        username=data.username,
    )


@router.get("/me", response_model=StaffResponse)
async def get_me(
    staff: StaffPrincipal = Depends(get_current_staff),
):
    """
    Get the current staff member.

    Requires a valid access token in the Authorization header.
    """
    return StaffResponse(username=staff.username)
