"""
Notification endpoints.

Lets staff check the WhatsApp setup by sending a message directly. Unlike
queue notifications, this waits for the provider and reports the result.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from officehours.auth.dependencies import StaffPrincipal, get_current_staff
from officehours.errors import DeliveryFailure
from officehours.schemas.auth import MessageResponse
from officehours.schemas.queue import NotificationTestRequest
from officehours.state import OfficeHours, get_office

router = APIRouter()


@router.post("/test", response_model=MessageResponse)
async def send_test_message(
    data: NotificationTestRequest,
    office: OfficeHours = Depends(get_office),
    _staff: StaffPrincipal = Depends(get_current_staff),
):
    channel = office.dispatcher.channel
    if not channel.enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="WhatsApp delivery is not configured",
        )

    try:
        await channel.send(data.phone_number, data.message)
    except DeliveryFailure as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return MessageResponse(message="WhatsApp message sent successfully")
