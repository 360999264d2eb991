import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.guests.directory import GuestDirectory, get_guest_directory
from src.guests.dtos import InvalidSubmissionError
from src.guests.matching import find_guest
from src.guests.notifications import AdminNotifier, get_admin_notifier
from src.tasks import BackgroundTaskQueue, get_background_queue

logger = logging.getLogger(__name__)

router = APIRouter()

VERIFY_NAME_URL = "/api/verify-name"

NOT_FOUND_MESSAGE = "Name not found on the guest list. Please check the spelling or contact us."


class VerifyNameRequest(BaseModel):
    name: str = ""


class GuestResponse(BaseModel):
    id: str
    name: str


class VerifyNameResponse(BaseModel):
    success: bool
    message: str
    guest: GuestResponse | None = None


def client_ip(request: Request) -> str:
    """Caller address, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


@router.post(
    VERIFY_NAME_URL,
    response_model=VerifyNameResponse,
    responses={404: {"model": VerifyNameResponse}},
)
async def verify_name(
    body: VerifyNameRequest,
    request: Request,
    directory: GuestDirectory = Depends(get_guest_directory),
    notifier: AdminNotifier = Depends(get_admin_notifier),
    queue: BackgroundTaskQueue = Depends(get_background_queue),
):
    """
    Check a name against the guest list before the RSVP form is shown.

    A miss notifies the admin in the background and returns 404.
    """
    name = body.name.strip()
    if not name:
        raise InvalidSubmissionError("Name cannot be empty")

    guest = find_guest(name, await directory.get())
    if guest is None:
        logger.info("Name not on guest list: %s", name)
        queue.submit(
            notifier.unlisted_guest(
                name=name,
                ip_address=client_ip(request),
                user_agent=request.headers.get("user-agent", ""),
            ),
            name="unlisted-guest-notification",
        )
        return JSONResponse(
            status_code=404,
            content=VerifyNameResponse(success=False, message=NOT_FOUND_MESSAGE).model_dump(),
        )

    return VerifyNameResponse(
        success=True,
        message="Guest found",
        guest=GuestResponse(id=guest.id, name=guest.name),
    )
