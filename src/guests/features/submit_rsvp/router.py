from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.email_service import get_email_service
from src.guests.directory import get_guest_directory
from src.guests.dtos import RSVPSubmissionDTO
from src.guests.features.submit_rsvp.write_model import (
    StoreSubmitRSVPWriteModel,
    SubmitRSVPWriteModel,
)
from src.guests.notifications import get_admin_notifier
from src.guests.repository.write_models import SupabaseRSVPWriteModel
from src.guests.schemas import MessageResponse
from src.tasks import get_background_queue

router = APIRouter()

SUBMIT_RSVP_URL = "/api/submit-rsvp"


class SubmitRSVPRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: EmailStr
    is_attending: bool = Field(alias="isAttending")
    attending_guests: list[str] | None = Field(default=None, alias="attendingGuests")
    diet: str | None = None

    def to_dto(self) -> RSVPSubmissionDTO:
        return RSVPSubmissionDTO(
            name=self.name.strip(),
            email=str(self.email),
            is_attending=self.is_attending,
            attending_guests=tuple(
                guest.strip() for guest in self.attending_guests or () if guest.strip()
            ),
            diet=(self.diet or "").strip(),
        )


def get_submit_rsvp_write_model() -> SubmitRSVPWriteModel:
    """Dependency to get the RSVP submission write model instance."""
    return StoreSubmitRSVPWriteModel(
        directory=get_guest_directory(),
        rsvp_write_model=SupabaseRSVPWriteModel(),
        email_service=get_email_service(),
        notifier=get_admin_notifier(),
        queue=get_background_queue(),
    )


@router.post(SUBMIT_RSVP_URL, response_model=MessageResponse)
async def submit_rsvp(
    request: SubmitRSVPRequest,
    write_model: SubmitRSVPWriteModel = Depends(get_submit_rsvp_write_model),
) -> MessageResponse:
    """
    Submit an RSVP.

    Attending submissions whose guests are all on the guest list are verified
    and confirmed by email right away. Otherwise the admin is asked to verify.
    """
    result = await write_model.submit_rsvp(request.to_dto())
    return MessageResponse(success=True, message=result.message)
