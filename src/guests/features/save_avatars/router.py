from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from src.config.database import StoreError
from src.guests.dtos import AvatarSelectionDTO
from src.guests.features.save_avatars.write_model import (
    SaveAvatarsWriteModel,
    StoreSaveAvatarsWriteModel,
)
from src.guests.repository.read_models import SupabaseRSVPReadModel
from src.guests.repository.write_models import SupabaseRSVPWriteModel
from src.guests.schemas import MessageResponse

router = APIRouter()

SAVE_AVATARS_URL = "/api/save-avatars"


class AvatarSelection(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    guest_name: str = Field(default="", alias="guestName")
    avatar: str = ""
    message: str | None = None


class SaveAvatarsRequest(BaseModel):
    email: str = ""
    avatars: list[AvatarSelection] = []


def get_save_avatars_write_model() -> SaveAvatarsWriteModel:
    """Dependency to get the avatar write model instance."""
    return StoreSaveAvatarsWriteModel(
        rsvp_read_model=SupabaseRSVPReadModel(),
        rsvp_write_model=SupabaseRSVPWriteModel(),
    )


@router.post(SAVE_AVATARS_URL, response_model=MessageResponse)
async def save_avatars(
    request: SaveAvatarsRequest,
    write_model: SaveAvatarsWriteModel = Depends(get_save_avatars_write_model),
):
    """
    Store the plaza avatar each guest of an RSVP picked.

    The selections replace those on the most recent RSVP for the email.
    An email that never submitted an RSVP gets 404 instead of a silent no-op.
    """
    selections = [
        AvatarSelectionDTO(guest_name=a.guest_name, avatar=a.avatar, message=a.message or "")
        for a in request.avatars
    ]
    try:
        await write_model.save_avatars(request.email, selections)
    except StoreError:
        return JSONResponse(
            status_code=500,
            content=MessageResponse(
                success=False, message="Failed to save avatar selections"
            ).model_dump(),
        )
    return MessageResponse(success=True, message="Avatar selections saved successfully")
